# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Core ANTEX definitions.

- **Constants**: record labels, column layout and satellite system codes
- **Data Structures**: file header, antenna records, PCV grids and the
  diagnostics collected while reading
- **Exceptions**: errors raised for malformed records

Example Usage:
    >>> from pyantex.core import GridParameters
    >>> params = GridParameters(dazi=5.0, zen1=0.0, zen2=90.0, dzen=5.0)
    >>> params.azimuth_count, params.zenith_count
    (73, 19)
"""

from .constants import *
from .data_structures import *
from .exceptions import *
