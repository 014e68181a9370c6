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


"""I/O utilities for pyantex."""

from .antex import (AntexReader, next_substantive_line, parse_antenna, parse_antennas,
                    parse_frequency, parse_header, read_antex, resync_to_label)
from .fields import (LabeledLine, extract_label, has_label, parse_date, parse_row,
                     structural_kind)
from .line_source import LineSource

__all__ = [
    'AntexReader', 'read_antex', 'LineSource',
    'parse_header', 'parse_antennas', 'parse_antenna', 'parse_frequency',
    'resync_to_label', 'next_substantive_line',
    'LabeledLine', 'extract_label', 'has_label', 'structural_kind',
    'parse_row', 'parse_date',
]
