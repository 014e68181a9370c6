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


"""Evaluation of parsed antenna calibrations"""

from .pcv import (antennas_to_dataframe, grid_to_dataframe, interpolate_pcv,
                  line_of_sight_enu, offsets_to_dataframe, phase_center_correction)

__all__ = [
    'interpolate_pcv', 'phase_center_correction', 'line_of_sight_enu',
    'grid_to_dataframe', 'antennas_to_dataframe', 'offsets_to_dataframe',
]
