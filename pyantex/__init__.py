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


"""
pyantex - ANTEX antenna calibration reader

Reads receiver and satellite antenna phase center offsets and phase center
variation grids from ANTEX (antenna exchange format) files, as published
by the IGS, and evaluates them for a signal direction.
"""

__version__ = "1.0.0"
__author__ = "pyantex Development Team"
__title__ = "pyantex"
__description__ = "ANTEX antenna phase center reader"

from .logger import get_logger, setup_logger, setup_logger_from_config
from .core import *
from .io import AntexReader, LineSource, read_antex
from .gnss import *
