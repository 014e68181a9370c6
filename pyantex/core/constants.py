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


"""ANTEX format constants"""

from enum import Enum

# Line layout: data in columns 0-59, record label from column 60 on
LABEL_COLUMN = 60
MIN_LINE_WIDTH = LABEL_COLUMN + 1

# Record labels
LABEL_VERSION_SYST = "ANTEX VERSION / SYST"
LABEL_PCV_TYPE_REFANT = "PCV TYPE / REFANT"
LABEL_COMMENT = "COMMENT"
LABEL_END_OF_HEADER = "END OF HEADER"
LABEL_START_OF_ANTENNA = "START OF ANTENNA"
LABEL_TYPE_SERIAL = "TYPE / SERIAL NO"
LABEL_METH_BY_DATE = "METH / BY / # / DATE"
LABEL_DAZI = "DAZI"
LABEL_ZEN = "ZEN1 / ZEN2 / DZEN"
LABEL_NUM_FREQUENCIES = "# OF FREQUENCIES"
LABEL_VALID_FROM = "VALID FROM"
LABEL_VALID_UNTIL = "VALID UNTIL"
LABEL_SINEX_CODE = "SINEX CODE"
LABEL_START_OF_FREQUENCY = "START OF FREQUENCY"
LABEL_NORTH_EAST_UP = "NORTH / EAST / UP"
LABEL_END_OF_FREQUENCY = "END OF FREQUENCY"
LABEL_END_OF_ANTENNA = "END OF ANTENNA"

# Key of the azimuth-independent PCV row
NOAZI = "NOAZI"


class LineKind(Enum):
    """Structural kinds of an ANTEX line, keyed by record label"""
    VERSION_SYST = LABEL_VERSION_SYST
    PCV_TYPE_REFANT = LABEL_PCV_TYPE_REFANT
    COMMENT = LABEL_COMMENT
    END_OF_HEADER = LABEL_END_OF_HEADER
    START_OF_ANTENNA = LABEL_START_OF_ANTENNA
    TYPE_SERIAL = LABEL_TYPE_SERIAL
    METH_BY_DATE = LABEL_METH_BY_DATE
    DAZI = LABEL_DAZI
    ZEN = LABEL_ZEN
    NUM_FREQUENCIES = LABEL_NUM_FREQUENCIES
    VALID_FROM = LABEL_VALID_FROM
    VALID_UNTIL = LABEL_VALID_UNTIL
    SINEX_CODE = LABEL_SINEX_CODE
    START_OF_FREQUENCY = LABEL_START_OF_FREQUENCY
    NORTH_EAST_UP = LABEL_NORTH_EAST_UP
    END_OF_FREQUENCY = LABEL_END_OF_FREQUENCY
    END_OF_ANTENNA = LABEL_END_OF_ANTENNA
    UNKNOWN = ""

    @classmethod
    def from_label(cls, label: str) -> "LineKind":
        """Map a stripped label to its kind, UNKNOWN if not recognised"""
        return _KIND_BY_LABEL.get(label, cls.UNKNOWN)


_KIND_BY_LABEL = {kind.value: kind for kind in LineKind if kind is not LineKind.UNKNOWN}

# Fixed column windows (start, stop)
COL_VERSION = (0, 8)
COL_SAT_SYSTEM = 20
COL_PCV_TYPE = 0
COL_REF_ANTENNA = (20, 40)
COL_REF_SERIAL = (40, 60)
COL_ANTENNA_TYPE = (0, 20)
COL_IDENTIFIER1 = (20, 40)
COL_IDENTIFIER2 = (40, 50)
COL_IDENTIFIER3 = (50, 60)
COL_FREQ_SYSTEM = 3
COL_FREQ_NUMBER = (4, 6)

# VALID FROM / VALID UNTIL groups: year, month, day, hour, minute, seconds
DATE_FIELDS = ((0, 6), (6, 12), (12, 18), (18, 24), (24, 30), (30, 43))

# Absorbs representation error when flooring grid sizes, e.g. 0.3 / 0.1
GRID_EPS = 1e-9

# Satellite system codes (ANTEX VERSION / SYST and frequency codes)
SYS_CHAR_GPS = 'G'
SYS_CHAR_GLO = 'R'
SYS_CHAR_GAL = 'E'
SYS_CHAR_BDS = 'C'
SYS_CHAR_QZS = 'J'
SYS_CHAR_SBS = 'S'
SYS_CHAR_IRN = 'I'
SYS_CHAR_MIXED = 'M'

SYSTEM_NAMES = {
    SYS_CHAR_GPS: 'GPS',
    SYS_CHAR_GLO: 'GLONASS',
    SYS_CHAR_GAL: 'Galileo',
    SYS_CHAR_BDS: 'BeiDou',
    SYS_CHAR_QZS: 'QZSS',
    SYS_CHAR_SBS: 'SBAS',
    SYS_CHAR_IRN: 'IRNSS',
    SYS_CHAR_MIXED: 'Mixed',
}

# PCV TYPE / REFANT
PCV_TYPE_ABSOLUTE = 'A'
PCV_TYPE_RELATIVE = 'R'
