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


"""Data structures for parsed ANTEX content"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .constants import (GRID_EPS, NOAZI, PCV_TYPE_ABSOLUTE, PCV_TYPE_RELATIVE,
                        SYSTEM_NAMES)
from .exceptions import AntexError, GrammarError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable anomaly met while reading a file.

    Attributes
    ----------
    level : str
        'warning' for structural anomalies (short lines), 'error' for
        records that had to be dropped
    line_number : int or None
        1-based line number the anomaly refers to
    message : str
        Human readable description
    token : str or None
        Offending token, when known
    """
    level: str
    line_number: Optional[int]
    message: str
    token: Optional[str] = None

    def __str__(self):
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{self.level}: {where}{self.message}"


class Diagnostics(list):
    """List of :class:`Diagnostic` entries that also forwards each entry to a logger.

    The parser functions take an optional instance; callers keep the
    structured list while the usual logging output is still produced.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        super().__init__()
        self.log = log if log is not None else logging.getLogger("pyantex")

    def warning(self, message: str, line_number: Optional[int] = None,
                token: Optional[str] = None) -> Diagnostic:
        entry = Diagnostic('warning', line_number, message, token)
        self.append(entry)
        self.log.warning("%s", entry)
        return entry

    def error(self, message: str, line_number: Optional[int] = None,
              token: Optional[str] = None) -> Diagnostic:
        entry = Diagnostic('error', line_number, message, token)
        self.append(entry)
        self.log.error("%s", entry)
        return entry

    def add_exception(self, exc: AntexError, context: str = "") -> Diagnostic:
        """Record a parse error, prefixed with ``context`` (e.g. the antenna type)"""
        message = f"{context}: {exc.message}" if context else exc.message
        return self.error(message, exc.line_number, exc.token)

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self if d.level == 'warning']

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self if d.level == 'error']


@dataclass(frozen=True)
class FileHeader:
    """ANTEX file header.

    Attributes
    ----------
    version : str
        Format version, e.g. '1.4'
    satellite_system : str
        Satellite system code (G, R, E, C, J, S, I or M for mixed)
    pcv_type : str
        'A' absolute or 'R' relative values
    reference_antenna : str
        Reference antenna type for relative values (blank for absolute)
    reference_serial : str
        Serial number of the reference antenna
    comments : tuple of str
        Header COMMENT records, in file order
    """
    version: str = ""
    satellite_system: str = ""
    pcv_type: str = ""
    reference_antenna: str = ""
    reference_serial: str = ""
    comments: Tuple[str, ...] = ()

    @property
    def satellite_system_name(self) -> str:
        return SYSTEM_NAMES.get(self.satellite_system, "")

    @property
    def is_absolute(self) -> bool:
        return self.pcv_type == PCV_TYPE_ABSOLUTE

    @property
    def is_relative(self) -> bool:
        return self.pcv_type == PCV_TYPE_RELATIVE


@dataclass(frozen=True)
class GridParameters:
    """Antenna-wide PCV grid layout (DAZI and ZEN1 / ZEN2 / DZEN), degrees.

    The row counts of every frequency block of an antenna follow from
    these four values.
    """
    dazi: float
    zen1: float
    zen2: float
    dzen: float

    @property
    def zenith_count(self) -> int:
        """floor((zen2 - zen1) / dzen) + 1"""
        return int(np.floor((self.zen2 - self.zen1) / self.dzen + GRID_EPS)) + 1

    @property
    def azimuth_count(self) -> int:
        """0 for azimuth independent grids, else floor(360 / dazi) + 1"""
        if self.dazi == 0:
            return 0
        return int(np.floor(360.0 / self.dazi + GRID_EPS)) + 1

    @property
    def zeniths(self) -> np.ndarray:
        return self.zen1 + self.dzen * np.arange(self.zenith_count, dtype=np.float64)

    @property
    def azimuths(self) -> np.ndarray:
        return self.dazi * np.arange(self.azimuth_count, dtype=np.float64)

    def validate(self, line_number: Optional[int] = None):
        """Raise GrammarError if the values cannot describe a grid"""
        if self.dzen <= 0:
            raise GrammarError("DZEN must be positive", line_number, str(self.dzen))
        if self.dazi < 0:
            raise GrammarError("DAZI must not be negative", line_number, str(self.dazi))
        if self.zen2 < self.zen1:
            raise GrammarError("ZEN2 is below ZEN1", line_number,
                               f"{self.zen1} {self.zen2}")


@dataclass(frozen=True)
class PhaseCenterOffset:
    """Mean phase center offset, millimetres.

    North/east/up for receiver antennas, X/Y/Z in the satellite body frame
    for satellite antennas.
    """
    north: float
    east: float
    up: float

    def as_array(self) -> np.ndarray:
        return np.array([self.north, self.east, self.up], dtype=np.float64)


@dataclass
class PCVGrid:
    """Phase center variations of one frequency, millimetres.

    ``non_azimuth_values`` is the NOAZI row. ``azimuth_values`` holds one
    ``(azimuth, values)`` pair per azimuth row, in file order; it is empty
    when ``azimuth_step`` is 0.
    """
    system: str
    frequency_number: int
    zenith_start: float
    zenith_stop: float
    zenith_step: float
    azimuth_step: float
    phase_center_offset: Optional[PhaseCenterOffset] = None
    non_azimuth_values: np.ndarray = field(default_factory=lambda: np.zeros(0))
    azimuth_values: List[Tuple[float, np.ndarray]] = field(default_factory=list)

    @classmethod
    def from_parameters(cls, system: str, frequency_number: int,
                        params: GridParameters) -> "PCVGrid":
        return cls(system=system, frequency_number=frequency_number,
                   zenith_start=params.zen1, zenith_stop=params.zen2,
                   zenith_step=params.dzen, azimuth_step=params.dazi)

    @property
    def grid_parameters(self) -> GridParameters:
        return GridParameters(self.azimuth_step, self.zenith_start,
                              self.zenith_stop, self.zenith_step)

    @property
    def zenith_count(self) -> int:
        return self.grid_parameters.zenith_count

    @property
    def azimuth_count(self) -> int:
        return self.grid_parameters.azimuth_count

    @property
    def frequency_code(self) -> str:
        """Frequency code as written in the file, e.g. 'G01'"""
        return f"{self.system}{self.frequency_number:02d}"

    @property
    def is_azimuth_dependent(self) -> bool:
        return self.azimuth_step != 0

    @property
    def zeniths(self) -> np.ndarray:
        return self.grid_parameters.zeniths

    @property
    def azimuths(self) -> np.ndarray:
        """Azimuths of the azimuth rows, as read"""
        return np.array([az for az, _ in self.azimuth_values], dtype=np.float64)

    @property
    def azimuth_matrix(self) -> np.ndarray:
        """Azimuth dependent values, shape (azimuth_count, zenith_count)"""
        if not self.azimuth_values:
            return np.zeros((0, self.zenith_count))
        return np.vstack([values for _, values in self.azimuth_values])

    def validate(self):
        """Check every row against the size derived from the grid parameters"""
        nzen = self.zenith_count
        if len(self.non_azimuth_values) != nzen:
            raise GrammarError(
                f"{NOAZI} row of {self.frequency_code} has {len(self.non_azimuth_values)} "
                f"values, expected {nzen}")
        if len(self.azimuth_values) != self.azimuth_count:
            raise GrammarError(
                f"{self.frequency_code} has {len(self.azimuth_values)} azimuth rows, "
                f"expected {self.azimuth_count}")
        for azimuth, values in self.azimuth_values:
            if len(values) != nzen:
                raise GrammarError(
                    f"azimuth {azimuth} of {self.frequency_code} has {len(values)} "
                    f"values, expected {nzen}")


@dataclass
class AntennaRecord:
    """One antenna section (START OF ANTENNA to END OF ANTENNA).

    For receiver antennas ``identifier1`` is the serial number (often
    blank) and ``identifier2``/``identifier3`` are blank. For satellite
    antennas they are the satellite code (e.g. 'G01'), the SVN (e.g.
    'G032') and the COSPAR ID (e.g. '1992-079A').
    """
    type: str = ""
    identifier1: str = ""
    identifier2: str = ""
    identifier3: str = ""
    is_satellite: bool = False
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    sinex_code: Optional[str] = None
    num_frequencies: Optional[int] = None
    pcv_grids: List[PCVGrid] = field(default_factory=list)

    def set_type_serial(self, antenna_type: str, identifier1: str,
                        identifier2: str, identifier3: str):
        """Fill the TYPE / SERIAL NO fields and classify the antenna"""
        self.type = antenna_type
        self.identifier1 = identifier1
        self.identifier2 = identifier2
        self.identifier3 = identifier3
        self.is_satellite = self.classify_satellite(identifier2, identifier3)

    @staticmethod
    def classify_satellite(identifier2: str, identifier3: str) -> bool:
        # receiver antennas leave the SVN and COSPAR columns blank
        return bool(identifier2 or identifier3)

    @property
    def serial_number(self) -> Optional[str]:
        return None if self.is_satellite else self.identifier1

    @property
    def satellite_id(self) -> Optional[str]:
        return self.identifier1 if self.is_satellite else None

    @property
    def svn(self) -> Optional[str]:
        return self.identifier2 if self.is_satellite else None

    @property
    def cospar_id(self) -> Optional[str]:
        return self.identifier3 if self.is_satellite else None

    @property
    def frequency_codes(self) -> List[str]:
        return [grid.frequency_code for grid in self.pcv_grids]

    def grid(self, frequency_code: str) -> Optional[PCVGrid]:
        """PCV grid of a frequency code such as 'G01', None if absent"""
        for pcv in self.pcv_grids:
            if pcv.frequency_code == frequency_code:
                return pcv
        return None

    def is_valid_at(self, epoch: datetime) -> bool:
        """True if ``epoch`` lies in the validity window (open ends are unbounded)"""
        if self.valid_from is not None and epoch < self.valid_from:
            return False
        if self.valid_until is not None and epoch > self.valid_until:
            return False
        return True


@dataclass
class AntexFile:
    """Result of reading an ANTEX file: header, antennas and diagnostics"""
    header: FileHeader
    antennas: List[AntennaRecord] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def version(self) -> str:
        return self.header.version

    @property
    def satellite_system(self) -> str:
        return self.header.satellite_system

    @property
    def pcv_type(self) -> str:
        return self.header.pcv_type

    @property
    def reference_antenna(self) -> str:
        return self.header.reference_antenna

    def __len__(self):
        return len(self.antennas)

    def __iter__(self) -> Iterator[AntennaRecord]:
        return iter(self.antennas)

    def receiver_antennas(self) -> List[AntennaRecord]:
        return [ant for ant in self.antennas if not ant.is_satellite]

    def satellite_antennas(self) -> List[AntennaRecord]:
        return [ant for ant in self.antennas if ant.is_satellite]

    def find_receiver_antenna(self, antenna_type: str,
                              serial: Optional[str] = None) -> Optional[AntennaRecord]:
        """Receiver antenna by type (including radome), preferring an
        individual calibration for ``serial`` over the type mean."""
        antenna_type = antenna_type.strip()
        generic = None
        for ant in self.receiver_antennas():
            if ant.type != antenna_type:
                continue
            if serial and ant.identifier1 == serial:
                return ant
            if not ant.identifier1 and generic is None:
                generic = ant
        return generic

    def find_satellite_antenna(self, satellite_id: str,
                               epoch: Optional[datetime] = None) -> Optional[AntennaRecord]:
        """Satellite antenna by satellite code ('G01').

        With ``epoch`` only antennas valid at that time qualify; otherwise
        the last matching section of the file is returned.
        """
        found = None
        for ant in self.satellite_antennas():
            if ant.identifier1 != satellite_id:
                continue
            if epoch is not None and not ant.is_valid_at(epoch):
                continue
            found = ant
        if found is None:
            logger.debug("no satellite antenna for %s at %s", satellite_id, epoch)
        return found
