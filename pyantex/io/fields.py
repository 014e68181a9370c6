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


"""Column-level parsing of ANTEX lines.

Every function here is a pure mapping from a line (or its 60 column data
part) to field values; the record state machines live in
:mod:`pyantex.io.antex`.

Layout of a labelled line::

    ----+----1----+----2----+----3----+----4----+----5----+----6----+----7--
       G01                                                      START OF FREQUENCY
    |<------------------------- data, cols 0-59 ------------->|<- label ---->
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import numpy as np

from ..core.constants import (COL_ANTENNA_TYPE, COL_FREQ_NUMBER, COL_FREQ_SYSTEM,
                              COL_IDENTIFIER1, COL_IDENTIFIER2, COL_IDENTIFIER3,
                              COL_PCV_TYPE, COL_REF_ANTENNA, COL_REF_SERIAL,
                              COL_SAT_SYSTEM, COL_VERSION, DATE_FIELDS, LABEL_COLUMN,
                              LABEL_COMMENT, MIN_LINE_WIDTH, LineKind)
from ..core.data_structures import Diagnostics
from ..core.exceptions import FieldParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabeledLine:
    """A physical line split into its data part and record label"""
    kind: LineKind
    label: str
    data: str
    text: str
    line_number: Optional[int] = None
    coerced: bool = False


def extract_label(line: str, line_number: Optional[int] = None,
                  diagnostics: Optional[Diagnostics] = None) -> LabeledLine:
    """Split ``line`` into data (cols 0-59) and label (col 60 on).

    Lines too short to carry a label are reported and read as comments so
    they can never be taken for a structural marker.
    """
    if len(line) < MIN_LINE_WIDTH:
        message = "no record label found, read as a comment"
        if diagnostics is not None:
            diagnostics.warning(message, line_number, line)
        else:
            logger.warning("%s: line=%s, s='%s'", message, line_number, line)
        return LabeledLine(LineKind.COMMENT, LABEL_COMMENT, line, line, line_number,
                           coerced=True)

    label = line[LABEL_COLUMN:].strip()
    return LabeledLine(LineKind.from_label(label), label, line[:LABEL_COLUMN], line,
                       line_number)


def has_label(line: str, kind: LineKind) -> bool:
    """True if ``line`` carries the label of ``kind``; never reports anything"""
    return len(line) >= MIN_LINE_WIDTH and line[LABEL_COLUMN:].strip() == kind.value


def _window(data: str, columns: Tuple[int, int]) -> str:
    return data[columns[0]:columns[1]].strip()


def extract_version_system(data: str) -> Tuple[str, str]:
    """ANTEX VERSION / SYST: format version and satellite system code"""
    return _window(data, COL_VERSION), data[COL_SAT_SYSTEM:COL_SAT_SYSTEM + 1].strip()


def extract_pcv_type_refant(data: str) -> Tuple[str, str, str]:
    """PCV TYPE / REFANT: PCV type code, reference antenna and its serial"""
    return (data[COL_PCV_TYPE:COL_PCV_TYPE + 1].strip(),
            _window(data, COL_REF_ANTENNA),
            _window(data, COL_REF_SERIAL))


def extract_type_serial(data: str) -> Tuple[str, str, str, str]:
    """TYPE / SERIAL NO: antenna type and the three identifier columns"""
    return (_window(data, COL_ANTENNA_TYPE),
            _window(data, COL_IDENTIFIER1),
            _window(data, COL_IDENTIFIER2),
            _window(data, COL_IDENTIFIER3))


def extract_frequency_code(data: str, line_number: Optional[int] = None) -> Tuple[str, int]:
    """START OF FREQUENCY: satellite system (col 3) and frequency number (cols 4-5)"""
    system = data[COL_FREQ_SYSTEM:COL_FREQ_SYSTEM + 1].strip()
    if not system:
        raise FieldParseError("missing satellite system in frequency code", line_number,
                              data.strip())
    number = parse_int_field(data[COL_FREQ_NUMBER[0]:COL_FREQ_NUMBER[1]], line_number,
                             "frequency number")
    return system, number


def parse_float_field(text: str, line_number: Optional[int] = None,
                      what: str = "float") -> float:
    token = text.strip()
    try:
        return float(token)
    except ValueError:
        raise FieldParseError(f"invalid {what}", line_number, token) from None


def parse_int_field(text: str, line_number: Optional[int] = None,
                    what: str = "integer") -> int:
    token = text.strip()
    try:
        return int(token)
    except ValueError:
        raise FieldParseError(f"invalid {what}", line_number, token) from None


def parse_floats(data: str, count: int, line_number: Optional[int] = None,
                 what: str = "record") -> List[float]:
    """First ``count`` whitespace separated floats of ``data``"""
    tokens = data.split()
    if len(tokens) < count:
        raise FieldParseError(f"{what} needs {count} values, found {len(tokens)}",
                              line_number, data.strip())
    return [parse_float_field(token, line_number, what) for token in tokens[:count]]


def parse_row(line: str, line_number: Optional[int] = None) -> Tuple[str, np.ndarray]:
    """Split a PCV row into its key and values.

    The key is returned as text: 'NOAZI' or an azimuth the caller still
    has to convert.

    Examples
    --------
    >>> key, values = parse_row("   NOAZI   -0.80   -0.90")
    >>> key, values.tolist()
    ('NOAZI', [-0.8, -0.9])
    """
    tokens = line.split()
    if not tokens:
        raise FieldParseError("no values found", line_number, line)

    values = np.empty(len(tokens) - 1, dtype=np.float64)
    for i, token in enumerate(tokens[1:]):
        try:
            values[i] = float(token)
        except ValueError:
            raise FieldParseError("failed to parse value", line_number, token) from None
    return tokens[0], values


def _split_seconds(text: str, line_number: Optional[int]) -> Tuple[int, int]:
    # digits are taken as written so 59.9999999 never rounds into the next minute
    token = text.strip()
    whole, _, fraction = token.partition(".")
    if not whole.isdigit() or (fraction and not fraction.isdigit()):
        raise FieldParseError("invalid seconds", line_number, token)
    return int(whole), int((fraction + "000000")[:6])


def parse_date(data: str, line_number: Optional[int] = None) -> datetime:
    """Parse a VALID FROM / VALID UNTIL date (5I6,F13.7).

    Examples
    --------
    >>> parse_date("  2008    10    16    23    59   59.9999999")
    datetime.datetime(2008, 10, 16, 23, 59, 59, 999999)
    """
    if len(data.rstrip()) > DATE_FIELDS[-1][1]:
        raise FieldParseError("unexpected text after date", line_number, data.strip())
    groups = [data[start:stop] for start, stop in DATE_FIELDS]
    try:
        year, month, day, hour, minute = (int(group) for group in groups[:5])
    except ValueError:
        raise FieldParseError("invalid date", line_number, data.strip()) from None
    seconds, microseconds = _split_seconds(groups[5], line_number)
    if seconds > 60:
        raise FieldParseError("invalid seconds", line_number, groups[5].strip())

    try:
        epoch = datetime(year, month, day, hour, minute)
    except ValueError as exc:
        raise FieldParseError(f"invalid date ({exc})", line_number, data.strip()) from None
    return epoch + timedelta(seconds=seconds, microseconds=microseconds)


def structural_kind(line: str) -> Optional[LineKind]:
    """Kind of a recognised record label on ``line``, None for data rows and short lines"""
    if len(line) < MIN_LINE_WIDTH:
        return None
    kind = LineKind.from_label(line[LABEL_COLUMN:].strip())
    return None if kind is LineKind.UNKNOWN else kind
