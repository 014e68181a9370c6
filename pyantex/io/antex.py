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


"""ANTEX (antenna exchange format) reader.

The file is read by nested record parsers sharing one :class:`LineSource`:

* :func:`parse_header` up to END OF HEADER
* :func:`parse_antennas` scanning for START OF ANTENNA
* :func:`parse_antenna` for one antenna section
* :func:`parse_frequency` for one START OF FREQUENCY .. END OF FREQUENCY block

A malformed antenna is dropped: its error goes to the diagnostics, the
cursor is moved past its END OF ANTENNA with :func:`resync_to_label` and
reading continues with the next antenna.

Example:
--------

    from pyantex.io import read_antex
    atx = read_antex("igs20.atx")
    ant = atx.find_receiver_antenna("TRM59800.00     SCIS")
    pcv = ant.grid("G01")
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..core.constants import (LABEL_COLUMN, LABEL_END_OF_ANTENNA, LABEL_END_OF_FREQUENCY,
                              LABEL_NORTH_EAST_UP, LABEL_START_OF_FREQUENCY,
                              LABEL_VERSION_SYST, LABEL_ZEN, NOAZI, LineKind)
from ..core.data_structures import (AntennaRecord, AntexFile, Diagnostics, FileHeader,
                                    GridParameters, PCVGrid, PhaseCenterOffset)
from ..core.exceptions import (AntexError, AntexHeaderError, GrammarError,
                               TerminatorNotFoundError)
from .fields import (LabeledLine, extract_frequency_code, extract_label,
                     extract_pcv_type_refant, extract_type_serial, extract_version_system,
                     has_label, parse_date, parse_float_field, parse_floats, parse_int_field,
                     parse_row, structural_kind)
from .line_source import LineSource

logger = logging.getLogger(__name__)

# Labels that belong to the enclosing antenna section; never skipped over
# while looking for the end of a frequency block
_ANTENNA_BOUNDARIES = (LineKind.END_OF_ANTENNA, LineKind.START_OF_ANTENNA)


def _sink(diagnostics: Optional[Diagnostics]) -> Diagnostics:
    return diagnostics if diagnostics is not None else Diagnostics(logger)


# ============================================================================
# HEADER
# ============================================================================
def parse_header(source: LineSource, diagnostics: Optional[Diagnostics] = None) -> FileHeader:
    """Read header records up to END OF HEADER.

    A missing END OF HEADER is not an error: the header then ends with the
    input and holds whatever was read.
    """
    diagnostics = _sink(diagnostics)
    version = satellite_system = pcv_type = ref_antenna = ref_serial = ""
    comments = []

    while source.has_next():
        rec = extract_label(source.next(), source.line_number, diagnostics)

        if rec.kind is LineKind.VERSION_SYST:
            version, satellite_system = extract_version_system(rec.data)
        elif rec.kind is LineKind.PCV_TYPE_REFANT:
            pcv_type, ref_antenna, ref_serial = extract_pcv_type_refant(rec.data)
        elif rec.kind is LineKind.COMMENT:
            if not rec.coerced:
                comments.append(rec.data.rstrip())
        elif rec.kind is LineKind.END_OF_HEADER:
            break
        # any other header record is skipped
    else:
        logger.debug("END OF HEADER not found, header ends at line %d", source.line_number)

    return FileHeader(version=version, satellite_system=satellite_system, pcv_type=pcv_type,
                      reference_antenna=ref_antenna, reference_serial=ref_serial,
                      comments=tuple(comments))


# ============================================================================
# RESYNCHRONISATION
# ============================================================================
def resync_to_label(source: LineSource, kind: LineKind,
                    stop_kinds: Tuple[LineKind, ...] = ()) -> int:
    """Skip lines up to and including the next line labelled ``kind``.

    A line labelled with one of ``stop_kinds`` ends the search without
    being consumed. Returns the line number of the ``kind`` line.

    Raises
    ------
    TerminatorNotFoundError
        The input ended, or a ``stop_kinds`` line came first.
    """
    first = source.line_number + 1
    while source.has_next():
        line = source.next()
        if has_label(line, kind):
            logger.debug("skipped lines %d-%d up to '%s'", first, source.line_number, kind.value)
            return source.line_number
        stop = structural_kind(line)
        if stop in stop_kinds:
            source.push_back(line)
            raise TerminatorNotFoundError(f"'{kind.value}' not found before '{stop.value}'",
                                          source.line_number + 1)
    raise TerminatorNotFoundError(f"'{kind.value}' not found", source.line_number)


# ============================================================================
# ANTENNA SECTIONS
# ============================================================================
def parse_antennas(source: LineSource,
                   diagnostics: Optional[Diagnostics] = None) -> List[AntennaRecord]:
    """Read all antenna sections from the current position to the end of input.

    Antennas that fail to parse are reported to ``diagnostics`` and left
    out of the result.
    """
    diagnostics = _sink(diagnostics)
    antennas = []

    while source.has_next():
        rec = extract_label(source.next(), source.line_number, diagnostics)
        if rec.kind is not LineKind.START_OF_ANTENNA:
            continue

        start = rec.line_number
        antenna = AntennaRecord()
        try:
            parse_antenna(source, diagnostics, antenna)
        except AntexError as exc:
            name = f"'{antenna.type}'" if antenna.type else "antenna"
            diagnostics.add_exception(exc, f"{name} starting at line {start} dropped")
            continue
        antennas.append(antenna)

    return antennas


def parse_antenna(source: LineSource, diagnostics: Optional[Diagnostics] = None,
                  antenna: Optional[AntennaRecord] = None) -> AntennaRecord:
    """Read one antenna section; the cursor is just past its START OF ANTENNA.

    ``antenna`` is filled in place when given. On error the cursor is
    moved past the section's END OF ANTENNA before the error is re-raised.

    Raises
    ------
    AntexError
        Any field or grammar error inside the section
    TerminatorNotFoundError
        END OF ANTENNA missing; ``compounded`` if it went missing while
        recovering from another error
    """
    diagnostics = _sink(diagnostics)
    antenna = antenna if antenna is not None else AntennaRecord()

    try:
        complete = _parse_antenna_records(source, antenna, diagnostics)
    except AntexError as exc:
        try:
            resync_to_label(source, LineKind.END_OF_ANTENNA, (LineKind.START_OF_ANTENNA,))
        except TerminatorNotFoundError as missing:
            raise TerminatorNotFoundError(f"{missing.message} after: {exc}",
                                          missing.line_number, compounded=True) from exc
        raise

    if not complete:
        raise TerminatorNotFoundError(f"'{LABEL_END_OF_ANTENNA}' not found",
                                      source.line_number)
    return antenna


def _grid_parameters(dazi: Optional[float], zen: Optional[List[float]],
                     line_number: int) -> GridParameters:
    if dazi is None or zen is None:
        raise GrammarError(f"DAZI and {LABEL_ZEN} must precede {LABEL_START_OF_FREQUENCY}",
                           line_number)
    params = GridParameters(dazi, *zen)
    params.validate(line_number)
    return params


def _parse_antenna_records(source: LineSource, antenna: AntennaRecord,
                           diagnostics: Diagnostics) -> bool:
    """Fill ``antenna`` record by record; True once END OF ANTENNA is read.

    False means the input ended, or the next START OF ANTENNA showed up
    (it is pushed back for the caller).
    """
    dazi = None
    zen = None

    while source.has_next():
        rec = extract_label(source.next(), source.line_number, diagnostics)
        kind = rec.kind
        line_number = rec.line_number
        logger.trace("line %d: %s", line_number, rec.label)

        if kind is LineKind.TYPE_SERIAL:
            antenna.set_type_serial(*extract_type_serial(rec.data))
        elif kind is LineKind.DAZI:
            dazi = parse_float_field(rec.data, line_number, "DAZI")
        elif kind is LineKind.ZEN:
            zen = parse_floats(rec.data, 3, line_number, LABEL_ZEN)
        elif kind is LineKind.NUM_FREQUENCIES:
            antenna.num_frequencies = parse_int_field(rec.data, line_number,
                                                      "number of frequencies")
        elif kind is LineKind.VALID_FROM:
            antenna.valid_from = parse_date(rec.data, line_number)
        elif kind is LineKind.VALID_UNTIL:
            antenna.valid_until = parse_date(rec.data, line_number)
        elif kind is LineKind.SINEX_CODE:
            antenna.sinex_code = rec.data.strip()
        elif kind is LineKind.START_OF_FREQUENCY:
            params = _grid_parameters(dazi, zen, line_number)
            antenna.pcv_grids.append(parse_frequency(source, rec, params, diagnostics))
        elif kind is LineKind.END_OF_ANTENNA:
            if (antenna.num_frequencies is not None
                    and antenna.num_frequencies != len(antenna.pcv_grids)):
                diagnostics.warning(
                    f"'{antenna.type}' declares {antenna.num_frequencies} frequencies, "
                    f"{len(antenna.pcv_grids)} found", line_number)
            return True
        elif kind is LineKind.START_OF_ANTENNA:
            source.push_back(rec.text)
            return False
        # COMMENT, METH / BY / # / DATE and unknown records are skipped

    return False


# ============================================================================
# FREQUENCY BLOCKS
# ============================================================================
def next_substantive_line(source: LineSource) -> Optional[str]:
    """Next line that is not a COMMENT record, None at end of input"""
    while source.has_next():
        line = source.next()
        if not has_label(line, LineKind.COMMENT):
            return line
    return None


def _next_block_line(source: LineSource, code: str) -> str:
    line = next_substantive_line(source)
    if line is None:
        raise TerminatorNotFoundError(f"'{LABEL_END_OF_FREQUENCY}' not found for {code}",
                                      source.line_number)
    return line


def _read_row(source: LineSource, code: str):
    line = _next_block_line(source, code)
    line_number = source.line_number
    kind = structural_kind(line)
    if kind is not None:
        if kind in _ANTENNA_BOUNDARIES:
            source.push_back(line)
        raise GrammarError(f"PCV row expected for {code}, found '{kind.value}'",
                           line_number, kind.value)
    key, values = parse_row(line, line_number)
    return key, values, line_number


def _check_row_length(values, expected: int, line_number: int, code: str, key: str):
    if len(values) != expected:
        raise GrammarError(f"invalid number of values for {code}: expected {expected}, "
                           f"found {len(values)}", line_number, key)


def parse_frequency(source: LineSource, start: LabeledLine, params: GridParameters,
                    diagnostics: Optional[Diagnostics] = None) -> PCVGrid:
    """Read one frequency block; ``start`` is its START OF FREQUENCY line.

    The row count and row length follow from ``params``:
    one NOAZI row and ``params.azimuth_count`` azimuth rows of
    ``params.zenith_count`` values each.
    """
    diagnostics = _sink(diagnostics)
    system, number = extract_frequency_code(start.data, start.line_number)
    grid = PCVGrid.from_parameters(system, number, params)
    code = grid.frequency_code
    nzen = params.zenith_count

    # optional phase center offset
    line = _next_block_line(source, code)
    if has_label(line, LineKind.NORTH_EAST_UP):
        north, east, up = parse_floats(line[:LABEL_COLUMN], 3, source.line_number,
                                       LABEL_NORTH_EAST_UP)
        grid.phase_center_offset = PhaseCenterOffset(north, east, up)
    else:
        source.push_back(line)

    key, values, line_number = _read_row(source, code)
    if key != NOAZI:
        raise GrammarError(f"{NOAZI} not found for {code}", line_number, key)
    _check_row_length(values, nzen, line_number, code, key)
    grid.non_azimuth_values = values

    for _ in range(params.azimuth_count):
        key, values, line_number = _read_row(source, code)
        if key == NOAZI:
            raise GrammarError(f"{NOAZI} found at azimuth dependent values of {code}",
                               line_number, key)
        _check_row_length(values, nzen, line_number, code, key)
        azimuth = parse_float_field(key, line_number, "azimuth")
        grid.azimuth_values.append((azimuth, values))

    line = _next_block_line(source, code)
    if not has_label(line, LineKind.END_OF_FREQUENCY):
        misplaced = GrammarError(f"invalid '{LABEL_END_OF_FREQUENCY}' position for {code}",
                                 source.line_number, line.strip())
        source.push_back(line)
        try:
            resync_to_label(source, LineKind.END_OF_FREQUENCY, _ANTENNA_BOUNDARIES)
        except TerminatorNotFoundError as missing:
            raise TerminatorNotFoundError(f"{missing.message} for {code}", missing.line_number,
                                          compounded=True) from misplaced
        raise misplaced

    end_code = line[:LABEL_COLUMN].strip()
    if end_code and end_code != code:
        diagnostics.warning(f"{LABEL_END_OF_FREQUENCY} of {code} labelled '{end_code}'",
                            source.line_number, end_code)

    logger.debug("%s: %d x %d PCV grid", code, params.azimuth_count, nzen)
    return grid


# ============================================================================
# FILE
# ============================================================================
def _read_source(source: LineSource, diagnostics: Optional[Diagnostics]) -> AntexFile:
    diagnostics = _sink(diagnostics)
    header = parse_header(source, diagnostics)
    if not header.version:
        raise AntexHeaderError(f"'{LABEL_VERSION_SYST}' record not found", source.line_number)

    errors_before = len(diagnostics.errors)
    antennas = parse_antennas(source, diagnostics)
    logger.info("read %d antennas, %d dropped", len(antennas),
                len(diagnostics.errors) - errors_before)
    return AntexFile(header=header, antennas=antennas, diagnostics=diagnostics)


def read_antex(source: Union[str, Path, LineSource, Iterable[str]],
               diagnostics: Optional[Diagnostics] = None) -> AntexFile:
    """Read an ANTEX file.

    Parameters
    ----------
    source : str, Path, LineSource or iterable of str
        File path, or lines (e.g. ``io.StringIO(text)``)
    diagnostics : Diagnostics, optional
        Sink for warnings and dropped antennas; a new one is created
        otherwise. Either way it ends up as ``AntexFile.diagnostics``.

    Returns
    -------
    AntexFile
        Header, successfully read antennas and the diagnostics

    Raises
    ------
    FileNotFoundError
        ``source`` is a path that does not exist
    AntexHeaderError
        No ANTEX VERSION / SYST record in the header
    """
    if isinstance(source, (str, Path)):
        with LineSource.from_path(source) as lines:
            return _read_source(lines, diagnostics)
    if not isinstance(source, LineSource):
        source = LineSource(source)
    return _read_source(source, diagnostics)


class AntexReader:
    """Reader object for one ANTEX file"""

    def __init__(self, filename: Union[str, Path]):
        self.filename = Path(filename)

    def read(self) -> AntexFile:
        return read_antex(self.filename)
