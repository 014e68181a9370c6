#!/usr/bin/env python3
"""Test suite for data structures"""

import logging
import math
import unittest
from datetime import datetime

import numpy as np
import pytest

from pyantex.core.data_structures import (AntennaRecord, AntexFile, Diagnostics, FileHeader,
                                          GridParameters, PCVGrid, PhaseCenterOffset)
from pyantex.core.exceptions import (AntexError, FieldParseError, GrammarError,
                                     TerminatorNotFoundError)


class TestGridParameters(unittest.TestCase):
    """Derived grid dimensions"""

    def test_azimuth_independent(self):
        params = GridParameters(dazi=0.0, zen1=0.0, zen2=90.0, dzen=5.0)
        self.assertEqual(params.azimuth_count, 0)
        self.assertEqual(params.zenith_count, 19)
        self.assertEqual(params.azimuths.size, 0)

    def test_azimuth_dependent(self):
        params = GridParameters(dazi=5.0, zen1=0.0, zen2=80.0, dzen=5.0)
        self.assertEqual(params.azimuth_count, 73)
        self.assertEqual(params.zenith_count, 17)
        self.assertEqual(params.azimuths[-1], 360.0)
        self.assertEqual(params.zeniths[-1], 80.0)

    def test_step_not_dividing_range(self):
        params = GridParameters(dazi=7.0, zen1=0.0, zen2=17.0, dzen=2.0)
        self.assertEqual(params.azimuth_count, 52)
        self.assertEqual(params.zenith_count, 9)

    def test_representation_error(self):
        params = GridParameters(dazi=0.0, zen1=0.0, zen2=0.3, dzen=0.1)
        self.assertEqual(params.zenith_count, 4)

    def test_validate(self):
        GridParameters(0.0, 0.0, 17.0, 1.0).validate()
        with self.assertRaises(GrammarError):
            GridParameters(0.0, 0.0, 17.0, 0.0).validate(12)
        with self.assertRaises(GrammarError):
            GridParameters(-5.0, 0.0, 17.0, 1.0).validate()
        with self.assertRaises(GrammarError):
            GridParameters(0.0, 17.0, 0.0, 1.0).validate()


@pytest.mark.parametrize("zen1, zen2, dzen", [
    (0.0, 90.0, 5.0), (0.0, 17.0, 1.0), (0.0, 14.0, 1.0), (0.0, 10.0, 3.0), (5.0, 85.0, 2.5),
])
def test_zenith_count_formula(zen1, zen2, dzen):
    params = GridParameters(0.0, zen1, zen2, dzen)
    assert params.zenith_count == math.floor((zen2 - zen1) / dzen) + 1


@pytest.mark.parametrize("dazi", [0.0, 1.0, 5.0, 7.5, 10.0, 45.0])
def test_azimuth_count_formula(dazi):
    params = GridParameters(dazi, 0.0, 90.0, 5.0)
    if dazi == 0:
        assert params.azimuth_count == 0
    else:
        assert params.azimuth_count == math.floor(360.0 / dazi) + 1


def make_grid(dazi=120.0, rows=None):
    grid = PCVGrid.from_parameters('G', 1, GridParameters(dazi, 0.0, 10.0, 5.0))
    grid.phase_center_offset = PhaseCenterOffset(1.0, 2.0, 3.0)
    grid.non_azimuth_values = np.array([0.0, -0.5, -1.0])
    if rows is None:
        rows = [(az, np.array([0.0, -0.4, -0.9])) for az in (0.0, 120.0, 240.0, 360.0)]
    grid.azimuth_values = rows
    return grid


class TestPCVGrid(unittest.TestCase):

    def test_derived_fields(self):
        grid = make_grid()
        self.assertEqual(grid.frequency_code, 'G01')
        self.assertEqual(grid.zenith_count, 3)
        self.assertEqual(grid.azimuth_count, 4)
        self.assertTrue(grid.is_azimuth_dependent)
        np.testing.assert_array_equal(grid.zeniths, [0.0, 5.0, 10.0])
        self.assertEqual(grid.azimuth_matrix.shape, (4, 3))
        np.testing.assert_array_equal(grid.phase_center_offset.as_array(), [1.0, 2.0, 3.0])

    def test_validate_ok(self):
        make_grid().validate()
        make_grid(dazi=0.0, rows=[]).validate()

    def test_validate_row_length(self):
        rows = [(az, np.array([0.0, -0.4])) for az in (0.0, 120.0, 240.0, 360.0)]
        with self.assertRaises(GrammarError):
            make_grid(rows=rows).validate()

    def test_validate_row_count(self):
        with self.assertRaises(GrammarError):
            make_grid(rows=[(0.0, np.zeros(3))]).validate()

    def test_empty_matrix_keeps_zenith_axis(self):
        self.assertEqual(make_grid(dazi=0.0, rows=[]).azimuth_matrix.shape, (0, 3))


class TestAntennaRecord(unittest.TestCase):

    def test_receiver_classification(self):
        ant = AntennaRecord()
        ant.set_type_serial("TRM59800.00     SCIS", "5311354", "", "")
        self.assertFalse(ant.is_satellite)
        self.assertEqual(ant.serial_number, "5311354")
        self.assertIsNone(ant.satellite_id)

    def test_satellite_classification(self):
        ant = AntennaRecord()
        ant.set_type_serial("GALILEO-2", "E01", "E210", "2016-030B")
        self.assertTrue(ant.is_satellite)
        self.assertEqual(ant.satellite_id, "E01")
        self.assertEqual(ant.svn, "E210")
        self.assertEqual(ant.cospar_id, "2016-030B")
        self.assertIsNone(ant.serial_number)

    def test_grid_lookup(self):
        ant = AntennaRecord(type="TEST", pcv_grids=[make_grid()])
        self.assertIs(ant.grid('G01'), ant.pcv_grids[0])
        self.assertIsNone(ant.grid('G02'))
        self.assertEqual(ant.frequency_codes, ['G01'])

    def test_validity_window(self):
        ant = AntennaRecord(valid_from=datetime(2010, 1, 1), valid_until=datetime(2012, 1, 1))
        self.assertTrue(ant.is_valid_at(datetime(2011, 6, 1)))
        self.assertFalse(ant.is_valid_at(datetime(2009, 12, 31)))
        self.assertFalse(ant.is_valid_at(datetime(2012, 1, 2)))
        self.assertTrue(AntennaRecord().is_valid_at(datetime(1980, 1, 6)))


class TestAntexFile(unittest.TestCase):

    def setUp(self):
        old = AntennaRecord(valid_from=datetime(2000, 1, 1), valid_until=datetime(2005, 1, 1))
        old.set_type_serial("BLOCK IIR-A", "G05", "G046", "1999-055A")
        new = AntennaRecord(valid_from=datetime(2005, 1, 2))
        new.set_type_serial("BLOCK IIR-M", "G05", "G050", "2009-043A")
        rcv = AntennaRecord()
        rcv.set_type_serial("LEIAR25.R3      LEIT", "", "", "")
        self.atx = AntexFile(FileHeader(version="1.4", satellite_system="M", pcv_type="A"),
                             [old, new, rcv])

    def test_partition(self):
        self.assertEqual(len(self.atx.satellite_antennas()), 2)
        self.assertEqual(len(self.atx.receiver_antennas()), 1)
        self.assertEqual(len(self.atx), 3)
        self.assertEqual(self.atx.header.satellite_system_name, 'Mixed')

    def test_satellite_by_epoch(self):
        self.assertEqual(self.atx.find_satellite_antenna("G05", datetime(2003, 1, 1)).svn, "G046")
        self.assertEqual(self.atx.find_satellite_antenna("G05", datetime(2020, 1, 1)).svn, "G050")
        self.assertEqual(self.atx.find_satellite_antenna("G05").svn, "G050")
        self.assertIsNone(self.atx.find_satellite_antenna("G06"))

    def test_receiver_lookup_strips_type(self):
        self.assertIsNotNone(self.atx.find_receiver_antenna(" LEIAR25.R3      LEIT "))


class TestDiagnostics(unittest.TestCase):

    def test_entries_are_logged(self):
        log = logging.getLogger("pyantex.test")
        diagnostics = Diagnostics(log)
        with self.assertLogs(log, level='WARNING') as captured:
            diagnostics.warning("short line", 3, "abc")
            diagnostics.add_exception(FieldParseError("invalid DAZI", 8, "x"), "'ANT'")

        self.assertEqual(len(diagnostics.warnings), 1)
        self.assertEqual(len(diagnostics.errors), 1)
        self.assertEqual(diagnostics.errors[0].message, "'ANT': invalid DAZI")
        self.assertEqual(diagnostics.errors[0].line_number, 8)
        self.assertEqual(len(captured.records), 2)
        self.assertIn("line 3", captured.output[0])


class TestExceptions(unittest.TestCase):

    def test_message_carries_line_and_token(self):
        exc = FieldParseError("failed to parse value", 42, "1.2.3")
        self.assertIsInstance(exc, AntexError)
        self.assertIsInstance(exc, ValueError)
        self.assertEqual(str(exc), "failed to parse value, line=42, token='1.2.3'")

    def test_compounded_flag(self):
        self.assertFalse(TerminatorNotFoundError("missing").compounded)
        self.assertTrue(TerminatorNotFoundError("missing", 3, compounded=True).compounded)
        self.assertEqual(str(TerminatorNotFoundError("missing")), "missing")


if __name__ == '__main__':
    unittest.main()
