#!/usr/bin/env python3
"""Test suite for column level ANTEX parsing"""

import unittest
from datetime import datetime

import numpy as np
import pytest

from pyantex.core.constants import LineKind
from pyantex.core.data_structures import Diagnostics
from pyantex.core.exceptions import FieldParseError
from pyantex.io.fields import (extract_frequency_code, extract_label, extract_pcv_type_refant,
                               extract_type_serial, extract_version_system, has_label,
                               parse_date, parse_floats, parse_row, structural_kind)


def rec(data, label):
    return f"{data:<60}{label}"


class TestLabelExtractor(unittest.TestCase):

    def test_label_and_data(self):
        line = rec("     0.0  17.0   1.0", "ZEN1 / ZEN2 / DZEN  ")
        labeled = extract_label(line, 7)

        self.assertIs(labeled.kind, LineKind.ZEN)
        self.assertEqual(labeled.label, "ZEN1 / ZEN2 / DZEN")
        self.assertEqual(len(labeled.data), 60)
        self.assertEqual(labeled.line_number, 7)
        self.assertFalse(labeled.coerced)

    def test_unknown_label(self):
        labeled = extract_label(rec("", "SOME NEW LABEL"))
        self.assertIs(labeled.kind, LineKind.UNKNOWN)
        self.assertEqual(labeled.label, "SOME NEW LABEL")

    def test_short_line_becomes_comment(self):
        diagnostics = Diagnostics()
        labeled = extract_label("   NOAZI    0.00", 12, diagnostics)

        self.assertIs(labeled.kind, LineKind.COMMENT)
        self.assertTrue(labeled.coerced)
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].level, 'warning')
        self.assertEqual(diagnostics[0].line_number, 12)

    def test_exactly_sixty_columns_is_short(self):
        labeled = extract_label(" " * 60, 1, Diagnostics())
        self.assertTrue(labeled.coerced)

    def test_has_label(self):
        self.assertTrue(has_label(rec("", "END OF ANTENNA"), LineKind.END_OF_ANTENNA))
        self.assertFalse(has_label(rec("", "END OF ANTENNA"), LineKind.END_OF_FREQUENCY))
        self.assertFalse(has_label("END OF ANTENNA", LineKind.END_OF_ANTENNA))

    def test_structural_kind_ignores_long_data_rows(self):
        row = "   NOAZI" + "   -0.90" * 18
        self.assertIsNone(structural_kind(row))
        self.assertIs(structural_kind(rec("   G01", "END OF FREQUENCY")),
                      LineKind.END_OF_FREQUENCY)


class TestColumnFields(unittest.TestCase):

    def test_version_system(self):
        data = f"{'1.4':>8}{'':12}M"
        self.assertEqual(extract_version_system(data), ("1.4", "M"))

    def test_pcv_type_refant(self):
        data = f"{'R':<20}{'AOAD/M_T        NONE':<20}{'':<20}"
        self.assertEqual(extract_pcv_type_refant(data), ("R", "AOAD/M_T        NONE", ""))

    def test_type_serial_satellite(self):
        data = f"{'BLOCK IIA':<20}{'G01':<20}{'G032':<10}{'1992-079A':<10}"
        self.assertEqual(extract_type_serial(data), ("BLOCK IIA", "G01", "G032", "1992-079A"))

    def test_frequency_code(self):
        self.assertEqual(extract_frequency_code("   R02"), ("R", 2))
        with self.assertRaises(FieldParseError):
            extract_frequency_code("   GXX", 4)
        with self.assertRaises(FieldParseError):
            extract_frequency_code("    01", 4)

    def test_parse_floats_needs_count(self):
        self.assertEqual(parse_floats("  0.0  90.0  5.0 ", 3), [0.0, 90.0, 5.0])
        with self.assertRaises(FieldParseError):
            parse_floats("  0.0  90.0", 3, 9)


class TestRowParser(unittest.TestCase):

    def test_key_and_values(self):
        key, values = parse_row("    35.0   -0.12    0.34   +1.50")
        self.assertEqual(key, "35.0")
        np.testing.assert_array_equal(values, [-0.12, 0.34, 1.5])

    def test_key_only(self):
        key, values = parse_row("   NOAZI")
        self.assertEqual(key, "NOAZI")
        self.assertEqual(values.size, 0)

    def test_empty_line(self):
        with self.assertRaises(FieldParseError) as ctx:
            parse_row("    ", 21)
        self.assertIn("no values found", str(ctx.exception))
        self.assertEqual(ctx.exception.line_number, 21)

    def test_bad_token(self):
        with self.assertRaises(FieldParseError) as ctx:
            parse_row("   NOAZI   -0.80   -0.9O", 33)
        self.assertEqual(ctx.exception.token, "-0.9O")
        self.assertEqual(ctx.exception.line_number, 33)


@pytest.mark.parametrize("data, expected", [
    ("  1992    11    22     0     0    0.0000000", datetime(1992, 11, 22)),
    ("  2016    12     9     0     0    0.0000000", datetime(2016, 12, 9)),
    ("  2017     1     3    23    59   59.9999999", datetime(2017, 1, 3, 23, 59, 59, 999999)),
    ("  2020     2    29    12    30   15.5", datetime(2020, 2, 29, 12, 30, 15, 500000)),
])
def test_parse_date(data, expected):
    assert parse_date(f"{data:<60}") == expected


@pytest.mark.parametrize("data", [
    "  1992    11    22     0     0",
    "  1992    11    22     0     0   xx.0000000",
    "  1992    13    22     0     0    0.0000000",
    "  1992-11-22 00:00:00",
    "1992 11 22 0 0 0.0",
])
def test_parse_date_rejects_layout(data):
    with pytest.raises(FieldParseError):
        parse_date(data, 5)


if __name__ == '__main__':
    unittest.main()
