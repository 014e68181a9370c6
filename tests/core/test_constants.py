#!/usr/bin/env python3
"""Test suite for ANTEX format constants"""

import unittest

from pyantex.core.constants import (DATE_FIELDS, LABEL_COLUMN, MIN_LINE_WIDTH, NOAZI,
                                    SYSTEM_NAMES, LineKind)


class TestLayout(unittest.TestCase):
    """Test line layout constants"""

    def test_label_column(self):
        """Labels start right after the 60 data columns"""
        self.assertEqual(LABEL_COLUMN, 60)
        self.assertEqual(MIN_LINE_WIDTH, 61)

    def test_date_fields_are_contiguous(self):
        """Date groups follow each other without gaps (5I6,F13.7)"""
        for (_, stop), (start, _) in zip(DATE_FIELDS, DATE_FIELDS[1:]):
            self.assertEqual(stop, start)
        self.assertEqual(DATE_FIELDS[-1], (30, 43))


class TestLineKind(unittest.TestCase):
    """Test label to line kind mapping"""

    def test_known_labels(self):
        self.assertIs(LineKind.from_label("START OF ANTENNA"), LineKind.START_OF_ANTENNA)
        self.assertIs(LineKind.from_label("# OF FREQUENCIES"), LineKind.NUM_FREQUENCIES)
        self.assertIs(LineKind.from_label("METH / BY / # / DATE"), LineKind.METH_BY_DATE)

    def test_unknown_labels(self):
        self.assertIs(LineKind.from_label("ANTENNA PHASECENTER"), LineKind.UNKNOWN)
        self.assertIs(LineKind.from_label(""), LineKind.UNKNOWN)
        self.assertIs(LineKind.from_label(NOAZI), LineKind.UNKNOWN)

    def test_every_label_round_trips(self):
        for kind in LineKind:
            if kind is not LineKind.UNKNOWN:
                self.assertIs(LineKind.from_label(kind.value), kind)

    def test_system_names(self):
        self.assertEqual(SYSTEM_NAMES['G'], 'GPS')
        self.assertEqual(SYSTEM_NAMES['M'], 'Mixed')


if __name__ == '__main__':
    unittest.main()
