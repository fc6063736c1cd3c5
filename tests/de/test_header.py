"""Tests for DE header decoding."""

import unittest

from deephem.body import Body, LAYOUT_ITEMS
from deephem.de.byte_order import ByteOrder
from deephem.de.header import (
    CoefficientLayout,
    KNOWN_RECORD_WORD_COUNTS,
    compute_record_word_count,
    parse_header,
)
from deephem.errors import FormatError

from synthetic_de import (
    AU_KM,
    CONSTANTS,
    DAYS_PER_INTERVAL,
    DE_NUMBER,
    EMRAT,
    LAYOUT,
    RECORD_WORDS,
    START_DATE,
    build_header_block,
)


class TestParseHeader(unittest.TestCase):
    """Test decoding of a valid header block."""

    def setUp(self):
        self.header = parse_header(build_header_block("<"), ByteOrder.LITTLE)

    def test_scalar_fields(self):
        self.assertEqual(self.header.de_number, DE_NUMBER)
        self.assertEqual(self.header.start_date, START_DATE)
        self.assertEqual(self.header.end_date, START_DATE + 2 * DAYS_PER_INTERVAL)
        self.assertEqual(self.header.days_per_interval, DAYS_PER_INTERVAL)
        self.assertEqual(self.header.au, AU_KM)
        self.assertEqual(self.header.earth_moon_mass_ratio, EMRAT)
        self.assertEqual(self.header.byte_order, ByteOrder.LITTLE)

    def test_record_size_is_computed_from_layout(self):
        self.assertEqual(self.header.record_word_count, RECORD_WORDS)
        self.assertEqual(self.header.record_size, RECORD_WORDS * 8)
        self.assertEqual(self.header.coefficient_word_count, RECORD_WORDS - 2)

    def test_interval_count(self):
        self.assertEqual(self.header.interval_count, 2)

    def test_layout_table_has_every_item(self):
        self.assertEqual(set(self.header.layouts), set(LAYOUT_ITEMS))
        self.assertEqual(len(self.header.layouts), 13)

    def test_present_layouts_use_coefficient_block_offsets(self):
        mercury = self.header.layouts[Body.MERCURY]
        self.assertEqual(mercury, CoefficientLayout(offset=0, coefficient_count=4, granule_count=2))
        self.assertEqual(mercury.word_count, 24)
        self.assertEqual(mercury.granule_stride, 12)

        moon = self.header.layouts[Body.MOON]
        self.assertEqual(moon.offset, LAYOUT[Body.MOON][0] - 3)
        self.assertEqual(moon.granule_count, 4)

    def test_nutation_has_two_components(self):
        nutation = self.header.layouts[Body.NUTATION]
        self.assertEqual(nutation.component_count, 2)
        self.assertEqual(nutation.word_count, 10 * 4 * 2)

    def test_absent_bodies(self):
        for body in (Body.VENUS, Body.MARS, Body.PLUTO):
            layout = self.header.layouts[body]
            self.assertFalse(layout.is_present)
            self.assertEqual(layout.coefficient_count, 0)

    def test_labels_and_constant_names(self):
        self.assertEqual(self.header.labels[0], "SYNTHETIC EPHEMERIS FOR TESTS")
        self.assertEqual(len(self.header.labels), 3)
        self.assertEqual(self.header.constant_names, tuple(CONSTANTS))
        self.assertEqual(self.header.constant_count, len(CONSTANTS))

    def test_big_endian_header_is_swapped_on_little_endian_host(self):
        header = parse_header(build_header_block(">"), ByteOrder.BIG)
        self.assertEqual(header.byte_order_swapped, not ByteOrder.BIG.is_native)


class TestHeaderValidation(unittest.TestCase):
    """Test rejection of inconsistent headers."""

    def test_partial_interval_is_rejected(self):
        block = build_header_block("<", end_date=START_DATE + 50.0)
        with self.assertRaises(FormatError) as cm:
            parse_header(block, ByteOrder.LITTLE)
        self.assertIn("whole number", str(cm.exception))

    def test_end_before_start_is_rejected(self):
        block = build_header_block("<", end_date=START_DATE - 32.0)
        with self.assertRaises(FormatError):
            parse_header(block, ByteOrder.LITTLE)

    def test_non_positive_interval_is_rejected(self):
        block = build_header_block("<", days_per_interval=0.0, end_date=START_DATE + 64.0)
        with self.assertRaises(FormatError):
            parse_header(block, ByteOrder.LITTLE)

    def test_known_de_number_with_wrong_layout_is_rejected(self):
        self.assertIn(405, KNOWN_RECORD_WORD_COUNTS)
        block = build_header_block("<", de_number=405)
        with self.assertRaises(FormatError) as cm:
            parse_header(block, ByteOrder.LITTLE)
        self.assertIn("1018", str(cm.exception))

    def test_overlapping_layouts_are_rejected(self):
        layout = dict(LAYOUT)
        layout[Body.SUN] = (70, 3, 1)
        with self.assertRaises(FormatError) as cm:
            parse_header(build_header_block("<", layout=layout), ByteOrder.LITTLE)
        self.assertIn("overlap", str(cm.exception))

    def test_offset_inside_time_words_is_rejected(self):
        layout = dict(LAYOUT)
        layout[Body.VENUS] = (2, 3, 1)
        with self.assertRaises(FormatError):
            parse_header(build_header_block("<", layout=layout), ByteOrder.LITTLE)

    def test_zero_granules_is_rejected(self):
        layout = dict(LAYOUT)
        layout[Body.SUN] = (72, 3, 0)
        with self.assertRaises(FormatError):
            parse_header(build_header_block("<", layout=layout), ByteOrder.LITTLE)

    def test_all_ones_granule_count_means_one_granule(self):
        layout = dict(LAYOUT)
        layout[Body.SUN] = (72, 3, 0xFFFFFFFF)
        header = parse_header(build_header_block("<", layout=layout), ByteOrder.LITTLE)
        self.assertEqual(header.layouts[Body.SUN].granule_count, 1)

    def test_record_too_small_for_header_is_rejected(self):
        layout = {Body.SUN: (3, 3, 1)}
        with self.assertRaises(FormatError) as cm:
            parse_header(build_header_block("<", layout=layout), ByteOrder.LITTLE)
        self.assertIn("cannot hold", str(cm.exception))

    def test_truncated_block_is_rejected(self):
        with self.assertRaises(FormatError):
            parse_header(build_header_block("<")[:2000], ByteOrder.LITTLE)


class TestComputeRecordWordCount(unittest.TestCase):
    """Test record size computation from a layout table."""

    def test_de405_libration_ends_the_record(self):
        layouts = {
            Body.MERCURY: CoefficientLayout(0, 14, 4),
            Body.LIBRATION: CoefficientLayout(899 - 3, 10, 4),
        }
        self.assertEqual(compute_record_word_count(layouts), 1018)

    def test_empty_table_is_rejected(self):
        with self.assertRaises(FormatError):
            compute_record_word_count({Body.MERCURY: CoefficientLayout.absent()})


if __name__ == "__main__":
    unittest.main()
