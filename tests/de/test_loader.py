"""Tests for loading DE files from streams, bytes and paths."""

import io
import math
import unittest

import numpy as np
import pytest

from deephem.body import Body
from deephem.de import ByteOrder, load, load_bytes, load_file
from deephem.errors import FormatError

from synthetic_de import (
    CONSTANTS,
    DAYS_PER_INTERVAL,
    RECORD_WORDS,
    START_DATE,
    build_de_file,
    constant_coefficients,
)


class ChunkedStream(io.RawIOBase):
    """A stream that never returns more than a few bytes per read."""

    def __init__(self, data: bytes, chunk: int = 1000):
        self._buffer = io.BytesIO(data)
        self._chunk = chunk

    def readable(self):
        return True

    def read(self, size=-1):
        if size is None or size < 0:
            return self._buffer.read()
        return self._buffer.read(min(size, self._chunk))


class TestLoad(unittest.TestCase):
    """Test loading a valid synthetic file."""

    def setUp(self):
        self.data = build_de_file(intervals=3)
        self.eph = load_bytes(self.data)

    def test_record_count_matches_date_range(self):
        span = self.eph.end_date - self.eph.start_date
        self.assertEqual(math.fmod(span, self.eph.days_per_interval), 0.0)
        self.assertEqual(self.eph.record_count, span / self.eph.days_per_interval)
        self.assertEqual(self.eph.record_count, 3)

    def test_records_are_contiguous(self):
        records = self.eph.records
        self.assertEqual(records[0].t0, START_DATE)
        for current, following in zip(records, records[1:]):
            self.assertEqual(current.t1, following.t0)
            self.assertEqual(current.t1 - current.t0, DAYS_PER_INTERVAL)
        self.assertEqual(records[-1].t1, self.eph.end_date)

    def test_record_coefficient_length(self):
        for record in self.eph.records:
            self.assertEqual(len(record.coefficients), RECORD_WORDS - 2)

    def test_records_are_read_only(self):
        with self.assertRaises(ValueError):
            self.eph.records[0].coefficients[0] = 1.0

    def test_constants(self):
        self.assertEqual(dict(self.eph.constants), CONSTANTS)
        with self.assertRaises(TypeError):
            self.eph.constants["AU"] = 1.0

    def test_accessors(self):
        self.assertEqual(self.eph.de_number, 102)
        self.assertEqual(self.eph.date_range, (START_DATE, START_DATE + 3 * DAYS_PER_INTERVAL))
        self.assertEqual(self.eph.record_word_count, RECORD_WORDS)
        self.assertEqual(self.eph.byte_order, ByteOrder.LITTLE)
        self.assertEqual(self.eph.byte_order_swapped, not ByteOrder.LITTLE.is_native)

    def test_load_from_stream(self):
        eph = load(io.BytesIO(self.data))
        self.assertEqual(eph.record_count, 3)

    def test_load_from_short_reads(self):
        eph = load(ChunkedStream(self.data))
        self.assertEqual(eph.record_count, 3)


class TestByteOrders(unittest.TestCase):
    """Test that both byte orders load to the same ephemeris."""

    def test_big_and_little_endian_agree(self):
        coefficients = constant_coefficients({Body.SUN: (1.5, -2.25, 3.0)})
        little = load_bytes(build_de_file("<", coefficients=coefficients))
        big = load_bytes(build_de_file(">", coefficients=coefficients))

        self.assertEqual(little.byte_order, ByteOrder.LITTLE)
        self.assertEqual(big.byte_order, ByteOrder.BIG)
        self.assertEqual(little.date_range, big.date_range)
        self.assertEqual(dict(little.constants), dict(big.constants))

        t = START_DATE + 40.0
        np.testing.assert_array_equal(little.position(Body.SUN, t), big.position(Body.SUN, t))
        np.testing.assert_array_equal(big.position(Body.SUN, t), [1.5, -2.25, 3.0])

    def test_big_endian_records_are_native_copies(self):
        eph = load_bytes(build_de_file(">"))
        coefficients = eph.records[0].coefficients
        self.assertEqual(coefficients.dtype, np.dtype(np.float64))
        self.assertTrue(coefficients.dtype.isnative)
        self.assertFalse(coefficients.flags.writeable)
        self.assertEqual(eph.records[1].t0, START_DATE + DAYS_PER_INTERVAL)


class TestMalformedInput(unittest.TestCase):
    """Test rejection of truncated and inconsistent streams."""

    def setUp(self):
        self.data = build_de_file()

    def test_empty_stream(self):
        with self.assertRaises(FormatError):
            load_bytes(b"")

    def test_truncated_mid_header(self):
        with self.assertRaises(FormatError) as cm:
            load_bytes(self.data[:1500])
        self.assertIn("header", str(cm.exception))

    def test_truncated_in_header_padding(self):
        with self.assertRaises(FormatError):
            load_bytes(self.data[:2860])

    def test_truncated_in_constants(self):
        with self.assertRaises(FormatError) as cm:
            load_bytes(self.data[: RECORD_WORDS * 8 + 100])
        self.assertIn("constants", str(cm.exception))

    def test_truncated_in_records(self):
        with self.assertRaises(FormatError) as cm:
            load_bytes(self.data[:-8])
        self.assertIn("2 interval records", str(cm.exception))

    def test_missing_last_record(self):
        with self.assertRaises(FormatError):
            load_bytes(self.data[: -RECORD_WORDS * 8])

    def test_trailing_data(self):
        with self.assertRaises(FormatError) as cm:
            load_bytes(self.data + b"\x01\x02\x03")
        self.assertIn("trailing", str(cm.exception))

    def test_zero_padding_is_tolerated(self):
        eph = load_bytes(self.data + bytes(RECORD_WORDS * 8))
        self.assertEqual(eph.record_count, 2)

    def test_gap_between_records(self):
        times = [(START_DATE, START_DATE + 32.0), (START_DATE + 33.0, START_DATE + 65.0)]
        with self.assertRaises(FormatError) as cm:
            load_bytes(build_de_file(record_times=times))
        self.assertIn("Record 1 starts", str(cm.exception))

    def test_wrong_record_span(self):
        times = [(START_DATE, START_DATE + 30.0), (START_DATE + 30.0, START_DATE + 64.0)]
        with self.assertRaises(FormatError) as cm:
            load_bytes(build_de_file(record_times=times))
        self.assertIn("spans", str(cm.exception))

    def test_first_record_must_start_at_start_date(self):
        times = [(START_DATE + 1.0, START_DATE + 33.0), (START_DATE + 33.0, START_DATE + 65.0)]
        with self.assertRaises(FormatError):
            load_bytes(build_de_file(record_times=times))

    def test_format_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            load_bytes(b"not an ephemeris")


def test_load_file(de_path):
    eph = load_file(de_path)
    assert eph.record_count == 2
    assert eph.de_number == 102


def test_load_file_missing(tmp_path):
    with pytest.raises(OSError):
        load_file(str(tmp_path / "missing.405"))


if __name__ == "__main__":
    unittest.main()
