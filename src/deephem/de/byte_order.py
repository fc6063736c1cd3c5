"""
Byte order detection for DE header records.

DE files carry no endianness marker. The order is recovered by decoding
the header both ways and keeping the interpretation whose date range,
interval length and DE number are plausible.
"""

import math
import struct
import sys
from enum import Enum

from ..errors import FormatError

# Offsets into the fixed header block
TITLE_LINE_LENGTH = 84
TITLE_LINE_COUNT = 3
MAX_CONSTANT_NAMES = 400
CONSTANT_NAME_LENGTH = 6

DATES_OFFSET = TITLE_LINE_LENGTH * TITLE_LINE_COUNT + MAX_CONSTANT_NAMES * CONSTANT_NAME_LENGTH
DE_NUMBER_OFFSET = DATES_OFFSET + 3 * 8 + 4 + 2 * 8 + 12 * 3 * 4
HEADER_BLOCK_SIZE = DE_NUMBER_OFFSET + 4 + 3 * 4

MIN_DAYS_PER_INTERVAL = 1.0e-3
MAX_DAYS_PER_INTERVAL = 1000.0
MAX_DE_NUMBER = 1 << 15


class ByteOrder(Enum):
    """Byte order of every multi-byte field in a DE file."""

    LITTLE = "little"
    BIG = "big"

    @property
    def struct_prefix(self) -> str:
        """Prefix for struct format strings."""
        return "<" if self is ByteOrder.LITTLE else ">"

    @property
    def numpy_dtype(self) -> str:
        """numpy dtype string for a 64-bit float in this order."""
        return "<f8" if self is ByteOrder.LITTLE else ">f8"

    @property
    def is_native(self) -> bool:
        return self.value == sys.byteorder


def _is_plausible(raw_header: bytes, order: ByteOrder) -> bool:
    prefix = order.struct_prefix
    start, end, days_per_interval = struct.unpack_from(prefix + "ddd", raw_header, DATES_OFFSET)
    (de_number,) = struct.unpack_from(prefix + "I", raw_header, DE_NUMBER_OFFSET)

    if not all(math.isfinite(v) for v in (start, end, days_per_interval)):
        return False
    if not start < end:
        return False
    if not MIN_DAYS_PER_INTERVAL <= days_per_interval <= MAX_DAYS_PER_INTERVAL:
        return False
    return 0 < de_number < MAX_DE_NUMBER


def detect_byte_order(raw_header: bytes) -> ByteOrder:
    """Work out the byte order of a DE header.

    Args:
        raw_header: At least the fixed header block of record 0

    Returns:
        The byte order under which the header decodes plausibly

    Raises:
        FormatError: If the header is truncated, or if neither or both
            byte orders produce a plausible header
    """
    if len(raw_header) < HEADER_BLOCK_SIZE:
        raise FormatError(
            f"Header truncated: need {HEADER_BLOCK_SIZE} bytes, got {len(raw_header)}"
        )

    candidates = [order for order in ByteOrder if _is_plausible(raw_header, order)]
    if not candidates:
        raise FormatError("Header is not plausible in either byte order")
    if len(candidates) > 1:
        raise FormatError("Header is plausible in both byte orders; cannot detect byte order")
    return candidates[0]
