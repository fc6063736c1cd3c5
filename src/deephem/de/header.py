"""
DE header record decoding.

Record 0 of a DE file holds the title lines, the constant names, the date
range, the physical constants needed for evaluation and the table that says
where each body's coefficients live inside an interval record.
"""

import math
import struct
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from ..body import Body, FILE_TABLE_ORDER
from ..errors import FormatError
from .byte_order import (
    ByteOrder,
    CONSTANT_NAME_LENGTH,
    DATES_OFFSET,
    DE_NUMBER_OFFSET,
    HEADER_BLOCK_SIZE,
    MAX_CONSTANT_NAMES,
    TITLE_LINE_COUNT,
    TITLE_LINE_LENGTH,
)

WORD_SIZE = 8

# Words 1 and 2 of every record are t0 and t1; table offsets are 1-based
FIRST_COEFFICIENT_WORD = 3

# Record sizes, in words, published for the DE releases this reader targets
KNOWN_RECORD_WORD_COUNTS: Dict[int, int] = {
    200: 826,
    405: 1018,
    406: 728,
}

MIN_RECORD_WORD_COUNT = HEADER_BLOCK_SIZE // WORD_SIZE

# Some producers write an all-ones granule count meaning "one granule"
_WHOLE_INTERVAL_GRANULES = 0xFFFFFFFF

INTERVAL_COUNT_TOLERANCE = 1e-6


@dataclass(frozen=True)
class CoefficientLayout:
    """Where one item's coefficients sit inside a record's coefficient block.

    ``offset`` is a 0-based index into the coefficient block (the record
    without its two leading time words). An item absent from the file has
    ``coefficient_count == 0``.
    """

    offset: int
    coefficient_count: int
    granule_count: int
    component_count: int = 3

    @classmethod
    def absent(cls, component_count: int = 3) -> "CoefficientLayout":
        return cls(offset=0, coefficient_count=0, granule_count=0, component_count=component_count)

    @property
    def is_present(self) -> bool:
        return self.coefficient_count > 0

    @property
    def word_count(self) -> int:
        """Total words used by this item in each record."""
        return self.coefficient_count * self.granule_count * self.component_count

    @property
    def end(self) -> int:
        return self.offset + self.word_count

    @property
    def granule_stride(self) -> int:
        """Words between the starts of consecutive granules."""
        return self.coefficient_count * self.component_count


@dataclass(frozen=True)
class EphemerisHeader:
    """Decoded contents of a DE header record."""

    de_number: int
    start_date: float
    end_date: float
    days_per_interval: float
    au: float
    earth_moon_mass_ratio: float
    record_word_count: int
    byte_order: ByteOrder
    layouts: Mapping[Body, CoefficientLayout]
    labels: Tuple[str, ...] = ()
    constant_names: Tuple[str, ...] = ()
    constant_count: int = 0

    @property
    def byte_order_swapped(self) -> bool:
        """True when the file's byte order differs from the host's."""
        return not self.byte_order.is_native

    @property
    def interval_count(self) -> int:
        return int(round((self.end_date - self.start_date) / self.days_per_interval))

    @property
    def record_size(self) -> int:
        """Size of one record in bytes."""
        return self.record_word_count * WORD_SIZE

    @property
    def coefficient_word_count(self) -> int:
        """Words of coefficient data per record, excluding t0 and t1."""
        return self.record_word_count - 2


def _decode_text(raw: bytes) -> str:
    return raw.decode("ascii", errors="replace").strip()


def _read_layout(
    raw_header: bytes, position: int, prefix: str, body: Body
) -> CoefficientLayout:
    file_offset, coefficient_count, granule_count = struct.unpack_from(
        prefix + "III", raw_header, position
    )
    if coefficient_count == 0:
        return CoefficientLayout.absent(body.component_count)

    if granule_count == _WHOLE_INTERVAL_GRANULES:
        granule_count = 1
    if granule_count < 1:
        raise FormatError(f"{body.value}: granule count must be at least 1, got {granule_count}")
    if file_offset < FIRST_COEFFICIENT_WORD:
        raise FormatError(
            f"{body.value}: coefficient offset {file_offset} overlaps the record time words"
        )

    return CoefficientLayout(
        offset=file_offset - FIRST_COEFFICIENT_WORD,
        coefficient_count=coefficient_count,
        granule_count=granule_count,
        component_count=body.component_count,
    )


def compute_record_word_count(layouts: Mapping[Body, CoefficientLayout]) -> int:
    """Words per record implied by a layout table.

    Raises:
        FormatError: If two present items overlap or no item is present
    """
    present = sorted(
        ((body, layout) for body, layout in layouts.items() if layout.is_present),
        key=lambda item: item[1].offset,
    )
    if not present:
        raise FormatError("Layout table has no coefficient data")

    for (body_a, layout_a), (body_b, layout_b) in zip(present, present[1:]):
        if layout_a.end > layout_b.offset:
            raise FormatError(
                f"Coefficient ranges of {body_a.value} and {body_b.value} overlap"
            )

    return max(layout.end for _, layout in present) + FIRST_COEFFICIENT_WORD - 1


def parse_header(raw_header: bytes, byte_order: ByteOrder) -> EphemerisHeader:
    """Decode the fixed header block of record 0.

    Args:
        raw_header: At least ``HEADER_BLOCK_SIZE`` bytes of record 0
        byte_order: Byte order returned by ``detect_byte_order``

    Returns:
        The decoded header

    Raises:
        FormatError: If the header is truncated or its fields are inconsistent
    """
    if len(raw_header) < HEADER_BLOCK_SIZE:
        raise FormatError(
            f"Header truncated: need {HEADER_BLOCK_SIZE} bytes, got {len(raw_header)}"
        )

    prefix = byte_order.struct_prefix
    try:
        labels = tuple(
            _decode_text(raw_header[i * TITLE_LINE_LENGTH : (i + 1) * TITLE_LINE_LENGTH])
            for i in range(TITLE_LINE_COUNT)
        )

        position = DATES_OFFSET
        start_date, end_date, days_per_interval = struct.unpack_from(prefix + "ddd", raw_header, position)
        position += 3 * 8
        (constant_count,) = struct.unpack_from(prefix + "I", raw_header, position)
        position += 4
        au, earth_moon_mass_ratio = struct.unpack_from(prefix + "dd", raw_header, position)
        position += 2 * 8

        layouts: Dict[Body, CoefficientLayout] = {}
        for body in FILE_TABLE_ORDER:
            layouts[body] = _read_layout(raw_header, position, prefix, body)
            position += 3 * 4

        (de_number,) = struct.unpack_from(prefix + "I", raw_header, DE_NUMBER_OFFSET)
        layouts[Body.LIBRATION] = _read_layout(
            raw_header, DE_NUMBER_OFFSET + 4, prefix, Body.LIBRATION
        )
    except struct.error as e:
        raise FormatError(f"Invalid header data: {e}") from e

    names_start = TITLE_LINE_LENGTH * TITLE_LINE_COUNT
    constant_names = tuple(
        _decode_text(
            raw_header[
                names_start + i * CONSTANT_NAME_LENGTH : names_start + (i + 1) * CONSTANT_NAME_LENGTH
            ]
        )
        for i in range(min(constant_count, MAX_CONSTANT_NAMES))
    )

    if not end_date > start_date:
        raise FormatError(f"End date {end_date} is not after start date {start_date}")
    if not days_per_interval > 0:
        raise FormatError(f"Days per interval must be positive, got {days_per_interval}")
    if not (math.isfinite(au) and au > 0):
        raise FormatError(f"Astronomical unit must be positive, got {au}")
    if not (math.isfinite(earth_moon_mass_ratio) and earth_moon_mass_ratio > 0):
        raise FormatError(
            f"Earth-Moon mass ratio must be positive, got {earth_moon_mass_ratio}"
        )

    intervals = (end_date - start_date) / days_per_interval
    if round(intervals) < 1 or abs(intervals - round(intervals)) > INTERVAL_COUNT_TOLERANCE:
        raise FormatError(
            f"Date range [{start_date}, {end_date}] is not a whole number of "
            f"{days_per_interval}-day intervals"
        )

    computed = compute_record_word_count(layouts)
    declared = KNOWN_RECORD_WORD_COUNTS.get(de_number, computed)
    if computed != declared:
        raise FormatError(
            f"DE{de_number} records hold {declared} words, but the layout table "
            f"describes {computed}"
        )
    if declared < MIN_RECORD_WORD_COUNT:
        raise FormatError(
            f"Record size of {declared} words cannot hold the {HEADER_BLOCK_SIZE}-byte header"
        )

    return EphemerisHeader(
        de_number=de_number,
        start_date=start_date,
        end_date=end_date,
        days_per_interval=days_per_interval,
        au=au,
        earth_moon_mass_ratio=earth_moon_mass_ratio,
        record_word_count=declared,
        byte_order=byte_order,
        layouts=MappingProxyType(layouts),
        labels=labels,
        constant_names=constant_names,
        constant_count=constant_count,
    )
