"""
In-memory DE ephemeris and position evaluation.

A ``DEEphemeris`` is built once by the loader and never modified afterwards,
so a single instance can be queried from any number of threads.
"""

import math
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

import numpy as np

from ..body import Body, DERIVED_FROM, QUERYABLE_BODIES
from ..errors import FormatError, OutOfRangeError, UnsupportedBodyError
from .byte_order import ByteOrder
from .chebyshev import evaluate_components, normalize_time
from .header import CoefficientLayout, EphemerisHeader
from .record import IntervalRecord


class DEEphemeris:
    """
    A loaded JPL DE ephemeris.

    Positions come back in the frame and units of the file (kilometres,
    ICRF/J2000 equatorial for DE405). Planets, the Sun and the Earth-Moon
    barycenter are barycentric; the Moon is geocentric, as stored.
    """

    def __init__(
        self,
        header: EphemerisHeader,
        data: np.ndarray,
        constants: Optional[Mapping[str, float]] = None,
    ):
        """
        Initialize a DEEphemeris.

        Args:
            header: The decoded header record
            data: Float64 array of shape (interval_count, record_word_count),
                in either byte order, holding every interval record. It is
                copied once into a private native-order buffer.
            constants: Named constant values from the constants record

        Raises:
            FormatError: If the records don't match the header
        """
        if data.ndim != 2 or data.shape != (header.interval_count, header.record_word_count):
            raise FormatError(
                f"Record buffer has shape {data.shape}, expected "
                f"({header.interval_count}, {header.record_word_count})"
            )

        data = np.array(data, dtype=np.float64, copy=True)
        data.flags.writeable = False

        self._header = header
        self._data = data
        self._records: Tuple[IntervalRecord, ...] = tuple(
            IntervalRecord.from_row(row) for row in data
        )
        self._constants = MappingProxyType(dict(constants or {}))

        self._check_records()

    def _check_records(self) -> None:
        header = self._header
        expected_t0 = header.start_date
        for i, record in enumerate(self._records):
            if not math.isclose(record.t0, expected_t0, rel_tol=0.0, abs_tol=1e-9):
                raise FormatError(
                    f"Record {i} starts at {record.t0}, expected {expected_t0}"
                )
            if not math.isclose(
                record.span, header.days_per_interval, rel_tol=0.0, abs_tol=1e-9
            ):
                raise FormatError(
                    f"Record {i} spans {record.span} days, expected {header.days_per_interval}"
                )
            expected_t0 = record.t1

        if not math.isclose(expected_t0, header.end_date, rel_tol=0.0, abs_tol=1e-9):
            raise FormatError(
                f"Records end at {expected_t0}, header says {header.end_date}"
            )

    @property
    def header(self) -> EphemerisHeader:
        return self._header

    @property
    def de_number(self) -> int:
        return self._header.de_number

    @property
    def start_date(self) -> float:
        return self._header.start_date

    @property
    def end_date(self) -> float:
        return self._header.end_date

    @property
    def date_range(self) -> Tuple[float, float]:
        return self._header.start_date, self._header.end_date

    @property
    def days_per_interval(self) -> float:
        return self._header.days_per_interval

    @property
    def byte_order(self) -> ByteOrder:
        return self._header.byte_order

    @property
    def byte_order_swapped(self) -> bool:
        return self._header.byte_order_swapped

    @property
    def record_word_count(self) -> int:
        return self._header.record_word_count

    @property
    def record_count(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[IntervalRecord, ...]:
        return self._records

    @property
    def au(self) -> float:
        return self._header.au

    @property
    def earth_moon_mass_ratio(self) -> float:
        return self._header.earth_moon_mass_ratio

    @property
    def layouts(self) -> Mapping[Body, CoefficientLayout]:
        return self._header.layouts

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._header.labels

    @property
    def constants(self) -> Mapping[str, float]:
        return self._constants

    @property
    def bodies(self) -> List[Body]:
        """Queryable bodies this file can produce positions for."""
        return [body for body in QUERYABLE_BODIES if self.supports(body)]

    def supports(self, body: Body) -> bool:
        """Check if positions for a body can be computed from this file.

        Raises:
            TypeError: If body is not a Body
        """
        if not isinstance(body, Body):
            raise TypeError(
                f"body must be a Body, not {type(body).__name__}; use Body.from_name for names"
            )
        if body.is_pseudo:
            return False
        if body.is_derived:
            return all(self.supports(source) for source in DERIVED_FROM[body])
        return self._header.layouts[body].is_present

    def position(self, body: Body, julian_date: float) -> np.ndarray:
        """
        Get the position of a body at a Julian date.

        Args:
            body: The body to evaluate
            julian_date: Time of the query, as a Julian date in the file's
                time scale (TDB for DE files)

        Returns:
            Array of shape (3,) with the x, y, z components

        Raises:
            OutOfRangeError: If the date is outside [start_date, end_date]
            UnsupportedBodyError: If the body has no data in this file
            TypeError: If body is not a Body
        """
        if not self.supports(body):
            raise UnsupportedBodyError(body)
        record = self._record_for(julian_date)

        if body is Body.SOLAR_SYSTEM_BARYCENTER:
            return np.zeros(3)
        if body is Body.EARTH:
            # Earth = EMB - Moon / (1 + EMRAT), with Moon geocentric
            emb = self._evaluate(record, self._header.layouts[Body.EARTH_MOON_BARYCENTER], julian_date)
            moon = self._evaluate(record, self._header.layouts[Body.MOON], julian_date)
            return emb - moon / (1.0 + self._header.earth_moon_mass_ratio)

        return self._evaluate(record, self._header.layouts[body], julian_date)

    def positions(self, body: Body, julian_dates: Iterable[float]) -> np.ndarray:
        """
        Get the positions of a body at several Julian dates.

        Args:
            body: The body to evaluate
            julian_dates: Times of the queries

        Returns:
            Array of shape (N, 3), one row per date

        Raises:
            OutOfRangeError: If any date is outside the file's range
            UnsupportedBodyError: If the body has no data in this file
        """
        rows = [self.position(body, jd) for jd in julian_dates]
        if not rows:
            return np.empty((0, 3))
        return np.vstack(rows)

    def _record_for(self, julian_date: float) -> IntervalRecord:
        start, end = self._header.start_date, self._header.end_date
        # NaN fails both comparisons
        if not start <= julian_date <= end:
            raise OutOfRangeError(julian_date, start, end)

        index = int((julian_date - start) // self._header.days_per_interval)
        index = min(max(index, 0), len(self._records) - 1)
        record = self._records[index]

        # Floor division can land one record off when t sits on a boundary
        if not record.contains(julian_date):
            if julian_date < record.t0 and index > 0:
                record = self._records[index - 1]
            elif julian_date > record.t1 and index < len(self._records) - 1:
                record = self._records[index + 1]
        return record

    def _evaluate(
        self, record: IntervalRecord, layout: CoefficientLayout, julian_date: float
    ) -> np.ndarray:
        granule_width = self._header.days_per_interval / layout.granule_count
        granule = int((julian_date - record.t0) // granule_width)
        granule = min(max(granule, 0), layout.granule_count - 1)
        granule_start = record.t0 + granule * granule_width

        x = normalize_time(julian_date, granule_start, granule_width)
        x = min(1.0, max(-1.0, x))

        # Granule-major: each granule holds x, y, z series back to back
        first = layout.offset + granule * layout.granule_stride
        coeffs = record.coefficients[first : first + layout.granule_stride]
        coeffs = coeffs.reshape(layout.component_count, layout.coefficient_count)
        return evaluate_components(coeffs, x)

    def __repr__(self) -> str:
        return (
            f"DEEphemeris(de_number={self.de_number}, start_date={self.start_date}, "
            f"end_date={self.end_date}, records={self.record_count})"
        )
