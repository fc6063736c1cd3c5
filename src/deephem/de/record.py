"""
Interval records.

All records of a file share one contiguous float64 buffer of shape
``(record_count, record_word_count)``. An ``IntervalRecord`` is a read-only
view of one row of that buffer.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class IntervalRecord:
    """One fixed-width time span and the coefficients of every body for it."""

    t0: float
    t1: float
    coefficients: np.ndarray

    @classmethod
    def from_row(cls, row: np.ndarray) -> "IntervalRecord":
        """Wrap a buffer row; words 0 and 1 are t0 and t1, the rest coefficients."""
        return cls(t0=float(row[0]), t1=float(row[1]), coefficients=row[2:])

    @property
    def span(self) -> float:
        return self.t1 - self.t0

    def contains(self, t: float) -> bool:
        """Check if a Julian date falls within this record's closed range."""
        return self.t0 <= t <= self.t1
