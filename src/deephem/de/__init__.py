"""
JPL Development Ephemeris (DE) binary file support.

This module reads DE200/DE405/DE406-style binary files, which store
solar-system body positions as piecewise Chebyshev polynomials, and
evaluates body positions at arbitrary Julian dates.
"""

from .byte_order import ByteOrder, detect_byte_order
from .chebyshev import evaluate_components
from .ephemeris import DEEphemeris
from .header import CoefficientLayout, EphemerisHeader, parse_header
from .loader import load, load_bytes, load_file
from .record import IntervalRecord

__all__ = [
    "ByteOrder",
    "detect_byte_order",
    "evaluate_components",
    "DEEphemeris",
    "CoefficientLayout",
    "EphemerisHeader",
    "parse_header",
    "load",
    "load_bytes",
    "load_file",
    "IntervalRecord",
]
