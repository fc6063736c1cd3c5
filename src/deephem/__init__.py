"""Load JPL DE binary ephemerides and evaluate solar-system body positions."""

from .body import Body
from .de import DEEphemeris, load, load_bytes, load_file
from .errors import EphemerisError, FormatError, OutOfRangeError, UnsupportedBodyError

__all__ = [
    "Body",
    "DEEphemeris",
    "load",
    "load_bytes",
    "load_file",
    "EphemerisError",
    "FormatError",
    "OutOfRangeError",
    "UnsupportedBodyError",
]
