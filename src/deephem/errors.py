"""Exceptions raised while loading and querying DE ephemerides."""

from typing import Optional


class EphemerisError(ValueError):
    """Base class for all deephem errors."""

    pass


class FormatError(EphemerisError):
    """Raised when a DE stream is truncated, malformed or inconsistent."""

    pass


class OutOfRangeError(EphemerisError):
    """Raised when a query time falls outside the ephemeris date range."""

    def __init__(
        self,
        julian_date: float,
        start_date: float,
        end_date: float,
        message: Optional[str] = None,
    ):
        self.julian_date = julian_date
        self.start_date = start_date
        self.end_date = end_date
        if message is None:
            message = (
                f"Julian date {julian_date} is outside the ephemeris range "
                f"[{start_date}, {end_date}]"
            )
        super().__init__(message)


class UnsupportedBodyError(EphemerisError):
    """Raised when a body has no position data in the loaded file."""

    def __init__(self, body: object, message: Optional[str] = None):
        self.body = body
        if message is None:
            message = f"{getattr(body, 'value', body)} is not available in this ephemeris"
        super().__init__(message)
