"""Julian date conversion for command-line date arguments.

Calendar dates are converted with the Meeus algorithm from "Astronomical
Algorithms" (2nd ed.). No time-scale conversion is applied: a calendar date
is taken to be in the ephemeris time scale (TDB for DE files).
"""

from datetime import datetime, timezone

# Microsecond precision for a Julian date near 2.4 million
JD_PRECISION = 12

SECONDS_PER_DAY = 86400


def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    """Julian Day Number of a Gregorian calendar date.

    Raises:
        ValueError: If the date is before 1583 (Gregorian calendar adoption)
    """
    if year < 1583:
        raise ValueError("Dates before 1583 are not supported")

    # January and February count as months 13 and 14 of the previous year
    if month <= 2:
        year -= 1
        month += 12

    century = year // 100
    leap_correction = 2 - century + century // 4
    return int(365.25 * (year + 4716)) + int(30.6001 * (month + 1)) + day + leap_correction - 1524


def datetime_to_julian(dt: datetime) -> float:
    """Convert a timezone-aware datetime to a Julian date.

    Args:
        dt: datetime object (must be timezone-aware)

    Returns:
        Julian date

    Raises:
        ValueError: If dt is naive or before 1583
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")

    dt = dt.astimezone(timezone.utc)
    jdn = gregorian_to_jdn(dt.year, dt.month, dt.day)
    seconds = dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1_000_000

    # The Julian day starts at noon
    return round(jdn - 0.5 + seconds / SECONDS_PER_DAY, JD_PRECISION)


def parse_date_input(date_str: str) -> float:
    """Parse a date argument into a Julian date.

    Args:
        date_str: One of
            - Julian date (e.g., "2451545.0")
            - ISO format with timezone (e.g., "2000-01-01T12:00:00+00:00")
            - ISO format without timezone, taken as UTC (e.g., "2000-01-01T12:00:00")
            - "now"

    Returns:
        Julian date

    Raises:
        ValueError: If the string is not a recognized date
    """
    text = date_str.strip("' ")
    if text.lower() == "now":
        return datetime_to_julian(datetime.now(timezone.utc))

    try:
        return float(text)
    except ValueError:
        pass

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(
            f"Invalid date format: {date_str!r}. Use a Julian date, an ISO datetime or 'now'"
        ) from None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return datetime_to_julian(dt)
