"""Time conversion wrappers around rms-julian (calendar dates, UTC, TDB, Julian days)."""

from __future__ import annotations

import logging
import math

import julian

from saturn_moons.config import get_leapsecs_path
from saturn_moons.constants import (
    DEFAULT_MIN_INTERVAL_SECONDS,
    J2000_JD,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)

logger = logging.getLogger(__name__)

# Julian date at the midnight that starts rms-julian day 0 (2000-01-01)
_JD_OF_DAY_ZERO = J2000_JD - 0.5

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load the leap seconds kernel if not already loaded.

    Falls back to rms-julian's bundled LSK when the configured file is
    missing or not in LSK format.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        julian.load_lsk(path)
        _leapsecs_loaded = True
    except (OSError, KeyError, ValueError) as e:
        logger.info(
            'Leap seconds from %s not used (%s); using rms-julian bundled LSK.',
            path,
            e,
        )
        try:
            julian.load_lsk()
        except Exception as fallback_err:
            logger.error(
                'Fallback to rms-julian bundled LSK failed: %s',
                fallback_err,
                exc_info=True,
            )
            raise
        _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a UTC date/time string.

    Parameters:
        string: Date/time string (format accepted by rms-julian); a trailing
            ISO ``Z`` is accepted.

    Returns:
        (day, sec) where day is days since 2000-01-01 and sec is seconds into
        that day; None on parse failure.
    """
    _ensure_leapsecs()
    candidate_strings = [string]
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        candidate_strings.append(stripped[:-1])
    for candidate in candidate_strings:
        try:
            day, sec = julian.day_sec_from_string(candidate)[:2]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def tai_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to TAI seconds."""
    _ensure_leapsecs()
    return float(julian.tai_from_day_sec(day, sec))


def tdb_from_tai(tai: float) -> float:
    """Convert TAI to TDB seconds past J2000 (ET for SPICE)."""
    return float(julian.tdb_from_tai(tai))


def tai_from_tdb(tdb: float) -> float:
    """Convert TDB seconds past J2000 to TAI."""
    return float(julian.tai_from_tdb(tdb))


def jde_from_tdb(tdb: float) -> float:
    """Convert TDB seconds past J2000 to Julian Ephemeris Day."""
    return J2000_JD + tdb / SECONDS_PER_DAY


def tdb_from_jde(jde: float) -> float:
    """Convert Julian Ephemeris Day to TDB seconds past J2000."""
    return (jde - J2000_JD) * SECONDS_PER_DAY


def jde_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to Julian Ephemeris Day."""
    return jde_from_tdb(tdb_from_tai(tai_from_day_sec(day, sec)))


def jde_from_string(string: str) -> float:
    """Convert a UTC date/time string to Julian Ephemeris Day.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid time {string!r}')
    return jde_from_day_sec(*parsed)


def jd_from_calendar(year: int, month: int, decimal_day: float) -> float:
    """Convert a Gregorian calendar date with fractional day to a Julian day.

    Parameters:
        year, month: Calendar year and month.
        decimal_day: Day of month with fraction (1.5 = noon on the 1st).

    Returns:
        Julian day on the same time scale as the input.
    """
    whole = math.floor(decimal_day)
    day = int(julian.day_from_ymd(year, month, whole))
    return _JD_OF_DAY_ZERO + day + (decimal_day - whole)


def format_jde(jde: float) -> str:
    """Format a Julian Ephemeris Day as 'YYYY-MM-DD HH:MM' UTC."""
    _ensure_leapsecs()
    day, sec = julian.day_sec_from_tai(tai_from_tdb(tdb_from_jde(jde)))
    sec = SECONDS_PER_MINUTE * round(float(sec) / SECONDS_PER_MINUTE)
    if sec >= SECONDS_PER_DAY:
        day += 1
        sec -= SECONDS_PER_DAY
    y, m, d = julian.ymd_from_day(int(day))
    hour = int(sec // SECONDS_PER_HOUR)
    minute = int((sec - hour * SECONDS_PER_HOUR) // SECONDS_PER_MINUTE)
    return f'{int(y):04d}-{int(m):02d}-{int(d):02d} {hour:02d}:{minute:02d}'


def interval_seconds(
    interval: float,
    time_unit: str,
    *,
    min_seconds: float = DEFAULT_MIN_INTERVAL_SECONDS,
) -> float:
    """Convert interval and time_unit to seconds.

    Parameters:
        interval: Numeric interval value.
        time_unit: One of 'sec', 'min', 'hour', 'day' (case-insensitive, first 4 chars).
        min_seconds: Minimum returned value.

    Returns:
        Interval in seconds, at least min_seconds.
    """
    u = time_unit.strip().lower()[:4]
    if u in ('sec', 'seco'):
        dsec = abs(interval)
    elif u in ('min', 'minu'):
        dsec = abs(interval) * SECONDS_PER_MINUTE
    elif u == 'hour':
        dsec = abs(interval) * SECONDS_PER_HOUR
    elif u in ('day', 'days'):
        dsec = abs(interval) * SECONDS_PER_DAY
    else:
        raise ValueError(f'Invalid time_unit {time_unit!r}; expected one of sec, min, hour, day')
    return max(dsec, min_seconds)
