"""Configuration: SPICE kernel and leap-second paths from environment."""

import os
from pathlib import Path

DEFAULT_SPICE_PATH = '/var/www/SPICE/'
LOG_LEVEL_ENV = 'SATURN_MOONS_LOG'


def get_spice_path() -> str:
    """Return SPICE kernel root directory (SPICE_PATH env var or default).

    The directory holds SPICE_planets.txt and the kernels it lists.
    """
    return os.environ.get('SPICE_PATH', DEFAULT_SPICE_PATH)


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file under SPICE_PATH, then
    leapsecs.txt there.

    Returns:
        Path string to LSK or leapsecs file.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_spice_path())
    for name in ('naif0012.tls', 'naif0011.tls', 'naif0010.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return str(base / 'leapsecs.txt')


def get_log_level() -> str | None:
    """Return log level name from SATURN_MOONS_LOG, or None when unset/invalid."""
    level = os.environ.get(LOG_LEVEL_ENV, '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None
