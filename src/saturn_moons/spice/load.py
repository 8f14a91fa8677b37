"""SPICE kernel loading for Saturn system geometry."""

from __future__ import annotations

import logging
from pathlib import Path

import cspyce

from saturn_moons.config import get_spice_path
from saturn_moons.constants import SATURN_PLANET_NUM
from saturn_moons.spice.common import get_state

logger = logging.getLogger(__name__)


def load_spice_files(version: int = 0) -> tuple[bool, str | None]:
    """Load the SPICE kernels for Saturn listed in SPICE_planets.txt.

    Each non-comment line of SPICE_planets.txt is ``planet,version,"file"``;
    lines for planet 6 and the chosen version are furnished. No leap-second or
    constants kernel is needed: callers pass ephemeris time, and ECLIPB1950 is
    a built-in frame.

    Parameters:
        version: Ephemeris version, or 0 for the first listed.

    Returns:
        (True, None) if loaded, (False, reason) on failure.
    """
    state = get_state()
    if state.saturn_loaded and version in (0, state.ephem_version):
        return (True, None)
    base = Path(get_spice_path())
    if not base.is_dir():
        return (False, f'SPICE_PATH is not a directory: {base}')
    config_path = base / 'SPICE_planets.txt'
    if not config_path.exists():
        logger.warning('Config not found: %s', config_path)
        return (
            False,
            f'SPICE_planets.txt not found under {base}. '
            'Ensure SPICE_PATH points to a SPICE kernel tree that includes SPICE_planets.txt.',
        )
    load_version = version
    loaded = False
    with config_path.open() as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('!'):
                continue
            parts = line.split(',')
            if len(parts) < 3:
                logger.error(
                    'SPICE_planets.txt line %d: expected planet,version,filename: %r',
                    line_no,
                    line,
                )
                continue
            try:
                planet = int(parts[0])
                v = int(parts[1])
            except ValueError as e:
                logger.error('SPICE_planets.txt line %d: bad value %r - %s', line_no, line, e)
                continue
            if planet != SATURN_PLANET_NUM:
                continue
            if load_version == 0:
                load_version = v
            if v != load_version:
                continue
            kpath = base / parts[2].strip().strip('"')
            if not kpath.exists():
                logger.warning('Kernel listed but missing: %s', kpath)
                continue
            try:
                cspyce.furnsh(str(kpath))
                loaded = True
            except Exception as e:
                logger.warning('Failed to load %s: %s', kpath, e)
    if not loaded:
        return (
            False,
            f'No Saturn kernel files (version {load_version}) found under {base}. '
            'Check SPICE_planets.txt and that the listed kernel files exist.',
        )
    state.saturn_loaded = True
    state.ephem_version = load_version
    logger.info('Loaded Saturn kernels version %d from %s', load_version, base)
    return (True, None)
