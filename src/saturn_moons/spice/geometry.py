"""Saturn's geocentric apparent ecliptic position from SPICE kernels."""

from __future__ import annotations

import logging
import math

import cspyce

from saturn_moons.constants import AU_KM, B1950_JD, EARTH_ID, SATURN_ID
from saturn_moons.context import SaturnGeometry
from saturn_moons.spice.load import load_spice_files
from saturn_moons.time_utils import tdb_from_jde

logger = logging.getLogger(__name__)

TWOPI = 2.0 * math.pi


def saturn_ecliptic(et: float) -> tuple[float, float, float]:
    """Apparent ecliptic longitude, latitude (radians) and distance (km) of Saturn.

    Light time and stellar aberration corrected ('LT+S') as seen from the
    Earth's center, in the ECLIPB1950 frame (ecliptic and mean equinox of
    B1950.0, the equinox the satellite theories are referred to).

    Parameters:
        et: Ephemeris time (TDB seconds past J2000).
    """
    saturn_dpv, _lt = cspyce.spkez(SATURN_ID, et, 'ECLIPB1950', 'LT+S', EARTH_ID)
    dist, lon, lat = cspyce.reclat(saturn_dpv[:3])
    if lon < 0:
        lon += TWOPI
    return (lon, lat, dist)


class SpiceSaturnGeometry:
    """Geometry source backed by SPICE; loads kernels on first use.

    Returned angles are referred to the ecliptic and equinox of B1950.0.
    """

    def __init__(self, ephem_version: int = 0) -> None:
        self.ephem_version = ephem_version

    def saturn_geometry(self, jde: float) -> SaturnGeometry:
        """Return Saturn's apparent geocentric ecliptic position at ``jde``.

        Raises:
            RuntimeError: If the Saturn kernels cannot be loaded.
        """
        ok, reason = load_spice_files(self.ephem_version)
        if not ok:
            raise RuntimeError(f'Failed to load SPICE kernels: {reason}')
        lon, lat, dist_km = saturn_ecliptic(tdb_from_jde(jde))
        return SaturnGeometry(
            longitude=lon,
            latitude=lat,
            distance_au=dist_km / AU_KM,
            equinox_jd=B1950_JD,
        )
