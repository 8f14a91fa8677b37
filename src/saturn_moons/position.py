"""Apparent rectangular coordinates of Saturn's classical moons.

X and Y are measured from the center of Saturn's disk in units of Saturn's
equatorial radius: X positive to the west along Saturn's equator, Y positive
to the north along the rotation axis. Z is meaningful only in sign: positive
when the moon is farther from Earth than Saturn.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple, Protocol

from saturn_moons.constants import (
    DAYS_PER_YEAR,
    J2000_JD,
    RADII_PER_AU,
    REFERENCE_EPOCH_DATE,
    RING_PLANE_NODE,
    SATURN_LIGHT_TIME_DAYS,
    VALID_YEAR_RANGE,
)
from saturn_moons.context import EphemerisContext, SaturnGeometry, build_context
from saturn_moons.elements import OrbitalElements, orbital_elements
from saturn_moons.frame import pole_reference_angle, rotate_to_sky
from saturn_moons.moons import MOON_SPECS, Moon
from saturn_moons.time_utils import jd_from_calendar

logger = logging.getLogger(__name__)

# Equinox of the satellite theories, 1950 January 1.5
REFERENCE_EPOCH_JD = jd_from_calendar(*REFERENCE_EPOCH_DATE)

# Largest accepted offset of a geometry equinox from 1950.0 (days); B1950.0
# lies 0.58 day before 1950 January 1.5, under 0.1 arcsec of precession
EQUINOX_TOLERANCE_DAYS = 1.0


class MoonPosition(NamedTuple):
    """Apparent (X, Y, Z) of a moon relative to Saturn, in Saturn radii."""

    x: float
    y: float
    z: float


class SaturnGeometrySource(Protocol):
    """Provider of Saturn's geocentric apparent ecliptic position."""

    def saturn_geometry(self, jde: float) -> SaturnGeometry:
        """Return Saturn's geometry at the given Julian Ephemeris Day."""
        ...


@dataclass(frozen=True)
class FixedSaturnGeometry:
    """Geometry source returning the same caller-supplied values at every time.

    Suitable for a single instant whose Saturn position is known, e.g. from a
    published ephemeris. Angles in degrees referred to the ecliptic and
    equinox of 1950.0, distance in AU.
    """

    longitude_deg: float
    latitude_deg: float
    distance_au: float

    def saturn_geometry(self, jde: float) -> SaturnGeometry:
        """Return the fixed geometry (jde is ignored)."""
        del jde
        return SaturnGeometry(
            longitude=math.radians(self.longitude_deg),
            latitude=math.radians(self.latitude_deg),
            distance_au=self.distance_au,
            equinox_jd=REFERENCE_EPOCH_JD,
        )


def _default_geometry_source() -> SaturnGeometrySource:
    from saturn_moons.spice.geometry import SpiceSaturnGeometry

    return SpiceSaturnGeometry()


def _check_time(jde: float) -> None:
    """Reject non-finite times; warn outside the series' validity window."""
    if not math.isfinite(jde):
        raise ValueError(f'Julian Ephemeris Day must be finite, got {jde!r}')
    year = 2000.0 + (jde - J2000_JD) / DAYS_PER_YEAR
    lo, hi = VALID_YEAR_RANGE
    if not lo <= year <= hi:
        logger.warning(
            'JDE %.5f (year %.1f) is outside %d-%d; satellite series may be inaccurate',
            jde,
            year,
            lo,
            hi,
        )


def saturn_context(jde: float, geometry_source: SaturnGeometrySource) -> EphemerisContext:
    """Build the ephemeris context for a Julian Ephemeris Day.

    Fetches Saturn's geometry at ``jde``, which must already be referred to
    the ecliptic and equinox of 1950.0, and evaluates the time arguments at
    ``jde`` minus Saturn's light time.

    Parameters:
        jde: Julian Ephemeris Day.
        geometry_source: Provider of Saturn's apparent geocentric position.

    Returns:
        EphemerisContext for the instant.

    Raises:
        ValueError: If the geometry is referred to another equinox.
    """
    _check_time(jde)
    geometry = geometry_source.saturn_geometry(jde)
    if abs(geometry.equinox_jd - REFERENCE_EPOCH_JD) > EQUINOX_TOLERANCE_DAYS:
        raise ValueError(
            f'Saturn geometry must be referred to the equinox of 1950.0 '
            f'(JD {REFERENCE_EPOCH_JD}), got JD {geometry.equinox_jd}'
        )
    lambda0, beta0 = geometry.longitude, geometry.latitude
    logger.debug(
        'Saturn at JDE %.5f: lon %.6f deg, lat %.6f deg (1950.0), distance %.6f AU',
        jde,
        math.degrees(lambda0),
        math.degrees(beta0),
        geometry.distance_au,
    )
    return build_context(jde - SATURN_LIGHT_TIME_DAYS, lambda0, beta0, geometry.distance_au)


def ring_plane_vector(elements: OrbitalElements) -> tuple[float, float, float]:
    """Moon position in Saturn's ring-plane frame from its apparent elements."""
    u = elements.longitude - elements.node
    w = elements.node - RING_PLANE_NODE
    r = elements.radius
    cos_g = math.cos(elements.gamma)
    x = r * (math.cos(u) * math.cos(w) - math.sin(u) * cos_g * math.sin(w))
    y = r * (math.sin(u) * math.cos(w) * cos_g + math.cos(u) * math.sin(w))
    z = r * math.sin(u) * math.sin(elements.gamma)
    return (x, y, z)


def light_time_offset(x: float, z: float, radius: float, divisor: float) -> float:
    """Differential light-time shift in X for a moon at depth z.

    Parameters:
        x: Rotated X (Saturn radii).
        z: Line-of-sight depth (Saturn radii).
        radius: Moon's orbital radius (Saturn radii).
        divisor: The moon's light-time divisor.

    Returns:
        Amount to add to X.
    """
    ratio = x / radius
    return abs(z) * math.sqrt(max(0.0, 1.0 - ratio * ratio)) / divisor


def perspective_factor(delta: float, z: float) -> float:
    """Scale for X and Y from the moon's depth z relative to Saturn at distance delta (AU)."""
    return delta / (delta + z / RADII_PER_AU)


def moon_position(
    context: EphemerisContext,
    moon: Moon,
    reference_angle: float | None = None,
) -> MoonPosition:
    """Apparent position of one moon in a prepared context.

    Parameters:
        context: Ephemeris context for the instant.
        moon: Moon to evaluate.
        reference_angle: Pole reference angle for ``context`` (computed when None).

    Returns:
        MoonPosition (X, Y, Z) in Saturn radii.

    Raises:
        ValueError: If the result is not finite.
    """
    if reference_angle is None:
        reference_angle = pole_reference_angle(context)
    elements = orbital_elements(context, moon)
    sky = rotate_to_sky(*ring_plane_vector(elements), context, reference_angle)
    x = sky.x + light_time_offset(
        sky.x, sky.z, elements.radius, MOON_SPECS[moon].light_time_divisor
    )
    scale = perspective_factor(context.delta, sky.z)
    result = MoonPosition(x * scale, sky.y * scale, sky.z)
    if not all(math.isfinite(v) for v in result):
        raise ValueError(
            f'Non-finite position for {MOON_SPECS[moon].name} at year {context.year:.2f}: {result}'
        )
    return result


def apparent_rect_coords(
    jde: float,
    moon: Moon,
    geometry_source: SaturnGeometrySource | None = None,
) -> MoonPosition:
    """Apparent rectangular coordinates of a moon of Saturn as seen from Earth.

    Parameters:
        jde: Julian Ephemeris Day.
        moon: Moon to evaluate.
        geometry_source: Provider of Saturn's geometry; SPICE when None.

    Returns:
        MoonPosition (X, Y, Z) in Saturn equatorial radii.
    """
    if geometry_source is None:
        geometry_source = _default_geometry_source()
    context = saturn_context(jde, geometry_source)
    return moon_position(context, moon)


def all_moon_positions(
    jde: float,
    moons: Iterable[Moon] | None = None,
    geometry_source: SaturnGeometrySource | None = None,
) -> dict[Moon, MoonPosition]:
    """Apparent positions of several moons at one instant.

    Saturn's geometry, the context and the pole reference angle are computed
    once and shared by all moons.

    Parameters:
        jde: Julian Ephemeris Day.
        moons: Moons to evaluate; all eight when None.
        geometry_source: Provider of Saturn's geometry; SPICE when None.

    Returns:
        Dict of MoonPosition keyed by moon, in the requested order.
    """
    if geometry_source is None:
        geometry_source = _default_geometry_source()
    context = saturn_context(jde, geometry_source)
    reference_angle = pole_reference_angle(context)
    selected = list(Moon) if moons is None else list(moons)
    return {moon: moon_position(context, moon, reference_angle) for moon in selected}
