"""Apparent positions of the eight classical moons of Saturn.

Given a Julian Ephemeris Day and a moon, returns the (X, Y, Z) position of
the moon relative to Saturn's disk as seen from Earth, in Saturn equatorial
radii. Saturn's own position comes from SPICE kernels via cspyce, or from a
caller-supplied geometry source; time conversions use rms-julian.
"""

from saturn_moons.moons import Moon
from saturn_moons.position import (
    FixedSaturnGeometry,
    MoonPosition,
    all_moon_positions,
    apparent_rect_coords,
    moon_position,
)

__all__: list[str] = [
    'FixedSaturnGeometry',
    'Moon',
    'MoonPosition',
    'all_moon_positions',
    'apparent_rect_coords',
    'moon_position',
]
