"""Rotation from Saturn's ring-plane frame to the Earth-referenced sky frame."""

from __future__ import annotations

import math
from typing import NamedTuple

from saturn_moons.context import EphemerisContext


class SkyVector(NamedTuple):
    """Rotated vector plus the reference angle derived from it.

    x is positive west, y positive north, z positive away from Earth.
    """

    x: float
    y: float
    z: float
    reference_angle: float


def rotate_to_sky(
    x: float,
    y: float,
    z: float,
    context: EphemerisContext,
    reference_angle: float = 0.0,
) -> SkyVector:
    """Rotate a ring-plane vector into the sky frame of a geocentric observer.

    Four rotations: ring-plane inclination, ring-plane node, Saturn's ecliptic
    longitude, Saturn's ecliptic latitude. The result is then turned about the
    line of sight by ``reference_angle``, the angle returned for the pole
    vector (see pole_reference_angle), so that Saturn's axis points along +y.

    Parameters:
        x, y, z: Vector in the ring-plane frame.
        context: Ephemeris context (ring-plane tilt and Saturn geometry).
        reference_angle: Angle from a previous pole rotation (0 for the pole itself).

    Returns:
        SkyVector with the rotated components and this vector's own reference angle.
    """
    a1 = x
    b1 = context.c1 * y - context.s1 * z
    c1 = context.s1 * y + context.c1 * z

    a2 = context.c2 * a1 - context.s2 * b1
    b2 = context.s2 * a1 + context.c2 * b1

    sin_l0 = math.sin(context.lambda0)
    cos_l0 = math.cos(context.lambda0)
    a3 = a2 * sin_l0 - b2 * cos_l0
    b3 = a2 * cos_l0 + b2 * sin_l0
    c3 = c1

    sin_b0 = math.sin(context.beta0)
    cos_b0 = math.cos(context.beta0)
    a4 = a3
    b4 = b3 * cos_b0 + c3 * sin_b0
    c4 = c3 * cos_b0 - b3 * sin_b0

    angle = math.atan2(a4, c4)
    cos_d = math.cos(reference_angle)
    sin_d = math.sin(reference_angle)
    return SkyVector(
        a4 * cos_d - c4 * sin_d,
        a4 * sin_d + c4 * cos_d,
        b4,
        angle,
    )


def pole_reference_angle(context: EphemerisContext) -> float:
    """Reference angle of Saturn's ring-plane pole for this context.

    The pole (0, 0, 1) is the same for every moon, so callers evaluating
    several moons at one instant compute this once and pass it to each
    moon rotation.
    """
    return rotate_to_sky(0.0, 0.0, 1.0, context).reference_angle
