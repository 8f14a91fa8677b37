"""Shared fixtures: the 1992 December 16 worked-example epoch and Saturn geometry."""

from __future__ import annotations

import math

import pytest

from saturn_moons.constants import SATURN_LIGHT_TIME_DAYS
from saturn_moons.context import EphemerisContext, build_context
from saturn_moons.position import FixedSaturnGeometry

# 1992 December 16, 0h UT
EXAMPLE_JDE = 2448972.50068
# Saturn, geocentric, ecliptic and equinox 1950.0
EXAMPLE_SATURN_LON = 316.166291
EXAMPLE_SATURN_LAT = -0.521175
EXAMPLE_SATURN_DIST = 10.297607


@pytest.fixture
def example_jde() -> float:
    """Julian Ephemeris Day of the worked example."""
    return EXAMPLE_JDE


@pytest.fixture
def example_geometry() -> FixedSaturnGeometry:
    """Saturn geometry of the worked example, already referred to 1950.0."""
    return FixedSaturnGeometry(EXAMPLE_SATURN_LON, EXAMPLE_SATURN_LAT, EXAMPLE_SATURN_DIST)


@pytest.fixture
def example_context() -> EphemerisContext:
    """Context of the worked example."""
    return build_context(
        EXAMPLE_JDE - SATURN_LIGHT_TIME_DAYS,
        math.radians(EXAMPLE_SATURN_LON),
        math.radians(EXAMPLE_SATURN_LAT),
        EXAMPLE_SATURN_DIST,
    )
