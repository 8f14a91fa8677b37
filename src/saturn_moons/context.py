"""Ephemeris context: time arguments shared by all satellite series.

The context is built once per evaluation from the light-time corrected time
argument and Saturn's geocentric position (equinox 1950.0), and is immutable after.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from saturn_moons.constants import (
    DAYS_PER_CENTURY,
    DAYS_PER_YEAR,
    RING_PLANE_INCLINATION,
    RING_PLANE_NODE,
)

logger = logging.getLogger(__name__)

# Epochs (JD) of the individual satellite theories
EPOCH_T1 = 2411093.0
EPOCH_T3 = 2433282.423
EPOCH_T4 = 2411368.0
EPOCH_T6 = 2415020.0
EPOCH_T9 = 2442000.5
EPOCH_T10 = 2409786.0


@dataclass(frozen=True)
class SaturnGeometry:
    """Geocentric apparent ecliptic position of Saturn.

    Attributes:
        longitude: Ecliptic longitude (radians).
        latitude: Ecliptic latitude (radians).
        distance_au: Earth-Saturn distance (AU).
        equinox_jd: Julian day of the ecliptic and equinox the angles refer to.
    """

    longitude: float
    latitude: float
    distance_au: float
    equinox_jd: float


@dataclass(frozen=True)
class EphemerisContext:
    """Time offsets, perturbation angles, and Saturn geometry for one instant.

    t1..t11 and W0..W8 keep the names of the published theory so each series
    term can be checked against it. s1/c1 and s2/c2 are the sine and cosine of
    the ring-plane inclination and node. lambda0, beta0 and delta are Saturn's
    ecliptic longitude and latitude (equinox 1950.0) and distance in AU.
    """

    t1: float
    t2: float
    t3: float
    t4: float
    t5: float
    t6: float
    t7: float
    t8: float
    t9: float
    t10: float
    t11: float
    W0: float
    W1: float
    W2: float
    W3: float
    W4: float
    W5: float
    W6: float
    W7: float
    W8: float
    e1: float
    s1: float
    c1: float
    s2: float
    c2: float
    lambda0: float
    beta0: float
    delta: float

    @property
    def year(self) -> float:
        """Decimal year of the time argument."""
        return self.t3


def build_context(t: float, lambda0: float, beta0: float, delta: float) -> EphemerisContext:
    """Build the ephemeris context for one evaluation.

    Parameters:
        t: Julian Ephemeris Day already reduced by the Saturn light time.
        lambda0: Saturn's geocentric ecliptic longitude, equinox 1950.0 (radians).
        beta0: Saturn's geocentric ecliptic latitude, equinox 1950.0 (radians).
        delta: Earth-Saturn distance (AU).

    Returns:
        Fully initialized EphemerisContext.
    """
    t1 = t - EPOCH_T1
    t2 = t1 / DAYS_PER_YEAR
    t3 = (t - EPOCH_T3) / DAYS_PER_YEAR + 1950.0
    t4 = t - EPOCH_T4
    t5 = t4 / DAYS_PER_YEAR
    t6 = t - EPOCH_T6
    t7 = t6 / DAYS_PER_CENTURY
    t8 = t6 / DAYS_PER_YEAR
    t9 = (t - EPOCH_T9) / DAYS_PER_YEAR
    t10 = t - EPOCH_T10
    t11 = t10 / DAYS_PER_CENTURY

    context = EphemerisContext(
        t1=t1,
        t2=t2,
        t3=t3,
        t4=t4,
        t5=t5,
        t6=t6,
        t7=t7,
        t8=t8,
        t9=t9,
        t10=t10,
        t11=t11,
        W0=math.radians(5.095 * (t3 - 1866.39)),
        W1=math.radians(74.4 + 32.39 * t2),
        W2=math.radians(134.3 + 92.62 * t2),
        W3=math.radians(42.0 - 0.5118 * t5),
        W4=math.radians(276.59 + 0.5118 * t5),
        W5=math.radians(267.2635 + 1222.1136 * t7),
        W6=math.radians(175.4762 + 1221.5515 * t7),
        W7=math.radians(2.4891 + 0.002435 * t7),
        W8=math.radians(113.35 - 0.2597 * t7),
        e1=0.05589 - 0.000346 * t7,
        s1=math.sin(RING_PLANE_INCLINATION),
        c1=math.cos(RING_PLANE_INCLINATION),
        s2=math.sin(RING_PLANE_NODE),
        c2=math.cos(RING_PLANE_NODE),
        lambda0=lambda0,
        beta0=beta0,
        delta=delta,
    )
    logger.debug('Context at t=%.5f (year %.3f), Saturn distance %.6f AU', t, t3, delta)
    return context
