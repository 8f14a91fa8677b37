"""Orbital elements of the eight classical moons (Dourneau, Harper and Taylor series).

Each calculator turns an EphemerisContext into OrbitalElements: apparent
longitude in the orbit, inclination to Saturn's ring plane, node, and radius
in Saturn equatorial radii. Rhea, Titan, Hyperion and Iapetus go through
finalize_orbit; the three inner eccentric moons carry their own short
equation of center and Tethys is circular.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import NamedTuple

from saturn_moons.constants import RING_PLANE_NODE
from saturn_moons.context import EphemerisContext
from saturn_moons.moons import Moon

TETHYS_RADIUS = 4.880998
RHEA_SEMI_MAJOR_AXIS = 8.725924
TITAN_SEMI_MAJOR_AXIS = 20.216193

# Fixed-point passes for Titan's pericenter longitude
TITAN_PERICENTER_PASSES = 6
_TITAN_G0 = math.radians(102.8623)


class OrbitalElements(NamedTuple):
    """Elements consumed by the position assembler (radians, Saturn radii)."""

    longitude: float
    gamma: float
    node: float
    radius: float


def equation_of_center(e: float, mean_anomaly: float) -> float:
    """Five-term equation of center in powers of the eccentricity.

    Parameters:
        e: Orbital eccentricity (small).
        mean_anomaly: Mean anomaly (radians).

    Returns:
        True minus mean anomaly (radians).
    """
    m = mean_anomaly
    e2 = e * e
    return e * (
        (2.0 - e2 * (0.25 - 0.0520833333 * e2)) * math.sin(m)
        + e
        * (
            (1.25 - 0.458333333 * e2) * math.sin(2.0 * m)
            + e
            * (
                (1.083333333 - 0.671875 * e2) * math.sin(3.0 * m)
                + e * (1.072917 * math.sin(4.0 * m) + e * 1.142708 * math.sin(5.0 * m))
            )
        )
    )


def finalize_orbit(
    e: float,
    a: float,
    node: float,
    inclination: float,
    mean_longitude: float,
    pericenter: float,
    context: EphemerisContext,
) -> OrbitalElements:
    """Convert ecliptic-referred elements to ring-plane apparent elements.

    Parameters:
        e: Eccentricity.
        a: Semi-major axis (Saturn radii).
        node: Longitude of the ascending node on the ecliptic (radians).
        inclination: Inclination to the ecliptic (radians).
        mean_longitude: Mean longitude (radians).
        pericenter: Longitude of pericenter (radians).
        context: Ephemeris context (ring-plane tilt cache).

    Returns:
        OrbitalElements whose node is the ring-plane referenced direction w.
    """
    m = mean_longitude - pericenter
    c = equation_of_center(e, m)
    r = a * (1.0 - e * e) / (1.0 + e * math.cos(m + c))
    g = node - RING_PLANE_NODE
    a1 = math.sin(inclination) * math.sin(g)
    a2 = context.c1 * math.sin(inclination) * math.cos(g) - context.s1 * math.cos(inclination)
    gamma = math.asin(math.sqrt(a1 * a1 + a2 * a2))
    u = math.atan2(a1, a2)
    w = RING_PLANE_NODE + u
    h = context.c1 * math.sin(inclination) - context.s1 * math.cos(inclination) * math.cos(g)
    phi = math.atan2(context.s1 * math.sin(g), h)
    longitude = mean_longitude + c + u - g - phi
    return OrbitalElements(longitude, gamma, w, r)


def mimas(context: EphemerisContext) -> OrbitalElements:
    """Mimas: 2:1 Tethys libration in longitude, three-term equation of center."""
    w0 = context.W0
    mean_lon = math.radians(
        127.64
        + 381.994497 * context.t1
        - 43.57 * math.sin(w0)
        - 0.72 * math.sin(3.0 * w0)
        - 0.02144 * math.sin(5.0 * w0)
    )
    peri = math.radians(106.1 + 365.549 * context.t2)
    m = mean_lon - peri
    c = math.radians(
        2.18287 * math.sin(m) + 0.025988 * math.sin(2.0 * m) + 0.00043 * math.sin(3.0 * m)
    )
    return OrbitalElements(
        mean_lon + c,
        math.radians(1.563),
        math.radians(54.5 - 365.072 * context.t2),
        3.06879 / (1.0 + 0.01905 * math.cos(m + c)),
    )


def enceladus(context: EphemerisContext) -> OrbitalElements:
    """Enceladus."""
    mean_lon = math.radians(
        200.317
        + 262.7319002 * context.t1
        + 0.25667 * math.sin(context.W1)
        + 0.20883 * math.sin(context.W2)
    )
    peri = math.radians(309.107 + 123.44121 * context.t2)
    m = mean_lon - peri
    c = math.radians(0.55577 * math.sin(m) + 0.00168 * math.sin(2.0 * m))
    return OrbitalElements(
        mean_lon + c,
        math.radians(0.0262),
        math.radians(348.0 - 151.95 * context.t2),
        3.94118 / (1.0 + 0.00485 * math.cos(m + c)),
    )


def tethys(context: EphemerisContext) -> OrbitalElements:
    """Tethys: circular orbit of fixed radius."""
    w0 = context.W0
    longitude = math.radians(
        285.306
        + 190.69791226 * context.t1
        + 2.063 * math.sin(w0)
        + 0.03409 * math.sin(3.0 * w0)
        + 0.001015 * math.sin(5.0 * w0)
    )
    return OrbitalElements(
        longitude,
        math.radians(1.0976),
        math.radians(111.33 - 72.2441 * context.t2),
        TETHYS_RADIUS,
    )


def dione(context: EphemerisContext) -> OrbitalElements:
    """Dione."""
    mean_lon = math.radians(
        254.712
        + 131.53493193 * context.t1
        - 0.0215 * math.sin(context.W1)
        - 0.01733 * math.sin(context.W2)
    )
    peri = math.radians(174.8 + 30.82 * context.t2)
    m = mean_lon - peri
    c = math.radians(0.24717 * math.sin(m) + 0.00033 * math.sin(2.0 * m))
    return OrbitalElements(
        mean_lon + c,
        math.radians(0.0139),
        math.radians(232.0 - 30.27 * context.t2),
        6.24871 / (1.0 + 0.002157 * math.cos(m + c)),
    )


def rhea(context: EphemerisContext) -> OrbitalElements:
    """Rhea: forced eccentricity from Titan plus a small free term."""
    p1 = math.radians(342.7 + 10.057 * context.t2)
    a1 = 0.000265 * math.sin(p1) + 0.01 * math.sin(context.W4)
    a2 = 0.000265 * math.cos(p1) + 0.01 * math.cos(context.W4)
    e = math.sqrt(a1 * a1 + a2 * a2)
    peri = math.atan2(a1, a2)
    n = math.radians(345.0 - 10.057 * context.t2)
    mean_lon = math.radians(359.244 + 79.6900472 * context.t1 + 0.086754 * math.sin(n))
    inc = math.radians(28.0362 + 0.346898 * math.cos(n) + 0.0193 * math.cos(context.W3))
    node = math.radians(168.8034 + 0.736936 * math.sin(n) + 0.041 * math.sin(context.W3))
    return finalize_orbit(e, RHEA_SEMI_MAJOR_AXIS, node, inc, mean_lon, peri, context)


def _titan_mean_plane(context: EphemerisContext) -> tuple[float, float, float, float]:
    """Titan's inclination and node on the ecliptic, and the Laplace-plane offset (phi, s)."""
    inc = math.radians(27.45141 + 0.295999 * math.cos(context.W3))
    node = math.radians(168.66925 + 0.628808 * math.sin(context.W3))
    a1 = math.sin(context.W7) * math.sin(node - context.W8)
    a2 = math.cos(context.W7) * math.sin(inc) - math.sin(context.W7) * math.cos(inc) * math.cos(
        node - context.W8
    )
    return inc, node, math.atan2(a1, a2), math.sqrt(a1 * a1 + a2 * a2)


def titan_pericenter(
    context: EphemerisContext, passes: int = TITAN_PERICENTER_PASSES
) -> tuple[float, float]:
    """Solve Titan's perturbed pericenter longitude by fixed-point passes.

    The solar term depends on the argument of pericenter g, which in turn
    depends on the pericenter being solved for.

    Parameters:
        context: Ephemeris context.
        passes: Number of refinement passes.

    Returns:
        (pericenter longitude, argument g) in radians after the last pass.
    """
    _inc, node, phi, _s = _titan_mean_plane(context)
    g = context.W4 - node - phi
    w_dash = context.W4
    for _ in range(passes):
        w_dash = context.W4 + math.radians(0.37515) * (math.sin(2.0 * g) - math.sin(2.0 * _TITAN_G0))
        g = w_dash - node - phi
    return w_dash, g


def titan(context: EphemerisContext) -> OrbitalElements:
    """Titan: solar and Laplace-plane perturbations."""
    mean_lon = math.radians(261.1582 + 22.57697855 * context.t4 + 0.074025 * math.sin(context.W3))
    i1, node1, phi, s = _titan_mean_plane(context)
    w_dash, g = titan_pericenter(context)
    e1 = 0.029092 + 0.00019048 * (math.cos(2.0 * g) - math.cos(2.0 * _TITAN_G0))
    q = 2.0 * (context.W5 - w_dash)
    b1 = math.sin(i1) * math.sin(node1 - context.W8)
    b2 = math.cos(context.W7) * math.sin(i1) * math.cos(node1 - context.W8) - math.sin(
        context.W7
    ) * math.cos(i1)
    theta = math.atan2(b1, b2) + context.W8
    e = e1 * (1.0 + 0.002778797 * math.cos(q))
    peri = w_dash + math.radians(0.159215) * math.sin(q)
    u = 2.0 * (context.W5 - theta) + phi
    h = 0.9375 * e1 * e1 * math.sin(q) + 0.1875 * s * s * math.sin(2.0 * (context.W5 - theta))
    lam = mean_lon - math.radians(0.254744) * (
        context.e1 * (math.sin(context.W6) + 0.75 * context.e1 * math.sin(2.0 * context.W6)) + h
    )
    inc = i1 + math.radians(0.031843) * s * math.cos(u)
    node = node1 + math.radians(0.031843) * s * math.sin(u) / math.sin(i1)
    return finalize_orbit(e, TITAN_SEMI_MAJOR_AXIS, node, inc, lam, peri, context)


def hyperion(context: EphemerisContext) -> OrbitalElements:
    """Hyperion: 4:3 resonance with Titan."""
    t6, t8 = context.t6, context.t8
    nu = math.radians(92.39 + 0.5621071 * t6)
    zeta = math.radians(148.19 - 19.18 * t8)
    theta = math.radians(184.8 - 35.41 * context.t9)
    theta1 = theta - math.radians(7.5)
    a_s = math.radians(176.0 + 12.22 * t8)
    b_s = math.radians(8.0 + 24.44 * t8)
    c_s = b_s + math.radians(5.0)
    w_dash = math.radians(69.898 - 18.67088 * t8)
    phi = 2.0 * (w_dash - context.W5)
    xi = math.radians(94.9 - 2.292 * t8)
    a = (
        24.50601
        - 0.08686 * math.cos(nu)
        - 0.00166 * math.cos(zeta + nu)
        + 0.00175 * math.cos(zeta - nu)
    )
    e = (
        0.103458
        - 0.004099 * math.cos(nu)
        - 0.000167 * math.cos(zeta + nu)
        + 0.000235 * math.cos(zeta - nu)
        + 0.02303 * math.cos(zeta)
        - 0.00212 * math.cos(2.0 * zeta)
        + 0.000151 * math.cos(3.0 * zeta)
        + 0.00013 * math.cos(phi)
    )
    peri = w_dash + math.radians(
        0.15648 * math.sin(xi)
        - 0.4457 * math.sin(nu)
        - 0.2657 * math.sin(zeta + nu)
        - 0.3573 * math.sin(zeta - nu)
        - 12.872 * math.sin(zeta)
        + 1.668 * math.sin(2.0 * zeta)
        - 0.2419 * math.sin(3.0 * zeta)
        - 0.07 * math.sin(phi)
    )
    mean_lon = math.radians(
        177.047
        + 16.91993829 * t6
        + 0.15648 * math.sin(xi)
        + 9.142 * math.sin(nu)
        + 0.007 * math.sin(2.0 * nu)
        - 0.014 * math.sin(3.0 * nu)
        + 0.2275 * math.sin(zeta + nu)
        + 0.2112 * math.sin(zeta - nu)
        - 0.26 * math.sin(zeta)
        - 0.0098 * math.sin(2.0 * zeta)
        - 0.013 * math.sin(a_s)
        + 0.017 * math.sin(b_s)
        - 0.0303 * math.sin(phi)
    )
    inc = math.radians(
        27.3347
        + 0.643486 * math.cos(xi)
        + 0.315 * math.cos(context.W3)
        + 0.018 * (math.cos(theta) - math.cos(c_s))
    )
    node = math.radians(
        168.6812
        + 1.40136 * math.cos(xi)
        + 0.68599 * math.sin(context.W3)
        - 0.0392 * math.sin(c_s)
        + 0.0366 * math.sin(theta1)
    )
    return finalize_orbit(e, a, node, inc, mean_lon, peri, context)


def iapetus(context: EphemerisContext) -> OrbitalElements:
    """Iapetus: solar and Titan perturbations on an orbit near its Laplace plane."""
    t7, t11 = context.t7, context.t11
    titan_lon = math.radians(261.1582 + 22.57697855 * context.t4)
    sun_peri = math.radians(91.796 + 0.562 * t7)
    psi = math.radians(4.367 - 0.195 * t7)
    theta = math.radians(146.819 - 3.198 * t7)
    phi = math.radians(60.47 + 1.521 * t7)
    big_phi = math.radians(205.055 - 2.091 * t7)
    e1 = 0.028298 + 0.001156 * t11
    w_dash0 = math.radians(352.91 + 11.71 * t11)
    mu = math.radians(76.3852 + 4.53795125 * context.t10)
    i1 = math.radians(18.4602 - t11 * (0.9518 + t11 * (0.072 - 0.0054 * t11)))
    node1 = math.radians(143.198 - t11 * (3.919 - t11 * (0.116 + 0.008 * t11)))
    l = mu - w_dash0
    g = w_dash0 - node1 - psi
    g1 = w_dash0 - node1 - phi
    ls = context.W5 - sun_peri
    gs = sun_peri - theta
    lt = titan_lon - context.W4
    gt = context.W4 - big_phi
    u1 = 2.0 * (l + g - ls - gs)
    u2 = l + g1 - lt - gt
    u3 = l + 2.0 * (g - ls - gs)
    u4 = lt + gt - g1
    u5 = 2.0 * (ls + gs)
    a = 58.935028 + 0.004638 * math.cos(u1) + 0.058222 * math.cos(u2)
    e = (
        e1
        - 0.0014097 * math.cos(g1 - gt)
        + 0.0003733 * math.cos(u5 - 2.0 * g)
        + 0.000118 * math.cos(u3)
        + 0.0002408 * math.cos(l)
        + 0.0002849 * math.cos(l + u2)
        + 0.000619 * math.cos(u4)
    )
    w = math.radians(
        0.08077 * math.sin(g1 - gt)
        + 0.02139 * math.sin(u5 - 2.0 * g)
        - 0.00676 * math.sin(u3)
        + 0.0138 * math.sin(l)
        + 0.01632 * math.sin(l + u2)
        + 0.03547 * math.sin(u4)
    )
    peri = w_dash0 + w / e1
    mean_lon = mu + math.radians(
        -0.04299 * math.sin(u2)
        - 0.00789 * math.sin(u1)
        - 0.06312 * math.sin(ls)
        - 0.00295 * math.sin(2.0 * ls)
        - 0.02231 * math.sin(u5)
        + 0.0065 * math.sin(u5 + psi)
    )
    inc = i1 + math.radians(
        0.04204 * math.cos(u5 + psi)
        + 0.00235 * math.cos(l + g1 + lt + gt + phi)
        + 0.0036 * math.cos(u2 + phi)
    )
    w1 = math.radians(
        0.04204 * math.sin(u5 + psi)
        + 0.00235 * math.sin(l + g1 + lt + gt + phi)
        + 0.00358 * math.sin(u2 + phi)
    )
    node = node1 + w1 / math.sin(i1)
    return finalize_orbit(e, a, node, inc, mean_lon, peri, context)


ELEMENT_CALCULATORS: dict[Moon, Callable[[EphemerisContext], OrbitalElements]] = {
    Moon.MIMAS: mimas,
    Moon.ENCELADUS: enceladus,
    Moon.TETHYS: tethys,
    Moon.DIONE: dione,
    Moon.RHEA: rhea,
    Moon.TITAN: titan,
    Moon.HYPERION: hyperion,
    Moon.IAPETUS: iapetus,
}


def orbital_elements(context: EphemerisContext, moon: Moon) -> OrbitalElements:
    """Dispatch to the element calculator for one moon.

    Raises:
        ValueError: If moon is not one of the eight classical moons.
    """
    calculator = ELEMENT_CALCULATORS.get(moon)
    if calculator is None:
        raise ValueError(f'No orbital elements for body {moon!r}')
    return calculator(context)
