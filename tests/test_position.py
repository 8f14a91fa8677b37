"""Tests for apparent moon positions (assembly, corrections, entry points)."""

from __future__ import annotations

import dataclasses
import logging
import math

import pytest

from saturn_moons.constants import B1950_JD, J2000_JD
from saturn_moons.context import EphemerisContext, SaturnGeometry
from saturn_moons.frame import pole_reference_angle
from saturn_moons.moons import Moon
from saturn_moons.position import (
    REFERENCE_EPOCH_JD,
    FixedSaturnGeometry,
    MoonPosition,
    all_moon_positions,
    apparent_rect_coords,
    light_time_offset,
    moon_position,
    perspective_factor,
    saturn_context,
)

# X, Y (Saturn radii) and sign of Z at JDE 2448972.50068 with Saturn at
# lon 316.166291, lat -0.521175 (1950.0), 10.297607 AU, from a separate
# transcription of the same satellite series. These pin the current output;
# the ring-opening and orbital-period checks do not depend on the series.
WORKED_EXAMPLE = {
    Moon.MIMAS: (-2.922, -0.205, -1),
    Moon.ENCELADUS: (0.060, -1.026, -1),
    Moon.TETHYS: (-4.853, -0.210, -1),
    Moon.DIONE: (-0.669, 1.630, 1),
    Moon.RHEA: (-7.164, 1.272, 1),
    Moon.TITAN: (-16.992, 2.685, 1),
    Moon.HYPERION: (-16.222, -3.902, -1),
    Moon.IAPETUS: (-54.587, 6.111, -1),
}


def test_reference_epoch_is_1950_january_1_5() -> None:
    assert REFERENCE_EPOCH_JD == 2433283.0


@pytest.mark.parametrize('moon', list(Moon))
def test_worked_example(
    moon: Moon, example_jde: float, example_geometry: FixedSaturnGeometry
) -> None:
    """Apparent X and Y agree with the worked example to 0.01 Saturn radii."""
    x, y, z_sign = WORKED_EXAMPLE[moon]
    position = apparent_rect_coords(example_jde, moon, example_geometry)
    assert position.x == pytest.approx(x, abs=0.01)
    assert position.y == pytest.approx(y, abs=0.01)
    assert math.copysign(1, position.z) == z_sign


def _ring_opening(lon_deg: float, lat_deg: float) -> float:
    """Saturnicentric latitude of the Earth for the 1950.0 ring-plane pole (radians)."""
    inc = math.radians(28.0817)
    node = math.radians(168.8112)
    lam = math.radians(lon_deg)
    beta = math.radians(lat_deg)
    return math.asin(
        math.sin(inc) * math.cos(beta) * math.sin(lam - node) - math.cos(inc) * math.sin(beta)
    )


@pytest.mark.parametrize('moon', [Moon.ENCELADUS, Moon.DIONE])
def test_ring_plane_moons_follow_ring_opening(
    moon: Moon, example_jde: float, example_geometry: FixedSaturnGeometry
) -> None:
    """Moons orbiting in the ring plane satisfy Y = Z tan B.

    B is the ring opening seen from Earth, computed in closed form from Saturn's
    position and the ring pole. Enceladus and Dione are tilted less than 0.03
    degrees from the ring plane.
    """
    opening = _ring_opening(example_geometry.longitude_deg, example_geometry.latitude_deg)
    assert math.degrees(opening) == pytest.approx(15.185, abs=0.005)
    tan_b = math.tan(opening)
    for k in range(12):
        position = apparent_rect_coords(example_jde + 0.37 * k, moon, example_geometry)
        assert position.y == pytest.approx(position.z * tan_b, abs=0.005)


def test_all_moon_positions_match_single_evaluations(
    example_jde: float, example_geometry: FixedSaturnGeometry
) -> None:
    """Sharing the context and pole angle changes nothing."""
    positions = all_moon_positions(example_jde, geometry_source=example_geometry)
    assert list(positions) == list(Moon)
    for moon, position in positions.items():
        assert position == apparent_rect_coords(example_jde, moon, example_geometry)


def test_all_moon_positions_keeps_requested_order(
    example_jde: float, example_geometry: FixedSaturnGeometry
) -> None:
    moons = [Moon.TITAN, Moon.MIMAS]
    positions = all_moon_positions(example_jde, moons, example_geometry)
    assert list(positions) == moons


def test_repeated_evaluation_is_identical(
    example_jde: float, example_geometry: FixedSaturnGeometry
) -> None:
    for moon in Moon:
        first = apparent_rect_coords(example_jde, moon, example_geometry)
        second = apparent_rect_coords(example_jde, moon, example_geometry)
        assert first == second


def test_moon_position_computes_reference_angle_when_omitted(
    example_context: EphemerisContext,
) -> None:
    angle = pole_reference_angle(example_context)
    for moon in Moon:
        assert moon_position(example_context, moon) == moon_position(
            example_context, moon, angle
        )


@pytest.mark.parametrize('moon', list(Moon))
def test_motion_is_prograde(
    moon: Moon, example_jde: float, example_geometry: FixedSaturnGeometry
) -> None:
    """Moons in front of Saturn move west (X grows), moons behind move east."""
    before = apparent_rect_coords(example_jde, moon, example_geometry)
    after = apparent_rect_coords(example_jde + 0.02, moon, example_geometry)
    if before.z < 0.0:
        assert after.x > before.x
    else:
        assert after.x < before.x


def test_light_time_offset() -> None:
    """A moon on the line of sight through Saturn is shifted by |Z|/K."""
    assert light_time_offset(0.0, -20.0, 20.0, 53800.0) == pytest.approx(20.0 / 53800.0)
    assert light_time_offset(0.0, 20.0, 20.0, 53800.0) == pytest.approx(20.0 / 53800.0)
    assert light_time_offset(20.0, 0.0, 20.0, 53800.0) == 0.0


def test_light_time_offset_tolerates_rounding_past_elongation() -> None:
    """|X| slightly above the radius does not produce NaN."""
    assert light_time_offset(20.0000001, 0.001, 20.0, 53800.0) == 0.0


def test_perspective_factor() -> None:
    assert perspective_factor(10.0, 0.0) == 1.0
    assert perspective_factor(10.0, 2475.0) == pytest.approx(10.0 / 11.0)
    assert perspective_factor(10.0, -50.0) > 1.0


def test_fixed_geometry_converts_degrees() -> None:
    geometry = FixedSaturnGeometry(180.0, -1.0, 9.0).saturn_geometry(2451545.0)
    assert geometry.longitude == pytest.approx(math.pi)
    assert geometry.latitude == pytest.approx(math.radians(-1.0))
    assert geometry.distance_au == 9.0
    assert geometry.equinox_jd == REFERENCE_EPOCH_JD


class _StaticSource:
    def __init__(self, equinox_jd: float) -> None:
        self.equinox_jd = equinox_jd

    def saturn_geometry(self, jde: float) -> SaturnGeometry:
        return SaturnGeometry(math.radians(100.0), 0.0, 9.0, self.equinox_jd)


def test_saturn_context_uses_b1950_geometry_as_given() -> None:
    """B1950.0 is within a day of 1950 January 1.5; angles pass through untouched."""
    context = saturn_context(2451545.0, _StaticSource(B1950_JD))
    assert context.lambda0 == math.radians(100.0)
    assert context.beta0 == 0.0
    assert context.delta == 9.0
    assert context.t1 == pytest.approx(2451545.0 - 0.04942 - 2411093.0)


def test_saturn_context_rejects_other_equinox() -> None:
    """Geometry of date or J2000 would be off by up to a degree of precession."""
    with pytest.raises(ValueError, match='equinox of 1950.0'):
        saturn_context(2451545.0, _StaticSource(J2000_JD))


def test_non_finite_time_rejected(example_geometry: FixedSaturnGeometry) -> None:
    with pytest.raises(ValueError, match='finite'):
        apparent_rect_coords(math.nan, Moon.TITAN, example_geometry)


def test_time_outside_series_window_warns(
    example_geometry: FixedSaturnGeometry, caplog: pytest.LogCaptureFixture
) -> None:
    """Far-future epochs are evaluated, with a warning."""
    with caplog.at_level(logging.WARNING, logger='saturn_moons.position'):
        position = apparent_rect_coords(2451545.0 + 600 * 365.25, Moon.TETHYS, example_geometry)
    assert isinstance(position, MoonPosition)
    assert 'outside' in caplog.text


def test_non_finite_result_rejected(example_context: EphemerisContext) -> None:
    """A degenerate Saturn distance surfaces as an error instead of NaN output."""
    bad = dataclasses.replace(example_context, delta=math.nan)
    with pytest.raises(ValueError, match='Non-finite position for Titan'):
        moon_position(bad, Moon.TITAN)
