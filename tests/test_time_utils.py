"""Tests for julian time utility wrappers."""

from __future__ import annotations

import pytest

from saturn_moons import time_utils


def test_ensure_leapsecs_sets_spice_ut_model(monkeypatch: pytest.MonkeyPatch) -> None:
    """Leap-second init selects the SPICE UT model before loading the LSK."""

    calls: list[tuple[str, tuple[object, ...]]] = []

    def _set_ut_model(model: str, future: object = None) -> None:
        del future
        calls.append(('set_ut_model', (model,)))

    def _load_lsk(path: str | None = None) -> None:
        calls.append(('load_lsk', (path,)))

    monkeypatch.setattr('julian.set_ut_model', _set_ut_model)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('saturn_moons.time_utils.get_leapsecs_path', lambda: 'dummy.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert calls == [('set_ut_model', ('SPICE',)), ('load_lsk', ('dummy.tls',))]


def test_ensure_leapsecs_falls_back_to_bundled_lsk(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing configured LSK falls back to the one shipped with rms-julian."""

    paths: list[str | None] = []

    def _load_lsk(path: str | None = None) -> None:
        paths.append(path)
        if path is not None:
            raise FileNotFoundError(path)

    monkeypatch.setattr('julian.set_ut_model', lambda model, future=None: None)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('saturn_moons.time_utils.get_leapsecs_path', lambda: 'missing.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert paths == ['missing.tls', None]
    assert time_utils._leapsecs_loaded is True


def test_parse_datetime_accepts_iso_z_suffix() -> None:
    """ISO-8601 trailing Z parses as UTC like the same timestamp without Z."""

    with_z = time_utils.parse_datetime('2022-08-18T00:01:47Z')
    without_z = time_utils.parse_datetime('2022-08-18T00:01:47')

    assert with_z is not None
    assert without_z is not None
    assert with_z == without_z


def test_parse_datetime_tries_only_string_and_z_stripped_form(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Strings are handed to rms-julian as given, plus one retry without a trailing Z."""
    tried: list[str] = []

    def _day_sec_from_string(string: str) -> tuple[int, float]:
        tried.append(string)
        raise ValueError(string)

    monkeypatch.setattr(time_utils, '_leapsecs_loaded', True)
    monkeypatch.setattr('julian.day_sec_from_string', _day_sec_from_string)

    assert time_utils.parse_datetime('1992 12:00:00') is None
    assert tried == ['1992 12:00:00']

    tried.clear()
    assert time_utils.parse_datetime('1992-12-16T00:00:00Z') is None
    assert tried == ['1992-12-16T00:00:00Z', '1992-12-16T00:00:00']


def test_jde_from_string_rejects_unparsable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(time_utils, 'parse_datetime', lambda string: None)
    with pytest.raises(ValueError, match='Invalid time'):
        time_utils.jde_from_string('not a date')


def test_jde_from_string_is_ahead_of_utc() -> None:
    """TDB runs 64.18 s ahead of UTC in 1992."""
    jde = time_utils.jde_from_string('1992-12-16 00:00:00')
    assert (jde - 2448972.5) * 86400.0 == pytest.approx(59.184, abs=0.01)


def test_jd_from_calendar() -> None:
    assert time_utils.jd_from_calendar(1950, 1, 1.5) == 2433283.0
    assert time_utils.jd_from_calendar(2000, 1, 1.5) == 2451545.0
    assert time_utils.jd_from_calendar(1992, 12, 16.0) == 2448972.5


def test_jde_tdb_conversions_are_inverse() -> None:
    assert time_utils.tdb_from_jde(2451545.0) == 0.0
    assert time_utils.jde_from_tdb(86400.0) == 2451546.0


def test_format_jde() -> None:
    assert time_utils.format_jde(time_utils.jde_from_string('2025-03-04 05:06')) == (
        '2025-03-04 05:06'
    )


@pytest.mark.parametrize(
    ('interval', 'unit', 'seconds'),
    [(30.0, 'sec', 30.0), (2.0, 'min', 120.0), (1.5, 'hour', 5400.0), (1.0, 'days', 86400.0)],
)
def test_interval_seconds(interval: float, unit: str, seconds: float) -> None:
    assert time_utils.interval_seconds(interval, unit) == seconds


def test_interval_seconds_rejects_unknown_unit() -> None:
    with pytest.raises(ValueError, match='time_unit'):
        time_utils.interval_seconds(1.0, 'fortnight')
