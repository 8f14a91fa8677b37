"""Moon tracker: east-west offsets of the moons over a time range."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

import numpy as np

from saturn_moons.constants import DEFAULT_INTERVAL, SECONDS_PER_DAY
from saturn_moons.moons import MOON_SPECS, Moon
from saturn_moons.position import SaturnGeometrySource, all_moon_positions
from saturn_moons.time_utils import format_jde, interval_seconds, jde_from_string

logger = logging.getLogger(__name__)

MAX_STEPS = 10000


@dataclass
class TrackerParams:
    """Time range and moon selection for the tracker."""

    start_time: str
    stop_time: str
    interval: float = DEFAULT_INTERVAL
    time_unit: str = 'hour'
    moons: list[Moon] = field(default_factory=lambda: list(Moon))
    title: str = ''


def tracker_times(params: TrackerParams) -> np.ndarray:
    """Julian Ephemeris Days from start to stop (inclusive) at the interval.

    Raises:
        ValueError: On unparsable times, stop before start, or too many steps.
    """
    start = jde_from_string(params.start_time)
    stop = jde_from_string(params.stop_time)
    if stop < start:
        raise ValueError(f'Stop time {params.stop_time!r} precedes start {params.start_time!r}')
    step = interval_seconds(params.interval, params.time_unit) / SECONDS_PER_DAY
    nsteps = int((stop - start) / step + 1e-6) + 1
    if nsteps > MAX_STEPS:
        raise ValueError(f'Too many time steps ({nsteps}); maximum is {MAX_STEPS}')
    return start + step * np.arange(nsteps, dtype=np.float64)


def moon_tracks(
    times: np.ndarray,
    moons: list[Moon],
    geometry_source: SaturnGeometrySource | None = None,
) -> np.ndarray:
    """X offsets (Saturn radii, positive west) with shape (len(times), len(moons))."""
    offsets = np.zeros((len(times), len(moons)), dtype=np.float64)
    for i, jde in enumerate(times):
        positions = all_moon_positions(float(jde), moons, geometry_source)
        offsets[i, :] = [positions[m].x for m in moons]
    logger.debug('Computed %d tracker steps for %d moons', len(times), len(moons))
    return offsets


def write_tracker_table(
    stream: TextIO,
    times: np.ndarray,
    moons: list[Moon],
    offsets: np.ndarray,
) -> None:
    """Write one line per time: UTC time then each moon's X offset."""
    header = f'{"Time (UTC)":<16s}' + ''.join(f' {MOON_SPECS[m].name:>9s}' for m in moons)
    stream.write(header.rstrip() + '\n')
    for jde, row in zip(times, offsets):
        stream.write(f'{format_jde(float(jde)):<16s}' + ''.join(f' {x:9.3f}' for x in row) + '\n')


def run_tracker(
    params: TrackerParams,
    geometry_source: SaturnGeometrySource | None = None,
    output_txt: TextIO | None = None,
    output_plot: str | None = None,
) -> np.ndarray:
    """Compute the moon tracks and write the requested outputs.

    Parameters:
        params: Time range and moons.
        geometry_source: Provider of Saturn's geometry; SPICE when None.
        output_txt: Stream for the text table, or None.
        output_plot: Image path for the matplotlib chart, or None.

    Returns:
        Offsets array, shape (n_times, n_moons).
    """
    times = tracker_times(params)
    offsets = moon_tracks(times, params.moons, geometry_source)
    if output_txt is not None:
        write_tracker_table(output_txt, times, params.moons, offsets)
    if output_plot:
        from saturn_moons.rendering.matplotlib_tracker import draw_moon_tracks_mpl

        draw_moon_tracks_mpl(
            times,
            [MOON_SPECS[m].name for m in params.moons],
            offsets,
            title=params.title or f'Moons of Saturn from {format_jde(float(times[0]))} UTC',
            output_path=output_plot,
        )
    return offsets
