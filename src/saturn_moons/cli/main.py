"""CLI entry point: saturn-moons positions|tracker subcommands."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from saturn_moons.config import get_log_level
from saturn_moons.constants import DEFAULT_INTERVAL
from saturn_moons.moons import parse_moon_spec
from saturn_moons.position import (
    FixedSaturnGeometry,
    SaturnGeometrySource,
    all_moon_positions,
)
from saturn_moons.spice.geometry import SpiceSaturnGeometry
from saturn_moons.table import write_positions_table
from saturn_moons.time_utils import format_jde, jde_from_string
from saturn_moons.tracker import TrackerParams, run_tracker

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SATURN_MOONS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _geometry_source(args: argparse.Namespace) -> SaturnGeometrySource:
    """Fixed geometry from --saturn, else SPICE kernels."""
    if args.saturn is not None:
        lon, lat, dist = args.saturn
        return FixedSaturnGeometry(lon, lat, dist)
    return SpiceSaturnGeometry(args.ephem)


def _resolve_time(args: argparse.Namespace) -> float:
    """JDE from --jde, else from the --time UTC string."""
    if args.jde is not None:
        return float(args.jde)
    if not args.time:
        raise ValueError('One of --time or --jde is required')
    return jde_from_string(args.time)


def _positions_cmd(args: argparse.Namespace) -> int:
    """Print apparent X, Y, Z of the selected moons at one instant.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        moons = parse_moon_spec([str(x) for x in (args.moons or [])])
        jde = _resolve_time(args)
        positions = all_moon_positions(jde, moons, _geometry_source(args))
        label = f'JDE {jde:.5f}' if args.jde is not None else f'{format_jde(jde)} UTC'
        if args.output is not None:
            with open(args.output, 'w') as f:
                write_positions_table(f, positions, label)
        else:
            write_positions_table(sys.stdout, positions, label)
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _tracker_cmd(args: argparse.Namespace) -> int:
    """Tabulate (and optionally plot) moon X offsets over a time range.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        params = TrackerParams(
            start_time=args.start,
            stop_time=args.stop,
            interval=args.interval,
            time_unit=args.time_unit,
            moons=parse_moon_spec([str(x) for x in (args.moons or [])]),
            title=(args.title or '').strip(),
        )
        if args.saturn is not None:
            logger.warning('--saturn holds Saturn fixed over the whole tracker range')
        source = _geometry_source(args)
        if args.output_txt is not None:
            with open(args.output_txt, 'w') as f:
                run_tracker(params, source, output_txt=f, output_plot=args.output)
        else:
            run_tracker(params, source, output_txt=sys.stdout, output_plot=args.output)
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--moons',
        type=str,
        nargs='*',
        default=None,
        help='Moon names, NAIF IDs or indices 1-8 (e.g. titan 605 1); default all',
    )
    parser.add_argument(
        '--saturn',
        type=float,
        nargs=3,
        default=None,
        metavar=('LON', 'LAT', 'DIST'),
        help='Saturn ecliptic longitude/latitude (deg, equinox 1950.0) and distance (AU)',
    )
    parser.add_argument(
        '--ephem', type=int, default=0, help='SPICE ephemeris version (0=latest); env: SPICE_PATH'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')


def main(argv: list[str] | None = None) -> int:
    """Entry point for saturn-moons CLI (positions | tracker).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='saturn-moons',
        description='Apparent positions of the eight classical moons of Saturn.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    pos_parser = subparsers.add_parser('positions', help='Moon positions at one time')
    pos_parser.add_argument('--time', type=str, default='', help='UTC time (e.g. 1992-12-16 00:00)')
    pos_parser.add_argument('--jde', type=float, default=None, help='Julian Ephemeris Day')
    pos_parser.add_argument('-o', '--output', type=str, default=None, help='Output table file')
    _add_common_arguments(pos_parser)
    pos_parser.set_defaults(func=_positions_cmd)

    track_parser = subparsers.add_parser('tracker', help='Moon offsets over a time range')
    track_parser.add_argument('--start', type=str, required=True, help='Start time (UTC)')
    track_parser.add_argument('--stop', type=str, required=True, help='Stop time (UTC)')
    track_parser.add_argument(
        '--interval', type=float, default=DEFAULT_INTERVAL, help='Time step'
    )
    track_parser.add_argument(
        '--time-unit',
        type=str,
        default='hour',
        choices=['sec', 'min', 'hour', 'day'],
        help='Unit of --interval',
    )
    track_parser.add_argument('--title', type=str, default='', help='Plot title')
    track_parser.add_argument('-o', '--output', type=str, default=None, help='Plot image file')
    track_parser.add_argument(
        '--output-txt', type=str, default=None, help='Text table file (default stdout)'
    )
    _add_common_arguments(track_parser)
    track_parser.set_defaults(func=_tracker_cmd)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return int(args.func(args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
