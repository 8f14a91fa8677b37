"""Fixed-width text tables of moon positions."""

from __future__ import annotations

from typing import TextIO

from saturn_moons.moons import MOON_SPECS, Moon
from saturn_moons.position import MoonPosition

NAME_WIDTH = 10


def format_position_row(moon: Moon, position: MoonPosition) -> str:
    """One table line: name, NAIF ID, X, Y, Z with three decimals."""
    spec = MOON_SPECS[moon]
    return (
        f'{spec.name:<{NAME_WIDTH}s} {spec.id:4d}'
        f' {position.x:9.3f} {position.y:9.3f} {position.z:9.3f}'
    )


def write_positions_table(
    stream: TextIO,
    positions: dict[Moon, MoonPosition],
    time_label: str = '',
) -> None:
    """Write apparent positions for one instant.

    Parameters:
        stream: Output text stream.
        positions: MoonPosition per moon, written in dict order.
        time_label: Optional first line (e.g. the formatted time).
    """
    if time_label:
        stream.write(f'Time: {time_label}\n')
    stream.write(f'{"Moon":<{NAME_WIDTH}s} {"ID":>4s} {"X":>9s} {"Y":>9s} {"Z":>9s}\n')
    for moon, position in positions.items():
        stream.write(format_position_row(moon, position) + '\n')
