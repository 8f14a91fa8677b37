"""The eight classical moons of Saturn and moon selection parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

logger = logging.getLogger(__name__)


class Moon(IntEnum):
    """Classical Saturnian satellites, valued by NAIF body ID."""

    MIMAS = 601
    ENCELADUS = 602
    TETHYS = 603
    DIONE = 604
    RHEA = 605
    TITAN = 606
    HYPERION = 607
    IAPETUS = 608


@dataclass(frozen=True)
class MoonSpec:
    """Moon identifier and its differential light-time divisor."""

    moon: Moon
    name: str
    light_time_divisor: float

    @property
    def id(self) -> int:
        """NAIF body ID."""
        return int(self.moon)


MOON_SPECS: dict[Moon, MoonSpec] = {
    Moon.MIMAS: MoonSpec(Moon.MIMAS, 'Mimas', 20947.0),
    Moon.ENCELADUS: MoonSpec(Moon.ENCELADUS, 'Enceladus', 23715.0),
    Moon.TETHYS: MoonSpec(Moon.TETHYS, 'Tethys', 26382.0),
    Moon.DIONE: MoonSpec(Moon.DIONE, 'Dione', 29876.0),
    Moon.RHEA: MoonSpec(Moon.RHEA, 'Rhea', 35313.0),
    Moon.TITAN: MoonSpec(Moon.TITAN, 'Titan', 53800.0),
    Moon.HYPERION: MoonSpec(Moon.HYPERION, 'Hyperion', 59222.0),
    Moon.IAPETUS: MoonSpec(Moon.IAPETUS, 'Iapetus', 91820.0),
}


def parse_moon(token: str | int | Moon) -> Moon:
    """Convert one moon token to a Moon.

    Parameters:
        token: Moon member, NAIF ID (601-608), 1-based index (1-8), or
            case-insensitive name.

    Returns:
        The matching Moon.

    Raises:
        ValueError: If the token names no classical moon.
    """
    if isinstance(token, Moon):
        return token
    text = str(token).strip()
    if text.isdigit():
        value = int(text)
        if 1 <= value <= len(Moon):
            return list(Moon)[value - 1]
        try:
            return Moon(value)
        except ValueError:
            raise ValueError(f'Unknown moon ID {value}; expected 1-8 or 601-608') from None
    for spec in MOON_SPECS.values():
        if spec.name.lower() == text.lower():
            return spec.moon
    raise ValueError(f'Unknown moon {token!r}')


def parse_moon_spec(tokens: list[str]) -> list[Moon]:
    """Convert moon tokens to an ordered, de-duplicated list of moons.

    ``all`` (or no tokens) selects all eight. Comma-separated tokens are split.

    Parameters:
        tokens: Names, NAIF IDs, or 1-based indices.

    Returns:
        Moons in Saturn-distance order.
    """
    parts = [p.strip() for tok in tokens for p in tok.split(',') if p.strip()]
    if not parts or any(p.lower() == 'all' for p in parts):
        return list(Moon)
    selected = {parse_moon(p) for p in parts}
    logger.debug('Selected moons: %s', sorted(selected))
    return [m for m in Moon if m in selected]
