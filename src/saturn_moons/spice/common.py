"""Shared state for the SPICE layer: which kernels are already furnished."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SpiceState:
    """Kernel-pool bookkeeping.

    Modified by load_spice_files; read by the SPICE geometry source to decide
    whether kernels still need loading.
    """

    saturn_loaded: bool = False
    ephem_version: int = 0

    def reset(self) -> None:
        """Forget loaded kernels (does not unload them from cspyce)."""
        self.saturn_loaded = False
        self.ephem_version = 0


# Module-level singleton
_state = SpiceState()


def get_state() -> SpiceState:
    """Return the global SpiceState instance."""
    return _state
