"""Matplotlib moon tracker chart: time down the page, east-west offset across."""

from __future__ import annotations

import numpy as np


def draw_moon_tracks_mpl(
    times: np.ndarray,
    names: list[str],
    offsets: np.ndarray,
    title: str = '',
    output_path: str | None = None,
) -> None:
    """Render moon tracks with Saturn's disk drawn as a vertical band.

    Parameters:
        times: Julian Ephemeris Days, one per row of offsets.
        names: Moon names, one per column of offsets.
        offsets: X offsets in Saturn radii (positive west).
        title: Plot title.
        output_path: Image file to write; nothing is saved when None.
    """
    import matplotlib

    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    days = (times - times[0]) if len(times) else times
    fig, ax = plt.subplots(figsize=(6.0, 9.0))
    ax.axvspan(-1.0, 1.0, color='0.8', zorder=0)
    for j, name in enumerate(names):
        ax.plot(offsets[:, j], days, linewidth=0.8, label=name)
    ax.invert_yaxis()
    ax.set_xlabel('East    offset (Saturn radii)    West')
    ax.set_ylabel('Days from start')
    if title:
        ax.set_title(title)
    ax.legend(loc='lower right', fontsize='small')
    if output_path:
        fig.savefig(output_path)
    plt.close(fig)
