from __future__ import annotations

from functools import lru_cache

import numpy as np

from colplot_plot.raster.canvas import RGBA, blend_points


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, radius: int = 2) -> None:
    """Stamp a filled circle of ``radius`` pixels at every (x, y) position.

    Overlapping discs are merged first, so a translucent color is applied
    once per pixel regardless of point density.
    """
    if xs.size == 0:
        return
    offsets = _disc_offsets(max(0, int(radius)))
    px = np.asarray(xs, dtype=np.int64)[:, None] + offsets[None, :, 0]
    py = np.asarray(ys, dtype=np.int64)[:, None] + offsets[None, :, 1]
    blend_points(dst, px, py, color)


@lru_cache(maxsize=16)
def _disc_offsets(radius: int) -> np.ndarray:
    r2 = radius * radius + radius
    span = np.arange(-radius, radius + 1, dtype=np.int64)
    ox, oy = np.meshgrid(span, span)
    keep = (ox * ox + oy * oy) <= r2
    return np.stack([ox[keep], oy[keep]], axis=1)
