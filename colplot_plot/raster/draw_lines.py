from __future__ import annotations

from functools import lru_cache

import numpy as np

from colplot_plot.raster.canvas import RGBA, blend_points


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    """Draw connected segments through (xs[i], ys[i]) with a square pen.

    All segment pixels are gathered before blending, so joints and wide
    pens do not darken translucent colors.
    """
    xs = np.asarray(xs, dtype=np.int64)
    ys = np.asarray(ys, dtype=np.int64)
    if xs.size < 2:
        return
    px, py = _trace(xs, ys)
    pen = _pen_offsets(max(0, int(width) // 2))
    blend_points(dst, px[:, None] + pen[None, :, 0], py[:, None] + pen[None, :, 1], color)


def _trace(xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Pixel centers along each segment, one sample per step of the major axis."""
    out_x: list[np.ndarray] = []
    out_y: list[np.ndarray] = []
    for x0, y0, x1, y1 in zip(xs[:-1], ys[:-1], xs[1:], ys[1:]):
        steps = int(max(abs(x1 - x0), abs(y1 - y0)))
        t = np.linspace(0.0, 1.0, steps + 1)
        out_x.append(np.rint(x0 + (x1 - x0) * t).astype(np.int64))
        out_y.append(np.rint(y0 + (y1 - y0) * t).astype(np.int64))
    return np.concatenate(out_x), np.concatenate(out_y)


@lru_cache(maxsize=8)
def _pen_offsets(radius: int) -> np.ndarray:
    span = np.arange(-radius, radius + 1, dtype=np.int64)
    ox, oy = np.meshgrid(span, span)
    return np.stack([ox.ravel(), oy.ravel()], axis=1)
