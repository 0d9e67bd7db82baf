from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend(dst[y : y + 1, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    _blend(dst[ya : yb + 1, x : x + 1], color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    left = max(0, min(x0, x1))
    right = min(dst.shape[1] - 1, max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    if right < left or bottom < top:
        return
    _blend(dst[top : bottom + 1, left : right + 1], color)


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    draw_hline(dst, x0, x1, y0, color)
    draw_hline(dst, x0, x1, y1, color)
    draw_vline(dst, x0, y0, y1, color)
    draw_vline(dst, x1, y0, y1, color)


def to_image(canvas: np.ndarray) -> Image.Image:
    if canvas.ndim != 3 or canvas.shape[2] != 4 or canvas.dtype != np.uint8:
        raise ValueError("canvas must be an (h, w, 4) uint8 array")
    return Image.fromarray(canvas)


def save_png(canvas: np.ndarray, target: str | Path | BinaryIO) -> None:
    # Charts are opaque; dropping alpha keeps the files small.
    to_image(canvas).convert("RGB").save(target, format="PNG")


def blend_points(dst: np.ndarray, px: np.ndarray, py: np.ndarray, color: RGBA) -> None:
    """Blend ``color`` once into each distinct in-bounds (px, py) pixel."""
    h, w = dst.shape[0], dst.shape[1]
    px = np.asarray(px, dtype=np.int64).ravel()
    py = np.asarray(py, dtype=np.int64).ravel()
    inside = (px >= 0) & (px < w) & (py >= 0) & (py < h)
    if not np.any(inside):
        return
    rows, cols = np.divmod(np.unique(py[inside] * w + px[inside]), w)
    a = color[3] / 255.0
    src = np.asarray(color[0:3], dtype=np.float32) * a
    current = dst[rows, cols, :3].astype(np.float32)
    dst[rows, cols, :3] = (src + current * (1.0 - a)).astype(np.uint8)
    dst[rows, cols, 3] = 255


def _blend(region: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    src = np.asarray(color[0:3], dtype=np.float32) * a
    region[:, :, :3] = (src + region[:, :, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    region[:, :, 3] = 255
