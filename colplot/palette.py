from __future__ import annotations

import logging
import threading

import numpy as np
from matplotlib import colormaps

LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

RED: RGBA = (255, 0, 0, 255)
BLUE: RGBA = (0, 0, 255, 255)
GREEN: RGBA = (50, 190, 50, 255)
ORANGE: RGBA = (255, 175, 15, 255)
PINK: RGBA = (200, 0, 255, 255)
YELLOW: RGBA = (255, 255, 0, 255)
ROSE: RGBA = (255, 0, 200, 255)
LIGHT_BLUE: RGBA = (0, 255, 255, 255)
LIGHT_GREEN: RGBA = (150, 255, 150, 255)
BLACK: RGBA = (0, 0, 0, 255)

BASE_COLORS: tuple[RGBA, ...] = (RED, BLUE, GREEN, ORANGE, PINK, YELLOW, ROSE, LIGHT_BLUE, LIGHT_GREEN, BLACK)

# Moreland's smooth diverging map (blue -> grey -> red).
RAMP_COLORMAP = "coolwarm"


def diverging_ramp(count: int) -> list[RGBA]:
    """Sample ``count`` evenly spaced colors, blue end first."""
    if count <= 0:
        return []
    cmap = colormaps[RAMP_COLORMAP]
    samples = cmap(np.linspace(0.0, 1.0, count))
    return [tuple(int(round(float(c) * 255)) for c in rgba) for rgba in samples]  # type: ignore[misc]


class ColorPalette:
    """Append-only index -> color table.

    Indices below ``capacity`` map to a stable color; anything at or past
    ``capacity`` falls back to the first color.
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("palette capacity must be > 0")
        self._colors: list[RGBA] = list(BASE_COLORS)
        self._capacity = len(BASE_COLORS) if capacity is None else capacity
        self._lock = threading.Lock()
        self._extend_to(self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._colors)

    def colors(self) -> tuple[RGBA, ...]:
        return tuple(self._colors)

    def reserve(self, capacity: int) -> None:
        """Raise the capacity; never lowers it and never touches existing colors."""
        if capacity <= 0:
            raise ValueError("palette capacity must be > 0")
        with self._lock:
            self._extend_to(capacity)
            self._capacity = max(self._capacity, capacity)

    def _extend_to(self, capacity: int) -> None:
        current = len(self._colors)
        if capacity > current:
            self._colors.extend(diverging_ramp(capacity + 1 - current))
            LOGGER.debug("palette extended from %d to %d colors", current, len(self._colors))

    def color_for(self, index: int) -> RGBA:
        if index < 0:
            raise ValueError(f"palette index must be >= 0, got {index}")
        if index >= self._capacity:
            return self._colors[0]
        return self._colors[index]
