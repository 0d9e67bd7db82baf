from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np


SeriesMode = Literal["markers", "lines", "lines+markers"]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    source_name: str | None = None

    @property
    def size(self) -> int:
        return int(self.x.size)


@dataclass(frozen=True)
class SeriesStyle:
    mode: SeriesMode
    color: RGBA = (255, 0, 0, 255)
    marker_radius: int = 2
    line_width: int = 1


@dataclass(frozen=True)
class PlotSeries:
    data: SeriesData
    style: SeriesStyle
    label: str | None = None

    @property
    def has_label(self) -> bool:
        return self.label is not None and bool(self.label.strip())
