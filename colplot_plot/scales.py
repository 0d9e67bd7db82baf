from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

import numpy as np


UNIT_LIMITS_PAD = 1.0


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @classmethod
    def unit(cls) -> "DataLimits":
        return cls(xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)

    def union(self, other: "DataLimits") -> "DataLimits":
        return DataLimits(
            xmin=min(self.xmin, other.xmin),
            xmax=max(self.xmax, other.xmax),
            ymin=min(self.ymin, other.ymin),
            ymax=max(self.ymax, other.ymax),
        )

    def padded(self, y_buffer_ratio: float = 0.05) -> "DataLimits":
        xmin, xmax, ymin, ymax = self.xmin, self.xmax, self.ymin, self.ymax
        if ymin == ymax:
            delta = max(UNIT_LIMITS_PAD, abs(ymin) * y_buffer_ratio)
            ymin -= delta
            ymax += delta
        else:
            pad = (ymax - ymin) * y_buffer_ratio
            ymin -= pad
            ymax += pad
        if xmin == xmax:
            xmin -= UNIT_LIMITS_PAD
            xmax += UNIT_LIMITS_PAD
        return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


@dataclass(frozen=True)
class PlotTransform:
    """Affine data -> canvas mapping for a plot rectangle at (x0, y0)."""

    limits: DataLimits
    x0: int
    y0: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 1 or self.height <= 1:
            raise ValueError("plot viewport width/height must be > 1")

    @property
    def sx(self) -> float:
        return (self.width - 1) / (self.limits.xmax - self.limits.xmin)

    @property
    def sy(self) -> float:
        return (self.height - 1) / (self.limits.ymax - self.limits.ymin)

    def to_pixels(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        px = np.rint((x - self.limits.xmin) * self.sx).astype(np.int32)
        py = np.rint((y - self.limits.ymin) * self.sy).astype(np.int32)
        py = (self.height - 1) - py
        np.clip(px, 0, self.width - 1, out=px)
        np.clip(py, 0, self.height - 1, out=py)
        return px + self.x0, py + self.y0

    def x_pixel(self, value: float) -> int:
        px, _ = self.to_pixels(np.asarray([value], dtype=np.float64), np.asarray([self.limits.ymin], dtype=np.float64))
        return int(px[0])

    def y_pixel(self, value: float) -> int:
        _, py = self.to_pixels(np.asarray([self.limits.xmin], dtype=np.float64), np.asarray([value], dtype=np.float64))
        return int(py[0])


def finite_limits(x: np.ndarray, y: np.ndarray) -> DataLimits | None:
    mask = np.isfinite(x) & np.isfinite(y)
    if not np.any(mask):
        return None
    vx = x[mask]
    vy = y[mask]
    return DataLimits(
        xmin=float(np.min(vx)),
        xmax=float(np.max(vx)),
        ymin=float(np.min(vy)),
        ymax=float(np.max(vy)),
    )


def combine_limits(parts: Iterable[DataLimits | None]) -> DataLimits:
    out: DataLimits | None = None
    for part in parts:
        if part is None:
            continue
        out = part if out is None else out.union(part)
    if out is None:
        return DataLimits.unit()
    return out.padded()


def thin_to_pixel_columns(px: np.ndarray, py: np.ndarray, *, width: int, keep_extremes: bool) -> tuple[np.ndarray, np.ndarray]:
    """Reduce points to at most two per pixel column (min/max) or one (median)."""
    if px.size <= width:
        return px, py
    order = np.argsort(px, kind="stable")
    sx = px[order]
    sy = py[order]
    cols, starts = np.unique(sx, return_index=True)
    ends = np.append(starts[1:], sx.size)
    xs: list[int] = []
    ys: list[int] = []
    for col, start, end in zip(cols.tolist(), starts.tolist(), ends.tolist()):
        chunk = sy[start:end]
        if not keep_extremes:
            xs.append(col)
            ys.append(int(chunk[chunk.size // 2]))
            continue
        lo = int(chunk.min())
        hi = int(chunk.max())
        xs.append(col)
        ys.append(lo)
        if hi != lo:
            xs.append(col)
            ys.append(hi)
    return np.asarray(xs, dtype=np.int32), np.asarray(ys, dtype=np.int32)


def nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Round-numbered ticks covering [vmin, vmax], clipped to that range."""
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    first = np.ceil(vmin / step) * step
    ticks = np.arange(first, vmax + 0.5 * step, step, dtype=np.float64)
    # Snap float drift so values like -4.44e-16 print as 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    eps = step * 1e-6
    ticks = ticks[(ticks >= vmin - eps) & (ticks <= vmax + eps)]
    if ticks.size == 0:
        return np.asarray([vmin, vmax], dtype=np.float64)
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6 or (step is not None and abs(step) < 1e-4)):
        return f"{value:.4e}"

    decimals = _decimals_from_step(step) if step is not None else 6
    try:
        out = format(Decimal(str(value)).quantize(Decimal("1").scaleb(-decimals)), "f")
    except InvalidOperation:
        out = repr(value)
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return "0" if out == "-0" else out


def format_ticks(ticks: np.ndarray, *, decimals: int | None = None) -> list[str]:
    """Label ticks; a fixed ``decimals`` count overrides step-derived precision."""
    if ticks.size == 0:
        return []
    if decimals is not None:
        return [f"{float(v):.{decimals}f}" for v in ticks]
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)
    if round_result:
        bounds = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
        nice_frac = next((nice for limit, nice in bounds if frac < limit), 10.0)
    else:
        bounds = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
        nice_frac = next((nice for limit, nice in bounds if frac <= limit), 10.0)
    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exp = Decimal(str(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exp)))
