from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Literal

import numpy as np

from colplot_plot.adapters import normalize_xy
from colplot_plot.errors import PlotDataError
from colplot_plot.raster import (
    draw_hline,
    draw_markers,
    draw_polyline,
    draw_text,
    draw_vline,
    fill_rect,
    new_canvas,
    save_png,
    stroke_rect,
    text_size,
)
from colplot_plot.scales import (
    DataLimits,
    PlotTransform,
    combine_limits,
    finite_limits,
    format_ticks,
    nice_ticks,
    thin_to_pixel_columns,
)
from colplot_plot.series import RGBA, PlotSeries, SeriesStyle


LegendAnchor = Literal["top", "bottom"]


def _coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float) -> RGBA:
    alpha = max(0.0, min(1.0, alpha))
    if len(color) == 3:
        r, g, b = color
        return (r, g, b, int(alpha * 255))
    r, g, b, a = color
    return (r, g, b, int(alpha * a))


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    breaks = np.flatnonzero(np.diff(idx) > 1)
    starts = np.concatenate(([idx[0]], idx[breaks + 1]))
    ends = np.concatenate((idx[breaks] + 1, [idx[-1] + 1]))
    return [(int(s), int(e)) for s, e in zip(starts.tolist(), ends.tolist())]


@dataclass(frozen=True)
class FigureStyle:
    background: RGBA = (255, 255, 255, 255)
    plot_background: RGBA = (255, 255, 255, 255)
    axis_color: RGBA = (0, 0, 0, 255)
    grid_color: RGBA = (222, 222, 222, 255)
    text_color: RGBA = (0, 0, 0, 255)
    legend_background: RGBA = (255, 255, 255, 225)
    legend_border: RGBA = (160, 160, 160, 255)


@dataclass(frozen=True)
class LegendEntry:
    label: str
    mode: str
    color: RGBA
    marker_radius: int
    line_width: int


@dataclass(frozen=True)
class LegendLayout:
    entries: tuple[LegendEntry, ...]
    font_px: float
    swatch_w: int
    item_h: int
    item_gap: int
    pad: int
    box_w: int
    box_h: int


@dataclass(frozen=True)
class AxesLayout:
    plot_x0: int
    plot_y0: int
    plot_w: int
    plot_h: int
    tick_font_px: float
    label_font_px: float
    title_font_px: float
    tick_mark_len: int
    tick_pad: int


@dataclass
class Axes:
    figure: "Figure"
    title: str = ""
    x_label: str = "x"
    y_label: str = "y"
    legend_anchor: LegendAnchor = "bottom"
    x_tick_decimals: int | None = None
    y_tick_decimals: int | None = None
    show_grid: bool = True

    _series: list[PlotSeries] = field(default_factory=list)
    _last_limits: DataLimits | None = None
    _last_legend_bounds_px: tuple[int, int, int, int] | None = None
    _last_tick_x: tuple[float, ...] = ()
    _last_tick_y: tuple[float, ...] = ()

    def plot(
        self,
        y: Any = None,
        *,
        x: Any = None,
        label: str | None = None,
        mode: str = "lines",
        color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 0, 0),
        width: int = 1,
        alpha: float = 1.0,
    ) -> "Axes":
        if mode not in {"line", "lines", "lines+markers"}:
            raise PlotDataError(f"unsupported plot mode: {mode}")
        style = SeriesStyle(
            mode="lines+markers" if mode == "lines+markers" else "lines",
            color=_coerce_color(color, alpha),
            line_width=max(1, width),
        )
        self._series.append(PlotSeries(data=normalize_xy(y=y, x=x), style=style, label=label))
        return self

    def scatter(
        self,
        y: Any = None,
        *,
        x: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 0, 0),
        radius: int = 2,
        alpha: float = 1.0,
    ) -> "Axes":
        if radius < 0:
            raise ValueError("marker radius must be >= 0")
        style = SeriesStyle(mode="markers", color=_coerce_color(color, alpha), marker_radius=radius)
        self._series.append(PlotSeries(data=normalize_xy(y=y, x=x), style=style, label=label))
        return self

    def set_legend_anchor(self, anchor: LegendAnchor) -> "Axes":
        if anchor not in {"top", "bottom"}:
            raise ValueError("legend anchor must be 'top' or 'bottom'")
        self.legend_anchor = anchor
        return self

    def set_tick_decimals(self, *, x: int | None = None, y: int | None = None) -> "Axes":
        for value in (x, y):
            if value is not None and value < 0:
                raise ValueError("tick decimals must be >= 0")
        self.x_tick_decimals = x
        self.y_tick_decimals = y
        return self

    @property
    def series(self) -> tuple[PlotSeries, ...]:
        return tuple(self._series)

    def legend_entries(self) -> tuple[LegendEntry, ...]:
        return tuple(
            LegendEntry(
                label=spec.label.strip(),
                mode=spec.style.mode,
                color=spec.style.color,
                marker_radius=spec.style.marker_radius,
                line_width=spec.style.line_width,
            )
            for spec in self._series
            if spec.has_label and spec.label is not None
        )

    def last_limits(self) -> DataLimits | None:
        return self._last_limits

    def legend_bounds(self) -> tuple[int, int, int, int] | None:
        return self._last_legend_bounds_px

    def last_tick_values(self) -> tuple[tuple[float, ...], tuple[float, ...]]:
        return (self._last_tick_x, self._last_tick_y)

    def _limits(self) -> DataLimits:
        return combine_limits(finite_limits(spec.data.x, spec.data.y) for spec in self._series)

    def _layout(self, limits: DataLimits) -> AxesLayout:
        fig_w = self.figure.width
        fig_h = self.figure.height
        scale_base = min(fig_w, fig_h)
        tick_font_px = max(10.0, min(18.0, scale_base * 0.032))
        label_font_px = max(11.0, min(20.0, scale_base * 0.036))
        title_font_px = max(12.0, min(24.0, scale_base * 0.042))
        tick_mark_len = int(max(4.0, tick_font_px * 0.4))
        tick_pad = int(max(3.0, tick_font_px * 0.3))

        # Size the gutters from a first tick estimate on the whole figure.
        probe_y = nice_ticks(limits.ymin, limits.ymax, max(3, fig_h // 70))
        probe_x = nice_ticks(limits.xmin, limits.xmax, max(3, fig_w // 90))
        y_labels = format_ticks(probe_y, decimals=self.y_tick_decimals)
        x_labels = format_ticks(probe_x, decimals=self.x_tick_decimals)
        max_y_tick_w = max((text_size(lbl, font_size_px=tick_font_px)[0] for lbl in y_labels), default=0)
        max_x_tick_h = max((text_size(lbl, font_size_px=tick_font_px)[1] for lbl in x_labels), default=0)
        last_x_tick_w = text_size(x_labels[-1], font_size_px=tick_font_px)[0] if x_labels else 0
        label_gap = int(max(4.0, label_font_px * 0.4))
        y_label_w = text_size(self.y_label, font_size_px=label_font_px, rotate_deg=90)[0] if self.y_label else 0
        x_label_h = text_size(self.x_label, font_size_px=label_font_px)[1] if self.x_label else 0
        title_h = text_size(self.title, font_size_px=title_font_px)[1] if self.title else 0

        left = max_y_tick_w + tick_mark_len + tick_pad + y_label_w + 2 * label_gap
        right = max(8, last_x_tick_w // 2 + 4)
        top = title_h + 2 * label_gap if self.title else label_gap * 2
        bottom = tick_mark_len + tick_pad + max_x_tick_h + x_label_h + 2 * label_gap

        # Bound gutters on small figures so a drawable plot area always remains.
        left = min(left, max(6, fig_w // 3))
        right = min(right, max(4, fig_w // 4))
        top = min(top, max(4, fig_h // 4))
        bottom = min(bottom, max(6, fig_h // 3))
        plot_w = fig_w - left - right
        plot_h = fig_h - top - bottom
        if plot_w <= 1 or plot_h <= 1:
            raise PlotDataError("figure too small for plotting viewport")
        return AxesLayout(
            plot_x0=left,
            plot_y0=top,
            plot_w=plot_w,
            plot_h=plot_h,
            tick_font_px=tick_font_px,
            label_font_px=label_font_px,
            title_font_px=title_font_px,
            tick_mark_len=tick_mark_len,
            tick_pad=tick_pad,
        )

    def _build_legend_layout(self, tick_font_px: float) -> LegendLayout | None:
        entries = self.legend_entries()
        if not entries:
            return None
        font_px = max(10.0, tick_font_px * 0.9)
        swatch_w = int(max(14, font_px * 1.8))
        text_h = max(text_size(entry.label, font_size_px=font_px)[1] for entry in entries)
        marker_h = max(2 * entry.marker_radius + 1 for entry in entries)
        item_h = max(text_h, marker_h, int(round(font_px)))
        item_gap = int(max(2, font_px * 0.35))
        pad = int(max(4, font_px * 0.5))
        text_w = max(text_size(entry.label, font_size_px=font_px)[0] for entry in entries)
        return LegendLayout(
            entries=entries,
            font_px=font_px,
            swatch_w=swatch_w,
            item_h=item_h,
            item_gap=item_gap,
            pad=pad,
            box_w=pad * 3 + swatch_w + text_w,
            box_h=pad * 2 + len(entries) * item_h + (len(entries) - 1) * item_gap,
        )

    def _legend_origin(self, legend: LegendLayout, layout: AxesLayout) -> tuple[int, int]:
        margin = 6
        x = max(layout.plot_x0 + 2, layout.plot_x0 + layout.plot_w - legend.box_w - margin)
        if self.legend_anchor == "top":
            y = layout.plot_y0 + margin
        else:
            y = max(layout.plot_y0 + 2, layout.plot_y0 + layout.plot_h - legend.box_h - margin)
        return (x, y)

    def _draw_legend(self, canvas: np.ndarray, layout: AxesLayout) -> None:
        legend = self._build_legend_layout(layout.tick_font_px)
        if legend is None:
            self._last_legend_bounds_px = None
            return
        x, y = self._legend_origin(legend, layout)
        self._last_legend_bounds_px = (x, y, legend.box_w, legend.box_h)
        style = self.figure.style
        fill_rect(canvas, x, y, x + legend.box_w - 1, y + legend.box_h - 1, style.legend_background)
        stroke_rect(canvas, x, y, x + legend.box_w - 1, y + legend.box_h - 1, style.legend_border)

        for i, entry in enumerate(legend.entries):
            row_top = y + legend.pad + i * (legend.item_h + legend.item_gap)
            row_mid = row_top + legend.item_h // 2
            sw_x0 = x + legend.pad
            sw_x1 = sw_x0 + legend.swatch_w - 1
            if entry.mode in {"lines", "lines+markers"}:
                draw_polyline(
                    canvas,
                    np.asarray([sw_x0, sw_x1]),
                    np.asarray([row_mid, row_mid]),
                    color=entry.color,
                    width=entry.line_width,
                )
            if entry.mode in {"markers", "lines+markers"}:
                draw_markers(
                    canvas,
                    np.asarray([(sw_x0 + sw_x1) // 2]),
                    np.asarray([row_mid]),
                    color=entry.color,
                    radius=entry.marker_radius,
                )
            _, th = text_size(entry.label, font_size_px=legend.font_px)
            draw_text(
                canvas,
                sw_x1 + legend.pad,
                row_mid - th // 2,
                entry.label,
                style.text_color,
                font_size_px=legend.font_px,
            )

    def _draw_series(self, canvas: np.ndarray, transform: PlotTransform) -> None:
        # Lines first so markers stay visible on top.
        for spec in self._series:
            if spec.style.mode not in {"lines", "lines+markers"}:
                continue
            for start, end in _contiguous_true_runs(spec.data.mask):
                if end - start < 2:
                    continue
                px, py = transform.to_pixels(spec.data.x[start:end], spec.data.y[start:end])
                if px.size > 2 * transform.width:
                    px, py = thin_to_pixel_columns(px, py, width=transform.width, keep_extremes=True)
                draw_polyline(canvas, px, py, color=spec.style.color, width=spec.style.line_width)
        for spec in self._series:
            if spec.style.mode not in {"markers", "lines+markers"}:
                continue
            mask = spec.data.mask
            if not np.any(mask):
                continue
            px, py = transform.to_pixels(spec.data.x[mask], spec.data.y[mask])
            draw_markers(canvas, px, py, color=spec.style.color, radius=spec.style.marker_radius)

    def render(self) -> np.ndarray:
        style = self.figure.style
        canvas = new_canvas(self.figure.width, self.figure.height, color=style.background)
        limits = self._limits()
        layout = self._layout(limits)
        x0, y0, w, h = layout.plot_x0, layout.plot_y0, layout.plot_w, layout.plot_h
        x1 = x0 + w - 1
        y1 = y0 + h - 1
        transform = PlotTransform(limits=limits, x0=x0, y0=y0, width=w, height=h)
        self._last_limits = limits

        tick_x = nice_ticks(limits.xmin, limits.xmax, max(3, w // 90))
        tick_y = nice_ticks(limits.ymin, limits.ymax, max(3, h // 70))
        self._last_tick_x = tuple(float(v) for v in tick_x.tolist())
        self._last_tick_y = tuple(float(v) for v in tick_y.tolist())

        fill_rect(canvas, x0, y0, x1, y1, style.plot_background)
        if self.show_grid:
            for xv in tick_x.tolist():
                draw_vline(canvas, transform.x_pixel(xv), y0, y1, style.grid_color)
            for yv in tick_y.tolist():
                draw_hline(canvas, x0, x1, transform.y_pixel(yv), style.grid_color)

        self._draw_series(canvas, transform)

        draw_hline(canvas, x0, x1, y1, style.axis_color)
        draw_vline(canvas, x0, y0, y1, style.axis_color)

        tick_font = layout.tick_font_px
        for xv, label in zip(tick_x.tolist(), format_ticks(tick_x, decimals=self.x_tick_decimals)):
            px = transform.x_pixel(xv)
            draw_vline(canvas, px, y1, y1 + layout.tick_mark_len, style.axis_color)
            tw, _ = text_size(label, font_size_px=tick_font)
            draw_text(canvas, px - tw // 2, y1 + layout.tick_mark_len + layout.tick_pad, label, style.text_color, font_size_px=tick_font)
        tick_bottom = y1 + layout.tick_mark_len + layout.tick_pad
        for yv, label in zip(tick_y.tolist(), format_ticks(tick_y, decimals=self.y_tick_decimals)):
            py = transform.y_pixel(yv)
            draw_hline(canvas, x0 - layout.tick_mark_len, x0, py, style.axis_color)
            tw, th = text_size(label, font_size_px=tick_font)
            draw_text(
                canvas,
                max(0, x0 - layout.tick_mark_len - layout.tick_pad - tw),
                py - th // 2,
                label,
                style.text_color,
                font_size_px=tick_font,
            )
        if tick_x.size:
            tick_bottom += max(text_size(lbl, font_size_px=tick_font)[1] for lbl in format_ticks(tick_x, decimals=self.x_tick_decimals))

        if self.title:
            tw, th = text_size(self.title, font_size_px=layout.title_font_px)
            draw_text(
                canvas,
                max(2, (self.figure.width - tw) // 2),
                max(2, (y0 - th) // 2),
                self.title,
                style.text_color,
                font_size_px=layout.title_font_px,
                embolden_px=2,
            )
        if self.x_label:
            lw, _ = text_size(self.x_label, font_size_px=layout.label_font_px)
            draw_text(
                canvas,
                max(0, x0 + w // 2 - lw // 2),
                tick_bottom + int(max(4.0, layout.label_font_px * 0.4)),
                self.x_label,
                style.text_color,
                font_size_px=layout.label_font_px,
            )
        if self.y_label:
            lw, lh = text_size(self.y_label, font_size_px=layout.label_font_px, rotate_deg=90)
            draw_text(
                canvas,
                max(2, int(max(4.0, layout.label_font_px * 0.4))),
                max(2, y0 + h // 2 - lh // 2),
                self.y_label,
                style.text_color,
                font_size_px=layout.label_font_px,
                rotate_deg=90,
            )

        self._draw_legend(canvas, layout)
        return canvas


@dataclass
class Figure:
    width: int = 640
    height: int = 480
    style: FigureStyle = field(default_factory=FigureStyle)
    _axes: Axes | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")

    def axes(
        self,
        *,
        title: str = "",
        x_label: str = "x",
        y_label: str = "y",
        legend_anchor: LegendAnchor = "bottom",
    ) -> Axes:
        if self._axes is not None:
            raise PlotDataError("figure already has axes")
        self._axes = Axes(figure=self, title=title, x_label=x_label, y_label=y_label)
        self._axes.set_legend_anchor(legend_anchor)
        return self._axes

    def to_rgba(self) -> np.ndarray:
        if self._axes is None:
            raise PlotDataError("figure has no axes")
        return self._axes.render()

    def save_png(self, target: str | Path | BinaryIO) -> None:
        """Encode the rendered frame as PNG to a path or a binary file object."""
        save_png(self.to_rgba(), target)
