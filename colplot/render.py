from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile
from typing import Callable

from colplot_plot import Figure, PlotDataError, figure_cm

from .composer import ChartSpec, SeriesSpec
from .errors import RenderError

LOGGER = logging.getLogger(__name__)


def _read_umask() -> int:
    mask = os.umask(0o022)
    os.umask(mask)
    return mask


# umask is process-wide; read it once, before any render thread starts.
OUTPUT_FILE_MODE = 0o666 & ~_read_umask()


def build_figure(chart: ChartSpec) -> Figure:
    style = chart.style
    fig = figure_cm(style.x_length_cm, style.y_length_cm, dpi=style.dpi)
    ax = fig.axes(
        title=chart.title,
        x_label=chart.x_label,
        y_label=chart.y_label,
        legend_anchor="top" if style.legend_top else "bottom",
    )
    ax.set_tick_decimals(y=style.y_tick_decimals)
    for spec in chart.series:
        label = spec.legend or None
        if style.points:
            ax.scatter(x=spec.x, y=spec.y, label=label, color=spec.color, radius=style.marker_radius)
        else:
            ax.plot(x=spec.x, y=spec.y, label=label, color=spec.color, width=style.line_width)
    return fig


def print_series(chart: ChartSpec, spec: SeriesSpec, echo: Callable[[str], None] = print) -> None:
    echo(f"{chart.title} {spec.legend}")
    for xv, yv in zip(spec.x.tolist(), spec.y.tolist()):
        echo(f"\t {xv} {yv}")


def render_chart(chart: ChartSpec) -> Path:
    """Rasterize ``chart`` and write it as PNG to ``chart.output_path``.

    The image goes to a temporary file in the target directory first and
    replaces the target only once fully written.
    """
    target = Path(chart.output_path)
    if chart.style.print_data:
        for spec in chart.series:
            print_series(chart, spec)

    directory = target.parent if str(target.parent) else Path(".")
    try:
        fig = build_figure(chart)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
    except (PlotDataError, ValueError) as exc:
        raise RenderError(target, f"cannot build chart: {exc}") from exc
    except OSError as exc:
        raise RenderError(target, f"cannot write output: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            os.fchmod(handle.fileno(), OUTPUT_FILE_MODE)
            fig.save_png(handle)
        os.replace(tmp_path, target)
    except (PlotDataError, ValueError, OSError) as exc:
        tmp_path.unlink(missing_ok=True)
        raise RenderError(target, f"cannot render chart: {exc}") from exc
    LOGGER.debug("wrote %s (%d series)", target, len(chart.series))
    return target
