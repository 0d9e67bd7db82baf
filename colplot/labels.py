from __future__ import annotations

from dataclasses import dataclass
import os
from typing import TYPE_CHECKING, Sequence

from .parser import ALL_COLUMNS, Dataset

if TYPE_CHECKING:
    from .options import PlotOptions

DEFAULT_X_LABEL = "x"
DEFAULT_Y_LABEL = "y"
OUTPUT_SUFFIX = ".png"


@dataclass(frozen=True)
class ChartLabels:
    title: str
    x_label: str
    y_label: str
    output_path: str


def x_label(override: str, legend: Sequence[str] | None, xcol: int, default: str = DEFAULT_X_LABEL) -> str:
    if override:
        return override
    if legend is not None and 0 <= xcol < len(legend):
        return legend[xcol]
    return default


def y_label(
    override: str,
    legend: Sequence[str] | None,
    xcol: int,
    ycol: int,
    default: str = DEFAULT_Y_LABEL,
) -> str:
    """Y axis label: override, else legend-derived, else ``default``.

    With ``ycol == -1`` every legend name except the x column's is joined
    with ``-`` ("a b c" with x at 1 gives "a-c").
    """
    if override:
        return override
    if legend is None:
        return default
    if ycol == ALL_COLUMNS:
        names = [name for index, name in enumerate(legend) if index != xcol]
        return "-".join(names) if names else default
    if 0 <= ycol < len(legend):
        return legend[ycol]
    return default


def chart_title(override: str, source: str) -> str:
    if override:
        return override
    return os.path.basename(source)


def output_path(override: str, source: str) -> str:
    if override:
        return override
    base = os.path.basename(source)
    dot = base.rfind(".")
    stem = base[:dot] if dot >= 0 else base
    return stem + OUTPUT_SUFFIX


def build_chart_labels(options: "PlotOptions", dataset: Dataset) -> ChartLabels:
    """Labels for one chart, derived from ``dataset`` (the first file in combined mode)."""
    return ChartLabels(
        title=chart_title(options.title, dataset.source),
        x_label=x_label(options.xlabel, dataset.legend, options.xcol),
        y_label=y_label(options.ylabel, dataset.legend, options.xcol, options.ycol),
        output_path=output_path(options.output, dataset.source),
    )
