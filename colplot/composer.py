from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from .errors import ConfigurationError
from .labels import ChartLabels, build_chart_labels
from .options import PlotOptions, PlotStyle
from .palette import RGBA, ColorPalette
from .parser import ALL_COLUMNS, Dataset

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SeriesSpec:
    xcol: int
    ycol: int
    legend: str
    palette_index: int
    color: RGBA
    x: np.ndarray
    y: np.ndarray
    source: str = ""

    def __len__(self) -> int:
        return int(self.x.size)


@dataclass(frozen=True, eq=False)
class ChartSpec:
    title: str
    x_label: str
    y_label: str
    series: tuple[SeriesSpec, ...]
    output_path: str
    style: PlotStyle

    @property
    def palette_indices(self) -> tuple[int, ...]:
        return tuple(spec.palette_index for spec in self.series)


def select_columns(ncol: int, xcol: int, ycol: int) -> list[int]:
    """Y columns to plot: every column but x when ``ycol`` is -1, else just ``ycol``."""
    if ycol == ALL_COLUMNS:
        return [c for c in range(ncol) if c != xcol]
    if ycol == xcol:
        return []
    return [ycol]


def check_columns(dataset: Dataset, xcol: int, ycol: int) -> None:
    if dataset.is_empty:
        return
    if not 0 <= xcol < dataset.ncol:
        raise ConfigurationError(f"{dataset.source}: x column {xcol} out of range for {dataset.ncol} columns")
    if ycol != ALL_COLUMNS and not 0 <= ycol < dataset.ncol:
        raise ConfigurationError(f"{dataset.source}: y column {ycol} out of range for {dataset.ncol} columns")


def compose_series(
    dataset: Dataset,
    xcol: int,
    ycol: int,
    palette: ColorPalette,
    start_index: int = 0,
) -> list[SeriesSpec]:
    """Series for one dataset, numbering palette slots from ``start_index``."""
    if dataset.is_empty:
        return []
    check_columns(dataset, xcol, ycol)
    x = dataset.column(xcol)
    out: list[SeriesSpec] = []
    for offset, col in enumerate(select_columns(dataset.ncol, xcol, ycol)):
        index = start_index + offset
        out.append(
            SeriesSpec(
                xcol=xcol,
                ycol=col,
                legend=dataset.legend_entry(col),
                palette_index=index,
                color=palette.color_for(index),
                x=x,
                y=dataset.column(col),
                source=dataset.source,
            )
        )
    return out


def compose_chart(
    datasets: Sequence[Dataset],
    *,
    xcol: int,
    ycol: int,
    labels: ChartLabels,
    style: PlotStyle,
    palette: ColorPalette,
) -> ChartSpec:
    """One chart over ``datasets`` in order; palette slots run on across datasets."""
    series: list[SeriesSpec] = []
    for dataset in datasets:
        series.extend(compose_series(dataset, xcol, ycol, palette, start_index=len(series)))
    if len(series) > palette.capacity:
        LOGGER.warning(
            "%s: %d series exceed palette capacity %d; extra series reuse the first color",
            labels.output_path,
            len(series),
            palette.capacity,
        )
    if ycol != ALL_COLUMNS and ycol == xcol:
        LOGGER.warning("%s: y column equals x column %d; nothing to plot", labels.output_path, xcol)
    LOGGER.debug("composed %s: %d series from %d datasets", labels.output_path, len(series), len(datasets))
    return ChartSpec(
        title=labels.title,
        x_label=labels.x_label,
        y_label=labels.y_label,
        series=tuple(series),
        output_path=labels.output_path,
        style=style,
    )


def compose(datasets: Sequence[Dataset], options: PlotOptions, palette: ColorPalette) -> list[ChartSpec]:
    """Build every chart of a run.

    Combined mode yields one chart labeled from the first dataset. Per-file
    mode yields one chart per dataset, each with its own labels and palette
    numbering from 0.
    """
    if not datasets:
        raise ConfigurationError("no dataset to plot")
    style = options.style()
    if options.mode == "per-file":
        return [
            compose_chart(
                [dataset],
                xcol=options.xcol,
                ycol=options.ycol,
                labels=build_chart_labels(options, dataset),
                style=style,
                palette=palette,
            )
            for dataset in datasets
        ]
    return [
        compose_chart(
            datasets,
            xcol=options.xcol,
            ycol=options.ycol,
            labels=build_chart_labels(options, datasets[0]),
            style=style,
            palette=palette,
        )
    ]
