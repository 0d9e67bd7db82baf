from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Callable, Sequence

from .composer import compose
from .errors import ColplotError
from .options import PlotOptions
from .palette import ColorPalette
from .parser import Dataset, parse_file
from .render import render_chart

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskFailure:
    path: Path
    error: ColplotError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class RunReport:
    """Outputs and failures of a per-file run, both in input order."""

    outputs: list[Path] = field(default_factory=list)
    failures: list[TaskFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def load_dataset(path: Path, options: PlotOptions, echo: Callable[[str], None] = print) -> Dataset:
    dataset = parse_file(
        path,
        comment=options.comment,
        header=options.header,
        xcol=options.xcol,
        ycol=options.ycol,
        strict_width=options.strict_width,
    )
    if options.print_data:
        echo(f"{path} data: {[list(row) for row in dataset.rows]}")
        echo(f"{path} legend: {list(dataset.legend) if dataset.legend is not None else []}")
    return dataset


def run_combined(files: Sequence[Path], options: PlotOptions, palette: ColorPalette) -> Path:
    """Parse every file, then draw all of them on one chart."""
    datasets = [load_dataset(Path(path), options) for path in files]
    (chart,) = compose(datasets, options, palette)
    return render_chart(chart)


def _plot_one(path: Path, options: PlotOptions, palette: ColorPalette) -> Path:
    dataset = load_dataset(path, options)
    (chart,) = compose([dataset], options.with_changes(per_file=True), palette)
    return render_chart(chart)


def run_per_file(
    files: Sequence[Path],
    options: PlotOptions,
    palette: ColorPalette,
    max_workers: int | None = None,
) -> RunReport:
    """One chart per file, drawn concurrently.

    A failing file is logged and recorded; the others still get their
    chart. Every task finishes before this returns.
    """
    paths = [Path(path) for path in files]
    outputs: dict[int, Path] = {}
    failures: dict[int, TaskFailure] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {pool.submit(_plot_one, path, options, palette): idx for idx, path in enumerate(paths)}
        for future in as_completed(futures):
            idx = futures[future]
            try:
                outputs[idx] = future.result()
            except ColplotError as exc:
                LOGGER.error("chart for %s failed: %s", paths[idx], exc)
                LOGGER.debug("chart for %s failed", paths[idx], exc_info=exc)
                failures[idx] = TaskFailure(path=paths[idx], error=exc)

    report = RunReport(
        outputs=[outputs[idx] for idx in sorted(outputs)],
        failures=[failures[idx] for idx in sorted(failures)],
    )
    LOGGER.debug("per-file run: %d charts, %d failures", len(report.outputs), len(report.failures))
    return report
