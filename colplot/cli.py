from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Sequence

from .errors import ColplotError
from .inputs import resolve_input_files
from .options import PlotOptions, load_config_file
from .palette import ColorPalette
from .runner import run_combined, run_per_file

LOGGER = logging.getLogger(__name__)

# argparse dest -> PlotOptions field, for flags left unset on the command line.
_FLAG_FIELDS = {
    "comment": "comment",
    "output": "output",
    "root": "root",
    "title": "title",
    "xcol": "xcol",
    "ycol": "ycol",
    "xlabel": "xlabel",
    "ylabel": "ylabel",
    "xlength": "x_length_cm",
    "ylength": "y_length_cm",
    "max_series": "max_series",
    "dpi": "dpi",
    "workers": "workers",
}
_SWITCH_FIELDS = {
    "automation": "per_file",
    "print_data": "print_data",
    "pt": "points",
    "ytopleg": "legend_top",
    "strict_width": "strict_width",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colplot",
        description="Plot whitespace-separated column files to PNG charts.",
        epilog="examples: colplot file1.res file2.res | colplot --automation 'file*' | colplot --pt '*.res'",
    )
    parser.add_argument("files", nargs="*", metavar="FILE_OR_PATTERN")
    parser.add_argument("--automation", action="store_true", default=None, help="one chart per file")
    parser.add_argument("--comment", default=None, help="comment line prefix (default '#')")
    parser.add_argument("--nolegend", action="store_true", help="first line is data, not a header")
    parser.add_argument("--output", default=None, help="output PNG path")
    parser.add_argument("-p", "--print", dest="print_data", action="store_true", default=None, help="print the data while drawing")
    parser.add_argument("--pt", action="store_true", default=None, help="draw points instead of lines")
    parser.add_argument("--root", default=None, help="root folder for relative files and patterns")
    parser.add_argument("--title", default=None, help="chart title")
    parser.add_argument("--xcol", type=int, default=None, help="x column index (default 0)")
    parser.add_argument("--ycol", type=int, default=None, help="y column index, -1 for every other column (default -1)")
    parser.add_argument("--xlabel", default=None, help="x axis label")
    parser.add_argument("--ylabel", default=None, help="y axis label")
    parser.add_argument("--xlength", type=float, default=None, help="x axis length in cm (default 10)")
    parser.add_argument("--ylength", type=float, default=None, help="y axis length in cm (default 10)")
    parser.add_argument("--ytopleg", action="store_true", default=None, help="legend at the top instead of the bottom")
    parser.add_argument("--max-series", type=int, default=None, help="palette capacity (default 10)")
    parser.add_argument("--strict-width", action="store_true", default=None, help="reject lines wider than the first data line")
    parser.add_argument("--dpi", type=float, default=None, help="raster resolution (default 96)")
    parser.add_argument("--workers", type=int, default=None, help="thread count for --automation")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [colplot] table of defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def options_from_args(args: argparse.Namespace) -> PlotOptions:
    """Built-in defaults, then the config file, then explicit flags."""
    values: dict[str, Any] = {}
    if args.config is not None:
        values.update(load_config_file(args.config))
    for dest, name in _FLAG_FIELDS.items():
        value = getattr(args, dest)
        if value is not None:
            values[name] = value
    for dest, name in _SWITCH_FIELDS.items():
        if getattr(args, dest):
            values[name] = True
    if args.nolegend:
        values["header"] = False
    values["files"] = tuple(args.files)
    return PlotOptions(**values).validate()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        options = options_from_args(args)
        files = resolve_input_files(options.files, options.root or None)
        palette = ColorPalette(options.max_series)
        if options.per_file:
            if options.output and len(files) > 1:
                LOGGER.warning("--output %s is shared by %d per-file charts", options.output, len(files))
            report = run_per_file(files, options, palette, max_workers=options.workers)
            for failure in report.failures:
                print(f"Error : {failure.message}")
            for output in report.outputs:
                print(f"wrote {output}")
            return 0 if report.ok else 1
        output = run_combined(files, options, palette)
        print(f"wrote {output}")
        return 0
    except ColplotError as exc:
        print(f"Error : {exc}")
        return 1
