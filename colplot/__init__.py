from .composer import ChartSpec, SeriesSpec, compose, compose_chart, compose_series, select_columns
from .errors import (
    ColplotError,
    ColumnCountError,
    ColumnRangeError,
    ConfigurationError,
    ConversionError,
    InputError,
    ParseError,
    RenderError,
    UnreadableFileError,
)
from .inputs import resolve_input_files
from .labels import ChartLabels, build_chart_labels
from .options import PlotOptions, PlotStyle, load_config_file
from .palette import BASE_COLORS, ColorPalette
from .parser import ALL_COLUMNS, Dataset, parse_file, parse_lines
from .render import build_figure, render_chart
from .runner import RunReport, run_combined, run_per_file

__all__ = [
    "ALL_COLUMNS",
    "BASE_COLORS",
    "ChartLabels",
    "ChartSpec",
    "ColorPalette",
    "ColplotError",
    "ColumnCountError",
    "ColumnRangeError",
    "ConfigurationError",
    "ConversionError",
    "Dataset",
    "InputError",
    "ParseError",
    "PlotOptions",
    "PlotStyle",
    "RenderError",
    "RunReport",
    "SeriesSpec",
    "UnreadableFileError",
    "build_chart_labels",
    "build_figure",
    "compose",
    "compose_chart",
    "compose_series",
    "load_config_file",
    "parse_file",
    "parse_lines",
    "render_chart",
    "resolve_input_files",
    "run_combined",
    "run_per_file",
    "select_columns",
]
