from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib
from typing import Any, Literal

from .errors import ConfigurationError
from .palette import BASE_COLORS
from .parser import ALL_COLUMNS, DEFAULT_COMMENT

ChartMode = Literal["combined", "per-file"]

CONFIG_TABLE = "colplot"
DEFAULT_AXIS_LENGTH_CM = 10.0
DEFAULT_DPI = 96.0
Y_TICK_DECIMALS = 2


@dataclass(frozen=True)
class PlotStyle:
    """Render flags shared read-only by every chart of a run."""

    points: bool = False
    x_length_cm: float = DEFAULT_AXIS_LENGTH_CM
    y_length_cm: float = DEFAULT_AXIS_LENGTH_CM
    legend_top: bool = False
    print_data: bool = False
    dpi: float = DEFAULT_DPI
    y_tick_decimals: int | None = Y_TICK_DECIMALS
    marker_radius: int = 2
    line_width: int = 1


@dataclass(frozen=True)
class PlotOptions:
    files: tuple[str, ...] = ()
    comment: str = DEFAULT_COMMENT
    header: bool = True
    output: str = ""
    print_data: bool = False
    points: bool = False
    root: str = ""
    title: str = ""
    xcol: int = 0
    ycol: int = ALL_COLUMNS
    xlabel: str = ""
    ylabel: str = ""
    x_length_cm: float = DEFAULT_AXIS_LENGTH_CM
    y_length_cm: float = DEFAULT_AXIS_LENGTH_CM
    per_file: bool = False
    legend_top: bool = False
    max_series: int = len(BASE_COLORS)
    strict_width: bool = False
    dpi: float = DEFAULT_DPI
    workers: int | None = None

    @property
    def mode(self) -> ChartMode:
        return "per-file" if self.per_file else "combined"

    def style(self) -> PlotStyle:
        return PlotStyle(
            points=self.points,
            x_length_cm=float(self.x_length_cm),
            y_length_cm=float(self.y_length_cm),
            legend_top=self.legend_top,
            print_data=self.print_data,
            dpi=float(self.dpi),
        )

    def with_changes(self, **changes: Any) -> "PlotOptions":
        return replace(self, **changes)

    def validate(self) -> "PlotOptions":
        if self.xcol < 0:
            raise ConfigurationError(f"x column must be positive: {self.xcol}")
        if self.ycol < ALL_COLUMNS:
            raise ConfigurationError(f"y column must be positive or {ALL_COLUMNS} for all columns: {self.ycol}")
        if self.x_length_cm <= 0:
            raise ConfigurationError(f"x axis length must be positive: {self.x_length_cm}")
        if self.y_length_cm <= 0:
            raise ConfigurationError(f"y axis length must be positive: {self.y_length_cm}")
        if self.dpi <= 0:
            raise ConfigurationError(f"dpi must be positive: {self.dpi}")
        if self.max_series <= 0:
            raise ConfigurationError(f"max series must be positive: {self.max_series}")
        if self.workers is not None and self.workers <= 0:
            raise ConfigurationError(f"workers must be positive: {self.workers}")
        return self


_CONFIG_TYPES: dict[str, tuple[type, ...]] = {
    "comment": (str,),
    "header": (bool,),
    "output": (str,),
    "print_data": (bool,),
    "points": (bool,),
    "root": (str,),
    "title": (str,),
    "xcol": (int,),
    "ycol": (int,),
    "xlabel": (str,),
    "ylabel": (str,),
    "x_length_cm": (int, float),
    "y_length_cm": (int, float),
    "per_file": (bool,),
    "legend_top": (bool,),
    "max_series": (int,),
    "strict_width": (bool,),
    "dpi": (int, float),
    "workers": (int,),
}


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read option defaults from the ``[colplot]`` table of a TOML file."""
    config_path = Path(path)
    try:
        with config_path.open("rb") as f:
            raw = tomllib.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"config file not found: {config_path}") from exc
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"cannot read config file {config_path}: {exc}") from exc

    table = raw.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[{CONFIG_TABLE}] in {config_path} must be a table")
    values: dict[str, Any] = {}
    for key, value in table.items():
        name = key.replace("-", "_")
        expected = _CONFIG_TYPES.get(name)
        if expected is None:
            raise ConfigurationError(f"unknown option in {config_path}: {key}")
        if isinstance(value, bool) and bool not in expected:
            raise ConfigurationError(f"option {key} in {config_path} must not be a boolean")
        if not isinstance(value, expected):
            names = "/".join(t.__name__ for t in expected)
            raise ConfigurationError(f"option {key} in {config_path} must be {names}, got {type(value).__name__}")
        values[name] = value
    return values
