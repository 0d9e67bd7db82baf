from __future__ import annotations

from pathlib import Path


class ColplotError(Exception):
    """Base class for every failure the CLI reports to the user."""


class ConfigurationError(ColplotError, ValueError):
    """Invalid option values, detected before any file is parsed."""


class InputError(ColplotError):
    """An input path is missing, unreadable, or nothing matched."""


class ParseError(ColplotError):
    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class UnreadableFileError(ParseError):
    pass


class ColumnCountError(ParseError):
    def __init__(self, path: str | Path, message: str, *, line: str, line_number: int) -> None:
        self.line = line
        self.line_number = line_number
        super().__init__(path, message)


class ColumnRangeError(ParseError):
    def __init__(self, path: str | Path, *, ncol: int, xcol: int, ycol: int) -> None:
        self.ncol = ncol
        self.xcol = xcol
        self.ycol = ycol
        super().__init__(path, f"not enough columns in file (found {ncol}, xcol={xcol}, ycol={ycol})")


class ConversionError(ParseError):
    def __init__(self, path: str | Path, *, token: str, line_number: int, field_index: int) -> None:
        self.token = token
        self.line_number = line_number
        self.field_index = field_index
        super().__init__(path, f"line {line_number}, field {field_index}: cannot convert {token!r} to float")


class RenderError(ColplotError):
    def __init__(self, output_path: str | Path, message: str) -> None:
        self.output_path = str(output_path)
        super().__init__(f"{self.output_path}: {message}")
