from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from .errors import ColumnCountError, ColumnRangeError, ConversionError, UnreadableFileError

LOGGER = logging.getLogger(__name__)

ALL_COLUMNS = -1
DEFAULT_COMMENT = "#"

Row = tuple[float, ...]


@dataclass(frozen=True)
class Dataset:
    """Rows of one input file in file order, plus the optional header legend.

    ``ncol`` is the field count of the first data row. Later rows may be
    wider (only a lower bound is enforced unless parsing was strict).
    ``legend`` is ``None`` when the file had no header, which is not the
    same as an empty header.
    """

    rows: tuple[Row, ...] = ()
    legend: tuple[str, ...] | None = None
    ncol: int = 0
    source: str = ""

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows or self.ncol == 0

    def column(self, index: int) -> np.ndarray:
        if index < 0 or index >= self.ncol:
            raise IndexError(f"column {index} out of range for {self.ncol} columns")
        return np.fromiter((row[index] for row in self.rows), dtype=np.float64, count=len(self.rows))

    def legend_entry(self, index: int) -> str:
        if self.legend is None or index >= len(self.legend):
            return ""
        return self.legend[index]


def parse_file(
    path: str | Path,
    *,
    comment: str = DEFAULT_COMMENT,
    header: bool = True,
    xcol: int = 0,
    ycol: int = ALL_COLUMNS,
    strict_width: bool = False,
) -> Dataset:
    source = str(path)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            dataset = parse_lines(
                handle,
                source=source,
                comment=comment,
                header=header,
                xcol=xcol,
                ycol=ycol,
                strict_width=strict_width,
            )
    except OSError as exc:
        raise UnreadableFileError(source, f"cannot read file: {exc}") from exc
    LOGGER.debug("parsed %s: rows=%d ncol=%d legend=%s", source, len(dataset.rows), dataset.ncol, dataset.legend)
    return dataset


def parse_lines(
    lines: Iterable[str],
    *,
    source: str = "<memory>",
    comment: str = DEFAULT_COMMENT,
    header: bool = True,
    xcol: int = 0,
    ycol: int = ALL_COLUMNS,
    strict_width: bool = False,
) -> Dataset:
    ncol = -1
    legend: tuple[str, ...] | None = None
    rows: list[Row] = []
    first_line = True

    for line_number, raw in enumerate(lines, start=1):
        text = raw.strip()
        if first_line:
            first_line = False
            if header:
                legend = _split_header(text, comment)
                continue
        if not text or (comment and text.startswith(comment)):
            continue

        fields = text.split()
        if ncol == -1:
            ncol = len(fields)
            if xcol >= ncol or (ycol != ALL_COLUMNS and ycol >= ncol):
                raise ColumnRangeError(source, ncol=ncol, xcol=xcol, ycol=ycol)
            if legend is not None and len(legend) < ncol:
                raise ColumnCountError(
                    source,
                    f"header names {len(legend)} columns but data has {ncol}: {text}",
                    line=text,
                    line_number=line_number,
                )
        if len(fields) < ncol or (strict_width and len(fields) > ncol):
            raise ColumnCountError(
                source,
                f"bad formatted line {line_number} (expected {ncol} columns, got {len(fields)}): {text}",
                line=text,
                line_number=line_number,
            )
        rows.append(_convert_fields(fields, source=source, line_number=line_number))

    return Dataset(rows=tuple(rows), legend=legend, ncol=max(ncol, 0), source=source)


def _split_header(text: str, comment: str) -> tuple[str, ...]:
    names = text.split()
    if names and comment:
        names[0] = names[0].removeprefix(comment)
    return tuple(names)


def _convert_fields(fields: list[str], *, source: str, line_number: int) -> Row:
    values: list[float] = []
    for index, token in enumerate(fields):
        try:
            values.append(_to_float(token))
        except ValueError as exc:
            raise ConversionError(source, token=token, line_number=line_number, field_index=index) from exc
    return tuple(values)


def _to_float(token: str) -> float:
    # Digit separators are not number syntax in data files; hex floats are.
    if "_" in token:
        raise ValueError(f"digit separator in {token!r}")
    try:
        return float(token)
    except ValueError:
        if "0x" not in token.lower():
            raise
        return float.fromhex(token)
