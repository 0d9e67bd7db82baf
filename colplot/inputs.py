from __future__ import annotations

import glob
import logging
import os
from pathlib import Path
from typing import Sequence

from .errors import ConfigurationError, InputError

LOGGER = logging.getLogger(__name__)

GLOB_MARKER = "*"


def check_root(root: str | Path | None) -> Path | None:
    if root is None or str(root) == "":
        return None
    path = Path(root)
    if not path.exists():
        raise ConfigurationError(f"folder does not exist: {path}")
    if not path.is_dir():
        raise ConfigurationError(f"this is not a folder: {path}")
    return path


def resolve_input_files(args: Sequence[str], root: str | Path | None = None) -> list[Path]:
    """Turn positional arguments into the ordered list of files to plot.

    Plain paths come first in argument order, then the matches of each
    ``*`` pattern (sorted). Relative entries are looked up under ``root``.
    """
    root_path = check_root(root)
    if not args:
        raise ConfigurationError("no file to process")

    patterns = [arg for arg in args if GLOB_MARKER in arg]
    plain = [arg for arg in args if GLOB_MARKER not in arg]

    files: list[Path] = []
    for arg in plain:
        path = _under_root(arg, root_path)
        if not path.exists():
            raise InputError(f"file does not exist: {path}")
        if not path.is_file() or not os.access(path, os.R_OK):
            raise InputError(f"file is not readable: {path}")
        files.append(path)

    for pattern in patterns:
        expanded = str(_under_root(pattern, root_path))
        matches = sorted(glob.glob(expanded))
        if not matches:
            LOGGER.warning("pattern matched no file: %s", expanded)
        files.extend(Path(match) for match in matches if Path(match).is_file())

    if not files:
        raise InputError("no file matched the given arguments")
    LOGGER.debug("resolved %d input files", len(files))
    return files


def _under_root(arg: str, root: Path | None) -> Path:
    path = Path(arg)
    if root is None or path.is_absolute():
        return path
    return root / path
