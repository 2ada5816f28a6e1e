"""Utilities shared by the report pipeline."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(_LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def set_log_level(level: int) -> None:
    """Apply *level* to every ``inspectpdf`` logger created so far."""

    for name in list(logging.root.manager.loggerDict):
        if name == "inspectpdf" or name.startswith("inspectpdf."):
            logging.getLogger(name).setLevel(level)


def resolve_path(path: PathLike | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def write_bytes_atomic(destination: PathLike, data: bytes) -> Path:
    """Write *data* next to *destination* and move it into place.

    A reader of *destination* never observes a partially written file.
    """

    target = resolve_path(destination)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".part", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(temp_name, target)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return target


def format_file_size(size_bytes: float) -> str:
    """Format *size_bytes* as a human readable string (``"1.5 MB"``)."""

    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


__all__ = [
    "PathLike",
    "get_logger",
    "set_log_level",
    "resolve_path",
    "write_bytes_atomic",
    "format_file_size",
]
