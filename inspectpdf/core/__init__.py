"""Core helpers shared across the inspectpdf packages."""

from .utils import PathLike, format_file_size, get_logger, resolve_path, set_log_level, write_bytes_atomic

__all__ = [
    "PathLike",
    "get_logger",
    "set_log_level",
    "resolve_path",
    "write_bytes_atomic",
    "format_file_size",
]
