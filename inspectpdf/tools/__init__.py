"""Namespace for pluggable inspectpdf tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from . import merge  # noqa: F401
    from . import report  # noqa: F401


__all__ = ["registry", "load_builtin_plugins"]
