"""Console helpers shared by CLI commands."""

from __future__ import annotations

import sys
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape

from ..config import PipelineSettings
from ..exceptions import InspectPDFError

console = Console()


def describe_failure(exc: BaseException) -> str:
    if isinstance(exc, InspectPDFError):
        document = getattr(exc, "document", None)
        where = f"{exc.stage} stage" + (f", {document} document" if document else "")
        return f"[{where}] {exc.message}"
    return str(exc)


def fail(exc: BaseException) -> NoReturn:
    console.print(f"\n[bold red]✗ Error:[/bold red] {escape(describe_failure(exc))}")
    sys.exit(1)


def settings_from_options(**overrides: Any) -> PipelineSettings:
    try:
        return PipelineSettings.from_env().with_updates(**overrides)
    except ValueError as exc:
        fail(exc)


__all__ = ["console", "describe_failure", "fail", "settings_from_options"]
