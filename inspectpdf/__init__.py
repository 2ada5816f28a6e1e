"""Render property inspection records to merged PDF reports."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Sequence

from . import compose, merge, render
from .config import DEFAULT_ENGINE_ARGS, PipelineSettings
from .exceptions import (
    AssetSettleTimeout,
    EngineStartFailure,
    InspectPDFError,
    MergeFailure,
    RecordError,
    RenderFailure,
    SessionDisposedError,
)
from .merge import get_pdf_info, merge_artifacts, merge_pdfs, validate_pdf
from .models import InspectionRecord, InspectionStatus, load_record
from .pipeline import ReportPipeline, generate_report, generate_reports, run_sync
from .render import RenderingSession, acquire
from .types import PdfArtifact, ReportResult

__version__ = "0.1.0"

__all__ = [
    "compose",
    "merge",
    "render",
    "__version__",
    "PipelineSettings",
    "DEFAULT_ENGINE_ARGS",
    "InspectionRecord",
    "InspectionStatus",
    "load_record",
    "ReportPipeline",
    "RenderingSession",
    "acquire",
    "generate_report",
    "generate_reports",
    "run_sync",
    "merge_artifacts",
    "merge_pdfs",
    "validate_pdf",
    "get_pdf_info",
    "PdfArtifact",
    "ReportResult",
    "InspectPDFError",
    "RecordError",
    "EngineStartFailure",
    "SessionDisposedError",
    "RenderFailure",
    "MergeFailure",
    "AssetSettleTimeout",
    "generate_report_file",
    "merge_documents",
]


def generate_report_file(
    input: str | Path,
    output: str | Path | None = None,
    *,
    settings: PipelineSettings | None = None,
) -> ReportResult:
    """Render the JSON record at *input* to *output* (``<input>.pdf`` by default)."""

    record = load_record(input)
    destination = Path(output) if output is not None else Path(input).with_suffix(".pdf")
    return run_sync(generate_report(record, destination, settings=settings))


def merge_documents(
    inputs: Iterable[str | Path],
    output: str | Path,
    *,
    document_info: Mapping[str, object] | None = None,
    bookmarks: Sequence[str] | bool | None = None,
) -> Path:
    """Convenience wrapper around :func:`merge.merge_pdfs`."""

    return merge_pdfs(inputs, output, document_info=document_info, bookmarks=bookmarks)
