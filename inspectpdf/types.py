"""Transient documents and artifacts passed between pipeline stages."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Dict

from pypdf import PdfReader

from .exceptions import AssetSettleTimeout

COVER = "cover"
BODY = "body"


@dataclass(frozen=True)
class RenderedDocument:
    """Markup produced by a composer, rendered exactly once."""

    name: str
    markup: str


@dataclass(frozen=True)
class PdfArtifact:
    """Immutable PDF bytes produced by the renderer or the merger.

    Attributes:
        name: Which document the bytes belong to (``cover``, ``body``, ``merged``).
        data: The PDF byte stream.
        settle_timeouts: Images that were abandoned while rendering.
    """

    name: str
    data: bytes
    settle_timeouts: tuple[AssetSettleTimeout, ...] = field(default=(), compare=False)

    @cached_property
    def page_count(self) -> int:
        return len(PdfReader(io.BytesIO(self.data)).pages)

    def __len__(self) -> int:
        return len(self.data)


@dataclass
class ReportResult:
    """Outcome of one successful pipeline run.

    Attributes:
        output_path: Where the merged PDF was written.
        page_counts: Pages per rendered document, keyed by document name.
        timings: Seconds spent per stage.
        settle_timeouts: Images abandoned across both documents.
        intermediates: Paths of intermediate files that were kept, if any.
    """

    output_path: Path
    page_counts: Dict[str, int]
    timings: Dict[str, float] = field(default_factory=dict)
    settle_timeouts: tuple[AssetSettleTimeout, ...] = ()
    intermediates: Dict[str, Path] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return sum(self.page_counts.values())

    def __str__(self) -> str:
        return f"ReportResult(output={self.output_path}, pages={self.total_pages})"


__all__ = ["COVER", "BODY", "RenderedDocument", "PdfArtifact", "ReportResult"]
