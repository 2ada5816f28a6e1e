"""Lossless PDF concatenation for the :mod:`inspectpdf` pipeline."""

from __future__ import annotations

from ..exceptions import MergeFailure
from .merger import MergeInput, merge_artifacts, merge_pdfs
from .validators import PDFInfo, get_pdf_info, validate_pdf

__all__ = [
    "merge_artifacts",
    "merge_pdfs",
    "validate_pdf",
    "get_pdf_info",
    "MergeFailure",
    "MergeInput",
    "PDFInfo",
]
