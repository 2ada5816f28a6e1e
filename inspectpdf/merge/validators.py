"""Validation utilities for the :mod:`inspectpdf.merge` package."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from pypdf import PdfReader

from ..core.utils import PathLike, resolve_path
from ..exceptions import MergeFailure

LOGGER = logging.getLogger("inspectpdf.merge")

PdfSource = Union[PathLike, bytes]


@dataclass(frozen=True)
class PDFInfo:
    """Summary information describing a PDF document."""

    source: str
    num_pages: int
    is_encrypted: bool
    metadata: Dict[str, Any]
    size: int


def describe_source(source: PdfSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)


def open_reader(source: PdfSource) -> PdfReader:
    """Return a decrypted :class:`PdfReader` over *source*.

    Raises:
        MergeFailure: If *source* cannot be parsed or decrypted.
    """

    label = describe_source(source)
    try:
        if isinstance(source, (bytes, bytearray)):
            reader = PdfReader(io.BytesIO(bytes(source)))
        else:
            reader = PdfReader(str(resolve_path(source)))
    except Exception as exc:  # pypdf raises a variety of errors for broken input
        LOGGER.error("Failed to read PDF %s: %s", label, exc)
        raise MergeFailure(f"Unable to read PDF: {label}") from exc

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF %s", label)
        try:
            reader.decrypt("")
        except Exception as exc:
            LOGGER.error("Encrypted PDF %s cannot be decrypted: %s", label, exc)
            raise MergeFailure(f"Unable to decrypt encrypted PDF: {label}") from exc
    return reader


def validate_pdf(source: PdfSource) -> bool:
    """Return ``True`` if *source* is a readable PDF with at least one page.

    ``MergeFailure`` is raised otherwise, so callers can rely on the return
    value being ``True`` if the function completes.
    """

    label = describe_source(source)
    LOGGER.debug("Validating PDF %s", label)
    reader = open_reader(source)
    try:
        page_count = len(reader.pages)
    except Exception as exc:
        LOGGER.error("Failed to read page tree of %s: %s", label, exc)
        raise MergeFailure(f"PDF page tree is unreadable: {label}") from exc

    if page_count == 0:
        LOGGER.error("PDF %s contains no pages", label)
        raise MergeFailure(f"PDF contains no pages: {label}")
    return True


def get_pdf_info(source: PdfSource) -> PDFInfo:
    """Return :class:`PDFInfo` describing *source*."""

    validate_pdf(source)
    reader = open_reader(source)

    metadata: Dict[str, Any] = {}
    if reader.metadata:
        metadata = {key: value for key, value in reader.metadata.items() if value is not None}

    if isinstance(source, (bytes, bytearray)):
        size = len(source)
    else:
        size = Path(resolve_path(source)).stat().st_size

    info = PDFInfo(
        source=describe_source(source),
        num_pages=len(reader.pages),
        is_encrypted=reader.is_encrypted,
        metadata=metadata,
        size=size,
    )
    LOGGER.debug("PDF info: source=%s, pages=%s, encrypted=%s", info.source, info.num_pages, info.is_encrypted)
    return info


__all__ = ["PDFInfo", "PdfSource", "open_reader", "validate_pdf", "get_pdf_info", "describe_source"]
