"""Merge functionality for the :mod:`inspectpdf.merge` package."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, Mapping, Sequence, Union

from pypdf import PdfReader, PdfWriter

from ..core.utils import PathLike, write_bytes_atomic
from ..exceptions import MergeFailure
from ..types import PdfArtifact
from .validators import describe_source, open_reader, validate_pdf

LOGGER = logging.getLogger("inspectpdf.merge")

MergeInput = Union[PdfArtifact, bytes, PathLike]

_METADATA_KEYS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "keywords": "/Keywords",
    "creator": "/Creator",
}


def _as_source(item: MergeInput) -> bytes | PathLike:
    if isinstance(item, PdfArtifact):
        return item.data
    if isinstance(item, bytearray):
        return bytes(item)
    return item


def _label(item: MergeInput, index: int) -> str:
    if isinstance(item, PdfArtifact):
        return item.name
    if isinstance(item, (bytes, bytearray)):
        return f"input {index + 1}"
    return Path(item).stem or f"input {index + 1}"


def _normalize_metadata(document_info: Mapping[str, object]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for key, value in document_info.items():
        if value is None:
            continue
        string_value = str(value).strip()
        if not string_value:
            continue
        pdf_key = _METADATA_KEYS.get(key.lower())
        if pdf_key is None:
            pdf_key = key if str(key).startswith("/") else f"/{key}"
        metadata[pdf_key] = string_value
    return metadata


def merge_artifacts(
    artifacts: Iterable[MergeInput],
    *,
    document_info: Mapping[str, object] | None = None,
    bookmarks: Sequence[str] | bool | None = None,
) -> bytes:
    """Concatenate the pages of *artifacts*, in order, into one PDF.

    Pages are copied structurally; nothing is re-rendered. Every input is
    validated before any page is copied, and an input with zero pages is
    rejected as invalid rather than contributing nothing to the result.

    Args:
        artifacts: PDF artifacts, raw PDF bytes or paths, in output order.
        document_info: Optional title/author/subject/keywords for the result.
        bookmarks: Outline titles, one per input, pointing at each input's
            first page. ``True`` derives titles from the input names.

    Raises:
        MergeFailure: If there are no inputs or any input is not a valid PDF
            with at least one page.
    """

    items = list(artifacts)
    if not items:
        raise MergeFailure("No input PDFs provided")

    readers: list[PdfReader] = []
    for index, item in enumerate(items):
        source = _as_source(item)
        try:
            validate_pdf(source)
        except MergeFailure as exc:
            raise MergeFailure(f"Invalid PDF for {_label(item, index)}: {exc.message}") from exc
        readers.append(open_reader(source))

    writer = PdfWriter()
    start_pages: list[int] = []
    for index, reader in enumerate(readers):
        start_pages.append(len(writer.pages))
        for page_index, page in enumerate(reader.pages):
            LOGGER.debug("Adding page %s from %s", page_index, describe_source(_as_source(items[index])))
            writer.add_page(page)

    expected = sum(len(reader.pages) for reader in readers)
    if len(writer.pages) != expected:
        raise MergeFailure(f"Merged document has {len(writer.pages)} pages, expected {expected}")

    if document_info:
        metadata = _normalize_metadata(document_info)
        if metadata:
            LOGGER.debug("Setting metadata on merged PDF: %s", metadata)
            writer.add_metadata(metadata)

    if bookmarks:
        titles = list(bookmarks) if not isinstance(bookmarks, bool) else []
        for index, page_index in enumerate(start_pages):
            title = titles[index] if index < len(titles) and titles[index] else _label(items[index], index)
            try:
                writer.add_outline_item(title, page_index)
            except Exception as exc:  # pragma: no cover - outline support varies by pypdf version
                LOGGER.warning("Failed to add bookmark '%s': %s", title, exc)

    buffer = io.BytesIO()
    try:
        writer.write(buffer)
    except Exception as exc:
        LOGGER.error("Failed to serialize merged PDF: %s", exc)
        raise MergeFailure("Failed to serialize merged PDF") from exc

    LOGGER.info("Merged %d PDFs into %d page(s)", len(items), expected)
    return buffer.getvalue()


def merge_pdfs(
    inputs: Iterable[PathLike],
    output: PathLike,
    *,
    document_info: Mapping[str, object] | None = None,
    bookmarks: Sequence[str] | bool | None = None,
) -> Path:
    """Merge the PDF files *inputs* into *output* and return the output path.

    Raises:
        MergeFailure: If merging fails for any reason. *output* is left
            untouched in that case.
    """

    data = merge_artifacts(list(inputs), document_info=document_info, bookmarks=bookmarks)
    try:
        output_path = write_bytes_atomic(output, data)
    except OSError as exc:
        LOGGER.error("Failed to write merged PDF to %s: %s", output, exc)
        raise MergeFailure(f"Failed to write merged PDF to {output}", stage="write") from exc
    LOGGER.info("Wrote merged PDF %s", output_path)
    return output_path


__all__ = ["MergeInput", "merge_artifacts", "merge_pdfs"]
