from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader

from inspectpdf import merge_documents
from inspectpdf.merge import MergeFailure, get_pdf_info, merge_artifacts, merge_pdfs, validate_pdf
from inspectpdf.types import PdfArtifact


def _reader(data: bytes) -> PdfReader:
    return PdfReader(io.BytesIO(data))


def test_merge_artifacts_keeps_order_and_pages(pdf_bytes: Callable[..., bytes]) -> None:
    cover = PdfArtifact("cover", pdf_bytes(1, 100))
    body = PdfArtifact("body", pdf_bytes(3, 200))

    merged = _reader(merge_artifacts([cover, body]))

    assert len(merged.pages) == cover.page_count + body.page_count == 4
    assert [float(page.mediabox.width) for page in merged.pages] == [100, 200, 200, 200]


def test_merge_artifacts_sets_metadata(pdf_bytes: Callable[..., bytes]) -> None:
    merged = _reader(
        merge_artifacts(
            [pdf_bytes(1), pdf_bytes(1)],
            document_info={"title": "Property Inspection Report", "author": "Sam", "subject": None},
        )
    )

    assert merged.metadata.get("/Title") == "Property Inspection Report"
    assert merged.metadata.get("/Author") == "Sam"
    assert "/Subject" not in merged.metadata


def test_merge_artifacts_bookmarks(pdf_bytes: Callable[..., bytes]) -> None:
    cover = PdfArtifact("cover", pdf_bytes(1))
    body = PdfArtifact("body", pdf_bytes(2))

    merged = _reader(merge_artifacts([cover, body], bookmarks=True))

    outline = merged.outline
    assert [item.title for item in outline] == ["cover", "body"]
    assert [merged.get_destination_page_number(item) for item in outline] == [0, 1]


def test_merge_artifacts_requires_inputs() -> None:
    with pytest.raises(MergeFailure):
        merge_artifacts([])


def test_merge_artifacts_rejects_invalid_input(pdf_bytes: Callable[..., bytes]) -> None:
    with pytest.raises(MergeFailure) as excinfo:
        merge_artifacts([PdfArtifact("cover", pdf_bytes(1)), PdfArtifact("body", b"not a pdf")])

    assert "body" in str(excinfo.value)
    assert excinfo.value.stage == "merge"


def test_validate_pdf_rejects_empty_document(empty_pdf: Path) -> None:
    with pytest.raises(MergeFailure):
        validate_pdf(empty_pdf)


def test_merge_artifacts_rejects_zero_page_input(pdf_bytes: Callable[..., bytes]) -> None:
    with pytest.raises(MergeFailure) as excinfo:
        merge_artifacts([PdfArtifact("cover", pdf_bytes(1)), PdfArtifact("body", pdf_bytes(0))])

    assert "no pages" in str(excinfo.value)


def test_merge_pdfs_writes_output(tmp_path: Path, pdf_factory: Callable[..., Path]) -> None:
    inputs = [pdf_factory("one.pdf", 2, title="One"), pdf_factory("two.pdf", 1)]
    output = tmp_path / "out" / "merged.pdf"

    result = merge_pdfs(inputs, output, bookmarks=["First", "Second"])

    assert result == output
    info = get_pdf_info(output)
    assert info.num_pages == 3
    assert not info.is_encrypted
    assert info.size == output.stat().st_size
    assert [entry.title for entry in PdfReader(str(output)).outline] == ["First", "Second"]


def test_merge_pdfs_leaves_no_output_on_failure(tmp_path: Path, pdf_factory: Callable[..., Path]) -> None:
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"%PDF-1.4 garbage")
    output = tmp_path / "merged.pdf"

    with pytest.raises(MergeFailure):
        merge_pdfs([pdf_factory("one.pdf"), broken], output)

    assert not output.exists()
    assert list(tmp_path.glob(".merged.pdf.*")) == []


def test_merge_documents_helper(tmp_path: Path, pdf_factory: Callable[..., Path]) -> None:
    output = tmp_path / "merged.pdf"
    result = merge_documents([pdf_factory("a.pdf"), pdf_factory("b.pdf")], output, document_info={"title": "Both"})
    assert result == output
    assert get_pdf_info(output).metadata.get("/Title") == "Both"
