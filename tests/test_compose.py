from __future__ import annotations

import dataclasses
import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from inspectpdf.compose import (
    EMPTY_OVERLAY,
    FormIdentity,
    alpha_label,
    build_overlays,
    compose_body,
    compose_cover,
    escape,
    format_datetime,
)
from inspectpdf.compose.body import compose_line_item
from inspectpdf.models import Comment, InspectionRecord, InspectionStatus, LineItem, MediaRef, Section

HOSTILE = '<script>alert("x")</script> & \'quoted\'\x07'


def _parse(markup: str) -> ET.Element:
    return ET.fromstring(markup.replace("<!DOCTYPE html>", "", 1).strip())


def _by_class(root: ET.Element, tag: str, css_class: str) -> list[ET.Element]:
    return [element for element in root.iter(tag) if element.get("class") == css_class]


def _text(element: ET.Element) -> str:
    return "".join(element.itertext())


@pytest.mark.parametrize(
    ("index", "label"),
    [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (701, "ZZ"), (702, "AAA")],
)
def test_alpha_label(index: int, label: str) -> None:
    assert alpha_label(index) == label


def test_alpha_label_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        alpha_label(-1)


def test_escape() -> None:
    assert escape(None) == ""
    assert escape(HOSTILE) == "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt; &amp; &#x27;quoted&#x27;"
    assert escape("tab\tand\nnewline") == "tab\tand\nnewline"


def test_body_sections_and_lettering(record: InspectionRecord) -> None:
    root = _parse(compose_body(record))

    titles = [_text(element) for element in _by_class(root, "div", "sec-title")]
    assert titles == ["I. STRUCTURAL SYSTEMS", "II. ELECTRICAL SYSTEMS"]

    items = [_text(element) for element in _by_class(root, "div", "alpha-title")]
    assert items == ["A. Foundations", "B. Grading and Drainage", "A. Service Entrance and Panels"]


def test_body_status_checkboxes(record: InspectionRecord) -> None:
    root = _parse(compose_body(record))
    groups = _by_class(root, "div", "checkbox-group")
    assert len(groups) == 3

    checked = [
        [box.get("aria-label") for box in group.iter("input") if box.get("checked")]
        for group in groups
    ]
    assert checked == [["Inspected"], ["Deficient"], ["Not Inspected"]]
    assert all(len(list(group.iter("input"))) == len(InspectionStatus) for group in groups)


def test_body_line_item_without_status_has_no_checked_box() -> None:
    markup = compose_line_item(LineItem(name="Roof"), 0)
    assert "checked" not in markup
    assert "subhead-main" not in markup


def test_body_unknown_status_renders_unchecked_boxes(record_data) -> None:
    record_data["inspection"]["sections"][1]["lineItems"][0]["inspectionStatus"] = "N/A"
    root = _parse(compose_body(InspectionRecord.from_dict(record_data)))

    groups = _by_class(root, "div", "checkbox-group")
    assert [box.get("checked") for box in groups[2].iter("input")] == [None] * len(InspectionStatus)
    assert [_text(element) for element in _by_class(root, "div", "alpha-title")][2] == "A. Service Entrance and Panels"


def test_body_comments_and_media(record: InspectionRecord) -> None:
    root = _parse(compose_body(record))

    checklist = _by_class(root, "div", "checklist-item")
    assert [(_text(item).strip(), bool(item.find("input").get("checked"))) for item in checklist] == [
        ("Slab on Grade", True),
        ("Pier and Beam", False),
    ]

    paragraphs = [_text(p) for p in root.iter("p")]
    assert "Minor cracks observed." in paragraphs
    assert "Monitor for movement." in paragraphs
    assert "Location: North wall" in paragraphs
    assert "Negative slope at rear." in paragraphs

    images = list(root.iter("img"))
    assert [(img.get("src"), img.get("alt")) for img in images] == [("https://example.com/crack.jpg", "Crack")]
    links = [a.get("href") for a in root.iter("a")]
    assert links == ["https://example.com/walkthrough.mp4"]


def test_body_footer_carries_account(record: InspectionRecord) -> None:
    root = _parse(compose_body(record))
    footer = _text(_by_class(root, "div", "bottom-bar")[0])
    assert "Acme Inspections" in footer
    assert "office@acme.test" in footer


def test_body_escapes_record_text(record: InspectionRecord) -> None:
    hostile_comment = Comment(
        label=HOSTILE,
        text=HOSTILE,
        location=HOSTILE,
        photos=(MediaRef(url='https://example.com/a.jpg" onerror="x', caption=HOSTILE),),
    )
    hostile = dataclasses.replace(
        record,
        sections=(
            Section(
                section_number="1",
                name=HOSTILE,
                line_items=(LineItem(name=HOSTILE, status=InspectionStatus.INSPECTED, comments=(hostile_comment,)),),
            ),
        ),
    )
    markup = compose_body(hostile)

    assert "<script>" not in markup
    assert "\x07" not in markup
    root = _parse(markup)
    image = next(root.iter("img"))
    assert image.get("src") == 'https://example.com/a.jpg" onerror="x'
    assert image.get("onerror") is None


def test_body_with_no_sections(record: InspectionRecord) -> None:
    root = _parse(compose_body(dataclasses.replace(record, sections=())))
    assert _by_class(root, "div", "sec-title") == []


def test_composers_are_deterministic(record: InspectionRecord) -> None:
    assert compose_body(record) == compose_body(record)
    assert compose_cover(record) == compose_cover(record)


def test_cover_fields(record: InspectionRecord) -> None:
    root = _parse(compose_cover(record))
    values = [_text(element) for element in _by_class(root, "div", "header-field-value")]
    assert values == [
        "Jane Buyer",
        "03/05/2024 2:30PM",
        "123 Main St, Austin, TX 78701",
        "Sam Inspector",
        "TREC-12345",
        "N/A",
        "N/A",
    ]


def test_cover_without_license_uses_placeholder(record: InspectionRecord) -> None:
    unlicensed = dataclasses.replace(record, inspector=dataclasses.replace(record.inspector, license_number=""))
    root = _parse(compose_cover(unlicensed))
    values = [_text(element) for element in _by_class(root, "div", "header-field-value")]
    assert values[4] == "N/A"


def test_cover_uses_form_identity(record: InspectionRecord) -> None:
    markup = compose_cover(record, FormIdentity(form_code="FORM-1", promulgation="Local Board"))
    assert "FORM-1" in markup
    assert "Local Board" in markup


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2024, 1, 1, 0, 5), "01/01/2024 12:05AM"),
        (datetime(2024, 1, 1, 12, 0), "01/01/2024 12:00PM"),
        (datetime(2024, 12, 31, 23, 59), "12/31/2024 11:59PM"),
    ],
)
def test_format_datetime(moment: datetime, expected: str) -> None:
    assert format_datetime(moment) == expected


def test_overlays(record: InspectionRecord) -> None:
    overlays = build_overlays(record)
    assert overlays.cover_header is None
    assert "REI 7-6 (8/9/2021)" in overlays.cover_footer
    assert "Report: 123 Main St, Austin, TX 78701 - 03/05/2024" in overlays.body_header
    assert "I=Inspected" in overlays.body_header
    assert '<span class="pageNumber"></span>' in overlays.body_footer
    assert '<span class="totalPages"></span>' in overlays.body_footer
    assert EMPTY_OVERLAY == "<div></div>"


def test_overlays_escape_address(record: InspectionRecord) -> None:
    hostile = dataclasses.replace(record, address=dataclasses.replace(record.address, full_address=HOSTILE))
    assert "<script>" not in build_overlays(hostile).body_header
