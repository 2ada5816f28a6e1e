from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable
import copy
import json
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from inspectpdf.models import InspectionRecord  # noqa: E402

COVER_PAGE_WIDTH = 100
BODY_PAGE_WIDTH = 200

SAMPLE_RECORD: dict[str, Any] = {
    "inspection": {
        "clientInfo": {"name": "Jane Buyer", "email": "jane@example.com", "phone": "555-0100"},
        "inspector": {"name": "Sam Inspector", "email": "sam@example.com", "licenseNumber": "TREC-12345"},
        "address": {
            "fullAddress": "123 Main St, Austin, TX 78701",
            "street": "123 Main St",
            "city": "Austin",
            "state": "TX",
            "zipcode": "78701",
        },
        "schedule": {"startTime": "2024-03-05T14:30:00"},
        "sections": [
            {
                "sectionNumber": "I",
                "name": "Structural Systems",
                "lineItems": [
                    {
                        "name": "Foundations",
                        "inspectionStatus": "I",
                        "comments": [
                            {
                                "label": "Type of Foundation",
                                "inputType": "checklist",
                                "options": ["Slab on Grade", "Pier and Beam"],
                                "selectedOptions": ["Slab on Grade"],
                            },
                            {
                                "label": "Comments",
                                "text": "Minor cracks observed.\nMonitor for movement.",
                                "location": "North wall",
                                "photos": [{"url": "https://example.com/crack.jpg", "caption": "Crack"}],
                                "videos": [{"url": "https://example.com/walkthrough.mp4"}],
                            },
                        ],
                    },
                    {
                        "name": "Grading and Drainage",
                        "inspectionStatus": "D",
                        "comments": [{"label": "Observation", "content": "Negative slope at rear."}],
                    },
                ],
            },
            {
                "sectionNumber": "II",
                "name": "Electrical Systems",
                "lineItems": [
                    {"name": "Service Entrance", "title": "Service Entrance and Panels", "inspectionStatus": "NI"},
                ],
            },
        ],
    },
    "account": {"companyName": "Acme Inspections", "email": "office@acme.test", "phoneNumber": "555-0199"},
}


def make_pdf_bytes(pages: int = 1, width: int = 72) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_bytes() -> Callable[..., bytes]:
    return make_pdf_bytes


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: int = 1, title: str | None = None) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)
        if title is not None:
            writer.add_metadata({"/Title": title})
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def record_data() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_RECORD)


@pytest.fixture()
def record(record_data: dict[str, Any]) -> InspectionRecord:
    return InspectionRecord.from_dict(record_data)


@pytest.fixture()
def record_file(tmp_path: Path, record_data: dict[str, Any]) -> Path:
    path = tmp_path / "inspection.json"
    path.write_text(json.dumps(record_data), encoding="utf-8")
    return path


class FakePage:
    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine
        self.url: str | None = None

    async def goto(self, url: str, *, wait_until: str, timeout: int) -> None:
        self.engine.goto_calls.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.engine.fail_goto and self.engine.fail_goto in url:
            raise RuntimeError("net::ERR_FAILED")
        self.url = url

    async def evaluate(self, script: str, arg: Any) -> list[str]:
        self.engine.evaluate_args.append(arg)
        return list(self.engine.pending_images)

    async def pdf(self, **options: Any) -> bytes:
        self.engine.pdf_calls.append({"url": self.url, **options})
        if self.engine.fail_pdf:
            raise RuntimeError("Printing failed")
        if self.url is not None and ".cover." in self.url:
            return make_pdf_bytes(self.engine.cover_pages, COVER_PAGE_WIDTH)
        return make_pdf_bytes(self.engine.body_pages, BODY_PAGE_WIDTH)


class FakeContext:
    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine
        self.closed = False

    async def new_page(self) -> FakePage:
        return FakePage(self.engine)

    async def close(self) -> None:
        self.closed = True
        self.engine.contexts_closed += 1


class FakeBrowser:
    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine

    async def new_context(self) -> FakeContext:
        self.engine.contexts_opened += 1
        return FakeContext(self.engine)

    async def close(self) -> None:
        self.engine.browser_closes += 1


class FakeChromium:
    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine

    async def launch(self, *, headless: bool, args: list[str]) -> FakeBrowser:
        self.engine.launches += 1
        self.engine.launch_kwargs = {"headless": headless, "args": args}
        if self.engine.fail_launch is not None:
            raise self.engine.fail_launch
        return FakeBrowser(self.engine)


class FakeEngine:
    """Stands in for ``async_playwright``; counts every lifecycle call."""

    def __init__(self) -> None:
        self.chromium = FakeChromium(self)
        self.cover_pages = 1
        self.body_pages = 3
        self.pending_images: list[str] = []
        self.fail_launch: Exception | None = None
        self.fail_goto: str | None = None
        self.fail_pdf = False
        self.launches = 0
        self.stops = 0
        self.browser_closes = 0
        self.contexts_opened = 0
        self.contexts_closed = 0
        self.launch_kwargs: dict[str, Any] | None = None
        self.goto_calls: list[dict[str, Any]] = []
        self.evaluate_args: list[Any] = []
        self.pdf_calls: list[dict[str, Any]] = []

    def __call__(self) -> "FakeEngine":
        return self

    async def start(self) -> "FakeEngine":
        return self

    async def stop(self) -> None:
        self.stops += 1

    def browser(self) -> FakeBrowser:
        return FakeBrowser(self)

    def page(self) -> FakePage:
        return FakePage(self)


@pytest.fixture()
def fake_engine(monkeypatch: pytest.MonkeyPatch) -> FakeEngine:
    engine = FakeEngine()
    monkeypatch.setattr("inspectpdf.render.session.async_playwright", engine)
    return engine
