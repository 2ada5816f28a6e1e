"""Inspection record data model.

The record is immutable: every collection is a tuple and every dataclass is
frozen, so one record can be handed to both composers concurrently.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping

from .core.utils import PathLike, get_logger, resolve_path
from .exceptions import RecordError

LOGGER = get_logger("inspectpdf.models")


class InspectionStatus(str, Enum):
    INSPECTED = "I"
    NOT_INSPECTED = "NI"
    NOT_PRESENT = "NP"
    DEFICIENT = "D"

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: object) -> "InspectionStatus | None":
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            # Rendered with every status box unchecked.
            LOGGER.warning("Unknown inspection status %r, treating it as unset", value)
            return None


_STATUS_DESCRIPTIONS = {
    InspectionStatus.INSPECTED: "Inspected",
    InspectionStatus.NOT_INSPECTED: "Not Inspected",
    InspectionStatus.NOT_PRESENT: "Not Present",
    InspectionStatus.DEFICIENT: "Deficient",
}


@dataclass(frozen=True)
class MediaRef:
    """A photo or video attached to a comment."""

    url: str
    caption: str | None = None
    description: str | None = None

    @property
    def display_caption(self) -> str:
        return self.caption or self.description or ""


@dataclass(frozen=True)
class Comment:
    """Annotation attached to a line item.

    A comment renders as a checklist when it is a ``checklist`` input with a
    non-empty option set, and as narrative text otherwise.
    """

    label: str = ""
    text: str = ""
    content: str = ""
    comment_text: str = ""
    input_type: str = ""
    options: tuple[str, ...] = ()
    selected_options: tuple[str, ...] = ()
    location: str = ""
    photos: tuple[MediaRef, ...] = ()
    videos: tuple[MediaRef, ...] = ()

    @property
    def is_checklist(self) -> bool:
        return self.input_type == "checklist" and len(self.options) > 0

    @property
    def display_text(self) -> str:
        # Fixed precedence: text, then content, then comment_text.
        for candidate in (self.text, self.content, self.comment_text):
            if candidate and candidate.strip():
                return candidate
        return ""

    def is_selected(self, option: str) -> bool:
        return option in self.selected_options


@dataclass(frozen=True)
class LineItem:
    name: str
    title: str = ""
    status: InspectionStatus | None = None
    comments: tuple[Comment, ...] = ()

    @property
    def display_name(self) -> str:
        return self.title or self.name


@dataclass(frozen=True)
class Section:
    section_number: str
    name: str
    line_items: tuple[LineItem, ...] = ()


@dataclass(frozen=True)
class Address:
    full_address: str
    street: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""


@dataclass(frozen=True)
class ClientInfo:
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class Inspector:
    name: str = ""
    email: str = ""
    license_number: str = ""


@dataclass(frozen=True)
class Account:
    company_name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class InspectionRecord:
    """The full, read-only input of one report run."""

    address: Address
    scheduled_at: datetime
    client: ClientInfo = field(default_factory=ClientInfo)
    inspector: Inspector = field(default_factory=Inspector)
    account: Account = field(default_factory=Account)
    sections: tuple[Section, ...] = ()

    @property
    def line_item_count(self) -> int:
        return sum(len(section.line_items) for section in self.sections)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InspectionRecord":
        """Build a record from the ``{"inspection": ..., "account": ...}`` shape."""

        if not isinstance(data, Mapping):
            raise RecordError("Inspection record must be a JSON object")
        inspection = data.get("inspection")
        if not isinstance(inspection, Mapping):
            raise RecordError("Inspection record is missing the 'inspection' object")

        address_data = _mapping(inspection.get("address"), "inspection.address")
        full_address = _text(address_data.get("fullAddress"))
        if not full_address:
            full_address = ", ".join(
                part
                for part in (
                    _text(address_data.get("street")),
                    _text(address_data.get("city")),
                    " ".join(
                        p for p in (_text(address_data.get("state")), _text(address_data.get("zipcode"))) if p
                    ),
                )
                if part
            )

        client_data = _mapping(inspection.get("clientInfo"), "inspection.clientInfo")
        inspector_data = _mapping(inspection.get("inspector"), "inspection.inspector")
        account_data = _mapping(data.get("account"), "account")

        return cls(
            address=Address(
                full_address=full_address,
                street=_text(address_data.get("street")),
                city=_text(address_data.get("city")),
                state=_text(address_data.get("state")),
                zipcode=_text(address_data.get("zipcode")),
            ),
            scheduled_at=_parse_schedule(inspection.get("schedule")),
            client=ClientInfo(
                name=_text(client_data.get("name")),
                email=_text(client_data.get("email")),
                phone=_text(client_data.get("phone")),
            ),
            inspector=Inspector(
                name=_text(inspector_data.get("name")),
                email=_text(inspector_data.get("email")),
                license_number=_text(inspector_data.get("licenseNumber")),
            ),
            account=Account(
                company_name=_text(account_data.get("companyName")),
                email=_text(account_data.get("email")),
                phone=_text(account_data.get("phoneNumber")),
            ),
            sections=tuple(_parse_section(item) for item in _sequence(inspection.get("sections"), "sections")),
        )


def load_record(source: PathLike) -> InspectionRecord:
    """Read and parse the JSON inspection record at *source*."""

    path = resolve_path(source)
    LOGGER.debug("Loading inspection record from %s", path)
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordError(f"Unable to read inspection record: {path}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RecordError(f"Inspection record is not valid JSON: {path} ({exc})") from exc
    record = InspectionRecord.from_dict(data)
    LOGGER.info(
        "Loaded inspection record %s: %d section(s), %d line item(s)",
        path.name,
        len(record.sections),
        record.line_item_count,
    )
    return record


def _parse_section(data: object) -> Section:
    section = _mapping(data, "section")
    return Section(
        section_number=_text(section.get("sectionNumber")),
        name=_text(section.get("name")),
        line_items=tuple(_parse_line_item(item) for item in _sequence(section.get("lineItems"), "lineItems")),
    )


def _parse_line_item(data: object) -> LineItem:
    item = _mapping(data, "lineItem")
    return LineItem(
        name=_text(item.get("name")),
        title=_text(item.get("title")),
        status=InspectionStatus.parse(item.get("inspectionStatus")),
        comments=tuple(_parse_comment(entry) for entry in _sequence(item.get("comments"), "comments")),
    )


def _parse_comment(data: object) -> Comment:
    comment = _mapping(data, "comment")
    return Comment(
        label=_text(comment.get("label")),
        text=_text(comment.get("text")),
        content=_text(comment.get("content")),
        comment_text=_text(comment.get("commentText")),
        input_type=_text(comment.get("inputType")),
        options=tuple(_text(option) for option in _sequence(comment.get("options"), "options")),
        selected_options=tuple(
            _text(option) for option in _sequence(comment.get("selectedOptions"), "selectedOptions")
        ),
        location=_text(comment.get("location")),
        photos=tuple(_parse_media(entry) for entry in _sequence(comment.get("photos"), "photos")),
        videos=tuple(_parse_media(entry) for entry in _sequence(comment.get("videos"), "videos")),
    )


def _parse_media(data: object) -> MediaRef:
    media = _mapping(data, "media")
    return MediaRef(
        url=_text(media.get("url")),
        caption=_text(media.get("caption")) or None,
        description=_text(media.get("description")) or None,
    )


def _parse_schedule(data: object) -> datetime:
    schedule = _mapping(data, "inspection.schedule")
    value = schedule.get("startTime") or schedule.get("date")
    if value is None:
        raise RecordError("Inspection schedule has neither 'startTime' nor 'date'")
    if isinstance(value, bool):
        raise RecordError(f"Invalid inspection schedule value: {value!r}")
    if isinstance(value, (int, float)):
        # Epoch milliseconds, rendered in local time.
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as exc:
            raise RecordError(f"Inspection schedule is out of range: {value!r}") from exc
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise RecordError(f"Invalid inspection schedule value: {value!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def _mapping(value: object, label: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise RecordError(f"Expected an object for {label}, got {type(value).__name__}")
    return value


def _sequence(value: object, label: str) -> Iterable[Any]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise RecordError(f"Expected a list for {label}, got {type(value).__name__}")
    return value


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


__all__ = [
    "InspectionStatus",
    "MediaRef",
    "Comment",
    "LineItem",
    "Section",
    "Address",
    "ClientInfo",
    "Inspector",
    "Account",
    "InspectionRecord",
    "load_record",
]
