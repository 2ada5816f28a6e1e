"""Custom exceptions raised by the report pipeline.

Every fatal failure derives from :class:`InspectPDFError` and records the
pipeline ``stage`` it came from, so that callers can report where a run
stopped without parsing messages.
"""

from __future__ import annotations

from dataclasses import dataclass


class InspectPDFError(Exception):
    """Base exception for all report pipeline errors."""

    stage: str = "pipeline"

    def __init__(self, message: str = "", *, stage: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if stage is not None:
            self.stage = stage

    @property
    def default_message(self) -> str:
        return "The report pipeline failed."


class RecordError(InspectPDFError):
    """Raised when an inspection record cannot be loaded."""

    stage = "record"

    @property
    def default_message(self) -> str:
        return "Malformed inspection record."


class EngineStartFailure(InspectPDFError):
    """Raised when the rendering engine process cannot be started."""

    stage = "engine"

    @property
    def default_message(self) -> str:
        return "The rendering engine could not be started."


class SessionDisposedError(InspectPDFError):
    """Raised when a rendering session is used after disposal."""

    stage = "engine"

    @property
    def default_message(self) -> str:
        return "The rendering session has already been disposed."


class RenderFailure(InspectPDFError):
    """Raised when navigating to or exporting a document fails."""

    stage = "render"

    def __init__(self, message: str = "", *, document: str, stage: str | None = None) -> None:
        self.document = document
        super().__init__(message, stage=stage)

    @property
    def default_message(self) -> str:
        return f"Rendering the {self.document} document failed."


class MergeFailure(InspectPDFError):
    """Raised when PDF artifacts cannot be merged."""

    stage = "merge"

    @property
    def default_message(self) -> str:
        return "Merging PDF artifacts failed."


@dataclass(frozen=True)
class AssetSettleTimeout:
    """An image that neither loaded nor errored within its time budget.

    This is an observation, not an error: rendering continues without it.
    """

    document: str
    src: str
    timeout_ms: int


__all__ = [
    "InspectPDFError",
    "RecordError",
    "EngineStartFailure",
    "SessionDisposedError",
    "RenderFailure",
    "MergeFailure",
    "AssetSettleTimeout",
]
