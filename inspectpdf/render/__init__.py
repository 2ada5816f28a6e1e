"""Rendering through headless Chromium (Playwright)."""

from __future__ import annotations

from .renderer import PAGE_FORMATS, Margins, PageConfig, render, settle_images
from .session import Ownership, RenderingSession, SessionState, acquire

__all__ = [
    "RenderingSession",
    "Ownership",
    "SessionState",
    "acquire",
    "PageConfig",
    "Margins",
    "PAGE_FORMATS",
    "render",
    "settle_images",
]
