"""Markup composers for the cover page and the inspection body."""

from __future__ import annotations

from .body import alpha_label, compose_body
from .cover import compose_cover, format_datetime
from .escaping import escape
from .overlays import EMPTY_OVERLAY, FormIdentity, Overlays, build_overlays, format_date

__all__ = [
    "compose_body",
    "compose_cover",
    "build_overlays",
    "alpha_label",
    "escape",
    "format_date",
    "format_datetime",
    "FormIdentity",
    "Overlays",
    "EMPTY_OVERLAY",
]
