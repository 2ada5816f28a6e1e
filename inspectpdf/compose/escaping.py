"""Markup escaping used by every composer."""

from __future__ import annotations

import html
import re

# C0/C1 controls and lone surrogates are not allowed in HTML text; tab,
# newline and carriage return are.
_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f\ud800-\udfff]")


def escape(value: object) -> str:
    """Return *value* as text that is safe in element content and attributes."""

    if value is None:
        return ""
    text = _INVALID_CHARS.sub("", str(value))
    return html.escape(text, quote=True)


def paragraphs(text: str) -> list[str]:
    """Split *text* into escaped, non-blank paragraphs, one per line."""

    return [escape(line) for line in text.splitlines() if line.strip()]


__all__ = ["escape", "paragraphs"]
