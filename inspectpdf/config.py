"""Runtime settings for the report pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

# Batch rendering, not an interactive browser.
DEFAULT_ENGINE_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
    "--disable-blink-features=AutomationControlled",
    "--no-first-run",
    "--no-default-browser-check",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True)
class PipelineSettings:
    """Settings shared by the session, the renderer and the orchestrator.

    Attributes:
        navigation_timeout_ms: Absolute bound for loading one document.
        image_timeout_ms: Per-image bound for the asset settle wait.
        headless: Launch Chromium without a window.
        engine_args: Command line switches passed to Chromium.
        page_format: Paper size used for both documents.
        work_dir: Where intermediate HTML and PDF files are written. A
            temporary directory is used when ``None``.
        keep_intermediates: Keep the per-document PDFs next to the HTML.
    """

    navigation_timeout_ms: int = 30_000
    image_timeout_ms: int = 5_000
    headless: bool = True
    engine_args: tuple[str, ...] = field(default=DEFAULT_ENGINE_ARGS)
    page_format: str = "Letter"
    work_dir: Path | None = None
    keep_intermediates: bool = False

    def __post_init__(self) -> None:
        if self.navigation_timeout_ms <= 0:
            raise ValueError("navigation_timeout_ms must be positive")
        if self.image_timeout_ms <= 0:
            raise ValueError("image_timeout_ms must be positive")
        if self.work_dir is not None and not isinstance(self.work_dir, Path):
            object.__setattr__(self, "work_dir", Path(self.work_dir).expanduser())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PipelineSettings":
        """Build settings from ``INSPECTPDF_*`` environment variables."""

        env = os.environ if environ is None else environ
        defaults = cls()
        work_dir = env.get("INSPECTPDF_WORK_DIR") or None
        return cls(
            navigation_timeout_ms=_env_int(env, "INSPECTPDF_NAVIGATION_TIMEOUT", defaults.navigation_timeout_ms),
            image_timeout_ms=_env_int(env, "INSPECTPDF_IMAGE_TIMEOUT", defaults.image_timeout_ms),
            headless=_env_flag(env, "INSPECTPDF_HEADLESS", defaults.headless),
            page_format=env.get("INSPECTPDF_PAGE_FORMAT", defaults.page_format),
            work_dir=Path(work_dir) if work_dir else None,
            keep_intermediates=_env_flag(env, "INSPECTPDF_KEEP_INTERMEDIATES", defaults.keep_intermediates),
        )

    def with_updates(self, **changes: Any) -> "PipelineSettings":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["PipelineSettings", "DEFAULT_ENGINE_ARGS"]
