"""Page renderer: one persisted markup document to one PDF artifact."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..compose.overlays import EMPTY_OVERLAY
from ..config import PipelineSettings
from ..core.utils import get_logger
from ..exceptions import AssetSettleTimeout, RenderFailure
from ..types import PdfArtifact

LOGGER = get_logger("inspectpdf.render.renderer")

PAGE_FORMATS = ("Letter", "Legal", "A4")

# Resolves with the sources of images that neither loaded nor errored in time.
SETTLE_IMAGES_SCRIPT = """
(timeoutMs) => Promise.all(
  Array.from(document.images).map((img) => {
    if (img.complete) return Promise.resolve(null);
    return new Promise((resolve) => {
      const timer = setTimeout(() => resolve(img.currentSrc || img.src || ''), timeoutMs);
      const done = () => { clearTimeout(timer); resolve(null); };
      img.addEventListener('load', done, { once: true });
      img.addEventListener('error', done, { once: true });
    });
  })
).then((results) => results.filter((src) => src !== null))
"""


@dataclass(frozen=True)
class Margins:
    top: str = "10mm"
    right: str = "10mm"
    bottom: str = "15mm"
    left: str = "10mm"

    def as_dict(self) -> dict[str, str]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass(frozen=True)
class PageConfig:
    """Closed set of page export options for one document."""

    page_format: str = "Letter"
    margins: Margins = field(default_factory=Margins)
    print_background: bool = True
    header_template: str | None = None
    footer_template: str | None = None

    def __post_init__(self) -> None:
        if self.page_format not in PAGE_FORMATS:
            raise ValueError(f"Unsupported page format {self.page_format!r}; expected one of {PAGE_FORMATS}")

    @property
    def has_overlays(self) -> bool:
        return self.header_template is not None or self.footer_template is not None

    def to_pdf_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "format": self.page_format,
            "print_background": self.print_background,
            "margin": self.margins.as_dict(),
            "prefer_css_page_size": False,
            "display_header_footer": self.has_overlays,
        }
        if self.has_overlays:
            options["header_template"] = self.header_template or EMPTY_OVERLAY
            options["footer_template"] = self.footer_template or EMPTY_OVERLAY
        return options


async def settle_images(page: Any, *, document: str, timeout_ms: int) -> tuple[AssetSettleTimeout, ...]:
    """Wait until every image of *page* has loaded, errored or timed out.

    Images are awaited in parallel, each against its own *timeout_ms*. Images
    that time out are returned and logged; they never fail the render.
    """

    try:
        pending = await page.evaluate(SETTLE_IMAGES_SCRIPT, timeout_ms)
    except Exception as exc:
        LOGGER.error("Image settle wait failed for %s document: %s", document, exc)
        raise RenderFailure(f"Page of the {document} document failed while loading images: {exc}", document=document) from exc

    timeouts = tuple(AssetSettleTimeout(document=document, src=str(src), timeout_ms=timeout_ms) for src in pending or ())
    for timeout in timeouts:
        LOGGER.warning("Image did not settle within %dms in %s document: %s", timeout_ms, document, timeout.src)
    return timeouts


async def render(
    page: Any,
    document_path: Path,
    config: PageConfig,
    *,
    name: str,
    settings: PipelineSettings | None = None,
) -> PdfArtifact:
    """Render the markup at *document_path* in *page* and export it as PDF.

    Navigation waits for the parsed DOM only; images are settled separately
    with a bounded wait before the export.

    Raises:
        RenderFailure: If navigation or export fails. The error names *name*.
    """

    settings = settings or PipelineSettings()
    started = time.perf_counter()
    url = Path(document_path).resolve().as_uri()

    LOGGER.debug("Navigating to %s for %s document", url, name)
    try:
        await page.goto(url, wait_until="domcontentloaded", timeout=settings.navigation_timeout_ms)
    except Exception as exc:
        LOGGER.error("Navigation failed for %s document: %s", name, exc)
        raise RenderFailure(f"Unable to load the {name} document: {exc}", document=name) from exc

    timeouts = await settle_images(page, document=name, timeout_ms=settings.image_timeout_ms)
    LOGGER.debug("%s document loaded (%.0fms)", name.capitalize(), (time.perf_counter() - started) * 1000)

    try:
        data = await page.pdf(**config.to_pdf_options())
    except Exception as exc:
        LOGGER.error("PDF export failed for %s document: %s", name, exc)
        raise RenderFailure(f"Unable to export the {name} document: {exc}", document=name) from exc

    if not data:
        raise RenderFailure(f"PDF export of the {name} document returned no data", document=name)

    LOGGER.info(
        "%s PDF created: %d bytes (%.0fms)",
        name.capitalize(),
        len(data),
        (time.perf_counter() - started) * 1000,
    )
    return PdfArtifact(name=name, data=bytes(data), settle_timeouts=timeouts)


__all__ = ["Margins", "PageConfig", "PAGE_FORMATS", "SETTLE_IMAGES_SCRIPT", "settle_images", "render"]
