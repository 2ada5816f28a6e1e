"""Report pipeline: compose, render and merge one inspection report.

The run overlaps every pair of steps that do not depend on each other:

1. engine start (or reuse) and both composers run concurrently;
2. both markup documents are written to the work directory;
3. both documents render concurrently, each in its own browser context;
4. the two artifacts are merged in the fixed order cover, body;
5. the merged PDF is written atomically to the requested output.

Either the complete merged PDF is written or nothing is. A session the
run launched itself is disposed before the run returns, on success and on
failure; a session supplied by the caller is never disposed here.
"""

from __future__ import annotations

import asyncio
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Coroutine, Iterable, Sequence, TypeVar

from .compose import FormIdentity, build_overlays, compose_body, compose_cover
from .config import PipelineSettings
from .core.utils import PathLike, get_logger, resolve_path, write_bytes_atomic
from .exceptions import InspectPDFError, RenderFailure
from .merge import merge_artifacts
from .models import InspectionRecord
from .render import Margins, PageConfig, RenderingSession, acquire, render
from .types import BODY, COVER, PdfArtifact, RenderedDocument, ReportResult

LOGGER = get_logger("inspectpdf.pipeline")

T = TypeVar("T")

COVER_MARGINS = Margins(top="10mm", right="10mm", bottom="15mm", left="10mm")
# The body header carries the status legend and needs more room.
BODY_MARGINS = Margins(top="25mm", right="10mm", bottom="15mm", left="10mm")


async def _gather_or_cancel(tasks: Sequence["asyncio.Future[Any]"]) -> list[Any]:
    """Await *tasks*; on the first failure cancel and drain the rest."""

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _completed_session(task: "asyncio.Future[RenderingSession]") -> RenderingSession | None:
    if task.done() and not task.cancelled() and task.exception() is None:
        return task.result()
    return None


class ReportPipeline:
    """Runs report jobs with one set of settings and page layout.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        identity: Form identification printed in the footers.
        cover_margins: Page margins of the cover document.
        body_margins: Page margins of the body document.
    """

    def __init__(
        self,
        settings: PipelineSettings | None = None,
        *,
        identity: FormIdentity | None = None,
        cover_margins: Margins = COVER_MARGINS,
        body_margins: Margins = BODY_MARGINS,
    ) -> None:
        self.settings = settings or PipelineSettings.from_env()
        self.identity = identity or FormIdentity()
        self.cover_margins = cover_margins
        self.body_margins = body_margins

    def page_configs(self, record: InspectionRecord) -> tuple[PageConfig, PageConfig]:
        overlays = build_overlays(record, self.identity)
        cover = PageConfig(
            page_format=self.settings.page_format,
            margins=self.cover_margins,
            print_background=True,
            header_template=overlays.cover_header,
            footer_template=overlays.cover_footer,
        )
        body = PageConfig(
            page_format=self.settings.page_format,
            margins=self.body_margins,
            print_background=True,
            header_template=overlays.body_header,
            footer_template=overlays.body_footer,
        )
        return cover, body

    async def _compose(self, name: str, composer: Callable[..., str], *args: Any) -> RenderedDocument:
        started = time.perf_counter()
        try:
            markup = await asyncio.to_thread(composer, *args)
        except InspectPDFError:
            raise
        except Exception as exc:
            LOGGER.error("Composing the %s document failed: %s", name, exc)
            raise InspectPDFError(f"Composing the {name} document failed: {exc}", stage="compose") from exc
        LOGGER.debug("%s markup composed (%.0fms)", name.capitalize(), (time.perf_counter() - started) * 1000)
        return RenderedDocument(name, markup)

    async def _persist(self, documents: Sequence[RenderedDocument], work_dir: Path, stem: str) -> dict[str, Path]:
        paths = {document.name: work_dir / f"{stem}.{document.name}.html" for document in documents}

        def _write(document: RenderedDocument) -> None:
            paths[document.name].write_text(document.markup, encoding="utf-8")

        try:
            await asyncio.gather(*(asyncio.to_thread(_write, document) for document in documents))
        except OSError as exc:
            LOGGER.error("Failed to persist markup to %s: %s", work_dir, exc)
            raise InspectPDFError(f"Unable to write markup to {work_dir}: {exc}", stage="persist") from exc
        return paths

    async def _render_one(self, session: RenderingSession, name: str, path: Path, config: PageConfig) -> PdfArtifact:
        try:
            async with session.open_context() as page:
                return await render(page, path, config, name=name, settings=self.settings)
        except InspectPDFError:
            raise
        except Exception as exc:
            LOGGER.error("Opening a browser context for the %s document failed: %s", name, exc)
            raise RenderFailure(f"Unable to open a page for the {name} document: {exc}", document=name) from exc

    def _work_dir(self, output: Path) -> tuple[Path, "tempfile.TemporaryDirectory[str] | None"]:
        if self.settings.work_dir is not None:
            self.settings.work_dir.mkdir(parents=True, exist_ok=True)
            return self.settings.work_dir, None
        if self.settings.keep_intermediates:
            output.parent.mkdir(parents=True, exist_ok=True)
            return output.parent, None
        temp = tempfile.TemporaryDirectory(prefix="inspectpdf-")
        return Path(temp.name), temp

    async def run(
        self,
        record: InspectionRecord,
        output: PathLike,
        *,
        session: Any = None,
    ) -> ReportResult:
        """Generate the report for *record* and write it to *output*.

        Args:
            record: The inspection record to render.
            output: Destination of the merged PDF.
            session: Optional :class:`RenderingSession` (or Playwright
                ``Browser``) to reuse. The caller keeps ownership of it and
                must not run two reports on it at the same time.

        Raises:
            EngineStartFailure: The engine could not be launched.
            RenderFailure: One of the two documents failed to render.
            MergeFailure: A rendered artifact was not a valid PDF.
            InspectPDFError: Composition or file I/O failed.
        """

        output_path = resolve_path(output)
        owns_session = session is None
        timings: dict[str, float] = {}
        started = time.perf_counter()
        cover_config, body_config = self.page_configs(record)
        work_dir, temp_dir = self._work_dir(output_path)

        LOGGER.info(
            "Generating report for %s: %d section(s) -> %s",
            record.address.full_address or "<no address>",
            len(record.sections),
            output_path,
        )

        session_task = asyncio.ensure_future(acquire(session, settings=self.settings))
        try:
            stage_start = time.perf_counter()
            cover_task = asyncio.ensure_future(self._compose(COVER, compose_cover, record, self.identity))
            body_task = asyncio.ensure_future(self._compose(BODY, compose_body, record))
            active, cover_document, body_document = await _gather_or_cancel([session_task, cover_task, body_task])
            timings["prepare"] = time.perf_counter() - stage_start

            stage_start = time.perf_counter()
            paths = await self._persist((cover_document, body_document), work_dir, output_path.stem)
            timings["persist"] = time.perf_counter() - stage_start

            stage_start = time.perf_counter()
            cover, body = await _gather_or_cancel(
                [
                    asyncio.ensure_future(self._render_one(active, COVER, paths[COVER], cover_config)),
                    asyncio.ensure_future(self._render_one(active, BODY, paths[BODY], body_config)),
                ]
            )
            timings["render"] = time.perf_counter() - stage_start

            intermediates: dict[str, Path] = {}
            if self.settings.keep_intermediates:
                for artifact in (cover, body):
                    intermediate = work_dir / f"{output_path.stem}.{artifact.name}.pdf"
                    await asyncio.to_thread(write_bytes_atomic, intermediate, artifact.data)
                    intermediates[artifact.name] = intermediate
                intermediates.update({f"{name}_html": path for name, path in paths.items()})

            stage_start = time.perf_counter()
            merged = await asyncio.to_thread(
                merge_artifacts,
                [cover, body],
                document_info={
                    "title": f"Property Inspection Report - {record.address.full_address}",
                    "author": record.inspector.name,
                    "creator": "inspectpdf",
                },
            )
            timings["merge"] = time.perf_counter() - stage_start

            stage_start = time.perf_counter()
            try:
                await asyncio.to_thread(write_bytes_atomic, output_path, merged)
            except OSError as exc:
                LOGGER.error("Failed to write report to %s: %s", output_path, exc)
                raise InspectPDFError(f"Unable to write report to {output_path}: {exc}", stage="write") from exc
            timings["write"] = time.perf_counter() - stage_start
        except InspectPDFError as exc:
            document = getattr(exc, "document", None)
            if document:
                LOGGER.error("Report generation failed at stage %s (%s document): %s", exc.stage, document, exc)
            else:
                LOGGER.error("Report generation failed at stage %s: %s", exc.stage, exc)
            raise
        finally:
            if owns_session:
                if not session_task.done():
                    session_task.cancel()
                    await asyncio.gather(session_task, return_exceptions=True)
                owned = _completed_session(session_task)
                if owned is not None:
                    await owned.dispose()
            if temp_dir is not None:
                temp_dir.cleanup()

        timings["total"] = time.perf_counter() - started
        result = ReportResult(
            output_path=output_path,
            page_counts={COVER: cover.page_count, BODY: body.page_count},
            timings=timings,
            settle_timeouts=cover.settle_timeouts + body.settle_timeouts,
            intermediates=intermediates,
        )
        LOGGER.info(
            "Report written to %s: %d page(s) (cover %d, body %d) in %.2fs",
            output_path,
            result.total_pages,
            result.page_counts[COVER],
            result.page_counts[BODY],
            timings["total"],
        )
        return result


async def generate_report(
    record: InspectionRecord,
    output: PathLike,
    *,
    session: Any = None,
    settings: PipelineSettings | None = None,
    identity: FormIdentity | None = None,
) -> ReportResult:
    """Generate one report; see :meth:`ReportPipeline.run`."""

    pipeline = ReportPipeline(settings, identity=identity)
    return await pipeline.run(record, output, session=session)


async def generate_reports(
    jobs: Iterable[tuple[InspectionRecord, PathLike]],
    *,
    session: Any = None,
    settings: PipelineSettings | None = None,
    identity: FormIdentity | None = None,
) -> list[ReportResult]:
    """Generate several reports one after another over a single session.

    The engine starts once for the whole batch. A session launched here is
    disposed when the batch ends; a supplied one is left to the caller.
    """

    pipeline = ReportPipeline(settings, identity=identity)
    owns_session = session is None
    active = await acquire(session, settings=pipeline.settings)
    results: list[ReportResult] = []
    try:
        for record, output in jobs:
            results.append(await pipeline.run(record, output, session=active))
    finally:
        if owns_session:
            await active.dispose()
    return results


def run_sync(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run *coroutine* to completion from synchronous code."""

    return asyncio.run(coroutine)


__all__ = [
    "ReportPipeline",
    "generate_report",
    "generate_reports",
    "run_sync",
    "COVER_MARGINS",
    "BODY_MARGINS",
]
