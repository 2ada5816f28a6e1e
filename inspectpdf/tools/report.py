"""Plugin exposing report generation through the registry."""

from __future__ import annotations

from pathlib import Path

from ..core.utils import get_logger, resolve_path
from ..models import load_record
from ..pipeline import generate_reports, run_sync
from ..types import ReportResult
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("inspectpdf.tools.report")


@register_tool
class ReportTool(BaseTool):
    """Render one or more JSON inspection records to PDF.

    A single input writes to ``output_path`` as a file. Several inputs treat
    ``output_path`` as a directory and write ``<input stem>.pdf`` into it,
    reusing one browser for the whole batch.
    """

    name = "report"

    def run(self) -> list[ReportResult]:
        context = self.context
        inputs = [resolve_path(path) for path in context.config.get("inputs") or ()]
        if not inputs:
            if context.input_path is None:
                raise ValueError("Report tool requires at least one input record")
            inputs = [context.input_path]

        output = context.output_path
        if output is None:
            raise ValueError("Report tool requires an output path")

        if len(inputs) == 1 and output.suffix.lower() == ".pdf":
            outputs = [output]
        else:
            outputs = [output / f"{path.stem}.pdf" for path in inputs]

        jobs = [(load_record(path), destination) for path, destination in zip(inputs, outputs)]
        LOGGER.debug("Generating %d report(s)", len(jobs))
        return run_sync(generate_reports(jobs, settings=context.ensure_settings()))


def default_output(input_path: Path) -> Path:
    return input_path.with_suffix(".pdf")


__all__ = ["ReportTool", "default_output"]
