"""Plugin exposing PDF merge capabilities through the registry."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Sequence

from ..core.utils import get_logger
from ..exceptions import MergeFailure
from ..merge.merger import merge_pdfs
from .common.interfaces import BaseTool
from .common.pipeline import register_tool

LOGGER = get_logger("inspectpdf.tools.merge")


@register_tool
class MergeTool(BaseTool):
    name = "merge"

    def run(self) -> Path:
        context = self.context
        inputs: Iterable[str | Path] | None = context.config.get("inputs")
        if inputs is None:
            if context.input_path is None:
                raise MergeFailure("No input PDFs provided")
            inputs = [context.input_path]

        output = context.output_path
        if output is None:
            raise MergeFailure("Merge tool requires an output path")

        document_info: Mapping[str, object] | None = context.config.get("document_info")
        bookmarks: Sequence[str] | bool | None = context.config.get("bookmarks")

        inputs_list = list(inputs)
        LOGGER.debug("Merging %d input(s) into %s", len(inputs_list), output)
        return merge_pdfs(inputs_list, output, document_info=document_info, bookmarks=bookmarks)
