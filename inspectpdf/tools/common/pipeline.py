"""Registry mapping tool names to the tools the CLI dispatches to."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from ...core.utils import get_logger
from .interfaces import BaseTool, ToolContext

LOGGER = get_logger("inspectpdf.tools")


class ToolRegistry:
    """Tools keyed by their declared ``name``."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def register(self, tool_class: type[BaseTool]) -> type[BaseTool]:
        """Add *tool_class* under its ``name``; usable as a class decorator."""

        name = getattr(tool_class, "name", None)
        if not name:
            raise ValueError(f"{tool_class.__name__} does not declare a tool name")
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class
        return tool_class

    def run(self, name: str, context: ToolContext) -> Any:
        """Run the tool called *name* and keep its result on the context."""

        try:
            tool_class = self._tools[name]
        except KeyError as exc:
            raise KeyError(f"Tool '{name}' is not registered") from exc
        LOGGER.debug("Running %s tool (output=%s)", name, context.output_path)
        result = tool_class(context).run()
        context.resources["result"] = result
        return result

    def names(self) -> Iterable[str]:
        return sorted(self._tools)


registry = ToolRegistry()
register_tool = registry.register


__all__ = ["ToolRegistry", "registry", "register_tool"]
