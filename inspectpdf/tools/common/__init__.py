"""Shared plumbing for inspectpdf tools."""

from .interfaces import BaseTool, ToolContext
from .pipeline import ToolRegistry, register_tool, registry

__all__ = ["BaseTool", "ToolContext", "ToolRegistry", "register_tool", "registry"]
