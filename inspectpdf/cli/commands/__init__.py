"""Click commands of the inspectpdf CLI."""

from .info import info
from .merge import merge
from .report import report

__all__ = ["info", "merge", "report"]
