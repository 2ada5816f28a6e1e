"""CLI command describing a PDF file."""

from __future__ import annotations

import click
from rich.table import Table

from ...core.utils import format_file_size
from ...merge.validators import get_pdf_info
from ..console import console, fail


@click.command(name="info")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
def info(input_pdf):
    """
    Display page count and metadata of a PDF file.

    Example:

        inspectpdf info report.pdf
    """
    try:
        details = get_pdf_info(input_pdf)
    except Exception as exc:
        fail(exc)

    table = Table(title=f"PDF Information: {click.format_filename(input_pdf, shorten=True)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("File Size", format_file_size(details.size))
    table.add_row("Number of Pages", str(details.num_pages))
    table.add_row("Encrypted", "Yes" if details.is_encrypted else "No")
    for key, value in sorted(details.metadata.items()):
        table.add_row(str(key).lstrip("/"), str(value))

    console.print()
    console.print(table)
    console.print()
