"""CLI command merging PDF files."""

from __future__ import annotations

import click

from ...tools.common.interfaces import ToolContext
from ...tools.common.pipeline import registry
from ..console import console, fail


@click.command(name="merge")
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--bookmark", "bookmarks", multiple=True, help="Bookmark title for each input, in order.")
@click.option("--title", help="Title of the merged document.")
def merge(inputs, output, bookmarks, title):
    """
    Merge PDF files into OUTPUT, keeping every page in order.

    Example:

        inspectpdf merge cover.pdf body.pdf report.pdf
    """
    context = ToolContext(
        output_path=output,
        config={
            "inputs": list(inputs),
            "bookmarks": list(bookmarks) or None,
            "document_info": {"title": title} if title else None,
        },
    )
    try:
        result = registry.run("merge", context)
    except Exception as exc:
        fail(exc)
    console.print(f"\n[bold green]✓ Merged {len(inputs)} file(s) into {result}[/bold green]\n")
