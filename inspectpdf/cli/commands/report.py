"""CLI command rendering inspection records to PDF."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from ...tools.common.interfaces import ToolContext
from ...tools.common.pipeline import registry
from ...tools.report import default_output
from ..console import console, fail, settings_from_options


@click.command(name="report")
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output PDF (one input) or output directory (several inputs).",
)
@click.option("--work-dir", type=click.Path(file_okay=False), help="Directory for intermediate HTML files.")
@click.option("--keep-intermediates", is_flag=True, help="Keep the cover and body HTML/PDF files.")
@click.option("--navigation-timeout", type=int, help="Page load timeout in milliseconds.")
@click.option("--image-timeout", type=int, help="Per-image settle timeout in milliseconds.")
@click.option("--page-format", type=click.Choice(["Letter", "Legal", "A4"]), help="Paper size.")
@click.option("--headed", is_flag=True, help="Show the browser window while rendering.")
def report(inputs, output, work_dir, keep_intermediates, navigation_timeout, image_timeout, page_format, headed):
    """
    Render inspection record JSON files to merged PDF reports.

    Examples:

        inspectpdf report inspection.json -o report.pdf

        inspectpdf report a.json b.json -o reports/
    """
    settings = settings_from_options(
        work_dir=work_dir,
        keep_intermediates=keep_intermediates or None,
        navigation_timeout_ms=navigation_timeout,
        image_timeout_ms=image_timeout,
        page_format=page_format,
        headless=False if headed else None,
    )
    if output is None:
        output = default_output(Path(inputs[0])) if len(inputs) == 1 else Path.cwd()

    context = ToolContext(output_path=output, settings=settings, config={"inputs": list(inputs)})
    console.print(f"\n[bold cyan]Generating {len(inputs)} report(s)...[/bold cyan]")
    try:
        results = registry.run("report", context)
    except Exception as exc:
        fail(exc)

    table = Table(title="Generated Reports")
    table.add_column("Output", style="cyan")
    table.add_column("Cover", justify="right")
    table.add_column("Body", justify="right")
    table.add_column("Total", justify="right", style="green")
    table.add_column("Time", justify="right")
    table.add_column("Slow images", justify="right")
    for result in results:
        table.add_row(
            str(result.output_path),
            str(result.page_counts.get("cover", 0)),
            str(result.page_counts.get("body", 0)),
            str(result.total_pages),
            f"{result.timings.get('total', 0.0):.2f}s",
            str(len(result.settle_timeouts)),
        )
    console.print(table)
    console.print(f"\n[bold green]✓ Generated {len(results)} report(s)[/bold green]\n")
