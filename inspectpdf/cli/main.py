"""Command line interface for inspectpdf."""

from __future__ import annotations

import logging

import click

from .. import __version__
from ..core.utils import set_log_level
from ..tools import load_builtin_plugins
from .commands import info, merge, report

COMMANDS = [report, merge, info]


@click.group()
@click.version_option(version=__version__, prog_name="inspectpdf")
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline progress to stderr.")
def cli(verbose):
    """
    inspectpdf - Render property inspection records to PDF reports.
    """
    set_log_level(logging.DEBUG if verbose else logging.WARNING)


load_builtin_plugins()
for command in COMMANDS:
    cli.add_command(command)


if __name__ == "__main__":  # pragma: no cover
    cli()
