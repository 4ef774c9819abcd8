"""
Defines the main Click command group for the price token tools.

This module provides:
- The root `cli` command group for the application.
- Registration of subcommands from other modules.

Usage:
Import `cli` to run the command-line interface.
"""

import click
from pricetoken.commands.base import RichGroup
from pricetoken.commands.tokens import kinds, resolve, render, lint


@click.group(
    cls=RichGroup,
    help="""
    Price Token Command Palette

    Preview, render and lint price tokens in authored content.
    """,
)
def cli() -> None:
    """
    The root Click command group.
    """
    pass


cli: click.Group = cli

cli.add_command(kinds)
cli.add_command(resolve)
cli.add_command(render)
cli.add_command(lint)
