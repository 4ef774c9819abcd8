"""
Price Token Commands

This module provides CLI commands that content authors use to preview and
check price tokens.

Commands:
- kinds: List the recognized tokens.
- resolve <KIND>: Show the value of one token.
- render [FILE]: Substitute tokens in a file or stdin.
- lint <FILE>...: Report tokens that will not be substituted.
"""

from pathlib import Path
from typing import Any, Callable, Optional
import sys
from rich.table import Table
from rich.markup import escape
from pydantic import ValidationError
import click
from pricetoken.commands.base import RichCommand, rich_help
from pricetoken.config.settings import console, tokenConfig_build
from pricetoken.lib.log import LOG
from pricetoken.lib.render import quote_select
from pricetoken.lib.tokens import text_lint, text_substitute, token_resolve
from pricetoken.models.dataModel import LintResult, PriceTokenConfig, TokenKind


def price_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the quote and formatting options shared by pricing commands."""
    func = click.option(
        "--increment", type=float, default=None, help="Rounding increment in dollars."
    )(func)
    func = click.option(
        "--band", type=float, default=None, help="Premium band percentage for ranges."
    )(func)
    func = click.option(
        "--quote",
        "quote_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="JSON quote record, e.g. {\"ask\": 30000}.",
    )(func)
    func = click.option(
        "--ask", type=float, default=None, help="Ask price of one 1000 oz bar."
    )(func)
    return func


def _config(band: Optional[float], increment: Optional[float]) -> PriceTokenConfig:
    try:
        return tokenConfig_build(band, increment)
    except ValidationError as e:
        LOG(f"Invalid configuration: {e}")
        console.print("[bold red]Error: band and increment must be positive.[/bold red]")
        sys.exit(2)


@click.command(
    cls=RichCommand,
    short_help="List recognized tokens",
    help=rich_help(
        command="kinds",
        description="List the recognized price tokens.",
        usage="kinds [--ask <price>]",
        args={},
    ),
)
@price_options
def kinds(
    ask: Optional[float],
    quote_file: Optional[Path],
    band: Optional[float],
    increment: Optional[float],
) -> None:
    """
    Show every token, with its value when a quote is given.
    """
    config: PriceTokenConfig = _config(band, increment)
    quote = quote_select(ask, quote_file)
    table: Table = Table(title="Price tokens")
    table.add_column("Token", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for kind in TokenKind:
        table.add_row(f"{{{{{kind.value}}}}}", token_resolve(kind, quote, config))
    console.print(table)


@click.command(
    cls=RichCommand,
    short_help="Resolve one token",
    help=rich_help(
        command="resolve",
        description="Show the display value of one price token.",
        usage="resolve <KIND> --ask <price>",
        args={"<KIND>": "Token identifier, e.g. CAPITAL_REQUIREMENT."},
    ),
)
@click.argument("kind", type=click.Choice([k.value for k in TokenKind]))
@price_options
def resolve(
    kind: str,
    ask: Optional[float],
    quote_file: Optional[Path],
    band: Optional[float],
    increment: Optional[float],
) -> None:
    """
    Prints the value of KIND.
    """
    config: PriceTokenConfig = _config(band, increment)
    click.echo(token_resolve(TokenKind(kind), quote_select(ask, quote_file), config))


@click.command(
    cls=RichCommand,
    short_help="Substitute tokens",
    help=rich_help(
        command="render",
        description="Substitute price tokens in a file, or stdin.",
        usage="render [FILE] --ask <price>",
        args={"[FILE]": "Authored text; '-' or omitted reads stdin."},
    ),
)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@price_options
def render(
    source: Any,
    ask: Optional[float],
    quote_file: Optional[Path],
    band: Optional[float],
    increment: Optional[float],
) -> None:
    """
    Prints the authored text with tokens substituted.
    """
    config: PriceTokenConfig = _config(band, increment)
    click.echo(
        text_substitute(source.read(), quote_select(ask, quote_file), config), nl=False
    )


@click.command(
    cls=RichCommand,
    short_help="Check token usage",
    help=rich_help(
        command="lint",
        description="Report brace sequences that are not recognized tokens.",
        usage="lint <FILE>...",
        args={"<FILE>": "One or more authored files."},
    ),
)
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def lint(files: tuple[Path, ...]) -> None:
    """
    Exits with status 1 if any file holds an unrecognized token.
    """
    problems: int = 0
    for path in files:
        try:
            result: LintResult = text_lint(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            LOG(f"Error reading '{path}': {e}")
            console.print(f"[bold red]Error: cannot read {path}: {e}[/bold red]")
            problems += 1
            continue

        if result.clean:
            console.print(
                f"[bold green]{escape(str(path))}:[/bold green] {len(result.tokens)} token(s) OK",
                highlight=False,
                soft_wrap=True,
            )
            continue

        problems += len(result.unrecognized)
        for name in result.unrecognized:
            console.print(
                f"[bold red]{escape(str(path))}:[/bold red] unrecognized token '{escape(name)}'",
                highlight=False,
                soft_wrap=True,
            )

    if problems:
        sys.exit(1)
