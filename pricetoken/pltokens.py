"""
Price Token Plugin Main Module.

This module serves as the main entry point for the price token ChRIS plugin,
which renders authored content containing price tokens such as
{{CAPITAL_REQUIREMENT}} into final text using a live market quote.

Features:
- Mirrors every matching file of the input directory into the output
  directory with tokens substituted
- Text files are substituted whole; JSON files are read as Q&A records
- Degrades to the fallback phrase when no usable quote is supplied

Examples:
    Render markdown content with a known ask:
        $ pricetoken --ask 30250 inputdir/ outputdir/

    Use the record written by the upstream price fetch:
        $ pricetoken --quote quote.json --pattern "**/*.json" inputdir/ outputdir/

Note:
    Quote priority order:
    1. --ask argument (if provided)
    2. --quote file (if provided)
    3. no quote: tokens render as "current market price"
"""

from pathlib import Path
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from typing import Final
import sys
from chris_plugin import chris_plugin
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from pricetoken.config.settings import appsettings, tokenConfig_build
from pricetoken.lib.log import LOG
from pricetoken.lib.render import files_render, quote_select
from pricetoken.models.dataModel import PriceTokenConfig, Quote, RenderResult

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()

parser: Final[ArgumentParser] = ArgumentParser(
    description="Render price tokens in authored content from a market quote.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument("--ask", type=float, help="Ask price of one 1000 oz bar")
parser.add_argument(
    "--quote", type=str, help="JSON quote record produced by the price fetch"
)
parser.add_argument("--band", type=float, help="Premium band percentage for ranges")
parser.add_argument("--increment", type=float, help="Rounding increment in dollars")
parser.add_argument(
    "--pattern",
    type=str,
    default=appsettings.filePattern,
    help="Glob selecting content files in the input directory",
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def plugin_run(options: Namespace, inputdir: Path, outputdir: Path) -> int:
    """Render the input directory into the output directory.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory containing authored content
        outputdir: Directory receiving rendered content

    Returns:
        int: 0 if every file rendered, 1 otherwise
    """
    try:
        config: PriceTokenConfig = tokenConfig_build(options.band, options.increment)
    except ValidationError as e:
        LOG(f"Invalid configuration: {e}")
        console.print("[bold red]Error: band and increment must be positive.[/bold red]")
        return 1

    quote: Quote | None = quote_select(
        options.ask, Path(options.quote) if options.quote else None
    )
    if quote is None or not quote.available:
        console.print(
            "[bold yellow]No usable quote; tokens render as the fallback phrase.[/bold yellow]"
        )

    results: list[RenderResult] = files_render(
        inputdir, outputdir, options.pattern, quote, config
    )
    failures: list[RenderResult] = [r for r in results if not r.success]
    for failure in failures:
        console.print(f"[bold red]{escape(failure.error or '')}[/bold red]")

    console.print(
        f"[bold green]Rendered {len(results) - len(failures)} of {len(results)} file(s).[/bold green]"
    )
    return 1 if failures else 0


@chris_plugin(
    parser=parser,
    title="pl-pricetoken",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing input files
        outputdir: Directory for output files
    """
    sys.exit(plugin_run(options, inputdir, outputdir))
