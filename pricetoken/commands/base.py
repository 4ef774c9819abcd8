"""
Base classes for Rich-enhanced Click commands and groups.

This module defines:
- `RichGroup`: A custom Click group with Rich-enhanced help rendering.
- `RichCommand`: A custom Click command with Rich-enhanced help rendering.
- `rich_help`: Builds the markup shown by `RichCommand`.
"""

from rich.panel import Panel
import click
from pricetoken.config.settings import console
from pricetoken.lib.log import LOG


def rich_help(command: str, description: str, usage: str, args: dict) -> str:
    """
    Generate Rich-enhanced help text for commands.

    :param command: The command name.
    :param description: Description of the command.
    :param usage: Usage syntax for the command.
    :param args: Dictionary of arguments and their descriptions.
    :return: Formatted Rich help string.
    """
    help_text = f"[bold cyan]{description}[/bold cyan]\n\n"
    help_text += f"[bold yellow]Usage:[/bold yellow]\n    [green]{usage}[/green]\n\n"
    if args:
        help_text += "[bold yellow]Arguments:[/bold yellow]\n"
        for arg, desc in args.items():
            help_text += f"    [green]{arg}[/green]: {desc}\n"
    return help_text


class RichGroup(click.Group):
    """
    A Click Group that uses Rich for rendering help messages.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the group using Rich.

        :param ctx: The Click context for the command group.
        :param formatter: The Click help formatter.
        """
        try:
            info_name: str = ctx.info_name or ""
            console.print(
                f"[bold yellow]Usage:[/bold yellow] [cyan]{info_name}[/cyan] "
                f"[magenta]\\[OPTIONS] COMMAND \\[ARGS]...[/magenta]\n"
            )

            if self.help:
                console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")

            if self.commands:
                console.print("[bold green]Available Commands:[/bold green]")
                for name, command in self.commands.items():
                    console.print(
                        f"- [cyan]{name}[/cyan]: [white]{command.short_help or 'No description available.'}[/white]"
                    )
                console.print()
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


class RichCommand(click.Command):
    """
    A Click Command that uses Rich for rendering help messages.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the command using Rich.

        :param ctx: The Click context for the command.
        :param formatter: The Click help formatter.
        """
        try:
            help_text = self.help or "No help text available."
            panel_width = max(len(line) for line in help_text.splitlines()) + 10
            panel_width = min(panel_width, 80)
            console.print(
                Panel(help_text, expand=False, width=panel_width, border_style="cyan")
            )

            options = [p for p in self.get_params(ctx) if isinstance(p, click.Option)]
            if options:
                console.print("[bold yellow]Options:[/bold yellow]")
                for option in options:
                    console.print(
                        f"- [cyan]{option.opts[-1]}[/cyan]: {option.help or 'No description'}"
                    )
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")
