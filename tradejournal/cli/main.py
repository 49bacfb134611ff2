"""Main CLI entry point for TradeJournal.

This module provides the main click group, shared options and lazy
loading of command modules.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that imports command modules on first use."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = getattr(module, cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "summary": "tradejournal.cli.stats",
    "streak": "tradejournal.cli.stats",
    "eligibility": "tradejournal.cli.stats",
    "payouts": "tradejournal.cli.stats",
    "readiness": "tradejournal.cli.plan",
    "adherence": "tradejournal.cli.plan",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def resolve_today(ctx: click.Context) -> date:
    """Today as pinned by --today, else the wall clock in the configured timezone."""
    from tradejournal.clock import SystemClock

    pinned = ctx.obj.get("today")
    if pinned is not None:
        return pinned
    try:
        return SystemClock(ctx.obj["config"].timezone).today()
    except ValueError as e:
        error_panel(str(e), title="Configuration Error")


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/tradejournal/config.toml).",
)
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Treat this day (YYYY-MM-DD) as today.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], today, verbose: bool) -> None:
    """TradeJournal - streaks, payout eligibility and plan readiness.

    Reads trades, payouts and checklists from JSON or CSV files.

    \b
    Quick Start:
      tradejournal summary trades.csv       # Daily net P&L
      tradejournal streak trades.csv        # Current winning-day streak
      tradejournal eligibility trades.csv   # Payout eligibility
    """
    from tradejournal.config import load_config

    setup_logging(verbose)
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = load_config(config_path)
    except ValueError as e:
        error_panel(str(e), title="Configuration Error")

    ctx.obj["today"] = today.date() if today is not None else None


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
