"""Plan discipline commands for TradeJournal CLI.

Handles the checklist readiness and adherence score commands.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradejournal.cli.main import error_panel

console = Console()


def _load_checklist(path: Path) -> dict[str, bool]:
    from tradejournal.io import load_checklist

    try:
        return load_checklist(path)
    except ValueError as e:
        error_panel(str(e), title="Input Error")


def _score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def format_checklist(checklist: dict[str, bool]) -> str:
    """Render a checklist as markdown-style task lines."""
    if not checklist:
        return "[dim]- (none)[/dim]"
    return "\n".join(
        escape(f"- [{'x' if done else ' '}] {label}") for label, done in checklist.items()
    )


@click.command()
@click.argument("checklist_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def readiness(checklist_file: Path) -> None:
    """Display the percentage of the pre-market checklist completed.

    \b
    Examples:
      tradejournal readiness checklist.json
    """
    from tradejournal.analytics import readiness as compute_readiness

    checklist = _load_checklist(checklist_file)
    score = compute_readiness(checklist)
    color = _score_color(score)

    console.print(Panel(
        f"[bold]Readiness:[/bold] [{color}]{score}%[/{color}]\n\n"
        f"{format_checklist(checklist)}",
        title="[bold cyan]Plan Checklist[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("checklist_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--trades", "trade_count", type=click.IntRange(min=0), default=0, help="Trades taken today.")
@click.option(
    "--max-trades",
    type=click.IntRange(min=0),
    default=None,
    help="Trade-count ceiling (default from config).",
)
@click.pass_context
def adherence(ctx: click.Context, checklist_file: Path, trade_count: int, max_trades: Optional[int]) -> None:
    """Score adherence to the day's plan.

    Up to 70 points come from the checklist. With a trade ceiling, up to
    30 more come from staying within it.

    \b
    Examples:
      tradejournal adherence checklist.json --trades 4 --max-trades 3
    """
    from tradejournal.analytics import adherence as compute_adherence

    settings = ctx.obj["config"].readiness
    ceiling = max_trades if max_trades is not None else settings.max_trades

    checklist = _load_checklist(checklist_file)
    score = compute_adherence(
        checklist,
        trade_count=trade_count,
        max_trades=ceiling,
        penalty_per_trade=settings.penalty_per_trade,
    )
    color = _score_color(score)

    limit_line = (
        f"Trades: {trade_count} / {ceiling}" if ceiling is not None else f"Trades: {trade_count} (no ceiling)"
    )
    console.print(Panel(
        f"[bold]Adherence Score:[/bold] [{color}]{score}%[/{color}]\n\n"
        f"{limit_line}\n"
        f"Checklist: {sum(1 for done in checklist.values() if done)} / {len(checklist)}",
        title="[bold cyan]Plan Adherence[/bold cyan]",
        border_style="cyan",
    ))
