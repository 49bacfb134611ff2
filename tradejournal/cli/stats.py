"""Performance commands for TradeJournal CLI.

Handles the daily summary, winning streak, payout eligibility and payout
summary commands.
"""

from decimal import Decimal, localcontext
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.main import error_panel, resolve_today

console = Console()

FILE_ARG = click.Path(exists=True, dir_okay=False, path_type=Path)


def _load(loader, path: Path) -> list:
    try:
        return loader(path)
    except ValueError as e:
        error_panel(str(e), title="Input Error")


def _signed(value: Decimal) -> str:
    color = "green" if value > 0 else "red" if value < 0 else "dim"
    return f"[{color}]{value:+,.2f}[/{color}]"


@click.command()
@click.argument("trades_file", type=FILE_ARG)
@click.option("--days", type=click.IntRange(min=1), default=None, help="Only show the last N days.")
def summary(trades_file: Path, days: Optional[int]) -> None:
    """Display net P&L and trade count per day.

    \b
    Examples:
      tradejournal summary trades.csv
      tradejournal summary trades.json --days 7
    """
    from tradejournal.analytics import aggregate
    from tradejournal.analytics.daily import EXACT_CONTEXT
    from tradejournal.io import load_trades

    daily = aggregate(_load(load_trades, trades_file))

    if not daily:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Daily Summary[/bold]",
            border_style="dim",
        ))
        return

    keys = sorted(daily, reverse=True)
    if days is not None:
        keys = keys[:days]

    table = Table(title="Daily Summary", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Net P&L", justify="right")

    total = Decimal("0")
    with localcontext(EXACT_CONTEXT):
        for key in keys:
            day = daily[key]
            table.add_row(key, str(day.count), _signed(day.net_pnl))
            total += day.net_pnl

    console.print(table)
    wins = sum(1 for key in keys if daily[key].is_win)
    console.print(f"\n[bold]Total P&L:[/bold] {_signed(total)}  [dim]({wins}/{len(keys)} winning days)[/dim]")


@click.command()
@click.argument("trades_file", type=FILE_ARG)
@click.option(
    "--anchor",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Count back from this day instead of today.",
)
@click.option(
    "--finalized",
    is_flag=True,
    default=False,
    help="Let a loss on the anchor day break the streak.",
)
@click.pass_context
def streak(ctx: click.Context, trades_file: Path, anchor, finalized: bool) -> None:
    """Display the current consecutive winning-day streak.

    Days without trades or with a net of exactly zero are skipped. An
    unfinished losing day (today, by default) does not break the streak.

    \b
    Examples:
      tradejournal streak trades.csv
      tradejournal streak trades.csv --anchor 2024-03-14 --finalized
    """
    from tradejournal.analytics import aggregate
    from tradejournal.analytics import streak as compute_streak
    from tradejournal.io import load_trades

    anchor_day = anchor.date() if anchor is not None else resolve_today(ctx)
    daily = aggregate(_load(load_trades, trades_file))
    count = compute_streak(daily, anchor_day, treat_anchor_as_finalized=finalized)

    label = "Day" if count == 1 else "Days"
    console.print(Panel(
        f"[bold]{count} {label} Streak[/bold]\n\n"
        f"[dim]Consecutive winning days as of {anchor_day.isoformat()} (off-days ignored)[/dim]",
        title="[bold yellow]Winning Streak[/bold yellow]",
        border_style="yellow",
    ))


@click.command()
@click.argument("trades_file", type=FILE_ARG)
@click.option("--payouts", "payouts_file", type=FILE_ARG, default=None, help="Payout history file.")
@click.option(
    "--mode",
    type=click.Choice(["cycle", "rolling"], case_sensitive=False),
    default=None,
    help="Window policy (default from config).",
)
@click.option("--window-days", type=int, default=None, help="Rolling window length.")
@click.option("--required", "required_days", type=int, default=None, help="Winning days required.")
@click.pass_context
def eligibility(
    ctx: click.Context,
    trades_file: Path,
    payouts_file: Optional[Path],
    mode: Optional[str],
    window_days: Optional[int],
    required_days: Optional[int],
) -> None:
    """Check payout eligibility from winning days.

    Cycle mode counts winning days since the day after the last payout.
    Rolling mode counts winning days in the trailing window and ignores
    payouts.

    \b
    Examples:
      tradejournal eligibility trades.csv --payouts payouts.csv
      tradejournal eligibility trades.csv --mode rolling --window-days 14
    """
    from tradejournal.analytics import aggregate, latest_payout_date
    from tradejournal.analytics import eligibility as compute_eligibility
    from tradejournal.io import load_payouts, load_trades
    from tradejournal.models import EligibilityMode

    settings = ctx.obj["config"].eligibility
    today = resolve_today(ctx)

    daily = aggregate(_load(load_trades, trades_file))
    last_payout = None
    if payouts_file is not None:
        last_payout = latest_payout_date(_load(load_payouts, payouts_file))

    result = compute_eligibility(
        daily,
        last_payout,
        mode=mode or settings.mode,
        window_days=window_days if window_days is not None else settings.window_days,
        required_winning_days=required_days if required_days is not None else settings.required_winning_days,
        today=today,
    )

    if result.mode is EligibilityMode.CYCLE:
        window_label = f"Cycle since {result.window_start.isoformat()}"
    else:
        window_label = f"Last {result.window_days}d"

    status = "[bold green]Eligible[/bold green]" if result.eligible else "[yellow]Keep going[/yellow]"
    lines = [
        f"[bold]Eligibility[/bold] ({window_label})\n",
        f"Winning days: [bold]{result.winning_days}[/bold] / {result.required_winning_days}",
        f"Window:       {result.window_start.isoformat()} to {result.window_end.isoformat()}",
    ]
    if last_payout is not None:
        lines.append(f"Last payout:  {last_payout.isoformat()}")
    if not result.eligible:
        lines.append(f"Remaining:    {result.remaining}")
    lines.append(f"\n{status}")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Payout Eligibility[/bold cyan]",
        border_style="green" if result.eligible else "cyan",
    ))


@click.command()
@click.argument("payouts_file", type=FILE_ARG)
@click.option("--gross-pnl", type=float, default=0.0, help="Total trading P&L for the net figure.")
@click.pass_context
def payouts(ctx: click.Context, payouts_file: Path, gross_pnl: float) -> None:
    """Display payout totals.

    \b
    Examples:
      tradejournal payouts payouts.csv
      tradejournal payouts payouts.csv --gross-pnl 12500
    """
    from tradejournal.analytics import payout_summary
    from tradejournal.io import load_payouts

    result = payout_summary(_load(load_payouts, payouts_file), resolve_today(ctx), gross_pnl)

    table = Table(title="Payouts", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Payouts", str(result.count))
    table.add_row("Total", f"{result.total:,.2f}")
    table.add_row("Year to date", f"{result.ytd:,.2f}")
    table.add_row("Last 30 days", f"{result.last_30d:,.2f}")
    table.add_row("Average", f"{result.average:,.2f}")
    table.add_row("Balance after payouts", _signed(result.net))

    console.print(table)
