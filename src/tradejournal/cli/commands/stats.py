"""Performance dashboard command."""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from tradejournal.cli.commands.common import common_options, load_system_config, reference_day
from tradejournal.cli.trade_file import TradeFileError, load_trades
from tradejournal.cli.ui.formatters import (
    create_breakdown_table,
    create_consistency_table,
    create_monthly_table,
    create_ratio_table,
    create_streak_table,
    create_summary_table,
)
from tradejournal.services.analytics import AnalyticsService

console = Console()


@click.command("stats")
@common_options
@click.option(
    "--breakdowns/--no-breakdowns",
    default=False,
    help="Also show P&L by ticker, direction and tag",
)
def stats_command(
    trade_file: Path,
    config_file: Optional[Path],
    today: Optional[datetime],
    log_level: Optional[str],
    breakdowns: bool,
):
    """
    Show lifetime performance statistics.

    Period P&L, drawdown, streaks, trade ratios and the consistency score
    over all CLOSED trades of the journal (OPEN trades are ignored).

    \b
    Examples:
        # Dashboard with defaults from ./tradejournal.yaml
        tradejournal stats -f trades.json

        # Explicit config and reference day
        tradejournal stats -f trades.json -c journal.yaml --today 2025-03-14

        # Include ticker/direction/tag breakdowns
        tradejournal stats -f trades.json --breakdowns
    """
    try:
        system_config = load_system_config(config_file, log_level)
        trades = load_trades(trade_file)

        service = AnalyticsService(system_config.analytics_config())
        stats = service.trading_stats(trades, today=reference_day(today))

        console.rule("[bold blue]Trading Performance[/bold blue]")
        console.print()

        if stats is None:
            console.print("[yellow]No closed trades yet - nothing to analyze.[/yellow]")
            sys.exit(0)

        console.print(create_summary_table(stats))
        console.print(create_ratio_table(stats.ratios))
        console.print(create_streak_table(stats))
        console.print(create_consistency_table(stats.consistency))
        console.print(create_monthly_table(stats.monthly_by_year))

        if breakdowns:
            console.print(create_breakdown_table("By Ticker", stats.by_ticker))
            console.print(create_breakdown_table("By Direction", stats.by_direction))
            if stats.by_tag:
                console.print(create_breakdown_table("By Tag", stats.by_tag))

        sys.exit(0)

    except (TradeFileError, ValueError) as e:
        console.print()
        console.print(f"[bold red]✗ Stats failed:[/bold red] {e}")
        sys.exit(1)
