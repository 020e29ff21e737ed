"""Filtered equity curve command."""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console

from tradejournal.cli.commands.common import common_options, load_system_config, reference_day
from tradejournal.cli.trade_file import TradeFileError, load_trades
from tradejournal.cli.ui.formatters import create_equity_table, format_money, format_pct, format_signed_money
from tradejournal.libraries.performance.models import DateRange, Granularity
from tradejournal.services.analytics import AnalyticsService, FilterSpec, Period
from tradejournal.services.ledger.models import AssetType

console = Console()


def build_filter_spec(
    period: str,
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    days_back: Optional[int],
    trades_back: Optional[int],
    tags: tuple[str, ...],
    assets: tuple[str, ...],
) -> FilterSpec:
    """
    Translate CLI options into a FilterSpec.

    A custom selector (--start-date/--end-date, --days-back, --trades-back)
    switches the period to custom.
    """
    date_range = None
    if start_date or end_date:
        if not (start_date and end_date):
            raise click.UsageError("--start-date and --end-date must be given together")
        date_range = DateRange(start=start_date.date(), end=end_date.date())

    selected_period = Period(period)
    if any(s is not None for s in (date_range, days_back, trades_back)):
        selected_period = Period.CUSTOM

    return FilterSpec(
        period=selected_period,
        date_range=date_range,
        days_back=days_back,
        trades_back=trades_back,
        tag_filter=frozenset(tags),
        asset_filter=frozenset(AssetType(a.upper()) for a in assets),
    )


@click.command("equity")
@common_options
@click.option(
    "--period",
    "-p",
    type=click.Choice([p.value for p in Period if p != Period.CUSTOM], case_sensitive=False),
    default=Period.ALL.value,
    show_default=True,
    help="Calendar period to show",
)
@click.option("--start-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Custom range start (YYYY-MM-DD)")
@click.option("--end-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Custom range end (YYYY-MM-DD)")
@click.option("--days-back", type=click.IntRange(min=0), help="Last N calendar days")
@click.option("--trades-back", type=click.IntRange(min=0), help="Last N trades")
@click.option("--tag", "-t", "tags", multiple=True, help="Only trades carrying ALL given tags (repeatable)")
@click.option(
    "--asset",
    "-a",
    "assets",
    multiple=True,
    type=click.Choice([a.value for a in AssetType], case_sensitive=False),
    help="Only trades of ANY given asset type (repeatable)",
)
@click.option(
    "--granularity",
    "-g",
    type=click.Choice([g.value for g in Granularity], case_sensitive=False),
    help="Override point aggregation (default: per_trade for wtd, per_day otherwise)",
)
def equity_command(
    trade_file: Path,
    config_file: Optional[Path],
    today: Optional[datetime],
    log_level: Optional[str],
    period: str,
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    days_back: Optional[int],
    trades_back: Optional[int],
    tags: tuple[str, ...],
    assets: tuple[str, ...],
    granularity: Optional[str],
):
    """
    Show the equity curve for a period and tag/asset selection.

    The curve starts at the account equity when the window opens (starting
    equity plus every earlier closed trade), not at the configured starting
    equity.

    \b
    Examples:
        # Month to date
        tradejournal equity -f trades.json -p mtd

        # Last 30 days of breakout trades on stocks or options
        tradejournal equity -f trades.json --days-back 30 -t breakout -a stock -a options

        # Last 20 trades
        tradejournal equity -f trades.json --trades-back 20

        # Two years, aggregated by month
        tradejournal equity -f trades.json --start-date 2023-01-01 --end-date 2024-12-31 -g per_month
    """
    try:
        spec = build_filter_spec(period.lower(), start_date, end_date, days_back, trades_back, tags, assets)
        system_config = load_system_config(config_file, log_level)
        trades = load_trades(trade_file)

        service = AnalyticsService(system_config.analytics_config())
        view = service.filtered_view(
            trades,
            spec,
            today=reference_day(today),
            granularity=Granularity(granularity.lower()) if granularity else None,
        )

        console.rule("[bold blue]Equity Curve[/bold blue]")
        console.print()
        console.print(f"[cyan]Period:[/cyan]          {spec.period.value}")
        if spec.tag_filter:
            console.print(f"[cyan]Tags (all):[/cyan]      {', '.join(sorted(spec.tag_filter))}")
        if spec.asset_filter:
            console.print(f"[cyan]Assets (any):[/cyan]    {', '.join(sorted(a.value for a in spec.asset_filter))}")
        console.print(f"[cyan]Starting Equity:[/cyan] {format_money(view.starting_equity)}")
        console.print()

        if view.is_empty:
            console.print("[yellow]No trades match the selection.[/yellow]")
            sys.exit(0)

        console.print(create_equity_table(view))
        console.print()
        console.print(f"[cyan]Trades:[/cyan]          {view.trade_count}")
        console.print(f"[cyan]Net P&L:[/cyan]         {format_signed_money(view.net_pnl)}")
        console.print(
            f"[cyan]Max Drawdown:[/cyan]    {format_money(view.max_drawdown)} ({format_pct(view.max_drawdown_pct)})"
        )
        sys.exit(0)

    except (TradeFileError, ValidationError, ValueError) as e:
        console.print()
        console.print(f"[bold red]✗ Equity failed:[/bold red] {e}")
        sys.exit(1)
