"""Rich table formatters for CLI output."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from rich.table import Table

from tradejournal.libraries.performance.models import (
    BreakdownRow,
    ConsistencyScore,
    RatioSummary,
    TradingStats,
    YearlyPnl,
)
from tradejournal.services.analytics.models import FilteredEquityView

CENT = Decimal("0.01")

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_money(value: Decimal) -> str:
    """Format a currency amount: 1234.5 -> "$1,234.50", -50 -> "-$50.00"."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_signed_money(value: Decimal) -> str:
    """Currency amount colored by sign."""
    if value > 0:
        return f"[green]{format_money(value)}[/green]"
    if value < 0:
        return f"[red]{format_money(value)}[/red]"
    return format_money(value)


def format_pct(value: Decimal) -> str:
    """Format a percentage: 12.345 -> "12.35%"."""
    return f"{value.quantize(CENT, rounding=ROUND_HALF_UP)}%"


def _ratio(ratios: RatioSummary, name: str) -> str:
    value: Decimal = getattr(ratios, name)
    if name in ratios.bounded:
        return f"{value:.2f} [dim](max)[/dim]"
    return f"{value:.2f}"


def create_summary_table(stats: TradingStats) -> Table:
    """
    Create a Rich table of period P&L and equity figures.

    Args:
        stats: Dashboard snapshot

    Returns:
        Configured Rich Table
    """
    table = Table(title=f"Performance as of {stats.as_of}")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_column("Trades", style="dim", justify="right")

    for label, summary in (
        ("All Time", stats.all_time),
        ("Year to Date", stats.ytd),
        ("Last Year", stats.last_year),
        ("Month to Date", stats.mtd),
        ("Week to Date", stats.wtd),
    ):
        table.add_row(label, format_signed_money(summary.pnl), str(summary.trades))

    table.add_section()
    table.add_row("Starting Equity", format_money(stats.starting_equity), "")
    table.add_row("Peak Equity", format_money(stats.peak), "")

    drawdown_window = ""
    if stats.max_drawdown_start and stats.max_drawdown_end:
        drawdown_window = f"{stats.max_drawdown_start} to {stats.max_drawdown_end}"
    table.add_row(
        "Max Drawdown",
        f"{format_money(stats.max_drawdown)} ({format_pct(stats.max_drawdown_pct)})",
        drawdown_window,
    )
    table.add_row(
        "Current Drawdown",
        f"{format_money(stats.current_drawdown)} ({format_pct(stats.current_drawdown_pct)})",
        "",
    )
    table.add_row("Trading Days", str(stats.trading_days), f"{stats.win_days}W / {stats.loss_days}L")

    if stats.goal_progress is not None:
        goal = stats.goal_progress
        table.add_section()
        table.add_row("Yearly Goal", format_pct(goal.yearly_progress_pct), "")
        table.add_row("Monthly Goal", format_pct(goal.monthly_progress_pct), "")
        status = ""
        if goal.on_track is not None:
            status = "[green]on track[/green]" if goal.on_track else "[yellow]behind[/yellow]"
        table.add_row("Projected Year End", format_money(goal.projected_year_end), status)

    return table


def create_ratio_table(ratios: RatioSummary) -> Table:
    """
    Create a Rich table of lifetime trade ratios.

    Ratios reported at their cap (no losses, no drawdown) are marked "(max)".
    """
    table = Table(title="Trade Statistics")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    table.add_row("Total Trades", str(ratios.total_trades))
    table.add_row(
        "Winners / Losers / Flat",
        f"{ratios.winning_trades} / {ratios.losing_trades} / {ratios.break_even_trades}",
    )
    table.add_row("Win Rate", format_pct(ratios.win_rate))
    table.add_row("Net P&L", format_signed_money(ratios.net_pnl))
    table.add_row("Gross Profit", format_money(ratios.gross_profit))
    table.add_row("Gross Loss", format_money(ratios.gross_loss))
    table.add_row("Profit Factor", _ratio(ratios, "profit_factor"))
    table.add_row("Average Win", format_money(ratios.avg_win))
    table.add_row("Average Loss", format_money(ratios.avg_loss))
    table.add_row("Risk / Reward", _ratio(ratios, "risk_reward_ratio"))
    table.add_row("Expectancy", format_signed_money(ratios.expectancy))
    table.add_row("Recovery Factor", _ratio(ratios, "recovery_factor"))
    table.add_row("Sharpe Ratio", f"{ratios.sharpe_ratio:.2f}")
    table.add_row("Largest Win", format_money(ratios.largest_win))
    table.add_row("Largest Loss", format_money(ratios.largest_loss))
    return table


def create_consistency_table(score: ConsistencyScore) -> Table:
    """Create a Rich table of the consistency sub-scores and grade."""
    grade_style = {"A": "green", "B": "green", "C": "yellow", "D": "red", "F": "red"}[score.grade]

    table = Table(title="Consistency")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Points", justify="right")

    table.add_row("Win Rate", f"{score.win_rate_score:.2f} / 25")
    table.add_row("Profit Factor", f"{score.profit_factor_score:.2f} / 25")
    table.add_row("Drawdown", f"{score.drawdown_score:.2f} / 25")
    table.add_row("Risk / Reward", f"{score.risk_reward_score:.2f} / 25")
    table.add_section()
    table.add_row("Score", f"[bold]{score.score}[/bold] / 100")
    table.add_row("Grade", f"[bold {grade_style}]{score.grade}[/bold {grade_style}]")
    return table


def create_streak_table(stats: TradingStats) -> Table:
    """Create a Rich table of win/loss day streaks."""
    table = Table(title="Streaks (days)")
    table.add_column("Streak", style="cyan", no_wrap=True)
    table.add_column("Length", justify="right")

    if stats.current_streak_type is None:
        current = "-"
    else:
        style = "green" if stats.current_streak_type == "win" else "red"
        current = f"[{style}]{stats.current_streak} {stats.current_streak_type}[/{style}]"

    table.add_row("Current", current)
    table.add_row("Longest Win", str(stats.longest_win_streak))
    table.add_row("Longest Loss", str(stats.longest_loss_streak))
    return table


def create_breakdown_table(title: str, rows: Iterable[BreakdownRow]) -> Table:
    """
    Create a Rich table of trades grouped by ticker, direction or tag.

    Args:
        title: Table title (e.g. "By Ticker")
        rows: Breakdown rows

    Returns:
        Configured Rich Table
    """
    table = Table(title=title)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("P&L", justify="right")

    for row in rows:
        table.add_row(row.key, str(row.count), format_pct(row.win_rate), format_signed_money(row.pnl))
    return table


def create_monthly_table(monthly: Iterable[YearlyPnl]) -> Table:
    """Create a Rich year x month P&L grid."""
    table = Table(title="Monthly P&L")
    table.add_column("Year", style="cyan", no_wrap=True)
    for name in MONTH_NAMES:
        table.add_column(name, justify="right")
    table.add_column("Total", justify="right", style="bold")

    for row in monthly:
        cells = [format_signed_money(pnl) if pnl is not None else "[dim]-[/dim]" for pnl in row.months]
        table.add_row(str(row.year), *cells, format_signed_money(row.total))
    return table


def create_equity_table(view: FilteredEquityView) -> Table:
    """
    Create a Rich table of a filtered equity curve.

    Args:
        view: Filtered equity view

    Returns:
        Configured Rich Table (one row per point)
    """
    window = f"{view.date_range.start} to {view.date_range.end}" if view.date_range else "no trades"
    table = Table(title=f"Equity Curve ({view.granularity.value}, {window})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("P&L", justify="right")
    table.add_column("Equity", justify="right")
    table.add_column("Peak", justify="right", style="dim")
    table.add_column("Drawdown", justify="right")
    table.add_column("Trades", justify="right", style="dim")

    for idx, point in enumerate(view.data, start=1):
        label = str(point.date)
        if point.date_end is not None and point.date_end != point.date:
            label = f"{point.date} to {point.date_end}"

        drawdown = "-"
        if point.drawdown > 0:
            drawdown = f"[red]{format_money(point.drawdown)} ({format_pct(point.drawdown_pct)})[/red]"

        table.add_row(
            str(point.trade_index or idx),
            label,
            format_signed_money(point.pnl),
            format_money(point.cumulative),
            format_money(point.peak),
            drawdown,
            str(point.trade_count),
        )
    return table
