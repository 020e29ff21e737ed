"""Period summaries, breakdowns and goal progress.

Aggregations shown next to the equity curve on the performance dashboard:
calendar period totals, year-over-year monthly P&L, per ticker / direction /
tag breakdowns and progress toward yearly and monthly P&L goals.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from tradejournal.libraries.performance.calendar import day_of_year
from tradejournal.libraries.performance.models import BreakdownRow, GoalConfig, GoalProgress, PeriodSummary, YearlyPnl
from tradejournal.services.ledger.models import Trade

ZERO = Decimal("0")
HUNDRED = Decimal("100")
DAYS_PER_YEAR = Decimal("365")


def summarize_period(trades: Iterable[Trade], predicate: Callable[[date], bool]) -> PeriodSummary:
    """
    Net P&L and count of trades whose effective date satisfies `predicate`.

    Example:
        >>> summarize_period(trades, lambda d: d.year == 2025)
        PeriodSummary(pnl=Decimal('1520.00'), trades=37)
    """
    selected = [t for t in trades if predicate(t.effective_date)]
    return PeriodSummary(pnl=sum((t.pnl for t in selected), ZERO), trades=len(selected))


def monthly_by_year(trades: Iterable[Trade]) -> tuple[YearlyPnl, ...]:
    """Net P&L per month of each year with trades, oldest year first."""
    table: dict[int, dict[int, Decimal]] = {}
    for trade in trades:
        day = trade.effective_date
        months = table.setdefault(day.year, {})
        months[day.month] = months.get(day.month, ZERO) + trade.pnl
    return tuple(
        YearlyPnl(year=year, months=tuple(months.get(m) for m in range(1, 13)))
        for year, months in sorted(table.items())
    )


def _breakdown(trades: Iterable[Trade], keys_of: Callable[[Trade], Iterable[str]]) -> tuple[BreakdownRow, ...]:
    counts: dict[str, int] = defaultdict(int)
    pnl: dict[str, Decimal] = defaultdict(lambda: ZERO)
    wins: dict[str, int] = defaultdict(int)

    for trade in trades:
        for key in keys_of(trade):
            counts[key] += 1
            pnl[key] += trade.pnl
            if trade.is_winner:
                wins[key] += 1

    return tuple(BreakdownRow(key=key, count=counts[key], pnl=pnl[key], wins=wins[key]) for key in sorted(counts))


def breakdown_by_ticker(trades: Iterable[Trade]) -> tuple[BreakdownRow, ...]:
    """Aggregate trades per ticker (sorted by ticker)."""
    return _breakdown(trades, lambda t: (t.ticker,))


def breakdown_by_direction(trades: Iterable[Trade]) -> tuple[BreakdownRow, ...]:
    """Aggregate trades per direction (LONG / SHORT)."""
    return _breakdown(trades, lambda t: (t.direction.value,))


def breakdown_by_tag(trades: Iterable[Trade]) -> tuple[BreakdownRow, ...]:
    """Aggregate trades per tag; a trade with several tags counts in each."""
    return _breakdown(trades, lambda t: sorted(t.tags))


def calculate_goal_progress(
    ytd_pnl: Decimal,
    mtd_pnl: Decimal,
    goals: GoalConfig,
    today: date,
) -> GoalProgress | None:
    """
    Progress toward yearly and monthly P&L goals.

    Year-end projection extrapolates the year-to-date P&L linearly:
    ytd_pnl / day_of_year * 365. `on_track` compares that projection with the
    yearly goal and is None when only a monthly goal is set.

    Args:
        ytd_pnl: Year-to-date net P&L
        mtd_pnl: Month-to-date net P&L
        goals: Configured goals (0 disables a goal)
        today: Reference day

    Returns:
        GoalProgress, or None when no goal is configured
    """
    if goals.yearly_pnl_goal <= ZERO and goals.monthly_pnl_goal <= ZERO:
        return None

    yearly = ytd_pnl / goals.yearly_pnl_goal * HUNDRED if goals.yearly_pnl_goal > ZERO else ZERO
    monthly = mtd_pnl / goals.monthly_pnl_goal * HUNDRED if goals.monthly_pnl_goal > ZERO else ZERO
    projected = ytd_pnl / Decimal(day_of_year(today)) * DAYS_PER_YEAR

    return GoalProgress(
        yearly_progress_pct=min(yearly, HUNDRED),
        monthly_progress_pct=min(monthly, HUNDRED),
        projected_year_end=projected,
        on_track=projected >= goals.yearly_pnl_goal if goals.yearly_pnl_goal > ZERO else None,
    )


def win_loss_days(daily_pnl: Sequence[Decimal]) -> tuple[int, int]:
    """Number of days with positive and with negative net P&L."""
    return sum(1 for v in daily_pnl if v > ZERO), sum(1 for v in daily_pnl if v < ZERO)
