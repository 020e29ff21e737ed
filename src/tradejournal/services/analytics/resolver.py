"""Period & filter resolution.

Turns closed trades plus a FilterSpec into the trade subset of the filtered
equity view, the calendar window it renders over and the equity baseline at
the instant that window opens.

Baseline reconstruction:
    baseline = starting_equity + Σ pnl of every closed trade (tag/asset
    filters ignored) whose effective date is strictly before the window
    start. A filtered curve therefore starts where the unfiltered account
    actually stood, instead of restarting at the configured starting equity.

    Window start per period:
        all          -> none (baseline == starting equity)
        ytd          -> January 1st of today's year
        mtd          -> first day of today's month
        wtd          -> Sunday of today's week
        daily        -> today
        date_range   -> range start
        days_back=N  -> today - N days
        trades_back  -> effective date of the earliest selected trade
                        (no selection: all closed trades count, i.e. the
                        account's current equity)

    The baseline works on whole days. Unselected trades closed on the same
    day as the window start are excluded even when timed before the first
    selected trade, so a `trades_back` window that opens mid-day starts from
    the equity at the close of the previous day.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Iterable, Sequence

import structlog
from pydantic import BaseModel, ConfigDict

from tradejournal.libraries.performance.calendar import (
    ONE_DAY,
    end_of_week,
    same_month,
    same_week,
    start_of_month,
    start_of_week,
    start_of_year,
)
from tradejournal.libraries.performance.equity import sort_trades
from tradejournal.libraries.performance.models import DateRange, Granularity
from tradejournal.services.analytics.filters import FilterSpec, Period, apply_filters
from tradejournal.services.ledger.models import Trade

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


class ResolvedPeriod(BaseModel):
    """
    Output of period resolution.

    Attributes:
        filtered: Selected trades, chronological
        date_range: Calendar window to render (None if the window is
            defined by the trades and nothing was selected)
        baseline_equity: Account equity when the window opens
        granularity: Per-trade for week-to-date, per-day otherwise
    """

    model_config = ConfigDict(frozen=True)

    filtered: tuple[Trade, ...]
    date_range: DateRange | None
    baseline_equity: Decimal
    granularity: Granularity

    @property
    def is_empty(self) -> bool:
        """No trade survived filtering."""
        return not self.filtered


def baseline_equity(closed: Iterable[Trade], starting_equity: Decimal, window_start: date | None) -> Decimal:
    """
    Equity at the instant a window opens.

    Args:
        closed: ALL closed trades (not tag/asset filtered)
        starting_equity: Configured account starting equity
        window_start: First day of the window; None means no prior trades

    Returns:
        starting_equity plus P&L of every trade strictly before window_start
    """
    if window_start is None:
        return starting_equity
    return starting_equity + sum((t.pnl for t in closed if t.effective_date < window_start), ZERO)


def _padded_span(trades: Sequence[Trade]) -> DateRange | None:
    """One day before the earliest to one day after the latest trade."""
    if not trades:
        return None
    days = [t.effective_date for t in trades]
    return DateRange(start=min(days) - ONE_DAY, end=max(days) + ONE_DAY)


def _calendar_window(spec: FilterSpec, today: date) -> tuple[Callable[[date], bool], date, DateRange | None]:
    """Predicate, window start and render range for calendar-aligned periods."""
    period = spec.period

    if period == Period.YTD:
        start = start_of_year(today)
        return (lambda d: d.year == today.year), start, DateRange(start=start, end=today + ONE_DAY)

    if period == Period.MTD:
        start = start_of_month(today)
        return (lambda d: same_month(d, today)), start, DateRange(start=start, end=today + ONE_DAY)

    if period == Period.WTD:
        start = start_of_week(today)
        return (lambda d: same_week(d, today)), start, DateRange(start=start, end=end_of_week(today))

    if period == Period.DAILY:
        return (lambda d: d == today), today, DateRange(start=today, end=today)

    if spec.date_range is not None:
        window = spec.date_range
        return window.contains, window.start, window

    if spec.days_back is not None:
        start = today - timedelta(days=spec.days_back)
        if spec.days_back == 0:
            return (lambda d: False), start, None
        return (lambda d: d >= start), start, DateRange(start=start, end=today)

    raise ValueError(f"No calendar window for filter: {spec!r}")


def resolve(
    closed: Sequence[Trade],
    spec: FilterSpec,
    starting_equity: Decimal = ZERO,
    today: date | None = None,
) -> ResolvedPeriod:
    """
    Resolve a FilterSpec against closed trades.

    Steps:
        1. Asset filter (OR), then tag filter (AND)
        2. Period predicate on each trade's effective date
        3. Render range for the period
        4. Baseline equity from all closed trades before the window

    Args:
        closed: Closed trades only (see ledger.partition)
        spec: Period and tag/asset selection
        starting_equity: Configured account starting equity
        today: Reference day for calendar periods (default: local today)

    Returns:
        ResolvedPeriod

    Example:
        >>> resolved = resolve(closed, FilterSpec(period=Period.MTD), Decimal("10000"), date(2025, 3, 14))
        >>> resolved.date_range
        DateRange(start=datetime.date(2025, 3, 1), end=datetime.date(2025, 3, 15))
    """
    if today is None:
        today = date.today()

    candidates = apply_filters(closed, spec)
    granularity = Granularity.PER_TRADE if spec.period == Period.WTD else Granularity.PER_DAY

    if spec.period == Period.ALL:
        filtered = sort_trades(candidates)
        date_range = _padded_span(filtered)
        baseline = baseline_equity(closed, starting_equity, None)

    elif spec.period == Period.CUSTOM and spec.trades_back is not None:
        newest_first = sorted(candidates, key=lambda t: t.sort_key, reverse=True)
        filtered = sort_trades(newest_first[: spec.trades_back])
        date_range = _padded_span(filtered)
        if filtered:
            baseline = baseline_equity(closed, starting_equity, filtered[0].effective_date)
        else:
            baseline = starting_equity + sum((t.pnl for t in closed), ZERO)

    else:
        predicate, window_start, date_range = _calendar_window(spec, today)
        filtered = sort_trades(t for t in candidates if predicate(t.effective_date))
        baseline = baseline_equity(closed, starting_equity, window_start)

    logger.debug(
        "analytics.period.resolved",
        period=spec.period.value,
        candidates=len(candidates),
        selected=len(filtered),
        baseline=str(baseline),
        date_range=f"{date_range.start}..{date_range.end}" if date_range else None,
    )

    return ResolvedPeriod(
        filtered=tuple(filtered),
        date_range=date_range,
        baseline_equity=baseline,
        granularity=granularity,
    )
