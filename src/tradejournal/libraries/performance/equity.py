"""Equity curve construction.

Folds date-sorted closed trades into equity points carrying running
cumulative equity, high-water mark and drawdown. The fold threads an
explicit immutable accumulator (`_FoldState`) through the sequence, so each
step is a pure function of the previous state and the next bucket.

Usage:
    >>> from tradejournal.libraries.performance.equity import build_equity_curve
    >>> curve = build_equity_curve(trades, Decimal("1000"), Granularity.PER_DAY)
    >>> [p.cumulative for p in curve.points]
    [Decimal('1100'), Decimal('1050'), Decimal('1250')]
    >>> curve.max_drawdown
    Decimal('50')
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

import structlog

from tradejournal.libraries.performance.calendar import month_key, start_of_week
from tradejournal.libraries.performance.models import DailyPnl, EquityCurve, EquityDataPoint, Granularity
from tradejournal.services.ledger.models import Trade

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class _Bucket:
    """Trades collapsed into one equity point."""

    start: date
    end: date | None
    pnl: Decimal
    trade_count: int
    win_count: int
    loss_count: int
    trade_index: int | None = None


@dataclass(frozen=True)
class _FoldState:
    """Running accumulator of the equity fold."""

    cumulative: Decimal
    peak: Decimal
    max_drawdown: Decimal = ZERO
    max_drawdown_pct: Decimal = ZERO
    underwater_since: date | None = None
    max_drawdown_start: date | None = None
    max_drawdown_end: date | None = None


def sort_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Chronological order: effective date, then intraday time (stable)."""
    return sorted(trades, key=lambda t: t.sort_key)


def daily_pnl_series(trades: Iterable[Trade]) -> tuple[DailyPnl, ...]:
    """
    Aggregate trades into net P&L per effective date, ascending.

    Args:
        trades: Closed trades in any order

    Returns:
        One DailyPnl per distinct effective date
    """
    days: dict[date, list[Trade]] = {}
    for trade in trades:
        days.setdefault(trade.effective_date, []).append(trade)

    return tuple(
        DailyPnl(
            date=day,
            pnl=sum((t.pnl for t in items), ZERO),
            trade_count=len(items),
            win_count=sum(1 for t in items if t.is_winner),
            loss_count=sum(1 for t in items if t.is_loser),
        )
        for day, items in sorted(days.items())
    )


def drawdown_pct(drawdown: Decimal, peak: Decimal) -> Decimal:
    """Drawdown as percentage of peak; 0 when the peak is not positive."""
    if peak <= ZERO:
        return ZERO
    return drawdown / peak * HUNDRED


def build_equity_curve(
    trades: Iterable[Trade],
    baseline_equity: Decimal,
    granularity: Granularity = Granularity.PER_DAY,
) -> EquityCurve:
    """
    Build the equity curve of a set of closed trades.

    Starting from `cumulative = peak = baseline_equity`, each point adds its
    net P&L, raises the peak on a new high and records the distance below
    the peak. Maximum drawdown (absolute and percent, tracked independently)
    only moves on a strictly greater value, so the first occurrence of a
    tied maximum is the one reported.

    Args:
        trades: Closed trades (any order; sorted here)
        baseline_equity: Account equity when the window opens
        granularity: One point per trade, day, week or month

    Returns:
        EquityCurve (empty points if no trades)
    """
    buckets = _bucketize(sort_trades(trades), granularity)

    state = _FoldState(cumulative=baseline_equity, peak=baseline_equity)
    points: list[EquityDataPoint] = []
    for bucket in buckets:
        state, point = _advance(state, bucket)
        points.append(point)

    last = points[-1] if points else None
    curve = EquityCurve(
        points=tuple(points),
        baseline_equity=baseline_equity,
        final_equity=state.cumulative,
        peak=state.peak,
        max_drawdown=state.max_drawdown,
        max_drawdown_pct=state.max_drawdown_pct,
        max_drawdown_start=state.max_drawdown_start,
        max_drawdown_end=state.max_drawdown_end,
        current_drawdown=last.drawdown if last else ZERO,
        current_drawdown_pct=last.drawdown_pct if last else ZERO,
    )

    logger.debug(
        "equity.curve.built",
        granularity=granularity.value,
        points=len(points),
        baseline=str(baseline_equity),
        max_drawdown=str(curve.max_drawdown),
    )
    return curve


def _advance(state: _FoldState, bucket: _Bucket) -> tuple[_FoldState, EquityDataPoint]:
    """One fold step: apply a bucket's P&L and emit its point."""
    cumulative = state.cumulative + bucket.pnl
    peak = cumulative if cumulative > state.peak else state.peak
    drawdown = peak - cumulative
    dd_pct = drawdown_pct(drawdown, peak)

    if drawdown == ZERO:
        underwater_since = None
    elif state.underwater_since is None:
        underwater_since = bucket.start
    else:
        underwater_since = state.underwater_since

    max_drawdown = state.max_drawdown
    max_drawdown_start = state.max_drawdown_start
    max_drawdown_end = state.max_drawdown_end
    if drawdown > max_drawdown:
        max_drawdown = drawdown
        max_drawdown_start = underwater_since
        max_drawdown_end = bucket.end or bucket.start

    point = EquityDataPoint(
        date=bucket.start,
        date_end=bucket.end,
        pnl=bucket.pnl,
        cumulative=cumulative,
        peak=peak,
        drawdown=drawdown,
        drawdown_pct=dd_pct,
        trade_count=bucket.trade_count,
        win_count=bucket.win_count,
        loss_count=bucket.loss_count,
        trade_index=bucket.trade_index,
    )
    next_state = _FoldState(
        cumulative=cumulative,
        peak=peak,
        max_drawdown=max_drawdown,
        max_drawdown_pct=dd_pct if dd_pct > state.max_drawdown_pct else state.max_drawdown_pct,
        underwater_since=underwater_since,
        max_drawdown_start=max_drawdown_start,
        max_drawdown_end=max_drawdown_end,
    )
    return next_state, point


def _bucketize(trades: Sequence[Trade], granularity: Granularity) -> list[_Bucket]:
    """Collapse sorted trades into buckets for the requested granularity."""
    if granularity == Granularity.PER_TRADE:
        return [
            _Bucket(
                start=trade.effective_date,
                end=None,
                pnl=trade.pnl,
                trade_count=1,
                win_count=1 if trade.is_winner else 0,
                loss_count=1 if trade.is_loser else 0,
                trade_index=index,
            )
            for index, trade in enumerate(trades, start=1)
        ]

    if granularity == Granularity.PER_DAY:
        return [
            _Bucket(
                start=day.date,
                end=None,
                pnl=day.pnl,
                trade_count=day.trade_count,
                win_count=day.win_count,
                loss_count=day.loss_count,
            )
            for day in daily_pnl_series(trades)
        ]

    if granularity == Granularity.PER_WEEK:
        key_of = start_of_week
    elif granularity == Granularity.PER_MONTH:
        key_of = month_key  # type: ignore[assignment]
    else:
        raise ValueError(f"Invalid granularity: {granularity}")

    groups: dict[object, list[DailyPnl]] = {}
    for day in daily_pnl_series(trades):
        groups.setdefault(key_of(day.date), []).append(day)

    return [
        _Bucket(
            start=days[0].date,
            end=days[-1].date,
            pnl=sum((d.pnl for d in days), ZERO),
            trade_count=sum(d.trade_count for d in days),
            win_count=sum(d.win_count for d in days),
            loss_count=sum(d.loss_count for d in days),
        )
        for _, days in sorted(groups.items(), key=lambda item: item[1][0].date)
    ]


def trades_for_point(trades: Iterable[Trade], point: EquityDataPoint) -> list[Trade]:
    """
    Re-filter trades covered by an equity point (drill-down).

    Args:
        trades: Trades the curve was built from
        point: Point selected by the user

    Returns:
        Trades whose effective date falls in [point.date, point.date_end],
        in chronological order. For per-trade points only the trade at
        `trade_index` is returned.
    """
    ordered = sort_trades(trades)
    if point.trade_index is not None:
        index = point.trade_index - 1
        return [ordered[index]] if 0 <= index < len(ordered) else []

    end = point.date_end or point.date
    return [t for t in ordered if point.date <= t.effective_date <= end]
