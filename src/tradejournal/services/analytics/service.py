"""
Analytics Service Implementation.

Orchestrates the performance analytics pipeline:

    ledger partition -> {period resolver, ratio calculator}
                     -> equity curve builder -> streak analyzer
    consistency scorer <- ratios + equity curve

Every computation is a deterministic pure function of an immutable snapshot
(closed trades, filter, configuration, reference day). Results are memoized
with an LRU cache keyed on that snapshot, so repeated dashboard refreshes
with unchanged inputs return the identical objects.
"""

from datetime import date
from decimal import Decimal
from functools import lru_cache
from typing import Iterable

from tradejournal.libraries.performance.calendar import same_month, same_week
from tradejournal.libraries.performance.consistency import score_consistency
from tradejournal.libraries.performance.equity import build_equity_curve, daily_pnl_series
from tradejournal.libraries.performance.metrics import calculate_ratios
from tradejournal.libraries.performance.models import AnalyticsConfig, Granularity, TradingStats
from tradejournal.libraries.performance.streaks import analyze_streaks
from tradejournal.libraries.performance.summaries import (
    breakdown_by_direction,
    breakdown_by_tag,
    breakdown_by_ticker,
    calculate_goal_progress,
    monthly_by_year,
    summarize_period,
    win_loss_days,
)
from tradejournal.services.analytics.filters import FilterSpec
from tradejournal.services.analytics.models import FilteredEquityView
from tradejournal.services.analytics.resolver import resolve
from tradejournal.services.ledger.models import Trade
from tradejournal.services.ledger.partition import partition
from tradejournal.system.log_system import LoggerFactory

logger = LoggerFactory.get_logger()

CACHE_SIZE = 32


def compute_trading_stats(closed: tuple[Trade, ...], config: AnalyticsConfig, today: date) -> TradingStats | None:
    """
    Compute the full dashboard snapshot over closed trades.

    Args:
        closed: Closed trades only
        config: Starting equity, consistency targets and goals
        today: Reference day for YTD/MTD/WTD summaries and goal projection

    Returns:
        TradingStats, or None when `closed` is empty ("no data" is not
        the same as "all-zero performance")
    """
    if not closed:
        return None

    daily = daily_pnl_series(closed)
    daily_values = [d.pnl for d in daily]

    curve = build_equity_curve(closed, config.starting_equity, Granularity.PER_DAY)
    streaks = analyze_streaks(daily)
    ratios = calculate_ratios(closed, curve.max_drawdown, daily_values)
    consistency = score_consistency(
        win_rate=ratios.win_rate,
        profit_factor=ratios.profit_factor,
        max_drawdown_pct=curve.max_drawdown_pct,
        risk_reward_ratio=ratios.risk_reward_ratio,
        weights=config.consistency,
    )
    win_days, loss_days = win_loss_days(daily_values)

    ytd = summarize_period(closed, lambda d: d.year == today.year)
    mtd = summarize_period(closed, lambda d: same_month(d, today))

    return TradingStats(
        all_time=summarize_period(closed, lambda d: True),
        ytd=ytd,
        last_year=summarize_period(closed, lambda d: d.year == today.year - 1),
        mtd=mtd,
        wtd=summarize_period(closed, lambda d: same_week(d, today)),
        equity_curve=curve.points,
        starting_equity=config.starting_equity,
        peak=curve.peak,
        max_drawdown=curve.max_drawdown,
        max_drawdown_pct=curve.max_drawdown_pct,
        max_drawdown_start=curve.max_drawdown_start,
        max_drawdown_end=curve.max_drawdown_end,
        current_drawdown=curve.current_drawdown,
        current_drawdown_pct=curve.current_drawdown_pct,
        current_streak=streaks.current,
        current_streak_type=streaks.current_type,
        longest_win_streak=streaks.longest_win,
        longest_loss_streak=streaks.longest_loss,
        ratios=ratios,
        win_days=win_days,
        loss_days=loss_days,
        trading_days=len(daily),
        consistency=consistency,
        monthly_by_year=monthly_by_year(closed),
        by_ticker=breakdown_by_ticker(closed),
        by_direction=breakdown_by_direction(closed),
        by_tag=breakdown_by_tag(closed),
        goal_progress=calculate_goal_progress(ytd.pnl, mtd.pnl, config.goals, today),
        as_of=today,
    )


def compute_filtered_view(
    closed: tuple[Trade, ...],
    spec: FilterSpec,
    starting_equity: Decimal,
    today: date,
    granularity: Granularity | None = None,
) -> FilteredEquityView:
    """
    Resolve `spec` and build the filtered equity view.

    Args:
        closed: Closed trades only
        spec: Period and tag/asset selection
        starting_equity: Configured account starting equity
        today: Reference day for calendar periods
        granularity: Override of the period's natural granularity
            (e.g. PER_WEEK for multi-year ranges)

    Returns:
        FilteredEquityView starting at the reconstructed baseline equity
    """
    resolved = resolve(closed, spec, starting_equity, today)
    effective_granularity = granularity or resolved.granularity
    curve = build_equity_curve(resolved.filtered, resolved.baseline_equity, effective_granularity)

    return FilteredEquityView(
        data=curve.points,
        date_range=resolved.date_range,
        trade_count=len(resolved.filtered),
        starting_equity=resolved.baseline_equity,
        granularity=effective_granularity,
        max_drawdown=curve.max_drawdown,
        max_drawdown_pct=curve.max_drawdown_pct,
    )


_cached_trading_stats = lru_cache(maxsize=CACHE_SIZE)(compute_trading_stats)
_cached_filtered_view = lru_cache(maxsize=CACHE_SIZE)(compute_filtered_view)


class AnalyticsService:
    """
    Performance analytics over a trade journal.

    Responsibilities:
    - Partition trades and drop OPEN ones before any computation
    - Produce lifetime TradingStats and filtered equity views
    - Memoize results per immutable input snapshot

    Does NOT:
    - Mutate trades or previous results
    - Validate configuration ranges (SystemConfig does this)

    Example:
        >>> service = AnalyticsService(AnalyticsConfig(starting_equity=Decimal("10000")))
        >>> stats = service.trading_stats(trades, today=date(2025, 3, 14))
        >>> stats.consistency.grade
        'B'
    """

    def __init__(self, config: AnalyticsConfig | None = None) -> None:
        """
        Initialize analytics service.

        Args:
            config: Starting equity, consistency targets and goals.
                Default: AnalyticsConfig() (zero starting equity, default targets)
        """
        self._config = config if config is not None else AnalyticsConfig()

    @property
    def config(self) -> AnalyticsConfig:
        """Analytics configuration in use."""
        return self._config

    def with_config(self, config: AnalyticsConfig) -> "AnalyticsService":
        """New service using `config` (e.g. after consistency weights change)."""
        return AnalyticsService(config)

    @staticmethod
    def _closed_snapshot(trades: Iterable[Trade]) -> tuple[Trade, ...]:
        return partition(trades).closed

    def trading_stats(self, trades: Iterable[Trade], today: date | None = None) -> TradingStats | None:
        """
        Lifetime statistics over closed trades.

        Returns:
            TradingStats, or None when there is no closed trade
        """
        closed = self._closed_snapshot(trades)
        stats = _cached_trading_stats(closed, self._config, today or date.today())

        if stats is None:
            logger.debug("analytics.stats.empty")
        else:
            logger.debug(
                "analytics.stats.computed",
                closed_trades=len(closed),
                consistency_score=stats.consistency.score,
                max_drawdown=str(stats.max_drawdown),
            )
        return stats

    def filtered_view(
        self,
        trades: Iterable[Trade],
        spec: FilterSpec,
        today: date | None = None,
        granularity: Granularity | None = None,
    ) -> FilteredEquityView:
        """
        Equity curve of the trades selected by `spec`.

        Returns:
            FilteredEquityView (no data points when nothing matched)
        """
        closed = self._closed_snapshot(trades)
        view = _cached_filtered_view(
            closed,
            spec,
            self._config.starting_equity,
            today or date.today(),
            granularity,
        )
        logger.debug(
            "analytics.view.computed",
            period=spec.period.value,
            trade_count=view.trade_count,
            starting_equity=str(view.starting_equity),
        )
        return view

    @staticmethod
    def cache_info() -> dict[str, object]:
        """Hit/miss statistics of the result caches."""
        return {
            "trading_stats": _cached_trading_stats.cache_info(),
            "filtered_view": _cached_filtered_view.cache_info(),
        }

    @staticmethod
    def clear_cache() -> None:
        """Drop all memoized results."""
        _cached_trading_stats.cache_clear()
        _cached_filtered_view.cache_clear()
