"""Performance analytics library for trading journals.

This library provides the pure computations behind the performance dashboard:

1. **Models** (`models.py`): Pydantic data structures
   - EquityDataPoint / EquityCurve: Running equity with drawdown tracking
   - StreakSummary: Current and longest win/loss day streaks
   - RatioSummary: Lifetime ratios (profit factor, expectancy, Sharpe, ...)
   - ConsistencyScore / ConsistencyWeights: Composite 0-100 score
   - TradingStats: Complete dashboard snapshot

2. **Equity** (`equity.py`): Equity curve fold (per trade/day/week/month)

3. **Streaks** (`streaks.py`): Day-level win/loss streak detection

4. **Metrics** (`metrics.py`): Pure ratio functions with bounded sentinels

5. **Consistency** (`consistency.py`): Sub-scores, composite and grade

6. **Summaries** (`summaries.py`): Period totals, breakdowns, goal progress

Usage:
    >>> from tradejournal.libraries.performance import build_equity_curve, analyze_streaks
    >>> curve = build_equity_curve(closed_trades, Decimal("10000"))
    >>> streaks = analyze_streaks(daily_pnl_series(closed_trades))

Design Principles:
    - Decimal precision for financial calculations
    - Explicit edge case handling (zero trades, no losses, no drawdown)
    - Immutable outputs: every computation returns fresh models
"""

from tradejournal.libraries.performance.consistency import consistency_grade, score_consistency
from tradejournal.libraries.performance.equity import (
    build_equity_curve,
    daily_pnl_series,
    sort_trades,
    trades_for_point,
)
from tradejournal.libraries.performance.metrics import (
    BOUNDED_RATIO_CAP,
    bounded_ratio,
    calculate_expectancy,
    calculate_profit_factor,
    calculate_ratios,
    calculate_recovery_factor,
    calculate_risk_reward_ratio,
    calculate_sharpe_ratio,
    calculate_win_rate,
)
from tradejournal.libraries.performance.models import (
    AnalyticsConfig,
    BreakdownRow,
    ConsistencyScore,
    ConsistencyWeights,
    DailyPnl,
    DateRange,
    EquityCurve,
    EquityDataPoint,
    GoalConfig,
    GoalProgress,
    Granularity,
    PeriodSummary,
    RatioSummary,
    StreakSummary,
    TradingStats,
    YearlyPnl,
)
from tradejournal.libraries.performance.streaks import analyze_streaks

__all__ = [
    # Models
    "AnalyticsConfig",
    "BreakdownRow",
    "ConsistencyScore",
    "ConsistencyWeights",
    "DailyPnl",
    "DateRange",
    "EquityCurve",
    "EquityDataPoint",
    "GoalConfig",
    "GoalProgress",
    "Granularity",
    "PeriodSummary",
    "RatioSummary",
    "StreakSummary",
    "TradingStats",
    "YearlyPnl",
    # Equity
    "build_equity_curve",
    "daily_pnl_series",
    "sort_trades",
    "trades_for_point",
    # Streaks
    "analyze_streaks",
    # Metrics
    "BOUNDED_RATIO_CAP",
    "bounded_ratio",
    "calculate_expectancy",
    "calculate_profit_factor",
    "calculate_ratios",
    "calculate_recovery_factor",
    "calculate_risk_reward_ratio",
    "calculate_sharpe_ratio",
    "calculate_win_rate",
    # Consistency
    "consistency_grade",
    "score_consistency",
]
