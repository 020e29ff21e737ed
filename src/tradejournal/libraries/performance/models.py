"""Performance analytics data models.

Pydantic models for the structures produced by the analytics engine and
consumed by a presentation layer (charts, dashboards, CLI tables).
All models are frozen: every recomputation produces fresh instances.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

StreakType = Literal["win", "loss"]
Grade = Literal["A", "B", "C", "D", "F"]


class Granularity(str, Enum):
    """Equity curve point granularity."""

    PER_TRADE = "per_trade"  # One point per trade (week-to-date view)
    PER_DAY = "per_day"  # One point per effective date
    PER_WEEK = "per_week"  # Sunday-start week buckets (long ranges)
    PER_MONTH = "per_month"  # Calendar month buckets (long ranges)


class DateRange(BaseModel):
    """Inclusive calendar interval."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def validate_order(self) -> "DateRange":
        """Validate start does not come after end."""
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must be on or before end ({self.end})")
        return self

    def contains(self, day: date) -> bool:
        """True if `day` falls inside the interval (inclusive)."""
        return self.start <= day <= self.end


class DailyPnl(BaseModel):
    """Net P&L of all closed trades sharing one effective date."""

    model_config = ConfigDict(frozen=True)

    date: date
    pnl: Decimal
    trade_count: int = 0
    win_count: int = 0
    loss_count: int = 0


class EquityDataPoint(BaseModel):
    """
    Single point on the equity curve.

    Invariants (per consecutive points i-1, i):
        cumulative[i] = cumulative[i-1] + pnl[i]
        peak[i] = max(peak[i-1], cumulative[i])
        drawdown[i] = max(0, peak[i] - cumulative[i])

    `date_end` is set only for aggregated buckets (week/month) and
    `trade_index` only for per-trade points; together with `date` they
    identify which trades a point covers (see `trades_for_point`).
    """

    model_config = ConfigDict(frozen=True)

    date: date
    date_end: date | None = None
    pnl: Decimal
    cumulative: Decimal
    peak: Decimal
    drawdown: Decimal
    drawdown_pct: Decimal
    trade_count: int
    win_count: int
    loss_count: int
    trade_index: int | None = None  # 1-based, per-trade mode only


class EquityCurve(BaseModel):
    """
    Equity curve with its drawdown summary.

    `max_drawdown_start` is the first day underwater of the deepest drawdown
    and `max_drawdown_end` the day that depth was reached.
    """

    model_config = ConfigDict(frozen=True)

    points: tuple[EquityDataPoint, ...] = ()
    baseline_equity: Decimal
    final_equity: Decimal
    peak: Decimal
    max_drawdown: Decimal = Decimal("0")
    max_drawdown_pct: Decimal = Decimal("0")
    max_drawdown_start: date | None = None
    max_drawdown_end: date | None = None
    current_drawdown: Decimal = Decimal("0")
    current_drawdown_pct: Decimal = Decimal("0")

    @property
    def is_empty(self) -> bool:
        """No points were produced."""
        return not self.points

    def __len__(self) -> int:
        """Number of points on the curve."""
        return len(self.points)


class StreakSummary(BaseModel):
    """Win/loss day streaks."""

    model_config = ConfigDict(frozen=True)

    current: int = 0
    current_type: StreakType | None = None
    longest_win: int = 0
    longest_loss: int = 0


class RatioSummary(BaseModel):
    """
    Lifetime trade statistics over all closed trades.

    Ratios whose denominator is zero are reported at a bounded value
    (see `metrics.BOUNDED_RATIO_CAP`) or zero; `bounded` lists the names of
    ratios that were capped so a renderer can display them as "n/a" or "max".
    """

    model_config = ConfigDict(frozen=True)

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    break_even_trades: int = 0
    gross_profit: Decimal = Decimal("0")
    gross_loss: Decimal = Decimal("0")  # Positive number
    net_pnl: Decimal = Decimal("0")
    win_rate: Decimal = Decimal("0")  # Percentage 0-100
    profit_factor: Decimal = Decimal("0")
    avg_win: Decimal = Decimal("0")
    avg_loss: Decimal = Decimal("0")  # Positive number
    risk_reward_ratio: Decimal = Decimal("0")
    expectancy: Decimal = Decimal("0")
    recovery_factor: Decimal = Decimal("0")
    sharpe_ratio: Decimal = Decimal("0")
    largest_win: Decimal = Decimal("0")
    largest_loss: Decimal = Decimal("0")  # Negative number (or zero)
    bounded: tuple[str, ...] = ()


class ConsistencyWeights(BaseModel):
    """
    Targets the consistency sub-scores are measured against.

    Not validated here: a target <= 0 simply yields a sub-score of 0.
    Range checks belong to the configuration layer (`SystemConfig`).
    """

    model_config = ConfigDict(frozen=True)

    win_rate_target: Decimal = Field(default=Decimal("60"), description="Win rate (%) earning the full 25 points")
    profit_factor_target: Decimal = Field(default=Decimal("2.0"), description="Profit factor earning 25 points")
    max_drawdown_limit: Decimal = Field(default=Decimal("25"), description="Max drawdown (%) that scores 0")
    risk_reward_target: Decimal = Field(default=Decimal("1.5"), description="Risk/reward earning 25 points")


class ConsistencyScore(BaseModel):
    """Composite 0-100 score built from four 0-25 sub-scores."""

    model_config = ConfigDict(frozen=True)

    win_rate_score: Decimal
    profit_factor_score: Decimal
    drawdown_score: Decimal
    risk_reward_score: Decimal
    score: int
    grade: Grade


class GoalConfig(BaseModel):
    """P&L goals; 0 disables a goal."""

    model_config = ConfigDict(frozen=True)

    yearly_pnl_goal: Decimal = Decimal("0")
    monthly_pnl_goal: Decimal = Decimal("0")


class GoalProgress(BaseModel):
    """Progress toward the configured P&L goals."""

    model_config = ConfigDict(frozen=True)

    yearly_progress_pct: Decimal  # Capped at 100
    monthly_progress_pct: Decimal  # Capped at 100
    projected_year_end: Decimal
    on_track: bool | None = None  # None without a yearly goal


class PeriodSummary(BaseModel):
    """Net P&L and trade count of one calendar period."""

    model_config = ConfigDict(frozen=True)

    pnl: Decimal = Decimal("0")
    trades: int = 0


class BreakdownRow(BaseModel):
    """Aggregate of trades sharing a ticker, direction or tag."""

    model_config = ConfigDict(frozen=True)

    key: str
    count: int
    pnl: Decimal
    wins: int

    @property
    def win_rate(self) -> Decimal:
        """Win rate as percentage (0-100)."""
        if self.count == 0:
            return Decimal("0")
        return Decimal(self.wins) / Decimal(self.count) * Decimal("100")


class YearlyPnl(BaseModel):
    """
    Net P&L of each calendar month of one year.

    Attributes:
        year: Calendar year
        months: Twelve entries, January first; None for a month without trades
    """

    model_config = ConfigDict(frozen=True)

    year: int
    months: tuple[Decimal | None, ...] = Field(min_length=12, max_length=12)

    def month(self, month: int) -> Decimal | None:
        """Net P&L of `month` (1-12), None if nothing closed that month."""
        return self.months[month - 1]

    @property
    def total(self) -> Decimal:
        """Net P&L of the whole year."""
        return sum((pnl for pnl in self.months if pnl is not None), Decimal("0"))


class AnalyticsConfig(BaseModel):
    """
    Everything besides the trades that the analytics engine depends on.

    Hashable (frozen, nested frozen models) so it can key the result cache.
    """

    model_config = ConfigDict(frozen=True)

    starting_equity: Decimal = Decimal("0")
    consistency: ConsistencyWeights = Field(default_factory=ConsistencyWeights)
    goals: GoalConfig = Field(default_factory=GoalConfig)


class TradingStats(BaseModel):
    """
    Complete performance snapshot of a journal.

    Recomputed whenever the closed trades, starting equity or consistency
    weights change; never mutated in place. Ratios and streaks are lifetime
    values over all closed trades; the equity curve is the all-time per-day
    curve starting at the configured starting equity.
    """

    model_config = ConfigDict(frozen=True)

    # Period summaries
    all_time: PeriodSummary
    ytd: PeriodSummary
    last_year: PeriodSummary
    mtd: PeriodSummary
    wtd: PeriodSummary

    # Equity & drawdown
    equity_curve: tuple[EquityDataPoint, ...]
    starting_equity: Decimal
    peak: Decimal
    max_drawdown: Decimal
    max_drawdown_pct: Decimal
    max_drawdown_start: date | None = None
    max_drawdown_end: date | None = None
    current_drawdown: Decimal
    current_drawdown_pct: Decimal

    # Streaks
    current_streak: int
    current_streak_type: StreakType | None = None
    longest_win_streak: int
    longest_loss_streak: int

    # Ratios
    ratios: RatioSummary
    win_days: int
    loss_days: int
    trading_days: int

    # Consistency
    consistency: ConsistencyScore

    # Supplementary views
    monthly_by_year: tuple[YearlyPnl, ...] = ()
    by_ticker: tuple[BreakdownRow, ...] = ()
    by_direction: tuple[BreakdownRow, ...] = ()
    by_tag: tuple[BreakdownRow, ...] = ()
    goal_progress: GoalProgress | None = None
    as_of: date

    @property
    def win_rate(self) -> Decimal:
        """Lifetime win rate (%)."""
        return self.ratios.win_rate

    @property
    def profit_factor(self) -> Decimal:
        """Lifetime profit factor."""
        return self.ratios.profit_factor

    @property
    def consistency_score(self) -> int:
        """Composite consistency score (0-100)."""
        return self.consistency.score

    def monthly_pnl(self, year: int, month: int) -> Decimal | None:
        """Net P&L of one month, None if no trade closed in it."""
        for row in self.monthly_by_year:
            if row.year == year:
                return row.month(month)
        return None
