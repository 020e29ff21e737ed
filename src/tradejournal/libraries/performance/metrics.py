"""Performance ratio calculation functions.

Pure functions computing lifetime statistics from closed trades and
day-level P&L. All functions are stateless and never raise on degenerate
input: empty trade sets and zero denominators produce 0 or a bounded value,
never NaN or Infinity.

Bounded ratios:
    A ratio whose denominator is zero but whose numerator is positive
    ("no losses at all", "no drawdown at all") is reported as
    BOUNDED_RATIO_CAP rather than infinity, so ordering is preserved
    ("very good" > any finite value worth showing) while staying
    renderable. With a non-positive numerator the ratio is 0 ("no data").

Usage:
    >>> from tradejournal.libraries.performance import metrics
    >>> metrics.calculate_profit_factor(trades)
    Decimal('2.5')
    >>> metrics.calculate_sharpe_ratio([Decimal("100"), Decimal("-50"), Decimal("200")])
    Decimal('10.51')
"""

import math
from decimal import Decimal
from typing import NamedTuple, Sequence

from tradejournal.libraries.performance.models import RatioSummary
from tradejournal.services.ledger.models import Trade

ZERO = Decimal("0")
HUNDRED = Decimal("100")

BOUNDED_RATIO_CAP = Decimal("10")
TRADING_DAYS_PER_YEAR = 252


class BoundedRatio(NamedTuple):
    """Ratio value plus whether it was capped because the denominator was zero."""

    value: Decimal
    bounded: bool


def bounded_ratio(numerator: Decimal, denominator: Decimal, cap: Decimal = BOUNDED_RATIO_CAP) -> BoundedRatio:
    """
    Divide, substituting a bounded value for a zero denominator.

    Args:
        numerator: Dividend
        denominator: Divisor (compared against zero)
        cap: Value reported when denominator is zero and numerator positive

    Returns:
        BoundedRatio(value, bounded)

    Example:
        >>> bounded_ratio(Decimal("500"), Decimal("0"))
        BoundedRatio(value=Decimal('10'), bounded=True)
        >>> bounded_ratio(Decimal("0"), Decimal("0"))
        BoundedRatio(value=Decimal('0'), bounded=False)
    """
    if denominator == ZERO:
        if numerator > ZERO:
            return BoundedRatio(cap, True)
        return BoundedRatio(ZERO, False)
    return BoundedRatio(numerator / denominator, False)


def calculate_gross_profit(trades: Sequence[Trade]) -> Decimal:
    """Sum of winning trade P&L."""
    return sum((t.pnl for t in trades if t.is_winner), ZERO)


def calculate_gross_loss(trades: Sequence[Trade]) -> Decimal:
    """Sum of losing trade P&L as a positive number."""
    return abs(sum((t.pnl for t in trades if t.is_loser), ZERO))


def calculate_win_rate(trades: Sequence[Trade]) -> Decimal:
    """
    Calculate win rate (percentage of profitable trades).

    Break-even trades count toward the total but not as wins.

    Returns:
        Win rate as percentage (0-100), 0 for no trades
    """
    if not trades:
        return ZERO

    wins = sum(1 for t in trades if t.is_winner)
    return Decimal(wins) / Decimal(len(trades)) * HUNDRED


def calculate_profit_factor(trades: Sequence[Trade]) -> Decimal:
    """
    Calculate profit factor (gross profit / gross loss).

    Returns:
        Profit factor; BOUNDED_RATIO_CAP with no losses and some profit,
        0 with neither
    """
    return bounded_ratio(calculate_gross_profit(trades), calculate_gross_loss(trades)).value


def calculate_average_win(trades: Sequence[Trade]) -> Decimal:
    """Mean P&L of winning trades (0 if none)."""
    winners = [t for t in trades if t.is_winner]
    if not winners:
        return ZERO
    return calculate_gross_profit(winners) / Decimal(len(winners))


def calculate_average_loss(trades: Sequence[Trade]) -> Decimal:
    """Mean absolute P&L of losing trades (0 if none)."""
    losers = [t for t in trades if t.is_loser]
    if not losers:
        return ZERO
    return calculate_gross_loss(losers) / Decimal(len(losers))


def calculate_risk_reward_ratio(avg_win: Decimal, avg_loss: Decimal) -> Decimal:
    """Average win over average loss, bounded when there are no losses."""
    return bounded_ratio(avg_win, avg_loss).value


def calculate_expectancy(trades: Sequence[Trade]) -> Decimal:
    """
    Calculate expectancy (expected value per trade).

    Expectancy = (Win% × AvgWin) - (Loss% × AvgLoss)

    Win and loss fractions are taken over ALL trades, including break-even
    trades, so scratches dilute the expectancy.

    Returns:
        Expected value per trade in currency units (0 for no trades)
    """
    if not trades:
        return ZERO

    total = Decimal(len(trades))
    win_fraction = Decimal(sum(1 for t in trades if t.is_winner)) / total
    loss_fraction = Decimal(sum(1 for t in trades if t.is_loser)) / total

    return win_fraction * calculate_average_win(trades) - loss_fraction * calculate_average_loss(trades)


def calculate_recovery_factor(net_pnl: Decimal, max_drawdown: Decimal) -> Decimal:
    """Net profit over maximum drawdown, bounded when there was no drawdown."""
    return bounded_ratio(net_pnl, max_drawdown).value


def calculate_sharpe_ratio(
    daily_pnl: Sequence[Decimal],
    annualization_factor: int = TRADING_DAYS_PER_YEAR,
) -> Decimal:
    """
    Calculate annualized Sharpe ratio of day-level net P&L.

    Sharpe = mean / sample_stdev × √annualization_factor

    Uses the Bessel-corrected (n - 1) standard deviation and no risk-free
    rate (P&L is in currency, not returns).

    Args:
        daily_pnl: Net P&L per trading day
        annualization_factor: Periods per year (252 trading days)

    Returns:
        Sharpe ratio, 0 with fewer than 2 days or zero variance
    """
    if len(daily_pnl) < 2:
        return ZERO

    values = [float(v) for v in daily_pnl]
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / (len(values) - 1)
    std_dev = math.sqrt(variance)

    if std_dev == 0:
        return ZERO

    sharpe = mean / std_dev * math.sqrt(annualization_factor)
    return Decimal(str(sharpe)).quantize(Decimal("0.01"))


def calculate_ratios(
    trades: Sequence[Trade],
    max_drawdown: Decimal,
    daily_pnl: Sequence[Decimal],
) -> RatioSummary:
    """
    Compute every lifetime ratio in one pass over closed trades.

    Args:
        trades: All closed trades (not a filtered/period subset)
        max_drawdown: Maximum absolute drawdown of the all-time equity curve
        daily_pnl: Net P&L per trading day, chronological

    Returns:
        RatioSummary; `bounded` names the ratios reported at their cap
    """
    winners = [t for t in trades if t.is_winner]
    losers = [t for t in trades if t.is_loser]

    gross_profit = calculate_gross_profit(trades)
    gross_loss = calculate_gross_loss(trades)
    net_pnl = sum((t.pnl for t in trades), ZERO)
    avg_win = calculate_average_win(trades)
    avg_loss = calculate_average_loss(trades)

    profit_factor = bounded_ratio(gross_profit, gross_loss)
    risk_reward = bounded_ratio(avg_win, avg_loss)
    recovery = bounded_ratio(net_pnl, max_drawdown)

    bounded = tuple(
        name
        for name, ratio in (
            ("profit_factor", profit_factor),
            ("risk_reward_ratio", risk_reward),
            ("recovery_factor", recovery),
        )
        if ratio.bounded
    )

    return RatioSummary(
        total_trades=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        break_even_trades=len(trades) - len(winners) - len(losers),
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        net_pnl=net_pnl,
        win_rate=calculate_win_rate(trades),
        profit_factor=profit_factor.value,
        avg_win=avg_win,
        avg_loss=avg_loss,
        risk_reward_ratio=risk_reward.value,
        expectancy=calculate_expectancy(trades),
        recovery_factor=recovery.value,
        sharpe_ratio=calculate_sharpe_ratio(daily_pnl),
        largest_win=max((t.pnl for t in winners), default=ZERO),
        largest_loss=min((t.pnl for t in losers), default=ZERO),
        bounded=bounded,
    )
