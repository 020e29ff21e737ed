"""Win/loss day streak analysis.

Streaks are measured on day-level net P&L only, never per trade. A day with
positive net P&L is a win day, negative a loss day; a flat day is neither
and ends whatever streak was running.
"""

from decimal import Decimal
from typing import Protocol, Sequence

from tradejournal.libraries.performance.models import StreakSummary, StreakType


class _HasPnl(Protocol):
    pnl: Decimal


def day_outcome(pnl: Decimal) -> StreakType | None:
    """Classify a day's net P&L by strict sign."""
    if pnl > 0:
        return "win"
    if pnl < 0:
        return "loss"
    return None


def longest_streaks(daily_pnl: Sequence[_HasPnl]) -> tuple[int, int]:
    """
    Longest consecutive win and loss day runs.

    Args:
        daily_pnl: Day-aggregated P&L in chronological order

    Returns:
        (longest_win, longest_loss)
    """
    win_run = 0
    loss_run = 0
    longest_win = 0
    longest_loss = 0

    for day in daily_pnl:
        outcome = day_outcome(day.pnl)
        if outcome == "win":
            win_run += 1
            loss_run = 0
            longest_win = max(longest_win, win_run)
        elif outcome == "loss":
            loss_run += 1
            win_run = 0
            longest_loss = max(longest_loss, loss_run)
        else:
            win_run = 0
            loss_run = 0

    return longest_win, longest_loss


def current_streak(daily_pnl: Sequence[_HasPnl]) -> tuple[int, StreakType | None]:
    """
    Streak ending at the most recent day.

    Walks backward from the last day; the streak type is fixed by the last
    day's sign and the walk stops at the first day of a different sign.

    Returns:
        (length, type); (0, None) when empty or the last day is flat
    """
    if not daily_pnl:
        return 0, None

    streak_type = day_outcome(daily_pnl[-1].pnl)
    if streak_type is None:
        return 0, None

    length = 0
    for day in reversed(daily_pnl):
        if day_outcome(day.pnl) != streak_type:
            break
        length += 1

    return length, streak_type


def analyze_streaks(daily_pnl: Sequence[_HasPnl]) -> StreakSummary:
    """
    Current and longest win/loss day streaks.

    Args:
        daily_pnl: Day-aggregated P&L (e.g. `daily_pnl_series(trades)`),
            chronological

    Returns:
        StreakSummary

    Example:
        >>> # Daily P&L +100, -50, +200, -30, -20
        >>> summary = analyze_streaks(days)
        >>> summary.current, summary.current_type
        (2, 'loss')
        >>> summary.longest_win, summary.longest_loss
        (1, 2)
    """
    longest_win, longest_loss = longest_streaks(daily_pnl)
    length, streak_type = current_streak(daily_pnl)

    return StreakSummary(
        current=length,
        current_type=streak_type,
        longest_win=longest_win,
        longest_loss=longest_loss,
    )
