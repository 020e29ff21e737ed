"""Tests for period summaries, breakdowns and goal progress."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from tradejournal.libraries.performance.models import GoalConfig
from tradejournal.libraries.performance.summaries import (
    breakdown_by_direction,
    breakdown_by_tag,
    breakdown_by_ticker,
    calculate_goal_progress,
    monthly_by_year,
    summarize_period,
    win_loss_days,
)
from tradejournal.services.ledger.models import Direction


class TestSummarizePeriod:
    """Test period totals."""

    def test_filters_on_effective_date(self, make_trade):
        """Test a swing trade opened last year but closed this year counts this year."""
        trades = [
            make_trade("2024-12-30", "300", close_date="2025-01-02"),
            make_trade("2024-12-15", "-100"),
            make_trade("2025-02-01", "50"),
        ]

        summary = summarize_period(trades, lambda d: d.year == 2025)

        assert summary.pnl == Decimal("350")
        assert summary.trades == 2

    def test_nothing_selected(self, make_trade):
        """Test an empty period is zero, not an error."""
        summary = summarize_period([make_trade("2025-01-01", "10")], lambda d: False)

        assert summary.pnl == Decimal("0")
        assert summary.trades == 0


class TestMonthlyByYear:
    """Test year x month P&L grid."""

    def test_groups_by_year_and_month(self, make_trade):
        """Test P&L sums per (year, month), years oldest first."""
        trades = [
            make_trade("2025-03-05", "100"),
            make_trade("2024-03-10", "-40"),
            make_trade("2025-03-20", "25"),
            make_trade("2025-01-02", "10"),
        ]

        result = monthly_by_year(trades)

        assert [row.year for row in result] == [2024, 2025]
        assert result[0].month(3) == Decimal("-40")
        assert result[1].month(1) == Decimal("10")
        assert result[1].month(3) == Decimal("125")
        assert result[1].total == Decimal("135")

    def test_months_without_trades_are_none(self, make_trade):
        """Test an empty month is distinguished from a flat month."""
        trades = [make_trade("2025-02-03", "50"), make_trade("2025-02-04", "-50")]

        row = monthly_by_year(trades)[0]

        assert len(row.months) == 12
        assert row.month(2) == Decimal("0")
        assert row.month(1) is None
        assert row.month(12) is None

    def test_rows_are_immutable(self, make_trade):
        """Test a returned grid cannot be edited in place."""
        row = monthly_by_year([make_trade("2025-03-05", "100")])[0]

        with pytest.raises(TypeError):
            row.months[2] = Decimal("999999")  # type: ignore[index]
        with pytest.raises(ValidationError):
            row.year = 1999  # type: ignore[misc]

        assert row.month(3) == Decimal("100")


class TestBreakdowns:
    """Test ticker / direction / tag breakdowns."""

    def test_by_ticker(self, make_trade):
        """Test per-ticker counts, P&L and wins."""
        trades = [
            make_trade("2025-03-03", "100", ticker="TSLA"),
            make_trade("2025-03-04", "-30", ticker="AAPL"),
            make_trade("2025-03-05", "60", ticker="TSLA"),
        ]

        rows = breakdown_by_ticker(trades)

        assert [r.key for r in rows] == ["AAPL", "TSLA"]
        tsla = rows[1]
        assert (tsla.count, tsla.pnl, tsla.wins) == (2, Decimal("160"), 2)
        assert tsla.win_rate == Decimal("100")

    def test_by_direction(self, make_trade):
        """Test LONG and SHORT rows."""
        trades = [
            make_trade("2025-03-03", "100", direction=Direction.SHORT),
            make_trade("2025-03-04", "-30"),
        ]

        rows = breakdown_by_direction(trades)

        assert [(r.key, r.pnl) for r in rows] == [("LONG", Decimal("-30")), ("SHORT", Decimal("100"))]

    def test_by_tag_counts_multi_tag_trades_in_each(self, make_trade):
        """Test a trade with two tags contributes to both rows; untagged trades to none."""
        trades = [
            make_trade("2025-03-03", "100", tags={"breakout", "momentum"}),
            make_trade("2025-03-04", "-50", tags={"breakout"}),
            make_trade("2025-03-05", "20"),
        ]

        rows = {r.key: r for r in breakdown_by_tag(trades)}

        assert set(rows) == {"breakout", "momentum"}
        assert rows["breakout"].count == 2
        assert rows["breakout"].pnl == Decimal("50")
        assert rows["breakout"].win_rate == Decimal("50")
        assert rows["momentum"].count == 1


class TestGoalProgress:
    """Test progress toward P&L goals."""

    def test_no_goals_returns_none(self):
        """Test disabled goals produce no progress."""
        assert calculate_goal_progress(Decimal("500"), Decimal("100"), GoalConfig(), date(2025, 3, 1)) is None

    def test_progress_and_projection(self):
        """Test progress percentages, 100% cap and linear year-end projection."""
        goals = GoalConfig(yearly_pnl_goal=Decimal("10000"), monthly_pnl_goal=Decimal("1000"))

        # Feb 19 is day 50 of the year
        progress = calculate_goal_progress(Decimal("2500"), Decimal("1500"), goals, date(2025, 2, 19))

        assert progress is not None
        assert progress.yearly_progress_pct == Decimal("25")
        assert progress.monthly_progress_pct == Decimal("100")
        assert progress.projected_year_end == Decimal("18250")
        assert progress.on_track is True

    def test_behind_pace(self):
        """Test a projection short of the yearly goal is not on track."""
        goals = GoalConfig(yearly_pnl_goal=Decimal("100000"))

        progress = calculate_goal_progress(Decimal("2500"), Decimal("0"), goals, date(2025, 2, 19))

        assert progress is not None
        assert progress.on_track is False
        assert progress.monthly_progress_pct == Decimal("0")

    def test_monthly_goal_only_has_no_pace(self):
        """Test on_track is undefined without a yearly goal."""
        goals = GoalConfig(monthly_pnl_goal=Decimal("1000"))

        progress = calculate_goal_progress(Decimal("-2500"), Decimal("400"), goals, date(2025, 2, 19))

        assert progress is not None
        assert progress.on_track is None
        assert progress.monthly_progress_pct == Decimal("40")
        assert progress.yearly_progress_pct == Decimal("0")


class TestWinLossDays:
    """Test win/loss day counts."""

    def test_flat_days_are_neither(self):
        """Test zero days count as neither win nor loss."""
        assert win_loss_days([Decimal("5"), Decimal("0"), Decimal("-3"), Decimal("7")]) == (2, 1)
