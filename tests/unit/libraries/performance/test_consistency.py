"""Tests for the consistency score."""

from decimal import Decimal

import pytest

from tradejournal.libraries.performance.consistency import (
    consistency_grade,
    score_consistency,
    score_toward_target,
    score_under_limit,
)
from tradejournal.libraries.performance.models import ConsistencyWeights


class TestSubScores:
    """Test the 0-25 sub-score helpers."""

    def test_toward_target_is_linear(self):
        """Test half the target earns half the points."""
        assert score_toward_target(Decimal("30"), Decimal("60")) == Decimal("12.5")

    def test_toward_target_caps_at_25(self):
        """Test exceeding the target earns no extra points."""
        assert score_toward_target(Decimal("95"), Decimal("60")) == Decimal("25")

    def test_toward_target_floors_at_0(self):
        """Test negative inputs never score below zero."""
        assert score_toward_target(Decimal("-3"), Decimal("1.5")) == Decimal("0")

    @pytest.mark.parametrize("target", [Decimal("0"), Decimal("-2")])
    def test_non_positive_target_scores_zero(self, target):
        """Test a non-positive target yields 0 instead of dividing."""
        assert score_toward_target(Decimal("50"), target) == Decimal("0")
        assert score_under_limit(Decimal("5"), target) == Decimal("0")

    def test_under_limit(self):
        """Test no drawdown earns 25 and the limit earns 0."""
        assert score_under_limit(Decimal("0"), Decimal("25")) == Decimal("25")
        assert score_under_limit(Decimal("10"), Decimal("25")) == Decimal("15")
        assert score_under_limit(Decimal("25"), Decimal("25")) == Decimal("0")
        assert score_under_limit(Decimal("40"), Decimal("25")) == Decimal("0")


class TestConsistencyGrade:
    """Test fixed grade thresholds."""

    @pytest.mark.parametrize(
        "score,grade",
        [
            (100, "A"),
            (90, "A"),
            (89, "B"),
            (80, "B"),
            (79, "C"),
            (70, "C"),
            (69, "D"),
            (60, "D"),
            (59, "F"),
            (0, "F"),
        ],
    )
    def test_thresholds(self, score, grade):
        """Test A >= 90, B >= 80, C >= 70, D >= 60, else F."""
        assert consistency_grade(score) == grade


class TestScoreConsistency:
    """Test the composite score."""

    def test_targets_met_scores_100(self):
        """Test meeting every target with no drawdown is a perfect score."""
        result = score_consistency(Decimal("60"), Decimal("2"), Decimal("0"), Decimal("1.5"))

        assert result.score == 100
        assert result.grade == "A"

    def test_mixed_profile(self):
        """Test each sub-score against the default targets."""
        # Act
        result = score_consistency(
            win_rate=Decimal("50"),
            profit_factor=Decimal("1.5"),
            max_drawdown_pct=Decimal("10"),
            risk_reward_ratio=Decimal("1.2"),
        )

        # Assert
        assert result.win_rate_score == Decimal("50") / Decimal("60") * Decimal("25")
        assert result.profit_factor_score == Decimal("18.75")
        assert result.drawdown_score == Decimal("15")
        assert result.risk_reward_score == Decimal("20")
        assert result.score == 75  # 74.58 rounded
        assert result.grade == "C"

    def test_rounds_half_up(self):
        """Test a composite of exactly x.5 rounds up."""
        result = score_consistency(Decimal("30"), Decimal("0"), Decimal("25"), Decimal("0"))

        assert result.win_rate_score == Decimal("12.5")
        assert result.score == 13

    def test_custom_weights(self):
        """Test stricter targets lower the score for the same statistics."""
        strict = ConsistencyWeights(
            win_rate_target=Decimal("80"),
            profit_factor_target=Decimal("4"),
            max_drawdown_limit=Decimal("10"),
            risk_reward_target=Decimal("3"),
        )

        default = score_consistency(Decimal("60"), Decimal("2"), Decimal("5"), Decimal("1.5"))
        stricter = score_consistency(Decimal("60"), Decimal("2"), Decimal("5"), Decimal("1.5"), strict)

        assert stricter.score < default.score
        assert stricter.profit_factor_score == Decimal("12.5")
        assert stricter.drawdown_score == Decimal("12.5")

    def test_zero_target_does_not_raise(self):
        """Test a misconfigured zero target contributes 0 points."""
        weights = ConsistencyWeights(win_rate_target=Decimal("0"))

        result = score_consistency(Decimal("60"), Decimal("2"), Decimal("0"), Decimal("1.5"), weights)

        assert result.win_rate_score == Decimal("0")
        assert result.score == 75

    @pytest.mark.parametrize(
        "win_rate,profit_factor,drawdown,risk_reward",
        [
            ("0", "0", "100", "0"),
            ("100", "10", "0", "10"),
            ("45.5", "1.1", "33", "0.7"),
        ],
    )
    def test_bounds(self, win_rate, profit_factor, drawdown, risk_reward):
        """Test every sub-score stays in [0, 25] and the composite in [0, 100]."""
        result = score_consistency(Decimal(win_rate), Decimal(profit_factor), Decimal(drawdown), Decimal(risk_reward))

        for sub in (result.win_rate_score, result.profit_factor_score, result.drawdown_score, result.risk_reward_score):
            assert Decimal("0") <= sub <= Decimal("25")
        assert 0 <= result.score <= 100
