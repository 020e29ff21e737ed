"""Consistency score.

Blends four lifetime statistics into a 0-100 composite, each contributing a
sub-score in [0, 25] measured against a configurable target:

    win_rate_score      = min(win_rate / win_rate_target * 25, 25)
    profit_factor_score = min(profit_factor / profit_factor_target * 25, 25)
    drawdown_score      = max(25 - max_drawdown_pct / max_drawdown_limit * 25, 0)
    risk_reward_score   = min(risk_reward / risk_reward_target * 25, 25)

A target <= 0 makes its sub-score 0. Grade thresholds are fixed and do not
depend on the targets.
"""

from decimal import ROUND_HALF_UP, Decimal

from tradejournal.libraries.performance.models import ConsistencyScore, ConsistencyWeights, Grade

ZERO = Decimal("0")
SUB_SCORE_MAX = Decimal("25")

GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


def _clamp(value: Decimal) -> Decimal:
    if value < ZERO:
        return ZERO
    if value > SUB_SCORE_MAX:
        return SUB_SCORE_MAX
    return value


def score_toward_target(value: Decimal, target: Decimal) -> Decimal:
    """Sub-score rising linearly to 25 as `value` reaches `target`."""
    if target <= ZERO:
        return ZERO
    return _clamp(value / target * SUB_SCORE_MAX)


def score_under_limit(value: Decimal, limit: Decimal) -> Decimal:
    """Sub-score falling linearly from 25 to 0 as `value` reaches `limit`."""
    if limit <= ZERO:
        return ZERO
    return _clamp(SUB_SCORE_MAX - value / limit * SUB_SCORE_MAX)


def consistency_grade(score: int) -> Grade:
    """
    Letter grade for a composite score.

    Example:
        >>> consistency_grade(85)
        'B'
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def score_consistency(
    win_rate: Decimal,
    profit_factor: Decimal,
    max_drawdown_pct: Decimal,
    risk_reward_ratio: Decimal,
    weights: ConsistencyWeights | None = None,
) -> ConsistencyScore:
    """
    Compute the composite consistency score.

    Args:
        win_rate: Win rate as percentage (0-100)
        profit_factor: Lifetime profit factor
        max_drawdown_pct: Deepest drawdown as percentage of peak
        risk_reward_ratio: Average win / average loss
        weights: Targets (defaults: 60%, 2.0, 25%, 1.5)

    Returns:
        ConsistencyScore with the four sub-scores, rounded composite and grade

    Example:
        >>> result = score_consistency(Decimal("60"), Decimal("2"), Decimal("0"), Decimal("1.5"))
        >>> result.score, result.grade
        (100, 'A')
    """
    if weights is None:
        weights = ConsistencyWeights()

    win_rate_score = score_toward_target(win_rate, weights.win_rate_target)
    profit_factor_score = score_toward_target(profit_factor, weights.profit_factor_target)
    drawdown_score = score_under_limit(max_drawdown_pct, weights.max_drawdown_limit)
    risk_reward_score = score_toward_target(risk_reward_ratio, weights.risk_reward_target)

    total = win_rate_score + profit_factor_score + drawdown_score + risk_reward_score
    score = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return ConsistencyScore(
        win_rate_score=win_rate_score,
        profit_factor_score=profit_factor_score,
        drawdown_score=drawdown_score,
        risk_reward_score=risk_reward_score,
        score=score,
        grade=consistency_grade(score),
    )
