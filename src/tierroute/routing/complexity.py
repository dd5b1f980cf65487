"""Complexity scoring for tier routing.

Reduces Signals to a scalar in [0.0, 1.0]:

    raw = risk * risk_count
        - simplicity * simplicity_count
        + length * length_bucket_value
        + domain * domain_count
        + urgency * urgency_count
        + step * step_count

    score = clamp(raw, 0.0, 1.0)

A single hard-override term (security, production incident, cross-cutting
architecture) lifts the score to at least the MEDIUM/HIGH boundary, so one
dangerous keyword dominates an otherwise ordinary task description.

Usage:
    result = score_complexity(signals, config.weights, config.boundaries)
    print(f"Complexity: {result.score:.2f}")
    print(f"Breakdown: {result.breakdown}")
"""

from dataclasses import dataclass

from tierroute.config.models import ScoringWeights, TierBoundaries
from tierroute.observability.logging import get_logger
from tierroute.routing.signals import Signals

log = get_logger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 1.0


@dataclass(frozen=True, slots=True)
class ComplexityScore:
    """Result of complexity scoring.

    Attributes:
        score: Clamped complexity score between 0.0 and 1.0.
        breakdown: Contribution of each weighted signal plus the raw and
            clamped sums:
            - "risk", "simplicity" (negative), "length", "domain",
              "urgency", "steps": weighted contributions
            - "raw": sum before clamping
            - "clamped": sum after clamping, before any hard override
        hard_override: True when a hard-override term lifted the score.
    """

    score: float
    breakdown: dict[str, float]
    hard_override: bool = False


def score_complexity(
    signals: Signals,
    weights: ScoringWeights,
    boundaries: TierBoundaries,
) -> ComplexityScore:
    """Score the complexity of a task from its signals.

    Pure function: the same signals and tables always give the same score.

    Args:
        signals: Extracted signals for the task.
        weights: Per-signal weights.
        boundaries: Tier boundaries; the hard-override floor is
            ``boundaries.medium_high``.

    Returns:
        ComplexityScore with the final score and its breakdown.
    """
    contributions = {
        "risk": weights.risk * signals.risk_count,
        "simplicity": -weights.simplicity * signals.simplicity_count,
        "length": weights.length * signals.length_bucket.weight_value,
        "domain": weights.domain * signals.domain_count,
        "urgency": weights.urgency * signals.urgency_count,
        "steps": weights.step * signals.step_count,
    }
    raw = sum(contributions.values())
    clamped = min(max(raw, MIN_SCORE), MAX_SCORE)

    hard_override = signals.hard_override_count > 0
    score = max(clamped, boundaries.medium_high) if hard_override else clamped

    breakdown = {**contributions, "raw": raw, "clamped": clamped}

    log.debug(
        "complexity.scored",
        score=score,
        hard_override=hard_override,
        agent=signals.agent,
        word_count=signals.word_count,
    )

    return ComplexityScore(score=score, breakdown=breakdown, hard_override=hard_override)
