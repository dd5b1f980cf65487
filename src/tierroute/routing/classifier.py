"""Tier classification for tierroute.

Rules, in priority order:
1. Agent policy pin: a Pinned(tier) agent gets that tier; scoring is skipped.
2. Short/simple floor: documentation-only requests, and short prompts with no
   risk terms, go to LOW. Skipped when a hard-override term matched.
3. Score boundaries: below ``low_medium`` is LOW, above ``medium_high`` is
   HIGH, in between is MEDIUM. A score sitting on a boundary resolves to the
   lower tier unless a hard-override term matched, in which case it resolves
   to the higher tier.

Every rule that fires adds a line to the reasons, so the reasons form a
complete audit trail of the decision.
"""

from dataclasses import dataclass
from enum import Enum
import math

from tierroute.config.models import ScoringWeights, TierBoundaries
from tierroute.routing.complexity import ComplexityScore, score_complexity
from tierroute.routing.policy import Pinned, PolicyResolution, Variable
from tierroute.routing.signals import LengthBucket, Signals
from tierroute.routing.tiers import Tier

PINNED_CONFIDENCE = 0.95
SHORT_SIMPLE_CONFIDENCE = 0.85
HARD_OVERRIDE_MIN_CONFIDENCE = 0.90

# Scores this close to a boundary count as sitting on it
BOUNDARY_TOLERANCE = 1e-9


class RoutingRule(str, Enum):
    """Classifier rule that fixed the tier."""

    AGENT_PIN = "agent_pin"
    DOCUMENTATION_ONLY = "documentation_only"
    SHORT_SIMPLE = "short_simple"
    SCORE_BOUNDARY = "score_boundary"


@dataclass(frozen=True, slots=True)
class Classification:
    """Tier chosen by the classifier with its justification.

    Attributes:
        tier: Selected tier.
        rule: Rule that fixed the tier.
        confidence: Confidence in [0.5, 1.0].
        reasons: Ordered audit trail, never empty.
        complexity: Score used, or None when an agent pin skipped scoring.
    """

    tier: Tier
    rule: RoutingRule
    confidence: float
    reasons: tuple[str, ...]
    complexity: ComplexityScore | None = None


def calibrate_confidence(distance: float, steepness: float) -> float:
    """Map distance from the nearest boundary to a confidence in [0.5, 1.0)."""
    return 1.0 / (1.0 + math.exp(-steepness * abs(distance)))


def _on_boundary(score: float, boundary: float) -> bool:
    return math.isclose(score, boundary, rel_tol=0.0, abs_tol=BOUNDARY_TOLERANCE)


def _signal_reasons(signals: Signals) -> list[str]:
    """Describe the keyword, length and structure signals that fired."""
    reasons = []
    labels = {
        "risk": "risk terms",
        "simplicity": "lookup terms",
        "domain": "domain terms",
        "urgency": "urgency terms",
    }
    for category, (count, terms) in signals.category_counts().items():
        if category in labels and count:
            reasons.append(f"{labels[category]} ({count}): {', '.join(terms)}")
    if signals.hard_override_terms:
        reasons.append(f"hard override: {', '.join(signals.hard_override_terms)}")
    if signals.step_count:
        reasons.append(f"{signals.step_count} enumerated steps")
    if signals.documentation_only:
        reasons.append("documentation-only request")
    reasons.append(f"length: {signals.length_bucket.value} ({signals.word_count} words)")
    return reasons


class TierClassifier:
    """Maps signals and an agent policy onto a tier.

    Holds only immutable scoring tables; safe to share across threads.
    """

    __slots__ = ("_weights", "_boundaries", "_steepness")

    def __init__(
        self,
        weights: ScoringWeights,
        boundaries: TierBoundaries,
        confidence_steepness: float,
    ) -> None:
        self._weights = weights
        self._boundaries = boundaries
        self._steepness = confidence_steepness

    def score(self, signals: Signals) -> ComplexityScore:
        """Score signals with this classifier's tables."""
        return score_complexity(signals, self._weights, self._boundaries)

    def classify(self, signals: Signals, resolution: PolicyResolution) -> Classification:
        """Classify one request.

        Args:
            signals: Extracted signals for the prompt.
            resolution: Resolved agent policy.

        Returns:
            Classification with tier, rule, confidence and reasons.
        """
        reasons: list[str] = []
        if signals.trivial_input:
            reasons.append("trivial input: empty prompt")

        match resolution.policy:
            case Pinned(tier=tier):
                reasons.insert(0, f"agent policy pin: {resolution.agent} -> {tier.label}")
                return Classification(
                    tier=tier,
                    rule=RoutingRule.AGENT_PIN,
                    confidence=PINNED_CONFIDENCE,
                    reasons=tuple(reasons),
                )
            case Variable():
                if not resolution.known:
                    shown = resolution.agent or "<none>"
                    reasons.append(
                        f"unknown agent '{shown}': variable scoring with neutral policy"
                    )
                else:
                    reasons.append(f"agent policy: variable ({resolution.agent})")

        reasons.extend(_signal_reasons(signals))
        complexity = self.score(signals)

        floor_applies = signals.documentation_only or (
            signals.length_bucket is LengthBucket.SHORT and signals.risk_count == 0
        )
        if floor_applies and not complexity.hard_override:
            rule = (
                RoutingRule.DOCUMENTATION_ONLY
                if signals.documentation_only
                else RoutingRule.SHORT_SIMPLE
            )
            reasons.append("short/simple task")
            return Classification(
                tier=Tier.LOW,
                rule=rule,
                confidence=SHORT_SIMPLE_CONFIDENCE,
                reasons=tuple(reasons),
                complexity=complexity,
            )

        tier, boundary_reason = self._tier_from_score(complexity)
        reasons.append(boundary_reason)

        nearest = min(
            abs(complexity.score - self._boundaries.low_medium),
            abs(complexity.score - self._boundaries.medium_high),
        )
        confidence = calibrate_confidence(nearest, self._steepness)
        if complexity.hard_override:
            confidence = max(confidence, HARD_OVERRIDE_MIN_CONFIDENCE)

        return Classification(
            tier=tier,
            rule=RoutingRule.SCORE_BOUNDARY,
            confidence=min(confidence, 1.0),
            reasons=tuple(reasons),
            complexity=complexity,
        )

    def _tier_from_score(self, complexity: ComplexityScore) -> tuple[Tier, str]:
        """Compare a score against the boundaries, resolving ties."""
        score = complexity.score
        low_medium = self._boundaries.low_medium
        medium_high = self._boundaries.medium_high
        tie_up = complexity.hard_override

        if _on_boundary(score, medium_high):
            tier = Tier.HIGH if tie_up else Tier.MEDIUM
            direction = "up (hard override)" if tie_up else "down"
            return tier, f"score {score:.2f} on medium/high boundary {medium_high:.2f}: {direction}"
        if score > medium_high:
            return Tier.HIGH, f"score {score:.2f} above medium/high boundary {medium_high:.2f}"
        if _on_boundary(score, low_medium):
            tier = Tier.MEDIUM if tie_up else Tier.LOW
            direction = "up (hard override)" if tie_up else "down"
            return tier, f"score {score:.2f} on low/medium boundary {low_medium:.2f}: {direction}"
        if score > low_medium:
            return Tier.MEDIUM, (
                f"score {score:.2f} between boundaries {low_medium:.2f} and {medium_high:.2f}"
            )
        return Tier.LOW, f"score {score:.2f} below low/medium boundary {low_medium:.2f}"
