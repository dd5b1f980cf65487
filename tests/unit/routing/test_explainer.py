"""Unit tests for decision explanations."""

from tierroute.routing.classifier import RoutingRule
from tierroute.routing.explainer import explain_decision
from tierroute.routing.router import Decision
from tierroute.routing.signals import LengthBucket, Signals
from tierroute.routing.tiers import Tier

SIGNALS = Signals(
    agent="executor",
    word_count=13,
    length_bucket=LengthBucket.MEDIUM,
    risk_terms=("refactor", "schema"),
    domain_terms=("service", "database"),
)

DECISION = Decision(
    tier=Tier.HIGH,
    model="claude-opus-4-5",
    confidence=0.88,
    reasons=("agent policy: variable (executor)", "score 0.85 above medium/high boundary 0.60"),
    rule=RoutingRule.SCORE_BOUNDARY,
    score=0.85,
)


class TestExplainDecision:
    """Test explain_decision rendering."""

    def test_sections_in_fixed_order(self) -> None:
        """Sections appear in the documented order."""
        text = explain_decision(DECISION, SIGNALS)
        markers = ["Signals:", "Length:", "Score:", "Tier:", "Resource:", "Confidence:", "Reasons:"]
        positions = [text.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_category_counts_and_terms(self) -> None:
        """Each category lists its count and matched terms."""
        text = explain_decision(DECISION, SIGNALS)
        assert "  Risk: 2 (refactor, schema)" in text
        assert "  Domain: 2 (service, database)" in text
        assert "  Urgency: 0 (-)" in text

    def test_decision_fields(self) -> None:
        """Score, tier, rule, resource and confidence are rendered."""
        text = explain_decision(DECISION, SIGNALS)
        assert "Length: medium (13 words); flags: none" in text
        assert "Score: 0.85" in text
        assert "Tier: HIGH (rule: score_boundary)" in text
        assert "Resource: claude-opus-4-5" in text
        assert "Confidence: 88%" in text

    def test_reasons_trace(self) -> None:
        """Every reason is listed after the header."""
        text = explain_decision(DECISION, SIGNALS)
        reasons_block = text.split("Reasons:\n", 1)[1]
        assert reasons_block.splitlines() == [f"  - {reason}" for reason in DECISION.reasons]

    def test_no_escalation_note_without_escalation(self) -> None:
        """The escalation line only appears for escalated decisions."""
        assert "Escalated:" not in explain_decision(DECISION, SIGNALS)

    def test_escalation_note(self) -> None:
        """Escalated decisions show the tier change before the reasons."""
        escalated = Decision(
            tier=Tier.HIGH,
            model="claude-opus-4-5",
            confidence=0.85,
            reasons=("short/simple task", "escalated after 3 prior failures"),
            escalated_from=Tier.LOW,
            rule=RoutingRule.SHORT_SIMPLE,
            score=0.0,
        )
        text = explain_decision(escalated, SIGNALS)
        assert "Escalated: LOW -> HIGH" in text
        assert text.index("Confidence:") < text.index("Escalated:") < text.index("Reasons:")

    def test_pinned_decision_informational_score(self) -> None:
        """Pinned decisions show the supplied informational score."""
        pinned = Decision(
            tier=Tier.LOW,
            model="claude-haiku-4-5",
            confidence=0.95,
            reasons=("agent policy pin: explore -> LOW",),
            rule=RoutingRule.AGENT_PIN,
        )
        text = explain_decision(pinned, SIGNALS, score=0.4)
        assert "Score: 0.40 (informational; agent pin bypassed scoring)" in text

    def test_missing_score(self) -> None:
        """Without any score the line reads n/a."""
        pinned = Decision(
            tier=Tier.LOW,
            model="claude-haiku-4-5",
            confidence=0.95,
            reasons=("agent policy pin: explore -> LOW",),
            rule=RoutingRule.AGENT_PIN,
        )
        assert "Score: n/a" in explain_decision(pinned, SIGNALS)

    def test_flags_rendered(self) -> None:
        """Documentation, trivial and step flags are listed."""
        signals = Signals(
            agent="executor",
            word_count=20,
            length_bucket=LengthBucket.MEDIUM,
            documentation_only=True,
            step_count=3,
        )
        text = explain_decision(DECISION, signals)
        assert "flags: documentation-only, 3 steps" in text
