"""Human-readable explanation of routing decisions.

Pure formatting: the explainer never re-derives a decision, it only renders
the decision and signals it is given, in a fixed section order:

1. Signal categories with counts and matched terms
2. Length bucket and flags
3. Complexity score
4. Tier and the rule that fixed it
5. Resource
6. Confidence
7. Escalation note (only when the decision was escalated)
8. Reasons trace
"""

from typing import TYPE_CHECKING

from tierroute.routing.signals import Signals

if TYPE_CHECKING:
    from tierroute.routing.router import Decision

_CATEGORY_LABELS = {
    "risk": "Risk",
    "hard_override": "Hard override",
    "simplicity": "Simplicity",
    "domain": "Domain",
    "urgency": "Urgency",
}


def _format_terms(terms: tuple[str, ...]) -> str:
    return ", ".join(terms) if terms else "-"


def explain_decision(
    decision: "Decision",
    signals: Signals,
    score: float | None = None,
) -> str:
    """Render a decision and its signals as plain text.

    Args:
        decision: The decision to explain.
        signals: Signals the decision was derived from.
        score: Score to display when the decision carries none (agent pins
            skip scoring; the router passes an informational score).

    Returns:
        Multi-line explanation.
    """
    lines = ["Signals:"]
    for category, (count, terms) in signals.category_counts().items():
        label = _CATEGORY_LABELS[category]
        lines.append(f"  {label}: {count} ({_format_terms(terms)})")

    flags = []
    if signals.documentation_only:
        flags.append("documentation-only")
    if signals.trivial_input:
        flags.append("trivial input")
    if signals.step_count:
        flags.append(f"{signals.step_count} steps")
    lines.append(
        f"Length: {signals.length_bucket.value} ({signals.word_count} words)"
        f"; flags: {', '.join(flags) if flags else 'none'}"
    )

    shown_score = decision.score if decision.score is not None else score
    if shown_score is None:
        lines.append("Score: n/a")
    elif decision.score is None:
        lines.append(f"Score: {shown_score:.2f} (informational; agent pin bypassed scoring)")
    else:
        lines.append(f"Score: {shown_score:.2f}")

    lines.append(f"Tier: {decision.tier.label} (rule: {decision.rule.value})")
    lines.append(f"Resource: {decision.model}")
    lines.append(f"Confidence: {decision.confidence:.0%}")

    if decision.escalated_from is not None:
        lines.append(
            f"Escalated: {decision.escalated_from.label} -> {decision.tier.label}"
        )

    lines.append("Reasons:")
    lines.extend(f"  - {reason}" for reason in decision.reasons)
    return "\n".join(lines)
