"""Tier router facade.

Runs the routing pipeline for one task:

    prompt + agent -> SignalExtractor -> score_complexity -> TierClassifier
                   -> select_model -> Decision

and, for ``route_with_escalation``, applies the EscalationPolicy on top of the
base decision.

Design Principles:
- Explicit configuration: every table comes from the RouterConfig passed in;
  nothing is read from ambient state.
- Stateless: the router holds only immutable configuration and precompiled
  patterns, so one instance may be shared across threads.
- Pure decisions: the same prompt, agent and failure count always produce an
  equal Decision. The only side effect is structured logging, and the prompt
  text itself is never logged.

Usage:
    from tierroute.config import get_default_config
    from tierroute.routing.router import TierRouter

    router = TierRouter(get_default_config())
    decision = router.route("Find all .ts files in src/", "explore")
    print(f"{decision.tier.label} -> {decision.model}")

    # Alternatively, use the convenience function
    from tierroute.routing.router import route_task
    decision = route_task("Fix this bug", "sisyphus-junior")
"""

from dataclasses import dataclass
from typing import Any

from tierroute.config.models import RouterConfig, get_default_config
from tierroute.observability.logging import bind_context, get_logger, unbind_context
from tierroute.routing import adapter
from tierroute.routing.classifier import RoutingRule, TierClassifier
from tierroute.routing.complexity import ComplexityScore
from tierroute.routing.escalation import EscalationPolicy
from tierroute.routing.explainer import explain_decision
from tierroute.routing.policy import AgentPolicyTable, Pinned
from tierroute.routing.signals import SignalExtractor, Signals
from tierroute.routing.tiers import Tier, select_model, validate_resource_table

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Decision:
    """Result of a routing decision.

    Attributes:
        tier: Selected tier.
        model: Resource identifier bound to the tier.
        confidence: Confidence in [0.0, 1.0].
        reasons: Ordered audit trail; never empty.
        escalated_from: Base tier when escalation raised the tier, else None.
        rule: Classifier rule that fixed the base tier.
        score: Complexity score, or None when an agent pin bypassed scoring.

    Example:
        decision = router.route("Refactor the auth module", "executor")
        print(f"{decision.tier.label} ({decision.confidence:.0%})")
        for reason in decision.reasons:
            print(f"  - {reason}")
    """

    tier: Tier
    model: str
    confidence: float
    reasons: tuple[str, ...]
    escalated_from: Tier | None = None
    rule: RoutingRule = RoutingRule.SCORE_BOUNDARY
    score: float | None = None

    def __post_init__(self) -> None:
        if not self.reasons:
            msg = "Decision.reasons must not be empty"
            raise ValueError(msg)
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"Decision.confidence must be in [0, 1], got {self.confidence}"
            raise ValueError(msg)

    @property
    def escalated(self) -> bool:
        """True when escalation raised the tier."""
        return self.escalated_from is not None

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "tier": self.tier.value,
            "model": self.model,
            "confidence": round(self.confidence, 4),
            "rule": self.rule.value,
            "score": None if self.score is None else round(self.score, 4),
            "escalated_from": None if self.escalated_from is None else self.escalated_from.value,
            "reasons": list(self.reasons),
        }


class TierRouter:
    """Routes tasks to capability tiers using an explicit RouterConfig.

    Example:
        router = TierRouter(config)

        decision = router.route("Write documentation for the API", "document-writer")
        assert decision.tier == Tier.LOW

        retry = router.route_with_escalation("Fix this bug", "sisyphus-junior", 3)
        assert retry.tier == Tier.HIGH
    """

    __slots__ = ("_config", "_extractor", "_policies", "_classifier", "_escalation")

    def __init__(self, config: RouterConfig) -> None:
        """Build the pipeline components from ``config``.

        Raises:
            ConfigError: If the resource table lacks an entry for any tier.
        """
        validation = validate_resource_table(config)
        if validation.is_err:
            raise validation.error

        self._config = config
        self._extractor = SignalExtractor(config.keywords, config.length)
        self._policies = AgentPolicyTable.from_config(config.agents)
        self._classifier = TierClassifier(
            config.weights,
            config.boundaries,
            config.confidence_steepness,
        )
        self._escalation = EscalationPolicy(config.escalation, config)

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def policies(self) -> AgentPolicyTable:
        return self._policies

    def extract_signals(self, prompt: str | None, agent: str | None) -> Signals:
        """Extract routing signals from a prompt and agent label."""
        return self._extractor.extract(prompt, agent)

    def score_complexity(self, signals: Signals) -> ComplexityScore:
        """Score signals with the configured weights and boundaries."""
        return self._classifier.score(signals)

    def route(self, prompt: str | None, agent: str | None) -> Decision:
        """Route a task to a tier and resource.

        Args:
            prompt: Free-text task description.
            agent: Declared agent/role label.

        Returns:
            The routing decision.
        """
        return self._route_signals(self.extract_signals(prompt, agent))

    def route_with_escalation(
        self,
        prompt: str | None,
        agent: str | None,
        previous_failures: int,
    ) -> Decision:
        """Route a task, escalating for failures the caller has already seen.

        Args:
            prompt: Free-text task description.
            agent: Declared agent/role label.
            previous_failures: Prior failures for this task. Negative values
                are treated as 0.

        Returns:
            The base decision escalated per the configured thresholds.
        """
        # Routing events for this call carry the failure count
        bind_context(previous_failures=previous_failures)
        try:
            base = self.route(prompt, agent)
            return self._escalation.escalate(base, previous_failures)
        finally:
            unbind_context("previous_failures")

    def quick_tier(self, agent: str | None) -> Tier:
        """Return an agent's pinned tier, or the default tier when unpinned."""
        match self._policies.resolve(agent).policy:
            case Pinned(tier=tier):
                return tier
            case _:
                return Tier.parse(self._config.default_tier)

    def adapt_prompt(self, prompt: str, tier: Tier | str) -> str:
        """Rewrite a prompt for the given tier."""
        return adapter.adapt_prompt(prompt, tier)

    def explain(
        self,
        prompt: str | None,
        agent: str | None,
        previous_failures: int = 0,
    ) -> str:
        """Route a task and render the decision as text."""
        signals = self.extract_signals(prompt, agent)
        decision = self._escalation.escalate(self._route_signals(signals), previous_failures)
        return self.explain_decision(decision, signals)

    def explain_decision(self, decision: Decision, signals: Signals) -> str:
        """Render an existing decision and its signals as text.

        Pinned decisions carry no score; an informational score is computed
        from the signals for display.
        """
        informational = None
        if decision.score is None and not signals.trivial_input:
            informational = self.score_complexity(signals).score
        return explain_decision(decision, signals, informational)

    def _route_signals(self, signals: Signals) -> Decision:
        resolution = self._policies.resolve(signals.agent)
        classification = self._classifier.classify(signals, resolution)

        model_result = select_model(classification.tier, self._config)
        if model_result.is_err:
            raise model_result.error

        score = None if classification.complexity is None else classification.complexity.score
        decision = Decision(
            tier=classification.tier,
            model=model_result.value,
            confidence=classification.confidence,
            reasons=classification.reasons,
            rule=classification.rule,
            score=score,
        )

        log.info(
            "routing.decision.made",
            tier=decision.tier.value,
            model=decision.model,
            rule=decision.rule.value,
            confidence=round(decision.confidence, 4),
            complexity_score=score,
            agent=signals.agent,
            known_agent=resolution.known,
            word_count=signals.word_count,
        )
        return decision


def route_task(
    prompt: str | None,
    agent: str | None,
    *,
    config: RouterConfig | None = None,
) -> Decision:
    """Convenience function to route a task without keeping a TierRouter.

    Args:
        prompt: Free-text task description.
        agent: Declared agent/role label.
        config: Configuration to use; defaults to ``get_default_config()``.

    Returns:
        The routing decision.
    """
    router = TierRouter(config or get_default_config())
    return router.route(prompt, agent)


def route_task_with_escalation(
    prompt: str | None,
    agent: str | None,
    previous_failures: int,
    *,
    config: RouterConfig | None = None,
) -> Decision:
    """Convenience wrapper around ``TierRouter.route_with_escalation``."""
    router = TierRouter(config or get_default_config())
    return router.route_with_escalation(prompt, agent, previous_failures)
