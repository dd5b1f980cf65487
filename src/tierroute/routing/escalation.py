"""Escalation on failure for tierroute.

The escalation path is LOW -> MEDIUM -> HIGH. Each configured failure
threshold the caller's count reaches moves the tier up one step from the base
decision, capped at HIGH.

Escalation Rules:
- The policy is stateless: the caller re-supplies ``previous_failures`` on
  every call, and the result is always computed from the base decision, so
  escalation never compounds across calls
- Negative counts are treated as 0 and noted in the reasons
- A base decision already at HIGH is returned unchanged
- Escalation never lowers a tier

Usage:
    policy = EscalationPolicy(config.escalation, config)
    decision = policy.escalate(base_decision, previous_failures=2)
    if decision.escalated_from is not None:
        print(f"{decision.escalated_from.value} -> {decision.tier.value}")
"""

from dataclasses import replace
from typing import TYPE_CHECKING

from tierroute.config.models import EscalationConfig, RouterConfig
from tierroute.observability.logging import get_logger
from tierroute.routing.tiers import Tier, select_model

if TYPE_CHECKING:
    from tierroute.routing.router import Decision

log = get_logger(__name__)


class EscalationPolicy:
    """Upgrades a decision's tier based on a caller-supplied failure count."""

    __slots__ = ("_thresholds", "_config")

    def __init__(self, escalation: EscalationConfig, config: RouterConfig) -> None:
        self._thresholds = escalation.thresholds
        self._config = config

    def steps_for(self, previous_failures: int) -> int:
        """Number of thresholds reached by a failure count."""
        return sum(1 for threshold in self._thresholds if previous_failures >= threshold)

    def escalate(self, decision: "Decision", previous_failures: int) -> "Decision":
        """Return the decision escalated for ``previous_failures``.

        Args:
            decision: Base decision from the routing pipeline.
            previous_failures: Failures the caller has seen for this task.

        Returns:
            The base decision, possibly with a higher tier, a re-selected
            model, ``escalated_from`` set and an escalation reason appended.

        Raises:
            ConfigError: If the resource table has no entry for the new tier.
        """
        reasons = list(decision.reasons)
        failures = previous_failures
        if failures < 0:
            reasons.append(f"negative failure count {failures} normalized to 0")
            failures = 0

        target = decision.tier.step_up(self.steps_for(failures))
        if target == decision.tier:
            if failures and decision.tier is Tier.HIGH:
                log.debug(
                    "escalation.tier.capped",
                    tier=decision.tier.value,
                    previous_failures=failures,
                )
            return replace(decision, reasons=tuple(reasons))

        model_result = select_model(target, self._config)
        if model_result.is_err:
            raise model_result.error

        reasons.append(f"escalated after {failures} prior failures")
        log.info(
            "escalation.tier.upgraded",
            from_tier=decision.tier.value,
            to_tier=target.value,
            previous_failures=failures,
        )
        return replace(
            decision,
            tier=target,
            model=model_result.value,
            reasons=tuple(reasons),
            escalated_from=decision.tier,
        )
