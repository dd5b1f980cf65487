"""Routing module for tierroute.

This module decides which capability tier should run a task, including:
- Tier enumeration and resource selection (LOW, MEDIUM, HIGH)
- Agent policy pins and variable scoring
- Lexical signal extraction and complexity scoring
- Tier classification with an auditable reasons trace
- Escalation on caller-reported failures
- Tier-specific prompt adaptation and decision explanations
"""

from tierroute.routing.adapter import adapt_prompt
from tierroute.routing.classifier import Classification, RoutingRule, TierClassifier
from tierroute.routing.complexity import ComplexityScore, score_complexity
from tierroute.routing.escalation import EscalationPolicy
from tierroute.routing.explainer import explain_decision
from tierroute.routing.policy import (
    AgentPolicy,
    AgentPolicyTable,
    Pinned,
    PolicyResolution,
    Variable,
)
from tierroute.routing.router import (
    Decision,
    TierRouter,
    route_task,
    route_task_with_escalation,
)
from tierroute.routing.signals import LengthBucket, SignalExtractor, Signals
from tierroute.routing.tiers import Tier, select_model, validate_resource_table

__all__ = [
    # Tiers
    "Tier",
    "select_model",
    "validate_resource_table",
    # Agent policy
    "AgentPolicy",
    "AgentPolicyTable",
    "Pinned",
    "Variable",
    "PolicyResolution",
    # Signals and scoring
    "LengthBucket",
    "Signals",
    "SignalExtractor",
    "ComplexityScore",
    "score_complexity",
    # Classification
    "Classification",
    "RoutingRule",
    "TierClassifier",
    # Router
    "Decision",
    "TierRouter",
    "route_task",
    "route_task_with_escalation",
    # Escalation
    "EscalationPolicy",
    # Adaptation and explanation
    "adapt_prompt",
    "explain_decision",
]
