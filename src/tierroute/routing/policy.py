"""Agent policy table for tierroute.

An agent label resolves to one of two policies:
- Pinned(tier): the role mandates a fixed capability level; scoring is skipped
- Variable(): the task text decides the tier through scoring

Labels absent from the table resolve to Variable() and are reported as
unknown so the decision can say so in its reasons.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from tierroute.routing.tiers import Tier


@dataclass(frozen=True, slots=True)
class Pinned:
    """Fixed-tier policy for an agent role."""

    tier: Tier


@dataclass(frozen=True, slots=True)
class Variable:
    """Policy for agents whose tier is decided by scoring."""


AgentPolicy = Pinned | Variable


@dataclass(frozen=True, slots=True)
class PolicyResolution:
    """Outcome of looking up an agent label.

    Attributes:
        agent: The normalized agent label.
        policy: The resolved policy.
        known: False when the label is absent from the table.
    """

    agent: str
    policy: AgentPolicy
    known: bool


def normalize_agent(agent: str | None) -> str:
    """Normalize an agent label for table lookups."""
    return (agent or "").strip().lower()


class AgentPolicyTable:
    """Immutable mapping from agent label to AgentPolicy.

    Example:
        table = AgentPolicyTable.from_config({"oracle": "high", "executor": "variable"})
        table.resolve("Oracle").policy  # Pinned(tier=Tier.HIGH)
    """

    __slots__ = ("_policies",)

    def __init__(self, policies: Mapping[str, AgentPolicy]) -> None:
        self._policies: Mapping[str, AgentPolicy] = MappingProxyType(
            {normalize_agent(label): policy for label, policy in policies.items()}
        )

    @classmethod
    def from_config(cls, agents: Mapping[str, str]) -> "AgentPolicyTable":
        """Build a table from ``label -> "low" | "medium" | "high" | "variable"``."""
        policies: dict[str, AgentPolicy] = {}
        for label, name in agents.items():
            if name == "variable":
                policies[label] = Variable()
            else:
                policies[label] = Pinned(Tier.parse(name))
        return cls(policies)

    def resolve(self, agent: str | None) -> PolicyResolution:
        """Resolve an agent label, defaulting unknown labels to Variable()."""
        label = normalize_agent(agent)
        policy = self._policies.get(label)
        if policy is None:
            return PolicyResolution(agent=label, policy=Variable(), known=False)
        return PolicyResolution(agent=label, policy=policy, known=True)

    def pinned_agents(self) -> dict[str, Tier]:
        """Return every pinned label with its tier."""
        return {
            label: policy.tier
            for label, policy in self._policies.items()
            if isinstance(policy, Pinned)
        }

    def __len__(self) -> int:
        return len(self._policies)

    def __contains__(self, agent: object) -> bool:
        return isinstance(agent, str) and normalize_agent(agent) in self._policies
