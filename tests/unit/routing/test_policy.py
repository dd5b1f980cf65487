"""Unit tests for the agent policy table."""

import pytest

from tierroute.core.errors import ValidationError
from tierroute.routing.policy import (
    AgentPolicyTable,
    Pinned,
    Variable,
    normalize_agent,
)
from tierroute.routing.tiers import Tier


@pytest.fixture
def table() -> AgentPolicyTable:
    return AgentPolicyTable.from_config(
        {"oracle": "high", "explore": "low", "executor": "variable"}
    )


class TestNormalizeAgent:
    """Test agent label normalization."""

    def test_strips_and_lowercases(self) -> None:
        """Labels are stripped and lowercased."""
        assert normalize_agent("  Oracle ") == "oracle"

    def test_none_is_empty(self) -> None:
        """A missing label normalizes to the empty string."""
        assert normalize_agent(None) == ""


class TestAgentPolicyTable:
    """Test AgentPolicyTable resolution."""

    def test_pinned_agent(self, table: AgentPolicyTable) -> None:
        """Pinned labels resolve to Pinned(tier)."""
        resolution = table.resolve("oracle")
        assert resolution.policy == Pinned(Tier.HIGH)
        assert resolution.known is True

    def test_variable_agent(self, table: AgentPolicyTable) -> None:
        """Variable labels resolve to Variable()."""
        resolution = table.resolve("executor")
        assert resolution.policy == Variable()
        assert resolution.known is True

    def test_unknown_agent_is_variable(self, table: AgentPolicyTable) -> None:
        """Unknown labels resolve to Variable() and are flagged unknown."""
        resolution = table.resolve("stranger")
        assert resolution.policy == Variable()
        assert resolution.known is False
        assert resolution.agent == "stranger"

    def test_lookup_is_case_insensitive(self, table: AgentPolicyTable) -> None:
        """Resolution normalizes the label first."""
        assert table.resolve(" EXPLORE ").policy == Pinned(Tier.LOW)
        assert "Oracle" in table

    def test_pinned_agents(self, table: AgentPolicyTable) -> None:
        """pinned_agents lists only pinned labels."""
        assert table.pinned_agents() == {"oracle": Tier.HIGH, "explore": Tier.LOW}

    def test_len(self, table: AgentPolicyTable) -> None:
        """The table reports its size."""
        assert len(table) == 3

    def test_invalid_tier_name(self) -> None:
        """An unknown tier name in the mapping raises ValidationError."""
        with pytest.raises(ValidationError):
            AgentPolicyTable.from_config({"oracle": "ultra"})

    def test_table_is_read_only(self, table: AgentPolicyTable) -> None:
        """The underlying mapping cannot be mutated."""
        with pytest.raises(TypeError):
            table._policies["new"] = Variable()  # type: ignore[index]
