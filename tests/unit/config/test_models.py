"""Unit tests for tierroute.config.models module."""

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
import pytest

from tierroute.config.models import (
    EscalationConfig,
    KeywordTables,
    LengthConfig,
    LoggingSection,
    RouterConfig,
    ScoringWeights,
    TierBoundaries,
    get_config_dir,
    get_default_config,
)


class TestScoringWeights:
    """Test ScoringWeights model."""

    def test_defaults(self) -> None:
        """Default weights match the calibrated values."""
        weights = ScoringWeights()
        assert weights.risk == 0.25
        assert weights.simplicity == 0.15
        assert weights.length == 0.15
        assert weights.domain == 0.10
        assert weights.urgency == 0.10
        assert weights.step == 0.05

    def test_negative_weight_rejected(self) -> None:
        """Weights must be non-negative."""
        with pytest.raises(PydanticValidationError):
            ScoringWeights(risk=-0.1)

    def test_frozen(self) -> None:
        """ScoringWeights is immutable."""
        weights = ScoringWeights()
        with pytest.raises(PydanticValidationError):
            weights.risk = 0.5  # type: ignore[misc]


class TestTierBoundaries:
    """Test TierBoundaries model."""

    def test_defaults(self) -> None:
        """Default boundaries are 0.20 and 0.60."""
        boundaries = TierBoundaries()
        assert boundaries.low_medium == 0.20
        assert boundaries.medium_high == 0.60

    def test_order_enforced(self) -> None:
        """low_medium must be strictly below medium_high."""
        with pytest.raises(PydanticValidationError, match="low_medium"):
            TierBoundaries(low_medium=0.6, medium_high=0.6)

    def test_range_enforced(self) -> None:
        """Boundaries must lie in [0, 1]."""
        with pytest.raises(PydanticValidationError):
            TierBoundaries(medium_high=1.5)


class TestLengthConfig:
    """Test LengthConfig model."""

    def test_defaults(self) -> None:
        """Short is at most 8 words, long at least 40."""
        length = LengthConfig()
        assert length.short_max_words == 8
        assert length.long_min_words == 40

    def test_order_enforced(self) -> None:
        """long_min_words must exceed short_max_words."""
        with pytest.raises(PydanticValidationError, match="long_min_words"):
            LengthConfig(short_max_words=10, long_min_words=10)


class TestKeywordTables:
    """Test KeywordTables model."""

    def test_terms_normalized(self) -> None:
        """Terms are lowercased and stripped."""
        tables = KeywordTables(risk=("  Refactor ", "SCHEMA"))
        assert tables.risk == ("refactor", "schema")

    def test_empty_term_rejected(self) -> None:
        """Blank terms are rejected."""
        with pytest.raises(PydanticValidationError, match="non-empty"):
            KeywordTables(urgency=("urgent", "  "))

    def test_default_tables_populated(self) -> None:
        """Every category ships with default terms."""
        tables = KeywordTables()
        assert "refactor" in tables.risk
        assert "security" in tables.hard_override
        assert "find" in tables.simplicity
        assert "component" in tables.domain
        assert "urgent" in tables.urgency


class TestEscalationConfig:
    """Test EscalationConfig model."""

    def test_default_thresholds(self) -> None:
        """Default thresholds are one and three failures."""
        assert EscalationConfig().thresholds == (1, 3)

    def test_thresholds_must_ascend(self) -> None:
        """Thresholds must be strictly ascending."""
        with pytest.raises(PydanticValidationError, match="ascending"):
            EscalationConfig(thresholds=(3, 1))

    def test_thresholds_must_be_positive(self) -> None:
        """Thresholds must be at least 1."""
        with pytest.raises(PydanticValidationError, match=">= 1"):
            EscalationConfig(thresholds=(0, 2))


class TestRouterConfig:
    """Test RouterConfig model."""

    def test_empty_config_is_valid_schema(self) -> None:
        """RouterConfig validates with no resources (completeness is checked elsewhere)."""
        config = RouterConfig()
        assert config.resources == {}
        assert config.default_tier == "medium"
        assert config.confidence_steepness == 10.0

    def test_resource_keys_normalized(self) -> None:
        """Resource tier names are normalized to lowercase."""
        config = RouterConfig(resources={"HIGH": " opus "})
        assert config.resources == {"high": "opus"}

    def test_unknown_resource_tier_rejected(self) -> None:
        """Resource tiers must be low, medium or high."""
        with pytest.raises(PydanticValidationError, match="unknown tier"):
            RouterConfig(resources={"ultra": "model-x"})

    def test_blank_resource_rejected(self) -> None:
        """Resource identifiers must be non-empty."""
        with pytest.raises(PydanticValidationError, match="non-empty"):
            RouterConfig(resources={"low": "  "})

    def test_agent_labels_normalized(self) -> None:
        """Agent labels are lowercased and stripped."""
        config = RouterConfig(agents={" Oracle ": "high"})
        assert config.agents == {"oracle": "high"}

    def test_invalid_agent_policy_rejected(self) -> None:
        """Agent policies must name a tier or 'variable'."""
        with pytest.raises(PydanticValidationError):
            RouterConfig(agents={"oracle": "ultra"})  # type: ignore[dict-item]

    def test_invalid_default_tier_rejected(self) -> None:
        """default_tier must name a tier."""
        with pytest.raises(PydanticValidationError):
            RouterConfig(default_tier="ultra")  # type: ignore[arg-type]

    def test_logging_section_defaults(self) -> None:
        """Logging section defaults to dev mode at warning level."""
        section = LoggingSection()
        assert section.mode == "dev"
        assert section.level == "warning"
        assert section.log_dir is None


class TestDefaultConfig:
    """Test get_default_config."""

    def test_resources_cover_every_tier(self) -> None:
        """The default resource table binds all three tiers."""
        config = get_default_config()
        assert config.resources == {
            "low": "claude-haiku-4-5",
            "medium": "claude-sonnet-4-5",
            "high": "claude-opus-4-5",
        }

    def test_agent_roster(self) -> None:
        """The default roster pins analysis roles high and search roles low."""
        agents = get_default_config().agents
        for label in ("oracle", "prometheus", "momus", "metis"):
            assert agents[label] == "high"
        assert agents["explore"] == "low"
        assert agents["document-writer"] == "low"
        assert agents["frontend-engineer"] == "medium"
        assert agents["sisyphus-junior"] == "variable"

    def test_round_trips_through_model_dump(self) -> None:
        """The default config validates from its own JSON dump."""
        config = get_default_config()
        assert RouterConfig.model_validate(config.model_dump(mode="json")) == config


class TestGetConfigDir:
    """Test get_config_dir."""

    def test_defaults_to_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an override, the directory is ~/.tierroute."""
        monkeypatch.delenv("TIERROUTE_CONFIG_DIR", raising=False)
        assert get_config_dir() == Path.home() / ".tierroute"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """TIERROUTE_CONFIG_DIR overrides the directory."""
        monkeypatch.setenv("TIERROUTE_CONFIG_DIR", str(tmp_path))
        assert get_config_dir() == tmp_path
