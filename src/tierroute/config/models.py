"""Pydantic models for tierroute configuration.

The router reads nothing from ambient state: every table it needs is part of
a RouterConfig that the host builds once and passes in.

Classes:
    ScoringWeights: Per-signal weights for the complexity score
    TierBoundaries: Score boundaries between tiers
    LengthConfig: Word-count thresholds for length buckets
    KeywordTables: Keyword lists per signal category
    EscalationConfig: Failure thresholds for tier escalation
    LoggingSection: Logging mode and level
    RouterConfig: Top-level configuration combining all sections
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

TierName = Literal["low", "medium", "high"]
AgentPolicyName = Literal["low", "medium", "high", "variable"]

TIER_NAMES: tuple[str, ...] = ("low", "medium", "high")


class ScoringWeights(BaseModel, frozen=True):
    """Weights applied to each signal when computing the complexity score.

    Attributes:
        risk: Added per matched risk term (hard-override terms included).
        simplicity: Subtracted per matched lookup/search term.
        length: Multiplied by the length bucket value (0, 1 or 2).
        domain: Added per matched implementation/domain term.
        urgency: Added per matched urgency term.
        step: Added per enumerated step in the prompt.
    """

    risk: float = Field(default=0.25, ge=0.0)
    simplicity: float = Field(default=0.15, ge=0.0)
    length: float = Field(default=0.15, ge=0.0)
    domain: float = Field(default=0.10, ge=0.0)
    urgency: float = Field(default=0.10, ge=0.0)
    step: float = Field(default=0.05, ge=0.0)


class TierBoundaries(BaseModel, frozen=True):
    """Score boundaries separating LOW/MEDIUM and MEDIUM/HIGH.

    Attributes:
        low_medium: Scores below this route to LOW.
        medium_high: Scores above this route to HIGH.
    """

    low_medium: float = Field(default=0.20, ge=0.0, le=1.0)
    medium_high: float = Field(default=0.60, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_order(self) -> "TierBoundaries":
        """Validate that low_medium < medium_high."""
        if self.low_medium >= self.medium_high:
            msg = (
                f"low_medium ({self.low_medium}) must be < medium_high ({self.medium_high})"
            )
            raise ValueError(msg)
        return self


class LengthConfig(BaseModel, frozen=True):
    """Word-count thresholds for the length bucket.

    Attributes:
        short_max_words: Prompts with at most this many words are short.
        long_min_words: Prompts with at least this many words are long.
    """

    short_max_words: int = Field(default=8, ge=1)
    long_min_words: int = Field(default=40, ge=2)

    @model_validator(mode="after")
    def validate_order(self) -> "LengthConfig":
        """Validate that long_min_words > short_max_words."""
        if self.long_min_words <= self.short_max_words:
            msg = (
                f"long_min_words ({self.long_min_words}) must be > "
                f"short_max_words ({self.short_max_words})"
            )
            raise ValueError(msg)
        return self


class KeywordTables(BaseModel, frozen=True):
    """Keyword lists per signal category.

    Terms may contain spaces or hyphens; matching is case-insensitive and
    word-boundary aware. Every hard_override hit also counts as a risk hit.
    """

    risk: tuple[str, ...] = (
        "refactor",
        "rewrite",
        "redesign",
        "overhaul",
        "migration",
        "migrate",
        "schema",
        "breaking change",
        "backwards compatibility",
        "backward compatibility",
        "root cause",
        "race condition",
        "deadlock",
        "concurrency",
        "memory leak",
        "rollback",
        "dependency injection",
        "data model",
        "transaction",
    )
    hard_override: tuple[str, ...] = (
        "security",
        "vulnerability",
        "vulnerabilities",
        "exploit",
        "cve",
        "authentication bypass",
        "privilege escalation",
        "credential",
        "encryption",
        "production",
        "outage",
        "incident",
        "hotfix",
        "data loss",
        "downtime",
        "architecture",
        "microservice",
        "cross-service",
        "distributed system",
        "system-wide",
        "event sourcing",
    )
    simplicity: tuple[str, ...] = (
        "find",
        "search",
        "locate",
        "grep",
        "look up",
        "lookup",
        "list all",
        "list the",
        "list every",
        "where is",
        "where are",
        "where does",
        "where do",
        "which file",
        "show me",
    )
    domain: tuple[str, ...] = (
        "api",
        "endpoint",
        "component",
        "service",
        "database",
        "query",
        "cache",
        "module",
        "class",
        "function",
        "handler",
        "middleware",
        "controller",
        "session",
        "token",
        "authentication",
        "authorization",
        "payment",
        "pipeline",
        "integration",
    )
    urgency: tuple[str, ...] = (
        "urgent",
        "critical",
        "asap",
        "immediately",
        "blocker",
        "emergency",
        "p0",
    )

    @field_validator("risk", "hard_override", "simplicity", "domain", "urgency")
    @classmethod
    def normalize_terms(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase and strip terms, rejecting empty entries."""
        terms = tuple(term.strip().lower() for term in v)
        if any(not term for term in terms):
            msg = "keyword terms must be non-empty strings"
            raise ValueError(msg)
        return terms


class EscalationConfig(BaseModel, frozen=True):
    """Escalation thresholds.

    Attributes:
        thresholds: Failure counts at which the tier moves up one more step.
            With the default (1, 3): one failure moves up one tier, three
            failures move up two tiers, always capped at HIGH.
    """

    thresholds: tuple[int, ...] = (1, 3)

    @field_validator("thresholds")
    @classmethod
    def validate_thresholds(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Validate thresholds are positive and strictly ascending."""
        if any(t < 1 for t in v):
            msg = f"escalation thresholds must be >= 1, got {list(v)}"
            raise ValueError(msg)
        if any(a >= b for a, b in zip(v, v[1:])):
            msg = f"escalation thresholds must be strictly ascending, got {list(v)}"
            raise ValueError(msg)
        return v


class LoggingSection(BaseModel, frozen=True):
    """Logging configuration.

    Attributes:
        mode: dev (console) or prod (JSON).
        level: Minimum log level.
        log_dir: Directory for rotated JSON log files; None disables file logging.
    """

    mode: Literal["dev", "prod"] = "dev"
    level: Literal["debug", "info", "warning", "error"] = "warning"
    log_dir: str | None = None


class RouterConfig(BaseModel, frozen=True):
    """Top-level tierroute configuration.

    Validates against config.yaml in ~/.tierroute/.

    Attributes:
        resources: Resource table, tier name -> resource (model) identifier.
        agents: Agent policy table, agent label -> pinned tier or "variable".
        default_tier: Tier reported by quick_tier for unpinned agents.
        weights: Complexity score weights.
        boundaries: Tier boundaries on the score axis.
        length: Length bucket thresholds.
        keywords: Keyword tables per signal category.
        escalation: Escalation thresholds.
        confidence_steepness: Sigmoid steepness for score-based confidence.
        logging: Logging configuration.
    """

    resources: dict[str, str] = Field(default_factory=dict)
    agents: dict[str, AgentPolicyName] = Field(default_factory=dict)
    default_tier: TierName = "medium"
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    boundaries: TierBoundaries = Field(default_factory=TierBoundaries)
    length: LengthConfig = Field(default_factory=LengthConfig)
    keywords: KeywordTables = Field(default_factory=KeywordTables)
    escalation: EscalationConfig = Field(default_factory=EscalationConfig)
    confidence_steepness: float = Field(default=10.0, gt=0.0)
    logging: LoggingSection = Field(default_factory=LoggingSection)

    @field_validator("resources")
    @classmethod
    def validate_resources(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject unknown tier names and blank resource identifiers.

        Completeness (every tier present) is checked by
        ``tierroute.routing.tiers.validate_resource_table``.
        """
        normalized: dict[str, str] = {}
        for tier_name, resource_id in v.items():
            key = tier_name.strip().lower()
            if key not in TIER_NAMES:
                msg = f"unknown tier '{tier_name}' (expected one of {list(TIER_NAMES)})"
                raise ValueError(msg)
            if not resource_id.strip():
                msg = f"resource for tier '{key}' must be non-empty"
                raise ValueError(msg)
            normalized[key] = resource_id.strip()
        return normalized

    @field_validator("agents")
    @classmethod
    def normalize_agents(cls, v: dict[str, AgentPolicyName]) -> dict[str, AgentPolicyName]:
        """Normalize agent labels to lowercase without surrounding whitespace."""
        return {label.strip().lower(): policy for label, policy in v.items()}


def get_default_config() -> RouterConfig:
    """Get the default tierroute configuration.

    Returns:
        RouterConfig with a complete resource table and the standard agent roster.
    """
    return RouterConfig(
        resources={
            "low": "claude-haiku-4-5",
            "medium": "claude-sonnet-4-5",
            "high": "claude-opus-4-5",
        },
        agents={
            # Analysis and planning roles
            "oracle": "high",
            "prometheus": "high",
            "momus": "high",
            "metis": "high",
            # Search and writing roles
            "explore": "low",
            "document-writer": "low",
            # UI and visual roles
            "frontend-engineer": "medium",
            "multimodal-looker": "medium",
            # General executors go through scoring
            "sisyphus-junior": "variable",
            "executor": "variable",
            "librarian": "variable",
        },
    )


def get_config_dir() -> Path:
    """Get the tierroute configuration directory path.

    Returns:
        TIERROUTE_CONFIG_DIR if set, otherwise ~/.tierroute/
    """
    override = os.environ.get("TIERROUTE_CONFIG_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".tierroute"
