"""Capability tiers and resource selection for tierroute.

Three ordered tiers:
- LOW: fast, cheap resources for lookups and small edits
- MEDIUM: balanced resources for standard implementation work
- HIGH: most capable resources for risky, cross-cutting or analytical work

The resource table (tier -> resource id) comes from RouterConfig. A missing
entry is a configuration error, never a silent default.

Usage:
    from tierroute.routing.tiers import Tier, select_model

    result = select_model(Tier.HIGH, config)
    if result.is_ok:
        print(f"Using resource: {result.value}")
"""

from enum import Enum

from tierroute.config.models import RouterConfig
from tierroute.core.errors import ConfigError, ValidationError
from tierroute.core.types import Result
from tierroute.observability.logging import get_logger

log = get_logger(__name__)


class Tier(str, Enum):
    """Ordered capability tier: LOW < MEDIUM < HIGH.

    Comparison operators follow tier rank, not string order.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Position in the tier order (0, 1 or 2)."""
        return _TIER_ORDER.index(self)

    @property
    def label(self) -> str:
        """Upper-case display name (LOW, MEDIUM, HIGH)."""
        return self.name

    def step_up(self, steps: int = 1) -> "Tier":
        """Return the tier ``steps`` above this one, capped at HIGH."""
        index = min(self.rank + max(steps, 0), len(_TIER_ORDER) - 1)
        return _TIER_ORDER[index]

    @classmethod
    def parse(cls, value: "str | Tier") -> "Tier":
        """Parse a tier name case-insensitively.

        Raises:
            ValidationError: If ``value`` names no tier.
        """
        if isinstance(value, Tier):
            return value
        normalized = str(value).strip().lower()
        for tier in cls:
            if tier.value == normalized:
                return tier
        raise ValidationError(
            f"Unknown tier '{value}'",
            field="tier",
            value=value,
            details={"valid_tiers": [t.value for t in cls]},
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_ORDER: tuple[Tier, ...] = (Tier.LOW, Tier.MEDIUM, Tier.HIGH)


def select_model(tier: Tier, config: RouterConfig) -> Result[str, ConfigError]:
    """Look up the resource identifier bound to a tier.

    Args:
        tier: The tier to resolve.
        config: Configuration holding the resource table.

    Returns:
        Result containing the resource id, or ConfigError when the table has
        no usable entry for the tier.
    """
    resource_id = config.resources.get(tier.value, "")
    if not resource_id:
        log.error(
            "tier.config.missing",
            tier=tier.value,
            available_tiers=sorted(config.resources),
        )
        return Result.err(
            ConfigError(
                f"No resource configured for tier '{tier.value}'",
                config_key=f"resources.{tier.value}",
                details={
                    "available_tiers": sorted(config.resources),
                    "requested_tier": tier.value,
                },
            )
        )
    return Result.ok(resource_id)


def validate_resource_table(config: RouterConfig) -> Result[None, ConfigError]:
    """Validate that every tier has a resource entry.

    Args:
        config: The configuration to validate.

    Returns:
        Result containing None on success or a ConfigError listing the
        missing tiers.
    """
    missing = [tier.value for tier in Tier if not config.resources.get(tier.value)]
    if missing:
        log.error("tier.validation.failed", missing_tiers=missing)
        return Result.err(
            ConfigError(
                f"Resource table is missing tiers: {', '.join(missing)}",
                config_key="resources",
                details={
                    "missing_tiers": missing,
                    "required_tiers": [t.value for t in Tier],
                },
            )
        )

    log.debug("tier.validation.passed", tier_count=len(Tier))
    return Result.ok(None)
