"""Configuration module for tierroute.

Configuration is stored in ~/.tierroute/config.yaml (or TIERROUTE_CONFIG_DIR).

Usage:
    from tierroute.config import load_config
    from tierroute.routing import TierRouter

    router = TierRouter(load_config())
"""

from tierroute.config.loader import (
    config_exists,
    create_default_config,
    ensure_config_dir,
    load_config,
)
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

__all__ = [
    # Models
    "RouterConfig",
    "ScoringWeights",
    "TierBoundaries",
    "LengthConfig",
    "KeywordTables",
    "EscalationConfig",
    "LoggingSection",
    # Loader functions
    "load_config",
    "create_default_config",
    "ensure_config_dir",
    "config_exists",
    # Model helpers
    "get_config_dir",
    "get_default_config",
]
