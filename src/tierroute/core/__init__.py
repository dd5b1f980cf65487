"""tierroute core module - Result type and error hierarchy."""

from tierroute.core.errors import ConfigError, TierRouteError, ValidationError
from tierroute.core.types import Result

__all__ = [
    # Types
    "Result",
    # Errors
    "TierRouteError",
    "ConfigError",
    "ValidationError",
]
