"""Error hierarchy for tierroute.

Exceptions here signal conditions the host application must treat as
non-retryable. Request content never raises: input anomalies are normalized
and recorded in decision reasons instead.

Exception Hierarchy:
    TierRouteError (base)
    ├── ConfigError       - Missing resource entries, malformed tables, bad YAML
    └── ValidationError   - Values that cannot be coerced (e.g. an unknown tier name)
"""

from typing import Any


class TierRouteError(Exception):
    """Base exception for all tierroute errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
            details: Optional dict with additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigError(TierRouteError):
    """Error from routing configuration.

    Raised when the resource table, weights or keyword tables are unusable.
    Misconfiguration is fatal: hosts should fail at startup rather than retry.

    Attributes:
        config_key: Dotted configuration key that caused the error.
        config_file: Path to the config file if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        config_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize config error.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            config_file: Path to the config file if applicable.
            details: Optional dict with additional context.
        """
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


class ValidationError(TierRouteError):
    """Error from validating a caller-supplied value.

    Attributes:
        field: The field that failed validation.
        value: The rejected value.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable error description.
            field: The field that failed validation.
            value: The rejected value.
            details: Optional dict with additional context.
        """
        super().__init__(message, details)
        self.field = field
        self.value = value

    def __str__(self) -> str:
        """Return string representation including the offending field."""
        base = self.message
        if self.field:
            base = f"{base} (field: {self.field}, value: {self.value!r})"
        if self.details:
            base = f"{base} (details: {self.details})"
        return base
