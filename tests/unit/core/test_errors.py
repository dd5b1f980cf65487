"""Unit tests for tierroute.core.errors module."""

import pytest

from tierroute.core.errors import ConfigError, TierRouteError, ValidationError


class TestTierRouteError:
    """Test TierRouteError base class."""

    def test_is_exception(self) -> None:
        """TierRouteError inherits from Exception."""
        error = TierRouteError("test error")
        assert isinstance(error, Exception)

    def test_stores_message(self) -> None:
        """TierRouteError stores the message."""
        error = TierRouteError("test message")
        assert error.message == "test message"
        assert str(error) == "test message"

    def test_stores_details(self) -> None:
        """TierRouteError stores optional details."""
        details = {"key": "value", "count": 42}
        error = TierRouteError("test", details=details)
        assert error.details == details

    def test_default_empty_details(self) -> None:
        """TierRouteError defaults to empty details."""
        assert TierRouteError("test").details == {}

    def test_str_with_details(self) -> None:
        """String representation includes details."""
        error = TierRouteError("test", details={"key": "value"})
        assert "test" in str(error)
        assert "key" in str(error)


class TestConfigError:
    """Test ConfigError for configuration failures."""

    def test_inherits_from_base(self) -> None:
        """ConfigError inherits from TierRouteError."""
        assert isinstance(ConfigError("bad"), TierRouteError)

    def test_stores_key_and_file(self) -> None:
        """ConfigError stores the config key and file."""
        error = ConfigError(
            "missing tier",
            config_key="resources.high",
            config_file="/tmp/config.yaml",
        )
        assert error.config_key == "resources.high"
        assert error.config_file == "/tmp/config.yaml"

    def test_key_and_file_default_to_none(self) -> None:
        """ConfigError key and file are optional."""
        error = ConfigError("bad")
        assert error.config_key is None
        assert error.config_file is None

    def test_can_be_raised_and_caught_as_base(self) -> None:
        """ConfigError is caught by an except clause for the base class."""
        with pytest.raises(TierRouteError, match="missing"):
            raise ConfigError("missing resource")


class TestValidationError:
    """Test ValidationError for rejected values."""

    def test_inherits_from_base(self) -> None:
        """ValidationError inherits from TierRouteError."""
        assert isinstance(ValidationError("bad"), TierRouteError)

    def test_stores_field_and_value(self) -> None:
        """ValidationError stores field and value."""
        error = ValidationError("Unknown tier", field="tier", value="ultra")
        assert error.field == "tier"
        assert error.value == "ultra"

    def test_str_includes_field(self) -> None:
        """String representation names the field and value."""
        error = ValidationError("Unknown tier", field="tier", value="ultra")
        assert "field: tier" in str(error)
        assert "'ultra'" in str(error)

    def test_str_without_field(self) -> None:
        """String representation is the bare message without a field."""
        assert str(ValidationError("bad input")) == "bad input"
