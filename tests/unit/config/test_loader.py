"""Unit tests for tierroute.config.loader module."""

from pathlib import Path

import pytest
import yaml

from tierroute.config.loader import (
    config_exists,
    create_default_config,
    ensure_config_dir,
    load_config,
)
from tierroute.config.models import RouterConfig, get_default_config
from tierroute.core.errors import ConfigError


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = tmp_path / ".tierroute"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config_file(temp_config_dir: Path) -> Path:
    """Create a temporary config file with valid content."""
    config_path = temp_config_dir / "config.yaml"
    config_content = {
        "resources": {"low": "small-model", "medium": "mid-model", "high": "big-model"},
        "agents": {"reviewer": "high", "worker": "variable"},
        "boundaries": {"low_medium": 0.25, "medium_high": 0.7},
        "escalation": {"thresholds": [2]},
    }
    with config_path.open("w") as f:
        yaml.dump(config_content, f)
    return config_path


class TestEnsureConfigDir:
    """Test ensure_config_dir."""

    def test_creates_dir_and_logs(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The config directory and its logs/ subdirectory are created."""
        target = tmp_path / "cfg"
        monkeypatch.setenv("TIERROUTE_CONFIG_DIR", str(target))

        assert ensure_config_dir() == target
        assert target.is_dir()
        assert (target / "logs").is_dir()


class TestCreateDefaultConfig:
    """Test create_default_config."""

    def test_writes_loadable_file(self, temp_config_dir: Path) -> None:
        """The written file loads back to the default config."""
        path = create_default_config(temp_config_dir)

        assert path == temp_config_dir / "config.yaml"
        assert load_config(path) == get_default_config()

    def test_refuses_to_overwrite(self, temp_config_file: Path) -> None:
        """An existing file is kept unless overwrite=True."""
        with pytest.raises(ConfigError, match="already exists") as exc_info:
            create_default_config(temp_config_file.parent)
        assert exc_info.value.config_file == str(temp_config_file)

    def test_overwrite_replaces_file(self, temp_config_file: Path) -> None:
        """overwrite=True replaces an existing file with defaults."""
        create_default_config(temp_config_file.parent, overwrite=True)
        assert load_config(temp_config_file).resources["high"] == "claude-opus-4-5"

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        """The target directory is created when absent."""
        path = create_default_config(tmp_path / "new" / "dir")
        assert path.exists()


class TestLoadConfig:
    """Test load_config."""

    def test_loads_valid_file(self, temp_config_file: Path) -> None:
        """A valid file produces a RouterConfig with its values."""
        config = load_config(temp_config_file)

        assert isinstance(config, RouterConfig)
        assert config.resources["high"] == "big-model"
        assert config.agents == {"reviewer": "high", "worker": "variable"}
        assert config.boundaries.medium_high == 0.7
        assert config.escalation.thresholds == (2,)

    def test_default_path_uses_config_dir(
        self, temp_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a path, config.yaml in the config directory is loaded."""
        monkeypatch.setenv("TIERROUTE_CONFIG_DIR", str(temp_config_file.parent))
        assert load_config().resources["low"] == "small-model"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigError pointing at config init."""
        with pytest.raises(ConfigError, match="not found") as exc_info:
            load_config(tmp_path / "missing.yaml")
        assert "tierroute config init" in exc_info.value.message

    def test_malformed_yaml(self, temp_config_dir: Path) -> None:
        """Unparseable YAML raises ConfigError."""
        path = temp_config_dir / "config.yaml"
        path.write_text("resources: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config(path)

    def test_non_mapping_top_level(self, temp_config_dir: Path) -> None:
        """A YAML list at the top level is rejected."""
        path = temp_config_dir / "config.yaml"
        path.write_text("- low\n- high\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_validation_errors_listed_per_field(self, temp_config_dir: Path) -> None:
        """Pydantic errors are reported one line per field."""
        path = temp_config_dir / "config.yaml"
        path.write_text(
            yaml.dump(
                {
                    "resources": {"low": "a", "medium": "b", "high": "c"},
                    "boundaries": {"low_medium": 0.8, "medium_high": 0.3},
                    "default_tier": "ultra",
                }
            )
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        message = exc_info.value.message
        assert message.startswith("Configuration validation failed:")
        assert "  - boundaries:" in message
        assert "  - default_tier:" in message

    def test_incomplete_resource_table(self, temp_config_dir: Path) -> None:
        """A resource table missing a tier fails at load time."""
        path = temp_config_dir / "config.yaml"
        path.write_text(yaml.dump({"resources": {"low": "a", "medium": "b"}}))

        with pytest.raises(ConfigError, match="missing tiers: high") as exc_info:
            load_config(path)
        assert exc_info.value.config_key == "resources"
        assert exc_info.value.config_file == str(path)

    def test_empty_file_means_no_resources(self, temp_config_dir: Path) -> None:
        """An empty file validates as an empty config and fails the resource check."""
        path = temp_config_dir / "config.yaml"
        path.write_text("")

        with pytest.raises(ConfigError, match="missing tiers"):
            load_config(path)


class TestConfigExists:
    """Test config_exists."""

    def test_false_when_absent(self, temp_config_dir: Path) -> None:
        """config_exists is False for an empty directory."""
        assert config_exists(temp_config_dir) is False

    def test_true_when_present(self, temp_config_file: Path) -> None:
        """config_exists is True once config.yaml is written."""
        assert config_exists(temp_config_file.parent) is True
