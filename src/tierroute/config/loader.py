"""Configuration loading and management for tierroute.

Functions:
    load_config: Load and validate ~/.tierroute/config.yaml
    create_default_config: Write the default config.yaml
    ensure_config_dir: Ensure ~/.tierroute/ exists
    config_exists: Check whether config.yaml exists
"""

from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError
import yaml

from tierroute.config.models import RouterConfig, get_config_dir, get_default_config
from tierroute.core.errors import ConfigError

# TIERROUTE_* variables may come from a .env in the working directory or config dir
load_dotenv()
load_dotenv(get_config_dir() / ".env")

CONFIG_FILE_NAME = "config.yaml"


def ensure_config_dir() -> Path:
    """Ensure the configuration directory and its logs/ subdirectory exist.

    Returns:
        Path to the configuration directory.
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "logs").mkdir(exist_ok=True)
    return config_dir


def _format_validation_errors(error: PydanticValidationError) -> str:
    """Render pydantic errors as one ``  - loc: msg`` line per field."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"])
        lines.append(f"  - {loc}: {item['msg']}")
    return "\n".join(lines)


def create_default_config(
    config_dir: Path | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """Write the default config.yaml.

    Args:
        config_dir: Directory to create the file in. Defaults to ~/.tierroute/
        overwrite: If True, replace an existing file.

    Returns:
        Path to the written config file.

    Raises:
        ConfigError: If the file exists and overwrite=False.
    """
    if config_dir is None:
        config_dir = ensure_config_dir()
    else:
        config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / CONFIG_FILE_NAME
    if config_path.exists() and not overwrite:
        raise ConfigError(
            f"Configuration file already exists: {config_path}",
            config_file=str(config_path),
        )

    config_dict: dict[str, Any] = get_default_config().model_dump(mode="json")
    with config_path.open("w") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    return config_path


def load_config(config_path: Path | None = None) -> RouterConfig:
    """Load configuration from YAML and validate it completely.

    Besides schema validation, the resource table must cover every tier:
    an incomplete table fails here rather than on the first routed request.

    Args:
        config_path: Path to config file. Defaults to ~/.tierroute/config.yaml.

    Returns:
        Validated RouterConfig instance.

    Raises:
        ConfigError: If the file is missing, malformed, fails validation or
            has an incomplete resource table.
    """
    if config_path is None:
        config_path = get_config_dir() / CONFIG_FILE_NAME

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}. "
            "Run `tierroute config init` to create default configuration.",
            config_file=str(config_path),
        )

    try:
        with config_path.open() as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse configuration file: {e}",
            config_file=str(config_path),
            details={"yaml_error": str(e)},
        ) from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError(
            "Configuration file must contain a mapping at the top level",
            config_file=str(config_path),
        )

    try:
        config = RouterConfig.model_validate(config_dict)
    except PydanticValidationError as e:
        raise ConfigError(
            "Configuration validation failed:\n" + _format_validation_errors(e),
            config_file=str(config_path),
            details={"validation_errors": e.errors()},
        ) from e

    # Deferred: tierroute.routing imports the config models
    from tierroute.routing.tiers import validate_resource_table

    table_result = validate_resource_table(config)
    if table_result.is_err:
        error = table_result.error
        error.config_file = str(config_path)
        raise error

    return config


def config_exists(config_dir: Path | None = None) -> bool:
    """Check if config.yaml exists.

    Args:
        config_dir: Directory to check. Defaults to ~/.tierroute/
    """
    if config_dir is None:
        config_dir = get_config_dir()
    return (config_dir / CONFIG_FILE_NAME).exists()
