"""Config command group for tierroute.

Create, display and validate ~/.tierroute/config.yaml.
"""

from pathlib import Path
from typing import Annotated

import typer

from tierroute.cli.formatters.panels import print_error, print_info, print_success
from tierroute.cli.formatters.tables import create_key_value_table, create_table, print_table
from tierroute.config import (
    config_exists,
    create_default_config,
    get_config_dir,
    get_default_config,
    load_config,
)
from tierroute.config.loader import CONFIG_FILE_NAME
from tierroute.core.errors import ConfigError

app = typer.Typer(
    name="config",
    help="Manage tierroute configuration.",
    no_args_is_help=True,
)

ConfigPathOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to config.yaml (default: ~/.tierroute/config.yaml).",
        dir_okay=False,
    ),
]


@app.command()
def init(
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory to write config.yaml into.", file_okay=False),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config.yaml."),
    ] = False,
) -> None:
    """Initialize tierroute configuration.

    Writes the default config.yaml, including the resource table and the
    standard agent roster.
    """
    try:
        path = create_default_config(directory, overwrite=force)
    except ConfigError as e:
        print_error(f"{e.message}\nUse --force to overwrite.")
        raise typer.Exit(1) from e
    print_success(f"Configuration written to {path}")


@app.command()
def show(config_path: ConfigPathOption = None) -> None:
    """Display the active configuration.

    Falls back to the built-in defaults when no config.yaml exists.
    """
    try:
        if config_path is not None or config_exists():
            config = load_config(config_path)
            source = str(config_path or get_config_dir() / CONFIG_FILE_NAME)
        else:
            config = get_default_config()
            source = "built-in defaults"
    except ConfigError as e:
        print_error(e.message, title="Configuration Error")
        raise typer.Exit(1) from e

    summary = {
        "source": source,
        "default_tier": config.default_tier,
        "boundaries": (
            f"low/medium {config.boundaries.low_medium:.2f}, "
            f"medium/high {config.boundaries.medium_high:.2f}"
        ),
        "escalation_thresholds": ", ".join(str(t) for t in config.escalation.thresholds),
        "log_level": config.logging.level,
    }
    print_table(create_key_value_table(summary, "Current Configuration"))
    print_table(create_key_value_table(config.resources, "Resources"))

    agents = create_table("Agents")
    agents.add_column("Agent", style="cyan", no_wrap=True)
    agents.add_column("Policy")
    for label, policy in sorted(config.agents.items()):
        agents.add_row(label, policy)
    print_table(agents)


@app.command()
def validate(config_path: ConfigPathOption = None) -> None:
    """Validate configuration.

    Checks schema, boundary order and that every tier has a resource.
    """
    path = config_path or get_config_dir() / CONFIG_FILE_NAME
    try:
        load_config(path)
    except ConfigError as e:
        print_error(e.message, title="Invalid Configuration")
        raise typer.Exit(1) from e
    print_success(f"Configuration is valid: {path}")
    print_info("Every tier has a resource entry.")


__all__ = ["app"]
