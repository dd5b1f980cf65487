"""Routing commands for tierroute.

Route a task, explain a decision, look up an agent's quick tier and adapt a
prompt for a tier.
"""

import json
import os
from pathlib import Path
from typing import Annotated

import typer

from tierroute.cli.formatters import console
from tierroute.cli.formatters.panels import print_error, print_text, print_warning
from tierroute.cli.formatters.tables import (
    create_decision_table,
    create_key_value_table,
    create_signals_table,
    print_table,
    tier_markup,
)
from tierroute.config import config_exists, get_default_config, load_config
from tierroute.config.models import LoggingSection, RouterConfig
from tierroute.core.errors import TierRouteError
from tierroute.observability.logging import LoggingConfig, LogMode, configure_logging
from tierroute.routing import Tier, TierRouter, adapt_prompt

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to config.yaml (default: ~/.tierroute/config.yaml if present).",
        exists=False,
        dir_okay=False,
    ),
]
AgentOption = Annotated[
    str,
    typer.Option("--agent", "-a", help="Declared agent/role label."),
]
FailuresOption = Annotated[
    int,
    typer.Option("--failures", "-f", help="Failures already seen for this task."),
]


def _resolve_config(config_path: Path | None) -> RouterConfig:
    """Load the explicit config file, the user's config, or the defaults."""
    if config_path is not None:
        config = load_config(config_path)
    elif config_exists():
        config = load_config()
    else:
        config = get_default_config()

    _configure_logging(config.logging)
    return config


def _configure_logging(section: LoggingSection) -> None:
    """Apply the config's logging section; TIERROUTE_LOG_* variables win."""
    mode = os.environ.get("TIERROUTE_LOG_MODE", section.mode).lower()
    logging_config = LoggingConfig(
        mode=LogMode.PROD if mode == "prod" else LogMode.DEV,
        log_level=os.environ.get("TIERROUTE_LOG_LEVEL", section.level).upper(),
    )
    if section.log_dir:
        logging_config = logging_config.model_copy(
            update={
                "log_dir": Path(section.log_dir).expanduser(),
                "enable_file_logging": True,
            }
        )
    configure_logging(logging_config)


def _build_router(config_path: Path | None) -> TierRouter:
    try:
        return TierRouter(_resolve_config(config_path))
    except TierRouteError as e:
        print_error(e.message, title="Configuration Error")
        raise typer.Exit(1) from e


def _warn_unknown_agent(router: TierRouter, agent: str) -> None:
    resolution = router.policies.resolve(agent)
    if not resolution.known:
        shown = resolution.agent or "<none>"
        print_warning(
            f"Agent '{shown}' has no policy entry: tasks are scored "
            f"and the quick tier is {router.config.default_tier}.",
            title="Unknown Agent",
        )


def route(
    prompt: Annotated[str, typer.Argument(help="Task description to route.")],
    agent: AgentOption = "",
    failures: FailuresOption = 0,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the decision as JSON."),
    ] = False,
    show_signals: Annotated[
        bool,
        typer.Option("--signals", "-s", help="Also show matched signal terms."),
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """Route a task to a capability tier and resource."""
    router = _build_router(config_path)
    try:
        decision = router.route_with_escalation(prompt, agent, failures)
    except TierRouteError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    if as_json:
        typer.echo(json.dumps(decision.as_dict(), indent=2))
        return

    print_table(create_decision_table(decision))
    if show_signals:
        print_table(create_signals_table(router.extract_signals(prompt, agent)))
    _warn_unknown_agent(router, agent)


def explain(
    prompt: Annotated[str, typer.Argument(help="Task description to explain.")],
    agent: AgentOption = "",
    failures: FailuresOption = 0,
    config_path: ConfigOption = None,
) -> None:
    """Explain how a task would be routed."""
    router = _build_router(config_path)
    try:
        explanation = router.explain(prompt, agent, failures)
    except TierRouteError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    print_text(explanation, "Routing Explanation")


def tier(
    agent: Annotated[str, typer.Argument(help="Agent/role label.")],
    config_path: ConfigOption = None,
) -> None:
    """Show an agent's quick tier without scoring a prompt.

    Pinned agents report their pinned tier; others report the default tier.
    """
    router = _build_router(config_path)
    quick = router.quick_tier(agent)
    resolution = router.policies.resolve(agent)
    if not resolution.known:
        policy = "unknown (variable)"
    elif resolution.agent in router.policies.pinned_agents():
        policy = "pinned"
    else:
        policy = "variable"

    table = create_key_value_table(
        {
            "Agent": resolution.agent or "<none>",
            "Policy": policy,
            "Resource": router.config.resources[quick.value],
        },
        "Quick Tier",
    )
    table.add_row("Tier", tier_markup(quick))
    print_table(table)
    _warn_unknown_agent(router, agent)


def adapt(
    prompt: Annotated[str, typer.Argument(help="Task description to adapt.")],
    tier_name: Annotated[
        str,
        typer.Option("--tier", "-t", help="Target tier: low, medium or high."),
    ],
    raw: Annotated[
        bool,
        typer.Option("--raw", help="Print the adapted prompt without a panel."),
    ] = False,
) -> None:
    """Rewrite a prompt for a target tier."""
    try:
        target = Tier.parse(tier_name)
    except TierRouteError as e:
        print_error(e.message)
        raise typer.Exit(1) from e

    adapted = adapt_prompt(prompt, target)
    if raw:
        typer.echo(adapted)
        return
    console.print(f"Adapted for {tier_markup(target)}")
    print_text(adapted, "Adapted Prompt")


__all__ = ["route", "explain", "tier", "adapt"]
