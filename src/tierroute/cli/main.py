"""tierroute CLI main entry point.

Defines the main Typer application, registers the routing commands and the
config command group.
"""

from typing import Annotated

import typer

from tierroute import __version__
from tierroute.cli.commands import config, route
from tierroute.cli.formatters import console

app = typer.Typer(
    name="tierroute",
    help="tierroute - Capability tier routing for agent tasks",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Routing commands
app.command("route")(route.route)
app.command("explain")(route.explain)
app.command("tier")(route.tier)
app.command("adapt")(route.adapt)

# Command groups
app.add_typer(config.app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]tierroute[/] version [green]{__version__}[/]")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """tierroute - Capability tier routing for agent tasks.

    Decides which capability tier (LOW, MEDIUM, HIGH) should run a task,
    binds a resource and explains why.

    Use [bold cyan]tierroute COMMAND --help[/] for command-specific help.
    """


__all__ = ["app", "main"]
