"""tierroute - Capability tier routing for agent tasks.

Decides which capability tier of model resource should execute a task, based
on the task text and the declared agent role, and escalates on repeated
failure.

Example:
    # Using CLI
    tierroute route "Refactor the auth module" --agent sisyphus-junior
    tierroute explain "Fix this bug" --agent executor --failures 2

    # Using Python
    from tierroute.config import get_default_config
    from tierroute.routing import TierRouter

    router = TierRouter(get_default_config())
    decision = router.route("Find all .ts files in src/", "explore")
"""

__version__ = "0.1.0"

__all__ = ["__version__", "main"]


def main() -> None:
    """Main entry point for the tierroute CLI.

    This function invokes the Typer app from tierroute.cli.main.
    """
    from tierroute.cli.main import app

    app()
