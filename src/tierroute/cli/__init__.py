"""tierroute CLI module.

Command-line interface for the tier router, built with Typer and Rich.
"""

from tierroute.cli.main import app

__all__ = ["app"]
