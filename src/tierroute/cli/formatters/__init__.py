"""Rich formatters for CLI output.

This module provides a shared Console instance used by every tierroute
command, so colors stay consistent.

Semantic Colors:
- green: success
- yellow: warning
- red: error
- blue: info

Tier Colors:
- low: green
- medium: yellow
- high: magenta
"""

from rich.console import Console
from rich.theme import Theme

TIERROUTE_THEME = Theme(
    {
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "info": "blue",
        "muted": "dim",
        "highlight": "bold cyan",
        "tier.low": "bold green",
        "tier.medium": "bold yellow",
        "tier.high": "bold magenta",
    }
)

# Shared Console instance for all CLI modules
console = Console(theme=TIERROUTE_THEME, force_terminal=True)

__all__ = ["console", "TIERROUTE_THEME"]
