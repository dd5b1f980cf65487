"""Rich panels for CLI messages.

Panels for info, warning, error and success messages, plus the adapted
prompt and decision explanation views.
"""

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from tierroute.cli.formatters import console


def _message_panel(message: str, title: str, color: str, style: str, expand: bool) -> Panel:
    return Panel(
        f"[{style}]{escape(message)}[/]",
        title=f"[bold {color}]{title}[/]",
        border_style=color,
        expand=expand,
    )


def info_panel(message: str, title: str = "Info", *, expand: bool = False) -> Panel:
    """Create an info panel with blue styling."""
    return _message_panel(message, title, "blue", "info", expand)


def warning_panel(message: str, title: str = "Warning", *, expand: bool = False) -> Panel:
    """Create a warning panel with yellow styling."""
    return _message_panel(message, title, "yellow", "warning", expand)


def error_panel(message: str, title: str = "Error", *, expand: bool = False) -> Panel:
    """Create an error panel with red styling."""
    return _message_panel(message, title, "red", "error", expand)


def success_panel(message: str, title: str = "Success", *, expand: bool = False) -> Panel:
    """Create a success panel with green styling."""
    return _message_panel(message, title, "green", "success", expand)


def text_panel(body: str, title: str, *, border_style: str = "cyan") -> Panel:
    """Create a panel that shows ``body`` verbatim, without markup parsing.

    Args:
        body: Text to display; square brackets are not treated as markup.
        title: Panel title.
        border_style: Style for the panel border.

    Returns:
        Configured Rich Panel.
    """
    return Panel(Text(body), title=f"[bold]{title}[/]", border_style=border_style)


def print_info(message: str, title: str = "Info") -> None:
    console.print(info_panel(message, title))


def print_warning(message: str, title: str = "Warning") -> None:
    console.print(warning_panel(message, title))


def print_error(message: str, title: str = "Error") -> None:
    console.print(error_panel(message, title))


def print_success(message: str, title: str = "Success") -> None:
    console.print(success_panel(message, title))


def print_text(body: str, title: str, *, border_style: str = "cyan") -> None:
    """Print verbatim text in a panel."""
    console.print(text_panel(body, title, border_style=border_style))


__all__ = [
    "info_panel",
    "warning_panel",
    "error_panel",
    "success_panel",
    "text_panel",
    "print_info",
    "print_warning",
    "print_error",
    "print_success",
    "print_text",
]
