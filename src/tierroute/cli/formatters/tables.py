"""Rich tables for structured data display.

Provides table formatting utilities with consistent styling for routing
decisions, signals and configuration in the tierroute CLI.
"""

from typing import Any

from rich.markup import escape
from rich.table import Table

from tierroute.cli.formatters import console
from tierroute.routing import Decision, Signals, Tier


def create_table(
    title: str | None = None,
    *,
    show_header: bool = True,
    show_lines: bool = False,
    border_style: str = "blue",
    header_style: str = "bold cyan",
    row_styles: list[str] | None = None,
) -> Table:
    """Create a Rich Table with consistent tierroute styling.

    Args:
        title: Optional table title.
        show_header: Whether to show the header row.
        show_lines: Whether to show lines between rows.
        border_style: Style for table borders.
        header_style: Style for header row.
        row_styles: Alternating row styles (default: subtle alternation).

    Returns:
        Configured Rich Table instance.
    """
    if row_styles is None:
        row_styles = ["", "dim"]

    return Table(
        title=title,
        show_header=show_header,
        show_lines=show_lines,
        border_style=border_style,
        header_style=header_style,
        row_styles=row_styles,
    )


def create_key_value_table(
    data: dict[str, Any],
    title: str | None = None,
    *,
    key_style: str = "cyan",
    value_style: str = "",
) -> Table:
    """Create a two-column table for key-value data.

    Values are rendered literally; markup in them is escaped.

    Example:
        info = {"Tier": "HIGH", "Resource": "claude-opus-4-5"}
        print_table(create_key_value_table(info, "Decision"))
    """
    table = create_table(title, show_header=False)
    table.add_column("Key", style=key_style, no_wrap=True)
    table.add_column("Value", style=value_style)

    for key, value in data.items():
        table.add_row(str(key), escape(str(value)))

    return table


def tier_markup(tier: Tier) -> str:
    """Return the tier label wrapped in its theme style."""
    return f"[tier.{tier.value}]{tier.label}[/]"


def create_decision_table(decision: Decision, title: str | None = "Routing Decision") -> Table:
    """Create a table summarizing a routing decision.

    Args:
        decision: Decision to display.
        title: Optional table title.

    Returns:
        Rich Table with tier, resource, rule, score, confidence, escalation
        and reasons rows.
    """
    table = create_table(title, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Tier", tier_markup(decision.tier))
    table.add_row("Resource", escape(decision.model))
    table.add_row("Rule", decision.rule.value)
    table.add_row("Score", "n/a (agent pin)" if decision.score is None else f"{decision.score:.2f}")
    table.add_row("Confidence", f"{decision.confidence:.0%}")
    if decision.escalated_from is not None:
        table.add_row(
            "Escalated",
            f"{tier_markup(decision.escalated_from)} -> {tier_markup(decision.tier)}",
        )
    table.add_row("Reasons", escape("\n".join(decision.reasons)))
    return table


def create_signals_table(signals: Signals, title: str | None = "Signals") -> Table:
    """Create a table of matched terms per signal category."""
    table = create_table(title)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Count", justify="right")
    table.add_column("Terms")

    for category, (count, terms) in signals.category_counts().items():
        table.add_row(category, str(count), escape(", ".join(terms)) or "[muted]-[/]")

    return table


def print_table(table: Table) -> None:
    """Print a Rich Table to the shared console."""
    console.print(table)


__all__ = [
    "create_table",
    "create_key_value_table",
    "create_decision_table",
    "create_signals_table",
    "tier_markup",
    "print_table",
]
