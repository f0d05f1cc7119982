"""CLI command: keyguard patterns — list known secret signatures."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keyguard.cli._registry import build_registry
from keyguard.cli.scan import SEVERITY_COLORS

console = Console()


@click.command()
@click.pass_context
def patterns(ctx: click.Context) -> None:
    """List the secret patterns used by scans."""
    registry = build_registry(ctx)

    table = Table(title=f"Patterns ({len(registry)})", show_lines=False)
    table.add_column("Name", style="bold")
    table.add_column("Provider", style="cyan")
    table.add_column("Severity", width=10)
    table.add_column("Regex", max_width=60)

    for p in registry:
        color = SEVERITY_COLORS.get(p.severity, "white")
        table.add_row(
            escape(p.name),
            escape(p.provider),
            f"[{color}]{p.severity.value}[/{color}]",
            escape(p.regex.pattern),
        )

    console.print(table)
