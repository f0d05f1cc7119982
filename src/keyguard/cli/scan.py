"""CLI command: keyguard scan <url> — scan saved page content for secrets."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keyguard.cli._registry import build_registry
from keyguard.content.files import FileContentSource
from keyguard.scanner.engine import ScanOrchestrator
from keyguard.scanner.models import ProgressEvent, ScanResult, ScanStatus, Severity

console = Console(stderr=True)

SEVERITY_COLORS = {
    Severity.CRITICAL: "red",
    Severity.HIGH: "magenta",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
}

_SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


@click.command()
@click.argument("url")
@click.option(
    "--html",
    type=click.Path(dir_okay=False),
    help="Saved HTML document of the page.",
)
@click.option(
    "--script",
    "-s",
    "scripts",
    type=click.Path(dir_okay=False),
    multiple=True,
    help="Script body linked from the page (repeatable).",
)
@click.option(
    "--style",
    "-c",
    "styles",
    type=click.Path(dir_okay=False),
    multiple=True,
    help="Stylesheet linked from the page (repeatable).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def scan(
    ctx: click.Context,
    url: str,
    html: str | None,
    scripts: tuple[str, ...],
    styles: tuple[str, ...],
    as_json: bool,
) -> None:
    """Scan a page's HTML, scripts, and stylesheets for exposed secrets."""
    registry = build_registry(ctx)
    source = FileContentSource(html=html, scripts=list(scripts), styles=list(styles))
    orchestrator = ScanOrchestrator(registry)

    if not as_json:
        console.print(
            f"[bold]KeyGuard[/bold] scanning [cyan]{escape(url)}[/cyan] "
            f"with {len(registry)} patterns\n"
        )

    result = orchestrator.scan(
        url,
        source,
        on_progress=None if as_json else _print_progress,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)

    if result.status == ScanStatus.FAILED:
        sys.exit(2)
    if result.summary.critical > 0:
        sys.exit(1)


def _print_progress(event: ProgressEvent) -> None:
    console.print(f"[dim][{event.progress:>3}%][/dim] {event.message}")


def _print_result(result: ScanResult) -> None:
    if result.status == ScanStatus.FAILED:
        console.print(f"\n[red]Scan failed:[/red] {escape(result.error)}")
        return

    if not result.findings:
        console.print("\n[green]No findings.[/green]")
        _print_summary(result)
        return

    findings = sorted(
        result.findings, key=lambda f: _SEVERITY_ORDER.get(f.severity, 9)
    )

    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=10)
    table.add_column("Location", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Pattern")
    table.add_column("Value", max_width=40)
    table.add_column("Conf.", justify="right")

    for finding in findings:
        color = SEVERITY_COLORS.get(finding.severity, "white")
        table.add_row(
            f"[{color}]{finding.severity.value}[/{color}]",
            escape(finding.location),
            str(finding.line_number or ""),
            escape(finding.pattern_name),
            escape(finding.masked_value),
            f"{finding.confidence}%",
        )

    console.print()
    console.print(table)
    _print_summary(result)


def _print_summary(result: ScanResult) -> None:
    s = result.summary
    console.print(
        f"\nScanned {result.completed_checks}/{result.total_checks} content blocks"
    )
    console.print(
        f"Total findings: {s.total} "
        f"([red]{s.critical} critical[/red], "
        f"[magenta]{s.high} high[/magenta], "
        f"[yellow]{s.medium} medium[/yellow], "
        f"[blue]{s.low} low[/blue])"
    )
