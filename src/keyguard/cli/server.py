"""CLI command: keyguard server — start the scan API."""

from __future__ import annotations

import click
from rich.console import Console

from keyguard.config import KeyGuardConfig

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 11112).",
)
@click.pass_context
def server(ctx: click.Context, port: int | None) -> None:
    """Start the KeyGuard HTTP API."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]Web dependencies not installed.[/red]\n"
            "Install with: pip install keyguard[web]"
        )
        raise SystemExit(1)

    config = KeyGuardConfig.load()
    config.pattern_files.extend(ctx.obj.get("pattern_files", []))
    config.verbose = ctx.obj.get("verbose", False)
    if port is not None:
        config.web_port = port

    console.print(
        f"[bold]KeyGuard[/bold] API starting on "
        f"[cyan]http://{config.web_host}:{config.web_port}/api[/cyan]\n"
    )

    from keyguard.web.app import create_app

    uvicorn.run(
        create_app(config),
        host=config.web_host,
        port=config.web_port,
        log_level="debug" if config.verbose else "info",
    )
