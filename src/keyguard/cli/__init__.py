"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from keyguard import __version__


@click.group()
@click.version_option(version=__version__, prog_name="keyguard")
@click.option(
    "--patterns",
    "-P",
    "pattern_files",
    type=click.Path(exists=True, dir_okay=False),
    multiple=True,
    help="Extra YAML pattern catalog (repeatable).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, pattern_files: tuple[str, ...], verbose: bool) -> None:
    """KeyGuard — find exposed API keys and secrets in web page content."""
    ctx.ensure_object(dict)
    ctx.obj["pattern_files"] = list(pattern_files)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from keyguard.cli.patterns import patterns  # noqa: F811
    from keyguard.cli.scan import scan  # noqa: F811
    from keyguard.cli.server import server  # noqa: F811

    main.add_command(scan)
    main.add_command(patterns)
    main.add_command(server)


_register_commands()
