"""Registry construction shared by CLI commands."""

from __future__ import annotations

import click

from keyguard.config import KeyGuardConfig
from keyguard.scanner.patterns import PatternRegistry


def build_registry(ctx: click.Context) -> PatternRegistry:
    """Built-in patterns plus configured and command-line catalogs."""
    files = KeyGuardConfig.load().pattern_files + ctx.obj.get("pattern_files", [])
    try:
        return PatternRegistry.load(files)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot load patterns: {e}") from e
