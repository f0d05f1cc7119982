"""Partial redaction of secret values for display."""

from __future__ import annotations

_VISIBLE = 4
_MAX_STARS = 20


def mask_value(value: str) -> str:
    """Keep the first and last four characters, star out the middle.

    Values of eight characters or fewer are returned as-is.
    """
    if len(value) <= 2 * _VISIBLE:
        return value
    stars = "*" * min(len(value) - 2 * _VISIBLE, _MAX_STARS)
    return f"{value[:_VISIBLE]}{stars}{value[-_VISIBLE:]}"
