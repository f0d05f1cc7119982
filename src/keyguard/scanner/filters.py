"""False-positive suppression for placeholder and sample credentials."""

from __future__ import annotations

FALSE_POSITIVE_MARKERS: tuple[str, ...] = (
    "example",
    "demo",
    "test",
    "placeholder",
    "your_key_here",
    "insert_key",
    "replace_with",
    "dummy",
    "fake",
    "sample",
)


def is_false_positive(value: str, context: str) -> bool:
    """Check if a match or the line it sits on carries a benign marker."""
    lower_value = value.lower()
    lower_context = context.lower()
    return any(
        marker in lower_value or marker in lower_context
        for marker in FALSE_POSITIVE_MARKERS
    )
