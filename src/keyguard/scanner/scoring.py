"""Heuristic confidence scoring for named-pattern matches."""

from __future__ import annotations

from keyguard.scanner.entropy import is_high_entropy

BASE_CONFIDENCE = 0.5
# Matches at or below this confidence never become findings.
ACCEPTANCE_FLOOR = 0.3
# Fixed confidence given to entropy-only detections.
ENTROPY_CONFIDENCE = 75

_LENGTH_BONUS = 0.2
_ENTROPY_BONUS = 0.2
_NONPROD_PENALTY = 0.3
_PROD_BONUS = 0.2


def score_confidence(value: str, context: str) -> float:
    """Score how likely ``value`` is a live secret, clamped to [0, 1]."""
    confidence = BASE_CONFIDENCE

    if len(value) >= 16:
        confidence += _LENGTH_BONUS
    if is_high_entropy(value):
        confidence += _ENTROPY_BONUS

    lower_context = context.lower()
    if "test" in lower_context or "demo" in lower_context:
        confidence -= _NONPROD_PENALTY
    if "prod" in lower_context or "live" in lower_context:
        confidence += _PROD_BONUS

    return max(0.0, min(1.0, confidence))


def is_accepted(confidence: float) -> bool:
    return confidence > ACCEPTANCE_FLOOR


def as_percentage(confidence: float) -> int:
    """Convert a [0, 1] confidence into an integer percentage."""
    return round(confidence * 100)
