"""Line-by-line candidate detection: named patterns plus an entropy sweep."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from keyguard.scanner.entropy import is_high_entropy
from keyguard.scanner.models import Severity
from keyguard.scanner.patterns import Pattern, PatternRegistry

HIGH_ENTROPY_NAME = "High Entropy String"
HIGH_ENTROPY_DESCRIPTION = (
    "Potential API key or secret detected based on entropy analysis"
)
HIGH_ENTROPY_SEVERITY = Severity.MEDIUM

_TOKEN_RE = re.compile(r"[A-Za-z0-9_\-+/=]{20,}")


@dataclass(frozen=True)
class Candidate:
    """A raw match before false-positive filtering and scoring.

    ``pattern`` is None for tokens found by the entropy sweep.
    """

    pattern: Pattern | None
    value: str
    line: str
    line_number: int

    @property
    def name(self) -> str:
        return self.pattern.name if self.pattern else HIGH_ENTROPY_NAME

    @property
    def severity(self) -> Severity:
        return self.pattern.severity if self.pattern else HIGH_ENTROPY_SEVERITY

    @property
    def description(self) -> str:
        return self.pattern.description if self.pattern else HIGH_ENTROPY_DESCRIPTION

    @property
    def from_entropy(self) -> bool:
        return self.pattern is None


def detect(content: str, registry: PatternRegistry) -> Iterator[Candidate]:
    """Yield candidates for every line of ``content``.

    Both passes see the same line, so one token can be reported by a named
    pattern and again by the entropy sweep.
    """
    # Only \n separates lines; a trailing \r is dropped with the context strip.
    for line_num, line in enumerate(content.split("\n"), start=1):
        for pattern in registry:
            for value in pattern.find_all(line):
                yield Candidate(pattern, value, line, line_num)

        for match in _TOKEN_RE.finditer(line):
            token = match.group(0)
            if is_high_entropy(token):
                yield Candidate(None, token, line, line_num)
