"""Severity tallies for a list of findings."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from keyguard.scanner.models import Finding, ScanSummary, Severity


def summarize(findings: Iterable[Finding]) -> ScanSummary:
    counts = Counter(f.severity for f in findings)
    return ScanSummary(
        critical=counts[Severity.CRITICAL],
        high=counts[Severity.HIGH],
        medium=counts[Severity.MEDIUM],
        low=counts[Severity.LOW],
        total=sum(counts.values()),
    )
