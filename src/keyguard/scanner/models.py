"""Scanner data models — findings, progress events, and scan results."""

from __future__ import annotations

import enum
import time
import uuid
from dataclasses import dataclass, field


def _new_id() -> str:
    return uuid.uuid4().hex


class Severity(enum.Enum):
    """Risk tier of a finding."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScanStatus(enum.Enum):
    """Lifecycle state of a scan."""

    SCANNING = "scanning"
    COMPLETED = "completed"
    FAILED = "failed"


class BlockKind(enum.Enum):
    """Which part of the page a content block came from."""

    HTML = "html"
    SCRIPT = "script"
    STYLE = "style"


@dataclass(frozen=True)
class Finding:
    """A single candidate secret that survived filtering and scoring."""

    pattern_name: str
    masked_value: str
    location: str
    severity: Severity
    description: str
    context_line: str
    confidence: int
    line_number: int | None = None
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "pattern_name": self.pattern_name,
            "masked_value": self.masked_value,
            "location": self.location,
            "severity": self.severity.value,
            "description": self.description,
            "context_line": self.context_line,
            "line_number": self.line_number,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ScanSummary:
    """Per-severity finding counts."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "total": self.total,
        }


@dataclass(frozen=True)
class ProgressEvent:
    """A progress milestone emitted while a scan runs."""

    stage: str
    progress: int
    message: str

    def to_dict(self) -> dict:
        return {
            "stage": self.stage,
            "progress": self.progress,
            "message": self.message,
        }


@dataclass(frozen=True)
class ContentBlock:
    """One already-fetched text body tagged with where it came from."""

    content: str | None
    location: str
    kind: BlockKind = BlockKind.HTML


@dataclass(frozen=True)
class PageContent:
    """A page as supplied by a content source: document, scripts, stylesheets."""

    html: ContentBlock
    scripts: tuple[ContentBlock, ...] = ()
    styles: tuple[ContentBlock, ...] = ()

    @classmethod
    def build(
        cls,
        html: str | None,
        scripts: list[tuple[str | None, str]] | None = None,
        styles: list[tuple[str | None, str]] | None = None,
        html_location: str = "HTML Document",
    ) -> PageContent:
        """Assemble a page from ``(content, location)`` pairs."""
        return cls(
            html=ContentBlock(html, html_location, BlockKind.HTML),
            scripts=tuple(
                ContentBlock(content, location, BlockKind.SCRIPT)
                for content, location in scripts or []
            ),
            styles=tuple(
                ContentBlock(content, location, BlockKind.STYLE)
                for content, location in styles or []
            ),
        )

    def blocks(self) -> list[ContentBlock]:
        """All blocks in drive order."""
        return [self.html, *self.scripts, *self.styles]


@dataclass
class ScanResult:
    """Aggregate result of a scan, owned and finalized by a single run."""

    url: str
    user_id: str | None = None
    status: ScanStatus = ScanStatus.SCANNING
    findings: list[Finding] = field(default_factory=list)
    summary: ScanSummary = field(default_factory=ScanSummary)
    total_checks: int = 0
    completed_checks: int = 0
    error: str = ""
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None
    id: str = field(default_factory=_new_id)

    @property
    def is_finished(self) -> bool:
        return self.status != ScanStatus.SCANNING

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "url": self.url,
            "status": self.status.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "findings": [f.to_dict() for f in self.findings],
            "total_checks": self.total_checks,
            "completed_checks": self.completed_checks,
            "summary": self.summary.to_dict(),
            "error": self.error,
        }
