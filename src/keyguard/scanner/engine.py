"""Scan engine — drives page content through detection, filtering, and scoring."""

from __future__ import annotations

import contextlib
import dataclasses
import logging
import re
import threading
import time
from collections.abc import Callable, Iterator
from urllib.parse import urlsplit

from keyguard.content.base import ContentSource
from keyguard.scanner.detector import Candidate, detect
from keyguard.scanner.errors import (
    ContentUnavailable,
    InternalScanError,
    InvalidUrl,
    ScanCancelled,
    ScanError,
)
from keyguard.scanner.filters import is_false_positive
from keyguard.scanner.masking import mask_value
from keyguard.scanner.models import (
    ContentBlock,
    Finding,
    PageContent,
    ProgressEvent,
    ScanResult,
    ScanStatus,
    ScanSummary,
)
from keyguard.scanner.patterns import PatternRegistry
from keyguard.scanner.scoring import (
    ENTROPY_CONFIDENCE,
    as_percentage,
    is_accepted,
    score_confidence,
)
from keyguard.scanner.summary import summarize

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")
_EXPLICIT_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

# (stage, progress, message), emitted in this order on a successful scan
_INIT = ("init", 0, "Initializing scan...")
_FETCH = ("fetch", 10, "Fetching webpage...")
_HTML = ("html", 30, "Analyzing HTML content...")
_SCRIPTS = ("javascript", 50, "Scanning JavaScript files...")
_STYLES = ("css", 70, "Scanning CSS files...")
_FINALIZE = ("finalize", 90, "Finalizing scan...")
_DONE = ("complete", 100, "Scan completed!")

MILESTONES: tuple[tuple[str, int, str], ...] = (
    _INIT,
    _FETCH,
    _HTML,
    _SCRIPTS,
    _STYLES,
    _FINALIZE,
    _DONE,
)


def validate_url(url: str) -> str:
    """Normalize a scan target to an http(s) URL or raise InvalidUrl.

    A string without an explicit ``scheme://`` prefix gets ``https://``
    prepended and is parsed once more.
    """
    url = url.strip()
    if _EXPLICIT_SCHEME_RE.match(url):
        parsed = _parse_http_url(url)
        if parsed is None:
            raise InvalidUrl(f"Only HTTP and HTTPS URLs are supported: {url!r}")
        return parsed

    parsed = _parse_http_url(f"https://{url}")
    if parsed is None:
        raise InvalidUrl(f"Invalid URL format: {url!r}")
    return parsed


def _parse_http_url(candidate: str) -> str | None:
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.hostname:
        return None
    # "host:" with nothing after the colon
    if port is None and parts.netloc.rpartition("@")[2].endswith(":"):
        return None
    return parts.geturl()


class ScanRun:
    """A single scan: an ordered progress stream plus the result it finalizes.

    Iterating ``events()`` drives the scan; the stream ends exactly when the
    result leaves the scanning state. A run cannot be restarted.
    """

    def __init__(
        self,
        url: str,
        source: ContentSource,
        registry: PatternRegistry,
        user_id: str | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self._source: ContentSource | None = source
        self._registry = registry
        self._cancel = cancel
        self._lock = threading.Lock()
        self._started = False
        self._latest: ProgressEvent | None = None
        self.result = ScanResult(url=url, user_id=user_id)

    @property
    def latest_event(self) -> ProgressEvent | None:
        return self._latest

    def snapshot(self) -> ScanResult:
        """Consistent copy of the result for readers on other threads."""
        with self._lock:
            return dataclasses.replace(
                self.result, findings=list(self.result.findings)
            )

    def events(self) -> Iterator[ProgressEvent]:
        if self._started:
            raise RuntimeError("Scan run already started")
        self._started = True
        stream = self._drive()
        next(stream)
        return stream

    def _drive(self) -> Iterator[ProgressEvent]:
        findings: list[Finding] = []
        try:
            # parked here by events() so closing before the first event
            # still finalizes the run
            yield None
            yield self._emit(_INIT)

            url = validate_url(self.result.url)
            with self._lock:
                self.result.url = url
            logger.info("Scanning %s", url)
            yield self._emit(_FETCH)

            page = self._fetch(url)
            with self._lock:
                self.result.total_checks = len(page.blocks())
            yield self._emit(_HTML)

            findings.extend(self._scan_block(page.html))
            yield self._emit(_SCRIPTS)

            for block in page.scripts:
                findings.extend(self._scan_block(block))
            yield self._emit(_STYLES)

            for block in page.styles:
                findings.extend(self._scan_block(block))
            yield self._emit(_FINALIZE)

            self._complete(findings)
            yield self._emit(_DONE)
        except GeneratorExit:
            if not self.result.is_finished:
                self._fail(ScanCancelled("Progress stream closed before completion"))
            raise
        except ScanError as e:
            self._fail(e)
        except Exception as e:
            logger.exception("Unexpected error while scanning %s", self.result.url)
            self._fail(InternalScanError(str(e) or type(e).__name__))

    def _fetch(self, url: str) -> PageContent:
        try:
            page = self._source.fetch(url)
        except ScanError:
            raise
        except Exception as e:
            raise ContentUnavailable(f"Failed to fetch {url}: {e}") from e
        if page is None:
            raise ContentUnavailable(f"No content returned for {url}")
        return page

    def _scan_block(self, block: ContentBlock) -> list[Finding]:
        if self._cancel is not None and self._cancel.is_set():
            raise ScanCancelled("Scan cancelled")
        if block.content is None:
            raise ContentUnavailable(f"No content for {block.location}")

        findings: list[Finding] = []
        for candidate in detect(block.content, self._registry):
            finding = _to_finding(candidate, block.location)
            if finding is not None:
                findings.append(finding)
        logger.debug(
            "%s (%s): %d finding(s)", block.location, block.kind.value, len(findings)
        )
        with self._lock:
            self.result.completed_checks += 1
        return findings

    def _emit(self, milestone: tuple[str, int, str]) -> ProgressEvent:
        stage, progress, message = milestone
        event = ProgressEvent(stage=stage, progress=progress, message=message)
        self._latest = event
        return event

    def _complete(self, findings: list[Finding]) -> None:
        with self._lock:
            self.result.findings = findings
            self.result.summary = summarize(findings)
            self.result.end_time = time.time()
            self.result.status = ScanStatus.COMPLETED
        self._source = None
        logger.info(
            "Scan of %s completed: %d finding(s)", self.result.url, len(findings)
        )

    def _fail(self, error: ScanError) -> None:
        with self._lock:
            self.result.findings = []
            self.result.summary = ScanSummary()
            self.result.total_checks = 0
            self.result.completed_checks = 0
            self.result.error = str(error) or type(error).__name__
            self.result.end_time = time.time()
            self.result.status = ScanStatus.FAILED
            self._latest = ProgressEvent(
                stage="failed",
                progress=self._latest.progress if self._latest else 0,
                message=f"Scan failed: {self.result.error}",
            )
        self._source = None
        logger.warning(
            "Scan of %s failed (%s): %s",
            self.result.url,
            type(error).__name__,
            self.result.error,
        )


def _to_finding(candidate: Candidate, location: str) -> Finding | None:
    """Filter, score, and mask a candidate; None when it is discarded."""
    if is_false_positive(candidate.value, candidate.line):
        return None

    if candidate.from_entropy:
        confidence = ENTROPY_CONFIDENCE
    else:
        score = score_confidence(candidate.value, candidate.line)
        if not is_accepted(score):
            return None
        confidence = as_percentage(score)

    return Finding(
        pattern_name=candidate.name,
        masked_value=mask_value(candidate.value),
        location=location,
        severity=candidate.severity,
        description=candidate.description,
        context_line=candidate.line.strip(),
        line_number=candidate.line_number,
        confidence=confidence,
    )


class ScanOrchestrator:
    """Runs scans against a shared, read-only pattern registry."""

    def __init__(self, registry: PatternRegistry | None = None) -> None:
        if registry is None:
            registry = PatternRegistry.default()
        self._registry = registry

    @property
    def registry(self) -> PatternRegistry:
        return self._registry

    def start(
        self,
        url: str,
        source: ContentSource,
        user_id: str | None = None,
        cancel: threading.Event | None = None,
    ) -> ScanRun:
        """Create a run; nothing happens until its events are consumed."""
        return ScanRun(url, source, self._registry, user_id=user_id, cancel=cancel)

    def scan(
        self,
        url: str,
        source: ContentSource,
        on_progress: Callable[[ProgressEvent], None] | None = None,
        user_id: str | None = None,
        cancel: threading.Event | None = None,
    ) -> ScanResult:
        """Run a scan to completion and return its final result."""
        run = self.start(url, source, user_id=user_id, cancel=cancel)
        with contextlib.closing(run.events()) as events:
            for event in events:
                if on_progress:
                    on_progress(event)
        return run.result
