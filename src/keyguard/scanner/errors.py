"""Scan error kinds — all of them end a scan in the failed state."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for failures that abort a scan."""


class InvalidUrl(ScanError, ValueError):
    """The target URL is unparseable or uses a scheme other than http(s)."""


class ContentUnavailable(ScanError):
    """The content source could not supply a page or one of its blocks."""


class InternalScanError(ScanError):
    """Unexpected failure inside the detection pipeline."""


class ScanCancelled(ScanError):
    """The scan was cancelled between content blocks."""
