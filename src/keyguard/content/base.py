"""ContentSource protocol — every page fetcher must satisfy this."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from keyguard.scanner.models import PageContent


@runtime_checkable
class ContentSource(Protocol):
    """Supplies the already-fetched text of a page for scanning."""

    def fetch(self, url: str) -> PageContent:
        """Return the page body, its scripts, and its stylesheets.

        Raises ContentUnavailable when the page cannot be supplied.
        """
        ...
