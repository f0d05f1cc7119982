"""In-memory content sources."""

from __future__ import annotations

from keyguard.scanner.errors import ContentUnavailable
from keyguard.scanner.models import PageContent


class StaticContentSource:
    """Serves a page that was fetched ahead of time, whatever the URL."""

    def __init__(self, page: PageContent) -> None:
        self._page = page

    @classmethod
    def from_text(
        cls,
        html: str,
        scripts: list[tuple[str, str]] | None = None,
        styles: list[tuple[str, str]] | None = None,
    ) -> StaticContentSource:
        """Build from raw text; scripts and styles are (content, location) pairs."""
        return cls(PageContent.build(html, scripts=scripts, styles=styles))

    def fetch(self, url: str) -> PageContent:
        return self._page


class UnavailableContentSource:
    """Used when no fetcher is wired in: every fetch fails."""

    def fetch(self, url: str) -> PageContent:
        raise ContentUnavailable(f"No content source configured to fetch {url}")
