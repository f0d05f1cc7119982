"""Local-file content source — scan page bodies saved to disk."""

from __future__ import annotations

import logging
from pathlib import Path

from keyguard.scanner.errors import ContentUnavailable
from keyguard.scanner.models import BlockKind, ContentBlock, PageContent

logger = logging.getLogger(__name__)

# Location label prefixes for linked resources
_SCRIPT_LABEL = "JavaScript"
_STYLE_LABEL = "CSS"


class FileContentSource:
    """Reads the HTML document, scripts, and stylesheets from local files.

    Files are read lazily on fetch() so a missing file ends the scan in the
    failed state rather than at construction time.
    """

    def __init__(
        self,
        html: str | Path | None = None,
        scripts: list[str | Path] | None = None,
        styles: list[str | Path] | None = None,
    ) -> None:
        self._html = Path(html) if html else None
        self._scripts = [Path(p) for p in scripts or []]
        self._styles = [Path(p) for p in styles or []]

    def fetch(self, url: str) -> PageContent:
        html = ContentBlock(
            self._read(self._html) if self._html else "",
            "HTML Document",
            BlockKind.HTML,
        )
        scripts = tuple(
            ContentBlock(self._read(p), f"{_SCRIPT_LABEL}: {p}", BlockKind.SCRIPT)
            for p in self._scripts
        )
        styles = tuple(
            ContentBlock(self._read(p), f"{_STYLE_LABEL}: {p}", BlockKind.STYLE)
            for p in self._styles
        )
        return PageContent(html=html, scripts=scripts, styles=styles)

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            raise ContentUnavailable(f"Cannot read {path}: {e}") from e
