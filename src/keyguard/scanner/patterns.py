"""Secret signature catalog — YAML-defined patterns compiled into a registry."""

from __future__ import annotations

import functools
import importlib.resources
import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import yaml

from keyguard.scanner.models import Severity

logger = logging.getLogger(__name__)

_BUILTIN_CATALOG = "builtin.yaml"


@dataclass(frozen=True)
class Pattern:
    """A named credential signature with compiled regex and metadata."""

    name: str
    regex: re.Pattern[str]
    severity: Severity
    description: str = ""
    provider: str = ""

    def find_all(self, line: str) -> list[str]:
        """Return every non-overlapping, non-empty match in ``line``."""
        return [m.group(0) for m in self.regex.finditer(line) if m.group(0)]


class PatternRegistry:
    """Immutable, ordered collection of patterns with unique names.

    Safe to share between concurrent scans: nothing on it changes after
    construction, and matching never keeps cursor state on the regex.
    """

    def __init__(self, patterns: Iterable[Pattern]) -> None:
        patterns = tuple(patterns)
        seen: set[str] = set()
        for p in patterns:
            if p.name in seen:
                raise ValueError(f"Duplicate pattern name: {p.name}")
            seen.add(p.name)
        self._patterns = patterns

    @property
    def patterns(self) -> tuple[Pattern, ...]:
        return self._patterns

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def get(self, name: str) -> Pattern | None:
        for p in self._patterns:
            if p.name == name:
                return p
        return None

    @classmethod
    def default(cls) -> PatternRegistry:
        """The built-in catalog (loaded once per process)."""
        return _builtin_registry()

    @classmethod
    def load(cls, extra_files: Iterable[str | Path] = ()) -> PatternRegistry:
        """Built-in catalog followed by the patterns of each extra file."""
        patterns = list(cls.default())
        for path in extra_files:
            loaded = load_patterns(path)
            logger.debug("Loaded %d pattern(s) from %s", len(loaded), path)
            patterns.extend(loaded)
        return cls(patterns)


def load_patterns(path: str | Path) -> list[Pattern]:
    """Load patterns from a YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    return load_patterns_from_string(text)


def load_patterns_from_string(text: str) -> list[Pattern]:
    """Parse a YAML pattern catalog."""
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Pattern YAML must be a mapping")
    entries = data.get("patterns", [])
    if not isinstance(entries, list):
        raise ValueError("'patterns' must be a list")
    return [_parse_pattern(entry) for entry in entries]


def _parse_pattern(entry: object) -> Pattern:
    if not isinstance(entry, dict):
        raise ValueError(f"Pattern entry must be a mapping, got {entry!r}")
    try:
        name = str(entry["name"])
        raw = str(entry["regex"])
    except KeyError as e:
        raise ValueError(f"Pattern entry missing required key {e}") from e

    try:
        severity = Severity(entry.get("severity", "medium"))
    except ValueError as e:
        raise ValueError(
            f"Pattern '{name}' has unknown severity {entry.get('severity')!r}"
        ) from e

    # \d, \w and \s match ASCII only, as in the browser regexes the
    # signatures were written for
    try:
        regex = re.compile(raw, re.ASCII)
    except re.error as e:
        raise ValueError(f"Pattern '{name}' has an invalid regex: {e}") from e

    return Pattern(
        name=name,
        regex=regex,
        severity=severity,
        description=entry.get("description", ""),
        provider=entry.get("provider", ""),
    )


@functools.lru_cache(maxsize=1)
def _builtin_registry() -> PatternRegistry:
    pkg = importlib.resources.files("keyguard.scanner.presets")
    text = pkg.joinpath(_BUILTIN_CATALOG).read_text(encoding="utf-8")
    return PatternRegistry(load_patterns_from_string(text))
