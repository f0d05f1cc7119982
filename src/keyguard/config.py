"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "keyguard"
    return Path.home() / ".config" / "keyguard"


@dataclass
class KeyGuardConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    pattern_files: list[Path] = field(default_factory=list)
    web_host: str = "127.0.0.1"  # Local only
    web_port: int = 11112
    scan_history: int = 100  # finished scans the server keeps
    verbose: bool = False

    @classmethod
    def load(cls) -> KeyGuardConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_port = os.environ.get("KEYGUARD_WEB_PORT")
        if env_port:
            config.web_port = int(env_port)

        env_history = os.environ.get("KEYGUARD_SCAN_HISTORY")
        if env_history:
            config.scan_history = int(env_history)

        # User catalog in the config dir extends the built-in patterns
        user_patterns = config.config_dir / "patterns.yaml"
        if user_patterns.is_file():
            config.pattern_files.append(user_patterns)

        env_patterns = os.environ.get("KEYGUARD_PATTERNS")
        if env_patterns:
            config.pattern_files.extend(
                Path(p) for p in env_patterns.split(os.pathsep) if p
            )

        return config
