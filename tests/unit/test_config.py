"""Tests for environment-driven configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from keyguard.config import KeyGuardConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("KEYGUARD_WEB_PORT", raising=False)
    monkeypatch.delenv("KEYGUARD_PATTERNS", raising=False)
    monkeypatch.delenv("KEYGUARD_SCAN_HISTORY", raising=False)


def test_defaults(tmp_path: Path):
    config = KeyGuardConfig.load()
    assert config.config_dir == tmp_path / "xdg" / "keyguard"
    assert config.web_host == "127.0.0.1"
    assert config.web_port == 11112
    assert config.pattern_files == []
    assert config.scan_history == 100


def test_port_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEYGUARD_WEB_PORT", "9000")
    assert KeyGuardConfig.load().web_port == 9000


def test_scan_history_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEYGUARD_SCAN_HISTORY", "5")
    assert KeyGuardConfig.load().scan_history == 5


def test_user_catalog_picked_up(tmp_path: Path):
    config_dir = tmp_path / "xdg" / "keyguard"
    config_dir.mkdir(parents=True)
    (config_dir / "patterns.yaml").write_text("patterns: []\n")

    config = KeyGuardConfig.load()
    assert config.pattern_files == [config_dir / "patterns.yaml"]


def test_patterns_env_list(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEYGUARD_PATTERNS", os.pathsep.join(["a.yaml", "b.yaml"]))
    config = KeyGuardConfig.load()
    assert config.pattern_files == [Path("a.yaml"), Path("b.yaml")]
