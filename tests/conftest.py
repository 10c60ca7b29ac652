# Shared fixtures for the lifecycle tests.
# Every test gets a scratch home + filesystem root and a PATH that points only
# at a private bin directory, so nothing on the real host is touched.
# Created: 2026-10-18

from __future__ import annotations

from pathlib import Path

import pytest

from installer.lifecycle.config import Settings, get_settings


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def root(tmp_path: Path) -> Path:
    path = tmp_path / "root"
    path.mkdir()
    return path


@pytest.fixture
def path_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A bin directory that is the only entry on PATH."""
    path = tmp_path / "path-bin"
    path.mkdir()
    monkeypatch.setenv("PATH", str(path))
    return path


@pytest.fixture
def settings(home: Path, root: Path, path_bin: Path) -> Settings:
    return Settings(home=home, root=root, install_dir=None, min_size=None)


@pytest.fixture
def env_settings(home: Path, root: Path, path_bin: Path, monkeypatch: pytest.MonkeyPatch):
    """Route ``get_settings()`` at the scratch tree through the environment."""
    monkeypatch.setenv("DIRANALYZER_HOME", str(home))
    monkeypatch.setenv("DIRANALYZER_ROOT", str(root))
    monkeypatch.delenv("INSTALL_DIR", raising=False)
    monkeypatch.delenv("DIRANALYZER_MIN_SIZE", raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def make_binary():
    """Factory that writes an executable stub at the given path."""

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\necho diranalyzer\n")
        path.chmod(0o755)
        return path

    return _make
