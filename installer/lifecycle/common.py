# DirAnalyzer Lifecycle - Shared Constants & Helpers
# Well-known paths, the installer's PATH line, prompts, and the status
# callback used by bootstrap.py, removal.py, path_guard.py and uninstall.py.
# Created: 2026-10-18

from __future__ import annotations

import glob
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

# ── Package metadata ───────────────────────────────────────────────────
APP_NAME = "DirAnalyzer"
BINARY_NAME = "diranalyzer"
REPO_URL = "https://github.com/RustyFellows/diranalyzer"
SCRIPT_VERSION = "1.0.0"

# ── Startup-file line ──────────────────────────────────────────────────
# Written verbatim (unexpanded) by the installer and matched verbatim on removal.
PATH_EXPORT_LINE = 'export PATH="$HOME/.local/bin:$PATH"'
BACKUP_SUFFIX = ".diranalyzer.bak"

# ── Callback types ─────────────────────────────────────────────────────
StatusCallback = Callable[[str], None]
ConfirmCallback = Callable[[str], bool]


def noop_status(msg: str) -> None:
    """No-op status callback."""


def confirm(prompt: str) -> bool:
    """Ask a yes/no question. Only a bare ``y``/``Y`` counts as yes."""
    try:
        answer = input(f"{prompt} (y/N): ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer in ("y", "Y")


# ── Layout ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Layout:
    """Every well-known location the installer may write to.

    ``root`` prefixes the system-wide paths (``/usr/local/bin``, ``/etc`` ...)
    so the whole tree can be relocated under a scratch directory.
    """

    home: Path
    root: Path = Path("/")
    binary_name: str = BINARY_NAME
    rc_file: Path | None = None

    # Binaries

    @property
    def system_bin_dir(self) -> Path:
        return self.root / "usr" / "local" / "bin"

    @property
    def user_bin_dir(self) -> Path:
        return self.home / ".local" / "bin"

    def binary_paths(self) -> list[str]:
        """Fixed, ordered candidate locations for the installed binary."""
        return [
            str(self.system_bin_dir / self.binary_name),
            str(self.root / "usr" / "bin" / self.binary_name),
            str(self.user_bin_dir / self.binary_name),
            str(self.home / ".cargo" / "bin" / self.binary_name),
        ]

    # Config / cache / desktop entry

    def config_paths(self) -> list[str]:
        return [
            str(self.home / ".config" / self.binary_name),
            str(self.home / f".{self.binary_name}"),
            str(self.root / "etc" / self.binary_name),
        ]

    def cache_patterns(self) -> list[str]:
        """Glob patterns; every literal part is passed through ``glob.escape``."""
        return [
            glob.escape(str(self.home / ".cache" / self.binary_name)),
            glob.escape(str(self.root / "tmp" / f"{self.binary_name}-")) + "*",
            glob.escape(str(self.root / "var" / "cache" / self.binary_name)),
        ]

    @property
    def desktop_entry(self) -> Path:
        return self.home / ".local" / "share" / "applications" / f"{self.binary_name}.desktop"

    # Shell startup file

    @property
    def startup_file(self) -> Path:
        return self.rc_file or self.home / ".bashrc"

    @property
    def startup_backup(self) -> Path:
        rc = self.startup_file
        return rc.with_name(rc.name + BACKUP_SUFFIX)
