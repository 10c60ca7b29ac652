# DirAnalyzer Lifecycle - PATH Mutation Guard
# Adds and removes the installer's single `export PATH=...` line in the shell
# startup file. Removal always takes a backup first.
# Created: 2026-10-18

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from installer.lifecycle.common import (
    BACKUP_SUFFIX,
    PATH_EXPORT_LINE,
    ConfirmCallback,
    StatusCallback,
    confirm,
    noop_status,
)
from installer.lifecycle.models import PathEditResult, PathEditStatus

logger = logging.getLogger(__name__)

CopyFunction = Callable[[Path, Path], None]


def copy_preserving_owner(src: Path, dst: Path) -> None:
    """Copy ``src`` to ``dst`` with content, mode, times and owner intact."""
    shutil.copy2(src, dst)
    st = src.stat()
    copied = dst.stat()
    if (copied.st_uid, copied.st_gid) != (st.st_uid, st.st_gid):
        os.chown(dst, st.st_uid, st.st_gid)


class PathMutationGuard:
    """Owns the installer line in one shell startup file.

    Removal contract: find the exact line, get consent, copy the file to
    ``<file>.diranalyzer.bak``, then rewrite the file without that line. If the
    copy fails the file is never rewritten.
    """

    def __init__(
        self,
        startup_file: Path,
        line: str = PATH_EXPORT_LINE,
        backup_file: Path | None = None,
        status: StatusCallback | None = None,
        confirm_fn: ConfirmCallback = confirm,
        copy_fn: CopyFunction = copy_preserving_owner,
    ) -> None:
        self.startup_file = startup_file
        self.line = line
        self.backup_file = backup_file or startup_file.with_name(
            startup_file.name + BACKUP_SUFFIX
        )
        self.status = status or noop_status
        self.confirm = confirm_fn
        self.copy = copy_fn

    @property
    def _display_name(self) -> str:
        return f"~/{self.startup_file.name}"

    def _matches(self, raw: bytes) -> bool:
        return raw.rstrip(b"\r\n") == self.line.encode()

    def has_line(self) -> bool:
        if not self.startup_file.is_file():
            return False
        return any(self._matches(raw) for raw in self.startup_file.read_bytes().splitlines(True))

    # ── Install side ───────────────────────────────────────────────────

    def append(self) -> bool:
        """Append the line unless it is already present. Returns True if written."""
        if self.has_line():
            return False

        existing = self.startup_file.read_bytes() if self.startup_file.exists() else b""
        prefix = b"" if not existing or existing.endswith(b"\n") else b"\n"
        with open(self.startup_file, "ab") as fh:
            fh.write(prefix + self.line.encode() + b"\n")
        logger.info("Appended PATH line to %s", self.startup_file)
        return True

    # ── Uninstall side ─────────────────────────────────────────────────

    def remove(self, assume_yes: bool = False) -> PathEditResult:
        """Remove the installer line, prompting unless ``assume_yes``."""
        self.status("[blue]🔧[/] Checking PATH modifications...")

        if not self.startup_file.is_file():
            return PathEditResult(PathEditStatus.NO_STARTUP_FILE)

        content = self.startup_file.read_bytes()
        lines = content.splitlines(True)
        kept = [raw for raw in lines if not self._matches(raw)]
        removed = len(lines) - len(kept)

        if not removed:
            self.status("[green]✓[/] No PATH modifications found")
            return PathEditResult(PathEditStatus.NOT_FOUND)

        self.status(f"[yellow]⚠[/] Found PATH modification in {self._display_name}")
        if not assume_yes and not self.confirm(
            f"Remove DirAnalyzer PATH addition from {self._display_name}?"
        ):
            return PathEditResult(PathEditStatus.DECLINED)

        try:
            self.copy(self.startup_file, self.backup_file)
        except OSError as exc:
            logger.error("Backup of %s failed: %s", self.startup_file, exc)
            self.status(
                f"[red]❌[/] Could not back up {self._display_name}, leaving it unchanged"
            )
            return PathEditResult(PathEditStatus.BACKUP_FAILED, error=str(exc))
        self.status(f"[cyan]💾[/] Created backup: [yellow]{self.backup_file}[/]")

        try:
            self.startup_file.write_bytes(b"".join(kept))
        except OSError as exc:
            logger.error("Rewriting %s failed: %s", self.startup_file, exc)
            self.status(f"[red]❌[/] Failed to edit {self._display_name}: {exc}")
            return PathEditResult(
                PathEditStatus.WRITE_FAILED, backup=self.backup_file, error=str(exc)
            )

        logger.info("Removed %d PATH line(s) from %s", removed, self.startup_file)
        self.status("[green]✓[/] Removed PATH modification")
        self.status(
            "[cyan]💡[/] This shell is unchanged. Restart your terminal or run: "
            f"[yellow]source {self._display_name}[/]"
        )
        return PathEditResult(
            PathEditStatus.REMOVED, backup=self.backup_file, lines_removed=removed
        )
