# DirAnalyzer Lifecycle - Data Model
# Created: 2026-10-18

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path


class LocationKind(str, Enum):
    BINARY = "binary"
    CONFIG = "config"
    CACHE = "cache"
    DESKTOP_ENTRY = "desktop-entry"


@dataclass(frozen=True)
class CandidateLocation:
    """A path the installer may have produced.

    ``path`` is literal unless ``pattern`` is set, in which case it is a glob
    whose fixed parts are already escaped.
    """

    path: str
    kind: LocationKind
    pattern: bool = False


class RemovalStatus(str, Enum):
    REMOVED = "removed"
    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"


@dataclass(frozen=True)
class RemovalOutcome:
    location: CandidateLocation
    status: RemovalStatus
    target: str | None = None  # concrete path when location was a pattern
    error: str | None = None

    @property
    def path(self) -> str:
        return self.target or self.location.path


@dataclass
class CategoryReport:
    """Outcomes of one removal category (binaries, config, ...)."""

    kind: LocationKind
    outcomes: list[RemovalOutcome] = field(default_factory=list)

    @property
    def removed(self) -> list[RemovalOutcome]:
        return [o for o in self.outcomes if o.status is RemovalStatus.REMOVED]

    @property
    def not_found(self) -> list[RemovalOutcome]:
        return [o for o in self.outcomes if o.status is RemovalStatus.NOT_FOUND]

    @property
    def failures(self) -> list[RemovalOutcome]:
        return [o for o in self.outcomes if o.status is RemovalStatus.PERMISSION_DENIED]

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    @property
    def nothing_found(self) -> bool:
        return not self.removed and not self.failures


@dataclass(frozen=True)
class VerificationResult:
    reachable: bool
    path: str | None = None


class PathEditStatus(str, Enum):
    NO_STARTUP_FILE = "no-startup-file"
    NOT_FOUND = "not-found"
    DECLINED = "declined"
    REMOVED = "removed"
    BACKUP_FAILED = "backup-failed"
    WRITE_FAILED = "write-failed"


@dataclass(frozen=True)
class PathEditResult:
    status: PathEditStatus
    backup: Path | None = None
    lines_removed: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status in (PathEditStatus.BACKUP_FAILED, PathEditStatus.WRITE_FAILED)


class MenuSelection(IntEnum):
    FULL_REMOVAL = 1
    BINARIES_ONLY = 2
    CONFIG_ONLY = 3
    CACHE_ONLY = 4
    CANCEL = 5


@dataclass
class UninstallReport:
    """Everything a full removal pass did, for the final summary."""

    categories: dict[LocationKind, CategoryReport] = field(default_factory=dict)
    path_edit: PathEditResult | None = None
    verification: VerificationResult | None = None

    @property
    def total_removed(self) -> int:
        return sum(c.removed_count for c in self.categories.values())

    @property
    def failures(self) -> list[RemovalOutcome]:
        return [o for c in self.categories.values() for o in c.failures]

    @property
    def complete(self) -> bool:
        return self.verification is not None and not self.verification.reachable


@dataclass
class InstallStatus:
    """Result of an install run. ``error`` is set on any fatal failure."""

    target: str | None = None
    install_dir: Path | None = None
    binary_path: Path | None = None
    method: str | None = None  # "prebuilt" or "source"
    path_line_added: bool = False
    desktop_entry: Path | None = None
    verification: VerificationResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
