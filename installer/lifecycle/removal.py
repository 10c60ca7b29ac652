# DirAnalyzer Lifecycle - Removal Engine
# Deletes binaries, config, cache and the desktop entry. Per-item failures are
# recorded and never stop the batch.
# Created: 2026-10-18

from __future__ import annotations

import glob
import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from installer.lifecycle.common import APP_NAME, Layout, StatusCallback, noop_status
from installer.lifecycle.models import (
    CandidateLocation,
    CategoryReport,
    LocationKind,
    RemovalOutcome,
    RemovalStatus,
)

logger = logging.getLogger(__name__)

_LABELS = {
    LocationKind.BINARY: "binary",
    LocationKind.CONFIG: "config",
    LocationKind.CACHE: "cache",
    LocationKind.DESKTOP_ENTRY: "desktop entry",
}


class RemovalEngine:
    """Remove resolved binaries plus the fixed config/cache/desktop-entry sets."""

    def __init__(self, layout: Layout, status: StatusCallback | None = None) -> None:
        self.layout = layout
        self.status = status or noop_status

    # ── Fixed location sets ────────────────────────────────────────────

    def config_locations(self) -> list[CandidateLocation]:
        return [CandidateLocation(p, LocationKind.CONFIG) for p in self.layout.config_paths()]

    def cache_locations(self) -> list[CandidateLocation]:
        return [
            CandidateLocation(p, LocationKind.CACHE, pattern=True)
            for p in self.layout.cache_patterns()
        ]

    def desktop_locations(self) -> list[CandidateLocation]:
        return [CandidateLocation(str(self.layout.desktop_entry), LocationKind.DESKTOP_ENTRY)]

    # ── Categories ─────────────────────────────────────────────────────

    def remove_binaries(self, locations: Iterable[CandidateLocation]) -> CategoryReport:
        locations = list(locations)
        if not locations:
            self.status(f"[green]✓[/] No {APP_NAME} installations found")
            return CategoryReport(LocationKind.BINARY)

        self.status(f"[blue]🗑️[/]  Removing {APP_NAME} binaries...")
        report = self._remove_all(LocationKind.BINARY, locations)
        self.status(f"[green]✓[/] Removed {report.removed_count} binary file(s)")
        return report

    def remove_config(self) -> CategoryReport:
        self.status("[blue]🗑️[/]  Removing configuration files...")
        report = self._remove_all(LocationKind.CONFIG, self.config_locations())
        if report.nothing_found:
            self.status("[green]✓[/] No configuration files found")
        return report

    def remove_cache(self) -> CategoryReport:
        self.status("[blue]🗑️[/]  Removing cache and temporary files...")
        report = self._remove_all(LocationKind.CACHE, self.cache_locations())
        if report.nothing_found:
            self.status("[green]✓[/] No cache files found")
        return report

    def remove_desktop_entry(self) -> CategoryReport:
        report = self._remove_all(LocationKind.DESKTOP_ENTRY, self.desktop_locations())
        if report.nothing_found:
            self.status("[green]✓[/] No desktop entry found")
        return report

    # ── Internals ──────────────────────────────────────────────────────

    def _remove_all(
        self, kind: LocationKind, locations: Iterable[CandidateLocation]
    ) -> CategoryReport:
        report = CategoryReport(kind)
        for location in locations:
            if location.pattern:
                matches = sorted(glob.glob(location.path))
                if not matches:
                    report.outcomes.append(RemovalOutcome(location, RemovalStatus.NOT_FOUND))
                for match in matches:
                    report.outcomes.append(self._remove_one(location, match))
            else:
                report.outcomes.append(self._remove_one(location, location.path))
        return report

    def _remove_one(self, location: CandidateLocation, target: str) -> RemovalOutcome:
        path = Path(target)
        concrete = target if target != location.path else None

        if not os.path.lexists(path):
            return RemovalOutcome(location, RemovalStatus.NOT_FOUND, target=concrete)

        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            logger.error("Failed to remove %s: %s", path, exc)
            self.status(f"[red]❌[/] Failed to remove: [cyan]{path}[/] (try with sudo)")
            return RemovalOutcome(
                location,
                RemovalStatus.PERMISSION_DENIED,
                target=concrete,
                error=str(exc),
            )

        logger.info("Removed: %s", path)
        self.status(f"[green]✓[/] Removed {_LABELS[location.kind]}: [cyan]{path}[/]")
        return RemovalOutcome(location, RemovalStatus.REMOVED, target=concrete)
