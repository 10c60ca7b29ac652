# DirAnalyzer Lifecycle - Uninstaller
# Ties together location resolution, removal, the PATH guard and the
# post-removal probe, and renders the final summary.
# Created: 2026-10-18

from __future__ import annotations

import glob
import logging
import os

from installer.lifecycle.common import (
    APP_NAME,
    REPO_URL,
    ConfirmCallback,
    StatusCallback,
    confirm,
    noop_status,
)
from installer.lifecycle.config import Settings, get_settings
from installer.lifecycle.errors import UsageError
from installer.lifecycle.locator import LocationResolver
from installer.lifecycle.menu import InteractiveMenu
from installer.lifecycle.models import (
    CandidateLocation,
    CategoryReport,
    LocationKind,
    MenuSelection,
    UninstallReport,
    VerificationResult,
)
from installer.lifecycle.path_guard import PathMutationGuard
from installer.lifecycle.removal import RemovalEngine
from installer.lifecycle.verify import VerificationProbe

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INCOMPLETE = 2

_CATEGORY_TITLES = {
    LocationKind.BINARY: "Binaries",
    LocationKind.CONFIG: "Configuration",
    LocationKind.DESKTOP_ENTRY: "Desktop entry",
    LocationKind.CACHE: "Cache",
}


class Uninstaller:
    """Finds and removes everything an install may have left behind."""

    def __init__(
        self,
        settings: Settings | None = None,
        status: StatusCallback | None = None,
        confirm_fn: ConfirmCallback = confirm,
        menu: InteractiveMenu | None = None,
        search_path: str | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.layout = self.settings.layout()
        self.status = status or noop_status
        self.confirm = confirm_fn
        self.menu = menu or InteractiveMenu(status=self.status)
        self.search_path = search_path

        self.engine = RemovalEngine(self.layout, status=self.status)
        self.guard = PathMutationGuard(
            self.layout.startup_file,
            backup_file=self.layout.startup_backup,
            status=self.status,
            confirm_fn=confirm_fn,
        )

    # ── Building blocks ────────────────────────────────────────────────

    def find_installations(self) -> list[CandidateLocation]:
        self.status(f"[blue]🔍[/] Searching for {APP_NAME} installations...")
        resolver = LocationResolver(
            self.settings.binary_name,
            self.layout.binary_paths(),
            search_path=self.search_path,
            status=self.status,
        )
        return resolver.resolve()

    def probe(self) -> VerificationResult:
        return VerificationProbe(self.settings.binary_name, self.search_path).check()

    def remove_binaries(self) -> CategoryReport:
        return self.engine.remove_binaries(self.find_installations())

    def remove_config(self) -> CategoryReport:
        return self.engine.remove_config()

    def remove_cache(self) -> CategoryReport:
        return self.engine.remove_cache()

    def verify_removal(self) -> VerificationResult:
        self.status("[blue]🔍[/] Verifying complete removal...")
        result = self.probe()
        if result.reachable:
            self.status(f"[yellow]⚠[/] {APP_NAME} still found at: [cyan]{result.path}[/]")
            self.status("[red]❌[/] Uninstallation incomplete")
        else:
            self.status(f"[green]✓[/] {APP_NAME} completely removed from system")
        return result

    def full_removal(self, assume_yes: bool = False) -> UninstallReport:
        """Remove every category, then verify. Per-item failures never abort."""
        report = UninstallReport()
        installations = self.find_installations()

        report.categories[LocationKind.BINARY] = self.engine.remove_binaries(installations)
        report.categories[LocationKind.CONFIG] = self.engine.remove_config()
        report.categories[LocationKind.DESKTOP_ENTRY] = self.engine.remove_desktop_entry()
        report.path_edit = self.guard.remove(assume_yes=assume_yes)
        report.categories[LocationKind.CACHE] = self.engine.remove_cache()

        report.verification = self.verify_removal()
        logger.info(
            "Full removal: %d removed, %d failed, reachable=%s",
            report.total_removed,
            len(report.failures),
            report.verification.reachable,
        )
        return report

    # ── Modes ──────────────────────────────────────────────────────────

    def run_force(self) -> int:
        self.status(f"[red]⚡[/] Force uninstalling {APP_NAME}...")
        report = self.full_removal(assume_yes=True)
        self.print_summary(report)
        return EXIT_OK if report.complete else EXIT_INCOMPLETE

    def run_default(self) -> int:
        if not self.probe().reachable:
            self.status(f"[yellow]🤷[/] {APP_NAME} doesn't appear to be installed")
            self.status("[cyan]💡[/] Running cleanup anyway to remove any leftover files...")
            self.status("")

        self.status(f"[yellow]⚠[/] This will remove {APP_NAME} from your system")
        if not self.confirm("Are you sure you want to continue?"):
            self.status("[yellow]❌[/] Uninstallation cancelled")
            return EXIT_OK

        return self._run_full()

    def run_interactive(self) -> int:
        try:
            selection = self.menu.choose()
        except UsageError as exc:
            self.status(f"[red]❌[/] Invalid option ({exc})")
            return EXIT_USAGE

        if selection is MenuSelection.FULL_REMOVAL:
            self.status("[blue]🗑️[/]  Performing complete removal...")
            return self._run_full()
        if selection is MenuSelection.BINARIES_ONLY:
            self.remove_binaries()
            self.status("[green]🎉[/] Binary removal complete!")
        elif selection is MenuSelection.CONFIG_ONLY:
            self.remove_config()
            self.status("[green]🎉[/] Configuration removal complete!")
        elif selection is MenuSelection.CACHE_ONLY:
            self.remove_cache()
            self.status("[green]🎉[/] Cache cleanup complete!")
        else:
            self.status("[yellow]❌[/] Uninstallation cancelled")
        return EXIT_OK

    def run_dry_run(self) -> list[CandidateLocation]:
        """List what a full removal would touch. Read-only."""
        self.status("[cyan]🔍[/] Dry run - showing what would be removed:")
        found = self.find_installations()
        if not found:
            self.status(f"[green]✓[/] No {APP_NAME} installations found")

        leftovers = [
            *self.engine.config_locations(),
            *self.engine.desktop_locations(),
            *self.engine.cache_locations(),
        ]
        for location in leftovers:
            paths = glob.glob(location.path) if location.pattern else [location.path]
            for path in paths:
                if os.path.lexists(path):
                    found.append(CandidateLocation(path, location.kind))
                    self.status(
                        f"[yellow]📍[/] Would remove {location.kind.value}: [cyan]{path}[/]"
                    )

        if self.guard.has_line():
            self.status(
                f"[yellow]📝[/] Would offer to remove the PATH line from "
                f"[cyan]{self.layout.startup_file}[/]"
            )
        self.status("[cyan]💡[/] Run without --dry-run to actually remove files")
        return found

    def _run_full(self) -> int:
        report = self.full_removal(assume_yes=False)
        self.print_summary(report)
        return EXIT_OK

    # ── Summary ────────────────────────────────────────────────────────

    def print_summary(self, report: UninstallReport) -> None:
        self.status("")
        self.status("[bold]Summary[/]")
        for kind, title in _CATEGORY_TITLES.items():
            category = report.categories.get(kind)
            if category is None:
                continue
            if category.nothing_found:
                self.status(f"  {title}: nothing found")
            else:
                line = f"  {title}: {category.removed_count} removed"
                if category.failures:
                    line += f", {len(category.failures)} failed"
                self.status(line)

        if report.path_edit is not None:
            self.status(f"  PATH modification: {report.path_edit.status.value}")

        for failure in report.failures:
            self.status(f"  [red]✗[/] {failure.path}: {failure.error}")
        if report.path_edit is not None and report.path_edit.failed:
            self.status(f"  [red]✗[/] {self.layout.startup_file}: {report.path_edit.error}")

        if report.complete:
            self.print_farewell()
        else:
            self.status(
                "[yellow]⚠[/] Some files may still remain. Manual cleanup may be required."
            )

    def print_farewell(self) -> None:
        self.status("")
        self.status(f"[green]🎉 {APP_NAME} has been successfully uninstalled![/]")
        self.status("")
        self.status(f"[yellow]📊 Thanks for using {APP_NAME}![/]")
        self.status("[cyan]💡[/] If you change your mind, you can always reinstall from:")
        self.status(f"[blue]   {REPO_URL}[/]")
        self.status("")
