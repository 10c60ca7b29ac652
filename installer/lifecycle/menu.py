# DirAnalyzer Lifecycle - Interactive Menu
# Created: 2026-10-18

from __future__ import annotations

from collections.abc import Callable

from installer.lifecycle.common import StatusCallback, noop_status
from installer.lifecycle.errors import UsageError
from installer.lifecycle.models import MenuSelection

MENU_LABELS = {
    MenuSelection.FULL_REMOVAL: "Complete removal (recommended)",
    MenuSelection.BINARIES_ONLY: "Binary files only",
    MenuSelection.CONFIG_ONLY: "Configuration files only",
    MenuSelection.CACHE_ONLY: "Cache and temporary files only",
    MenuSelection.CANCEL: "Cancel",
}


class InteractiveMenu:
    """Ask once which scope to remove. Every answer is final."""

    def __init__(
        self,
        status: StatusCallback | None = None,
        read: Callable[[str], str] = input,
    ) -> None:
        self.status = status or noop_status
        self.read = read

    def choose(self) -> MenuSelection:
        """Show the options and return the selection.

        Raises:
            UsageError: on anything but a number from 1 to 5 (or EOF).
        """
        self.status("[yellow]🤔[/] What would you like to remove?")
        self.status("")
        for selection, label in MENU_LABELS.items():
            self.status(f"{selection.value}) {label}")
        self.status("")

        first, last = min(MenuSelection), max(MenuSelection)
        try:
            raw = self.read(f"Choose an option ({first.value}-{last.value}): ").strip()
        except EOFError as exc:
            raise UsageError("No option selected") from exc

        choices = {str(selection.value): selection for selection in MenuSelection}
        if raw not in choices:
            raise UsageError(f"Invalid option: {raw!r}")
        return choices[raw]
