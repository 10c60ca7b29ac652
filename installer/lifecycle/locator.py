# DirAnalyzer Lifecycle - Location Resolver
# Finds installed binaries at the well-known paths and through PATH lookup.
# Created: 2026-10-18

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Sequence

from installer.lifecycle.common import StatusCallback, noop_status
from installer.lifecycle.models import CandidateLocation, LocationKind

logger = logging.getLogger(__name__)


def resolve_command(name: str, search_path: str | None = None) -> str | None:
    """First match of ``name`` on the command-search path (like ``command -v``)."""
    return shutil.which(name, path=search_path)


class LocationResolver:
    """Resolve every location of the installed binary.

    Paths are compared as plain strings: ``/usr/local/bin/x`` and
    ``/usr/local/bin/../bin/x`` count as two locations.
    """

    def __init__(
        self,
        binary_name: str,
        well_known: Sequence[str],
        search_path: str | None = None,
        status: StatusCallback | None = None,
    ) -> None:
        self.binary_name = binary_name
        self.well_known = list(well_known)
        self.search_path = search_path
        self.status = status or noop_status

    def resolve(self) -> list[CandidateLocation]:
        found: list[str] = []

        for location in self.well_known:
            if os.path.isfile(location) and location not in found:
                found.append(location)
                self.status(f"[yellow]📍[/] Found: [cyan]{location}[/]")

        on_path = resolve_command(self.binary_name, self.search_path)
        if on_path and on_path not in found:
            found.append(on_path)
            self.status(f"[yellow]📍[/] Found in PATH: [cyan]{on_path}[/]")

        logger.debug("Resolved %d location(s) for %s", len(found), self.binary_name)
        return [CandidateLocation(path=p, kind=LocationKind.BINARY) for p in found]
