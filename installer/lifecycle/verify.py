# DirAnalyzer Lifecycle - Verification Probe
# Created: 2026-10-18

from __future__ import annotations

import logging

from installer.lifecycle.locator import resolve_command
from installer.lifecycle.models import VerificationResult

logger = logging.getLogger(__name__)


class VerificationProbe:
    """Re-run command resolution to see whether the tool is still reachable.

    Used after removal (expects unreachable) and after install (expects
    reachable). A binary outside the well-known list, such as one owned by a
    package manager, shows up here even though nothing tried to remove it.
    """

    def __init__(self, binary_name: str, search_path: str | None = None) -> None:
        self.binary_name = binary_name
        self.search_path = search_path

    def check(self) -> VerificationResult:
        path = resolve_command(self.binary_name, self.search_path)
        if path:
            logger.info("%s resolves to %s", self.binary_name, path)
            return VerificationResult(reachable=True, path=path)
        return VerificationResult(reachable=False)
