# DirAnalyzer Lifecycle - Errors
# Created: 2026-10-18

from __future__ import annotations


class LifecycleError(Exception):
    """Base class for fatal install/uninstall errors."""


class UsageError(LifecycleError):
    """Invalid flag or menu choice. Raised before anything is mutated."""


class UnsupportedPlatformError(LifecycleError):
    """OS/architecture outside the supported set."""


class ToolchainError(LifecycleError):
    """Rust toolchain missing and not installed."""


class BuildError(LifecycleError):
    """Clone, compile or copy step of a source build failed."""
