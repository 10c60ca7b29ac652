# DirAnalyzer Lifecycle - Command Line
# `install` and `uninstall` entry points.
# Created: 2026-10-18

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.rule import Rule

from installer.lifecycle import __version__
from installer.lifecycle.bootstrap import InstallationManager
from installer.lifecycle.common import APP_NAME, BINARY_NAME, REPO_URL
from installer.lifecycle.config import get_settings
from installer.lifecycle.logging_setup import console, setup_logging
from installer.lifecycle.uninstall import EXIT_USAGE, Uninstaller

logger = logging.getLogger("diranalyzer.lifecycle")


class _ArgumentParser(argparse.ArgumentParser):
    """argparse with usage errors mapped to exit status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _configure() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)


def _banner(title: str, style: str) -> None:
    console.print(Rule(f"[bold {style}]{APP_NAME}[/]", style=style))
    console.print(f"[yellow]{title}[/]")
    console.print()


# ── install ────────────────────────────────────────────────────────────


def install_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``diranalyzer-install``."""
    parser = _ArgumentParser(
        prog="install",
        description=f"{APP_NAME} Installation Script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  INSTALL_DIR            Custom installation directory
  DIRANALYZER_MIN_SIZE   Default minimum file size for duplicate detection
""",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"{APP_NAME} Installation Script v{__version__}",
    )
    parser.add_argument(
        "--uninstall",
        action="store_true",
        help=f"Uninstall {APP_NAME}",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.uninstall:
        return uninstall_main([])

    _configure()
    logger.info("Install starting (version %s)", __version__)
    _banner("🚀 Lightning-Fast Directory Analysis Tool Installation", "cyan")

    def console_progress(msg: str, pct: int) -> None:
        console.print(f"  [{pct:3d}%] {msg}", markup=False)

    status = InstallationManager(progress=console_progress).run()
    if not status.ok:
        console.print(f"\n[red]❌ {status.error}[/]\n")
        return 1

    _print_install_success(status.binary_path)
    return 0


def _print_install_success(binary_path: Path | None) -> None:
    console.print(f"[green]✓[/] Installed to: [yellow]{binary_path}[/]")
    console.print(f"[green]🎉 {APP_NAME} installed successfully![/]")
    console.print()
    console.print("[yellow]📚 Quick Start:[/]")
    console.print(f"  [cyan]{BINARY_NAME} .[/]                    # Analyze current directory")
    console.print(f"  [cyan]{BINARY_NAME} /path --duplicates[/]   # Find duplicates")
    console.print(f"  [cyan]{BINARY_NAME} /home --export json[/]  # Export results")
    console.print()
    console.print(f"[yellow]📖 Full documentation:[/] {REPO_URL}")
    console.print(f"[yellow]🐛 Report issues:[/] {REPO_URL}/issues")


# ── uninstall ──────────────────────────────────────────────────────────


def uninstall_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``diranalyzer-uninstall``."""
    parser = _ArgumentParser(
        prog="uninstall",
        description=f"{APP_NAME} Uninstallation Script",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Force removal without confirmation",
    )
    mode.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Interactive mode with options",
    )
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without doing it",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    _configure()
    logger.info("Uninstall starting")
    _banner("🗑️  Uninstallation", "red")

    uninstaller = Uninstaller(status=console.print)
    if args.dry_run:
        uninstaller.run_dry_run()
        return 0
    if args.force:
        return uninstaller.run_force()
    if args.interactive:
        return uninstaller.run_interactive()
    return uninstaller.run_default()
