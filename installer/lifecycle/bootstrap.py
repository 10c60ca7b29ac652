# DirAnalyzer Lifecycle - Installation Manager
# Picks a target directory, downloads the prebuilt binary for this platform and
# falls back to a cargo build from source. Verifies the result via PATH lookup.
# Created: 2026-10-18

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
import tempfile
from collections.abc import Callable
from pathlib import Path

import httpx

from installer.lifecycle.common import (
    APP_NAME,
    ConfirmCallback,
    confirm,
)
from installer.lifecycle.config import Settings, get_settings
from installer.lifecycle.errors import (
    BuildError,
    LifecycleError,
    ToolchainError,
    UnsupportedPlatformError,
)
from installer.lifecycle.models import InstallStatus, VerificationResult
from installer.lifecycle.path_guard import PathMutationGuard
from installer.lifecycle.verify import VerificationProbe

logger = logging.getLogger(__name__)

RUSTUP_URL = "https://sh.rustup.rs"

ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}
OS_TARGETS = {
    "linux": "{arch}-unknown-linux-gnu",
    "darwin": "{arch}-apple-darwin",
}

CLONE_TIMEOUT = 300
BUILD_TIMEOUT = 1800

ProgressCallback = Callable[[str, int], None]
"""Callback(message, percent_0_to_100)."""


def _noop_progress(msg: str, pct: int) -> None:
    pass


def detect_target(system: str | None = None, machine: str | None = None) -> str:
    """Normalise OS/arch into a release target triple.

    Raises:
        UnsupportedPlatformError: for anything outside {x86_64, aarch64} x
            {linux, darwin}.
    """
    system = (system or platform.system()).lower()
    machine = machine or platform.machine()

    arch = ARCH_ALIASES.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {machine}")
    template = OS_TARGETS.get(system)
    if template is None:
        raise UnsupportedPlatformError(f"Unsupported operating system: {system}")
    return template.format(arch=arch)


def render_desktop_entry(binary_name: str) -> str:
    return (
        "[Desktop Entry]\n"
        f"Name={APP_NAME}\n"
        "Comment=Lightning-fast directory analysis tool\n"
        f"Exec=gnome-terminal -- {binary_name}\n"
        "Icon=folder-documents\n"
        "Type=Application\n"
        "Categories=System;FileTools;\n"
        "Terminal=true\n"
    )


class InstallationManager:
    """Install the binary: prebuilt download first, source build second."""

    def __init__(
        self,
        settings: Settings | None = None,
        progress: ProgressCallback | None = None,
        confirm_fn: ConfirmCallback = confirm,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.layout = self.settings.layout()
        self.progress = progress or _noop_progress
        self.confirm = confirm_fn
        self._client = client

    # ── Public API ─────────────────────────────────────────────────────

    def run(self) -> InstallStatus:
        """Full install. Never raises; failures land in ``InstallStatus.error``."""
        status = InstallStatus()
        name = self.settings.binary_name

        try:
            # Step 1: platform check happens before anything touches disk or network
            self.progress("Checking system requirements...", 5)
            status.target = detect_target()
            self.progress(f"Detected system: {status.target}", 10)

            # Step 2: target directory
            status.install_dir, status.path_line_added = self.resolve_install_dir()
            self.progress(f"Installing to {status.install_dir}", 15)

            # Step 3: prebuilt binary, else build from source
            self.progress("Attempting to download pre-built binary...", 20)
            if self._install_prebuilt(status.target, status.install_dir):
                status.method = "prebuilt"
            else:
                self.progress("Pre-built binary not available, building from source", 30)
                cargo = self._ensure_toolchain()
                self._build_from_source(cargo, status.install_dir)
                status.method = "source"
            status.binary_path = status.install_dir / name

            # Step 4: verify
            self.progress("Verifying installation...", 90)
            status.verification = self.verify(status.install_dir, status.path_line_added)
            if not status.verification.reachable:
                status.error = (
                    f"Installation verification failed: {name} is not on the command "
                    "search path (files may have been copied)"
                )
                return status

            self._smoke_test(status.verification.path)
            status.desktop_entry = self._create_desktop_entry()
            self.progress("Ready!", 100)

        except LifecycleError as exc:
            logger.error("Install failed: %s", exc)
            status.error = str(exc)
        except Exception as exc:
            logger.exception("Install failed")
            status.error = str(exc)

        return status

    def resolve_install_dir(self) -> tuple[Path, bool]:
        """Pick the target directory. Returns (dir, whether a PATH line was added)."""
        if self.settings.install_dir is not None:
            install_dir = self.settings.install_dir
            install_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Using INSTALL_DIR override %s", install_dir)
            return install_dir, False

        if os.geteuid() == 0:
            logger.info("Running with administrator privileges")
            install_dir = self.layout.system_bin_dir
            install_dir.mkdir(parents=True, exist_ok=True)
            return install_dir, False

        install_dir = self.layout.user_bin_dir
        install_dir.mkdir(parents=True, exist_ok=True)
        if _on_search_path(install_dir):
            return install_dir, False

        guard = PathMutationGuard(self.layout.startup_file, backup_file=self.layout.startup_backup)
        added = guard.append()
        if added:
            self.progress(
                f"Added {install_dir} to your PATH; run `source ~/.bashrc` after installation",
                15,
            )
        return install_dir, added

    def verify(self, install_dir: Path, path_line_added: bool = False) -> VerificationResult:
        """Resolve the binary by name on the search path.

        The install dir is only searched as well when this run just appended
        the PATH line for it, since the current shell has not picked that up.
        """
        search_path = os.environ.get("PATH", os.defpath)
        if path_line_added and not _on_search_path(install_dir):
            search_path = os.pathsep.join([str(install_dir), search_path])
        return VerificationProbe(self.settings.binary_name, search_path).check()

    # ── Prebuilt binary ────────────────────────────────────────────────

    def _install_prebuilt(self, target: str, install_dir: Path) -> bool:
        url = self.settings.release_url(target)
        logger.info("Downloading %s", url)

        fd, tmp_name = tempfile.mkstemp(prefix=f"{self.settings.binary_name}-download-")
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                client = self._client or httpx.Client(timeout=self.settings.download_timeout)
                try:
                    with client.stream("GET", url, follow_redirects=True) as response:
                        response.raise_for_status()
                        for chunk in response.iter_bytes():
                            fh.write(chunk)
                finally:
                    if self._client is None:
                        client.close()
        except httpx.HTTPError as exc:
            logger.warning("Pre-built binary not available: %s", exc)
            tmp.unlink(missing_ok=True)
            return False

        try:
            tmp.chmod(0o755)
            shutil.move(str(tmp), install_dir / self.settings.binary_name)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise BuildError(f"Failed to install binary: {exc}") from exc
        logger.info("Installed pre-built binary to %s", install_dir)
        return True

    # ── Source build ───────────────────────────────────────────────────

    def _find_cargo(self) -> str | None:
        cargo = shutil.which("cargo")
        if cargo:
            return cargo
        rustup_cargo = self.layout.home / ".cargo" / "bin" / "cargo"
        return str(rustup_cargo) if rustup_cargo.exists() else None

    def _ensure_toolchain(self) -> str:
        cargo = self._find_cargo()
        if cargo:
            logger.info("Using cargo at %s", cargo)
            return cargo

        self.progress("Rust is required to build from source", 32)
        if not self.confirm("Install Rust automatically?"):
            raise ToolchainError("Installation cancelled: Rust is required to build from source")

        self._install_rust()
        cargo = self._find_cargo()
        if not cargo:
            raise ToolchainError("Rust installation finished but cargo was not found")
        return cargo

    def _install_rust(self) -> None:
        self.progress("Installing Rust...", 35)
        try:
            with httpx.Client(timeout=self.settings.download_timeout) as client:
                response = client.get(RUSTUP_URL, follow_redirects=True)
                response.raise_for_status()
                script = response.text
            result = subprocess.run(
                ["sh", "-s", "--", "-y"],
                input=script,
                capture_output=True,
                text=True,
                timeout=BUILD_TIMEOUT,
            )
        except (httpx.HTTPError, subprocess.TimeoutExpired, FileNotFoundError) as exc:
            raise ToolchainError(f"Failed to install Rust: {exc}") from exc

        if result.returncode != 0:
            logger.error("rustup failed:\n%s", result.stderr[-2000:])
            raise ToolchainError("Failed to install Rust")

    def _build_from_source(self, cargo: str, install_dir: Path) -> None:
        git = shutil.which("git")
        if not git:
            raise ToolchainError("git is required to build from source")

        name = self.settings.binary_name
        build_dir = Path(tempfile.gettempdir()) / f"{name}-build"
        shutil.rmtree(build_dir, ignore_errors=True)

        try:
            self.progress("Cloning repository...", 40)
            self._run(
                [git, "clone", self.settings.repo_url, str(build_dir)],
                CLONE_TIMEOUT,
                "Failed to clone repository",
            )

            self.progress("Building release binary...", 55)
            self._run(
                [cargo, "build", "--release"],
                BUILD_TIMEOUT,
                "Build failed",
                cwd=build_dir,
            )

            self.progress("Installing binary...", 80)
            try:
                shutil.copy2(build_dir / "target" / "release" / name, install_dir / name)
            except OSError as exc:
                raise BuildError(f"Failed to install binary: {exc}") from exc
        finally:
            shutil.rmtree(build_dir, ignore_errors=True)

        logger.info("Built and installed %s from source", name)

    @staticmethod
    def _run(cmd: list[str], timeout: int, failure: str, cwd: Path | None = None) -> None:
        logger.info("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd, cwd=cwd, capture_output=True, text=True, timeout=timeout
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as exc:
            raise BuildError(f"{failure}: {exc}") from exc
        if result.returncode != 0:
            logger.error("%s:\n%s", failure, result.stderr[-2000:])
            raise BuildError(failure)

    # ── Post-install ───────────────────────────────────────────────────

    def _smoke_test(self, binary: str | None) -> None:
        if not binary:
            return
        try:
            result = subprocess.run(
                [binary, "--help"],
                capture_output=True,
                text=True,
                timeout=30,
                env=self.settings.tool_environment(),
            )
        except (subprocess.TimeoutExpired, OSError) as exc:
            logger.warning("Smoke test of %s failed: %s", binary, exc)
            return
        for line in result.stdout.splitlines()[:5]:
            self.progress(line, 95)

    def _create_desktop_entry(self) -> Path | None:
        if platform.system() != "Linux" or not shutil.which("xdg-desktop-menu"):
            return None
        desktop_file = self.layout.desktop_entry
        desktop_file.parent.mkdir(parents=True, exist_ok=True)
        desktop_file.write_text(render_desktop_entry(self.settings.binary_name), encoding="utf-8")
        logger.info("Created desktop entry %s", desktop_file)
        return desktop_file


def _on_search_path(directory: Path) -> bool:
    entries = os.environ.get("PATH", "").split(os.pathsep)
    return str(directory) in entries
