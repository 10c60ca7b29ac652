# DirAnalyzer Lifecycle - Settings
# Environment-driven configuration (prefix DIRANALYZER_) with a cached accessor.
# Created: 2026-10-18

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.lifecycle.common import BINARY_NAME, REPO_URL, Layout


class Settings(BaseSettings):
    """Lifecycle manager settings.

    ``install_dir`` and ``min_size`` are read from the unprefixed/legacy
    variable names the shell installer documented (``INSTALL_DIR``,
    ``DIRANALYZER_MIN_SIZE``) and are handed to the analysis tool untouched.
    ``min_size`` is kept as the raw string; the tool parses it.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRANALYZER_",
        extra="ignore",
        populate_by_name=True,
    )

    binary_name: str = BINARY_NAME
    home: Path = Field(default_factory=Path.home)
    root: Path = Path("/")
    rc_file: Path | None = None

    repo_url: str = REPO_URL
    release_version: str = "latest"
    download_timeout: float = 60.0

    install_dir: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("INSTALL_DIR", "install_dir"),
    )
    min_size: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DIRANALYZER_MIN_SIZE", "min_size"),
    )

    log_level: str = "WARNING"
    log_file: Path | None = None

    def layout(self) -> Layout:
        return Layout(
            home=self.home,
            root=self.root,
            binary_name=self.binary_name,
            rc_file=self.rc_file,
        )

    def release_url(self, target: str) -> str:
        """Download URL of the prebuilt binary for a target triple."""
        if self.release_version == "latest":
            base = f"{self.repo_url}/releases/latest/download"
        else:
            base = f"{self.repo_url}/releases/download/{self.release_version}"
        return f"{base}/{self.binary_name}-{target}"

    def tool_environment(self) -> dict[str, str]:
        """Process environment for running the installed tool."""
        env = dict(os.environ)
        if self.install_dir is not None:
            env["INSTALL_DIR"] = str(self.install_dir)
        if self.min_size is not None:
            env["DIRANALYZER_MIN_SIZE"] = self.min_size
        return env


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings singleton."""
    return Settings()
