# Tests for installer/lifecycle/locator.py and verify.py
# Created: 2026-10-18

from __future__ import annotations

import os

from installer.lifecycle.locator import LocationResolver, resolve_command
from installer.lifecycle.models import LocationKind
from installer.lifecycle.verify import VerificationProbe


class TestLocationResolver:
    def _resolver(self, settings, status=None):
        layout = settings.layout()
        return LocationResolver(settings.binary_name, layout.binary_paths(), status=status)

    def test_nothing_installed_returns_empty(self, settings):
        assert self._resolver(settings).resolve() == []

    def test_finds_well_known_in_order(self, settings, make_binary):
        layout = settings.layout()
        paths = layout.binary_paths()
        make_binary(layout.home / ".cargo" / "bin" / "diranalyzer")
        make_binary(layout.system_bin_dir / "diranalyzer")

        found = self._resolver(settings).resolve()

        assert [c.path for c in found] == [paths[0], paths[3]]
        assert all(c.kind is LocationKind.BINARY for c in found)

    def test_directory_with_binary_name_is_ignored(self, settings):
        (settings.layout().system_bin_dir / "diranalyzer").mkdir(parents=True)
        assert self._resolver(settings).resolve() == []

    def test_path_match_identical_to_well_known_is_listed_once(
        self, settings, make_binary, monkeypatch
    ):
        layout = settings.layout()
        make_binary(layout.user_bin_dir / "diranalyzer")
        monkeypatch.setenv("PATH", str(layout.user_bin_dir))

        found = self._resolver(settings).resolve()

        assert [c.path for c in found] == [str(layout.user_bin_dir / "diranalyzer")]

    def test_path_only_location_is_appended(self, settings, make_binary, path_bin):
        layout = settings.layout()
        make_binary(layout.system_bin_dir / "diranalyzer")
        extra = make_binary(path_bin / "diranalyzer")

        found = self._resolver(settings).resolve()

        assert [c.path for c in found] == [str(layout.system_bin_dir / "diranalyzer"), str(extra)]

    def test_textually_different_path_counts_twice(self, settings, make_binary, monkeypatch):
        layout = settings.layout()
        make_binary(layout.user_bin_dir / "diranalyzer")
        monkeypatch.setenv("PATH", str(layout.user_bin_dir) + os.sep + ".")

        found = self._resolver(settings).resolve()

        assert len(found) == 2

    def test_reports_found_locations(self, settings, make_binary, path_bin):
        make_binary(path_bin / "diranalyzer")
        messages: list[str] = []

        self._resolver(settings, status=messages.append).resolve()

        assert any("Found in PATH" in m for m in messages)


class TestVerificationProbe:
    def test_not_reachable(self, path_bin):
        result = VerificationProbe("diranalyzer").check()
        assert not result.reachable
        assert result.path is None

    def test_reachable_reports_path(self, path_bin, make_binary):
        binary = make_binary(path_bin / "diranalyzer")
        result = VerificationProbe("diranalyzer").check()
        assert result.reachable
        assert result.path == str(binary)

    def test_non_executable_file_is_not_reachable(self, path_bin):
        (path_bin / "diranalyzer").write_text("not executable")
        (path_bin / "diranalyzer").chmod(0o644)
        assert not VerificationProbe("diranalyzer").check().reachable

    def test_explicit_search_path(self, tmp_path, make_binary, path_bin):
        other = tmp_path / "other"
        make_binary(other / "diranalyzer")
        assert VerificationProbe("diranalyzer", search_path=str(other)).check().reachable
        assert resolve_command("diranalyzer") is None
