# Tests for installer/lifecycle/cli.py, __main__.py and logging_setup.py
# Created: 2026-10-18

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from installer.lifecycle import __main__ as entry
from installer.lifecycle import cli
from installer.lifecycle.common import PATH_EXPORT_LINE
from installer.lifecycle.config import get_settings
from installer.lifecycle.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParsing:
    @pytest.mark.parametrize("main", [cli.install_main, cli.uninstall_main])
    def test_help_exits_zero(self, main, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert "usage:" in capsys.readouterr().out

    def test_install_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.install_main(["--version"])
        assert exc.value.code == 0
        assert "DirAnalyzer Installation Script v" in capsys.readouterr().out

    @pytest.mark.parametrize("main", [cli.install_main, cli.uninstall_main])
    def test_unknown_flag_exits_one(self, main, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--bogus"])
        assert exc.value.code == 1
        assert "unrecognized arguments" in capsys.readouterr().err

    def test_modes_are_mutually_exclusive(self):
        with pytest.raises(SystemExit) as exc:
            cli.uninstall_main(["--force", "--dry-run"])
        assert exc.value.code == 1


class TestUninstallCommand:
    def test_dry_run(self, env_settings, home):
        (home / ".bashrc").write_text(f"{PATH_EXPORT_LINE}\n")
        assert cli.uninstall_main(["--dry-run"]) == 0
        assert (home / ".bashrc").read_text() == f"{PATH_EXPORT_LINE}\n"

    def test_force(self, env_settings, root, make_binary):
        binary = make_binary(root / "usr" / "bin" / "diranalyzer")
        assert cli.uninstall_main(["-f"]) == 0
        assert not binary.exists()

    def test_default_declined(self, env_settings, root, make_binary, monkeypatch):
        binary = make_binary(root / "usr" / "bin" / "diranalyzer")
        monkeypatch.setattr("builtins.input", lambda _prompt: "n")

        assert cli.uninstall_main([]) == 0
        assert binary.exists()

    def test_interactive_invalid(self, env_settings, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda _prompt: "9")
        assert cli.uninstall_main(["--interactive"]) == 1

    def test_non_numeric_size_hint_is_accepted(self, env_settings, monkeypatch):
        monkeypatch.setenv("DIRANALYZER_MIN_SIZE", "1M")
        get_settings.cache_clear()

        assert cli.uninstall_main(["--dry-run"]) == 0
        assert get_settings().min_size == "1M"


class TestInstallCommand:
    def test_uninstall_flag_delegates(self):
        with patch.object(cli, "uninstall_main", return_value=0) as mock_uninstall:
            assert cli.install_main(["--uninstall"]) == 0
        mock_uninstall.assert_called_once_with([])

    def test_unsupported_platform_exits_one(self, env_settings, monkeypatch, capsys):
        monkeypatch.setattr("installer.lifecycle.bootstrap.platform.system", lambda: "Linux")
        monkeypatch.setattr("installer.lifecycle.bootstrap.platform.machine", lambda: "mips")

        assert cli.install_main([]) == 1
        assert "Unsupported architecture" in capsys.readouterr().out


class TestModuleEntry:
    def test_requires_subcommand(self, capsys):
        assert entry.main([]) == 1
        assert "usage:" in capsys.readouterr().err

    def test_unknown_subcommand(self):
        assert entry.main(["upgrade"]) == 1

    def test_dispatches(self, env_settings):
        assert entry.main(["uninstall", "--dry-run"]) == 0


class TestLogging:
    def test_file_handler_receives_records(self, tmp_path):
        log_file = tmp_path / "logs" / "lifecycle.log"
        setup_logging("INFO", log_file)

        logging.getLogger("diranalyzer.lifecycle").info("hello from the test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text()
        assert "[INFO] diranalyzer.lifecycle: hello from the test" in text

    def test_level_is_applied(self):
        setup_logging("error")
        assert logging.getLogger().level == logging.ERROR
