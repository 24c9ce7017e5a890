from unittest.mock import patch

import pytest

from hydra_launcher.claude_process_helpers.executable import (
    INSTALL_HINT,
    check_claude_installed,
    claude_command,
    find_claude_executable,
)
from hydra_launcher.exceptions import SpawnFailedError

_MODULE = "hydra_launcher.claude_process_helpers.executable"


def test_claude_command_default():
    assert claude_command() == ["claude"]


def test_find_prefers_npm_install_on_windows(monkeypatch, tmp_path):
    npm_cmd = tmp_path / "AppData" / "Roaming" / "npm" / "claude.cmd"
    npm_cmd.parent.mkdir(parents=True)
    npm_cmd.write_text("@echo off")
    monkeypatch.setenv("USERPROFILE", str(tmp_path))

    with patch(f"{_MODULE}.platform.system", return_value="Windows"), patch(f"{_MODULE}.shutil.which") as which:
        assert find_claude_executable() == str(npm_cmd)

    which.assert_not_called()


def test_find_falls_back_to_path(monkeypatch):
    with patch(f"{_MODULE}.platform.system", return_value="Linux"), patch(
        f"{_MODULE}.shutil.which", return_value="/usr/local/bin/claude"
    ):
        assert find_claude_executable() == "/usr/local/bin/claude"


def test_missing_executable():
    with patch(f"{_MODULE}.platform.system", return_value="Linux"), patch(f"{_MODULE}.shutil.which", return_value=None):
        with pytest.raises(SpawnFailedError) as exc_info:
            find_claude_executable()
        assert str(exc_info.value) == INSTALL_HINT
        assert check_claude_installed() is False


def test_claude_command_env_override(monkeypatch):
    monkeypatch.setenv("HYDRA_CLAUDE_EXECUTABLE", "/opt/claude/bin/claude")

    assert claude_command() == ["/opt/claude/bin/claude"]


def test_claude_command_uses_npm_shim_on_windows(monkeypatch, tmp_path):
    npm_cmd = tmp_path / "AppData" / "Roaming" / "npm" / "claude.cmd"
    npm_cmd.parent.mkdir(parents=True)
    npm_cmd.write_text("@echo off")
    monkeypatch.setenv("USERPROFILE", str(tmp_path))

    with patch(f"{_MODULE}.platform.system", return_value="Windows"):
        assert claude_command() == [str(npm_cmd)]


def test_claude_command_without_npm_install_on_windows(monkeypatch, tmp_path):
    monkeypatch.setenv("USERPROFILE", str(tmp_path))

    with patch(f"{_MODULE}.platform.system", return_value="Windows"):
        assert claude_command() == ["claude"]
