from unittest.mock import AsyncMock, MagicMock

import pytest

from hydra_launcher import commands
from hydra_launcher.app_state import AppState
from hydra_launcher.commands import LauncherCommands
from hydra_launcher.mcp_health_helpers.types import HealthResult, HealthTarget


@pytest.fixture
def state(tmp_path):
    session = MagicMock(pid=777, is_running=True)
    session.read_output.return_value = ["line"]
    health = MagicMock()
    health.check_all = AsyncMock(return_value=[HealthResult.online(HealthTarget("Serena", 9000), 1.5)])
    ollama = MagicMock()
    ollama.is_running = AsyncMock(return_value=True)
    ollama.list_models = AsyncMock(return_value=["llama3.2:3b"])
    ollama.start_ollama = AsyncMock()
    return AppState(session=session, health=health, ollama=ollama, hydra_path=tmp_path)


class TestStatusQueries:
    @pytest.mark.asyncio
    async def test_check_mcp_health(self, state):
        results = await LauncherCommands(state).check_mcp_health()

        assert [r.name for r in results] == ["Serena"]
        state.health.check_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_ollama_commands(self, state):
        cmds = LauncherCommands(state)

        assert await cmds.check_ollama() is True
        assert await cmds.get_ollama_models() == ["llama3.2:3b"]
        await cmds.start_ollama()
        state.ollama.start_ollama.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_system_metrics_runs_in_thread(self, state, monkeypatch):
        sentinel = object()
        monkeypatch.setattr(commands, "get_system_metrics", lambda: sentinel)

        assert await LauncherCommands(state).get_system_metrics() is sentinel

    @pytest.mark.asyncio
    async def test_check_claude_installed(self, state, monkeypatch):
        monkeypatch.setattr(commands, "check_claude_installed", lambda: False)

        assert await LauncherCommands(state).check_claude_installed() is False

    def test_load_hydra_config_defaults(self, state, monkeypatch, tmp_path):
        monkeypatch.delenv("USERPROFILE", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert LauncherCommands(state).load_hydra_config().version == "10.4.0"


class TestYoloAndLaunch:
    def test_yolo_round_trip(self, state):
        cmds = LauncherCommands(state)

        assert cmds.get_yolo_mode() is True
        assert cmds.set_yolo_mode(False) is False
        assert cmds.get_yolo_mode() is False

    @pytest.mark.asyncio
    async def test_launch_defaults_to_flag(self, state, monkeypatch, tmp_path):
        launch = MagicMock(return_value="Claude CLI launched successfully")
        monkeypatch.setattr(commands.claude_cli, "launch_claude", launch)
        cmds = LauncherCommands(state)
        cmds.set_yolo_mode(False)

        assert await cmds.launch_claude() == "Claude CLI launched successfully"
        launch.assert_called_once_with(False, tmp_path)

    @pytest.mark.asyncio
    async def test_launch_explicit_mode(self, state, monkeypatch, tmp_path):
        launch = MagicMock(return_value="ok")
        monkeypatch.setattr(commands.claude_cli, "launch_claude", launch)

        await LauncherCommands(state).launch_claude(yolo_mode=False)

        launch.assert_called_once_with(False, tmp_path)

    @pytest.mark.asyncio
    async def test_ask_claude(self, state, monkeypatch, tmp_path):
        ask = MagicMock(return_value="answer")
        monkeypatch.setattr(commands.claude_cli, "ask_claude", ask)

        assert await LauncherCommands(state).ask_claude("hi") == "answer"
        ask.assert_called_once_with("hi", tmp_path)


class TestSessionCommands:
    @pytest.mark.asyncio
    async def test_start_uses_flag_and_path(self, state, tmp_path):
        pid = await LauncherCommands(state).start_claude_session("hello")

        assert pid == 777
        state.session.start.assert_called_once_with(True, tmp_path, "hello")

    @pytest.mark.asyncio
    async def test_send_read_stop(self, state):
        cmds = LauncherCommands(state)

        await cmds.send_to_claude_session("msg")
        assert cmds.read_claude_output() == ["line"]
        assert cmds.is_claude_session_running() is True
        await cmds.stop_claude_session()

        state.session.send.assert_called_once_with("msg")
        state.session.stop.assert_called_once()
