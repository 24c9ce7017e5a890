"""
Caller-facing actions consumed by the GUI shell.

Every handler receives the shared AppState through its LauncherCommands
instance. Blocking process and OS calls run in worker threads so the event
loop driving health probes is never stalled.
"""

import asyncio
import logging
from typing import List, Optional

from . import claude_cli
from .claude_process_helpers.executable import check_claude_installed
from .app_state import AppState
from .config import HydraConfig
from .mcp_health_helpers.types import HealthResult
from .system_metrics import SystemMetrics, get_system_metrics

logger = logging.getLogger(__name__)


class LauncherCommands:
    """Command surface bound to one AppState."""

    def __init__(self, state: AppState):
        self.state = state

    # Status queries

    async def check_mcp_health(self) -> List[HealthResult]:
        return await self.state.health.check_all()

    async def get_system_metrics(self) -> SystemMetrics:
        return await asyncio.to_thread(get_system_metrics)

    def load_hydra_config(self) -> HydraConfig:
        return HydraConfig.load()

    async def check_ollama(self) -> bool:
        return await self.state.ollama.is_running()

    async def get_ollama_models(self) -> List[str]:
        return await self.state.ollama.list_models()

    async def start_ollama(self) -> None:
        await self.state.ollama.start_ollama()

    async def check_claude_installed(self) -> bool:
        return await asyncio.to_thread(check_claude_installed)

    # YOLO flag

    def get_yolo_mode(self) -> bool:
        return self.state.yolo.get()

    def set_yolo_mode(self, enabled: bool) -> bool:
        return self.state.yolo.set(enabled)

    # Detached launch and one-shot prompts

    async def launch_claude(self, yolo_mode: Optional[bool] = None) -> str:
        """Launch the CLI in its own window; defaults to the shared YOLO flag."""
        effective = self.state.yolo.get() if yolo_mode is None else yolo_mode
        return await asyncio.to_thread(claude_cli.launch_claude, effective, self.state.hydra_path())

    async def ask_claude(self, message: str) -> str:
        return await asyncio.to_thread(claude_cli.ask_claude, message, self.state.hydra_path())

    # Interactive session

    async def start_claude_session(self, initial_payload: Optional[str] = None) -> Optional[int]:
        """Start the supervised session; returns the child PID."""
        session = self.state.session
        await asyncio.to_thread(session.start, self.state.yolo.get(), self.state.hydra_path(), initial_payload)
        return session.pid

    async def send_to_claude_session(self, message: str) -> None:
        await asyncio.to_thread(self.state.session.send, message)

    def read_claude_output(self) -> List[str]:
        return self.state.session.read_output()

    async def stop_claude_session(self) -> None:
        await asyncio.to_thread(self.state.session.stop)

    def is_claude_session_running(self) -> bool:
        return self.state.session.is_running
