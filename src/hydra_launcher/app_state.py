"""Application-wide context passed to every command handler."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from .claude_session import ClaudeSession
from .config import HydraConfig, env_str, resolve_hydra_path
from .mcp_health import McpHealthCoordinator
from .ollama_client import OllamaClient

logger = logging.getLogger(__name__)

DEFAULT_YOLO_ENABLED = True


class YoloFlag:
    """Lock-guarded skip-safety-confirmation flag shared by all commands."""

    def __init__(self, enabled: bool = DEFAULT_YOLO_ENABLED) -> None:
        self._lock = threading.Lock()
        self._enabled = enabled

    def get(self) -> bool:
        with self._lock:
            return self._enabled

    def set(self, enabled: bool) -> bool:
        with self._lock:
            self._enabled = enabled
        logger.info("YOLO mode set to: %s", "ON" if enabled else "OFF")
        return enabled


class AppState:
    """
    Owns the session, the health coordinator, the Ollama client and the YOLO flag.

    Closing the state stops the session so no CLI process outlives it.
    """

    def __init__(
        self,
        config: Optional[HydraConfig] = None,
        *,
        session: Optional[ClaudeSession] = None,
        health: Optional[McpHealthCoordinator] = None,
        ollama: Optional[OllamaClient] = None,
        hydra_path: Optional[Path] = None,
    ):
        self.config = config if config is not None else HydraConfig()
        self.yolo = YoloFlag(self.config.yolo_enabled)
        self.session = session if session is not None else ClaudeSession()
        self.health = health if health is not None else McpHealthCoordinator(self.config.health_targets())
        if ollama is None:
            default_url = f"http://127.0.0.1:{self.config.ai_handler.ollama_port}"
            ollama = OllamaClient(env_str("OLLAMA_URL", default_url))
        self.ollama = ollama
        self._hydra_path = hydra_path

    @classmethod
    def from_disk(cls, config_path: Optional[Path] = None) -> "AppState":
        return cls(HydraConfig.load(config_path))

    def hydra_path(self) -> Path:
        if self._hydra_path is not None:
            return self._hydra_path
        return resolve_hydra_path()

    def close(self) -> None:
        self.session.stop()

    def __enter__(self) -> "AppState":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
