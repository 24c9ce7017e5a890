"""HYDRA launcher configuration file (``hydra-config.json``).

A missing file yields the built-in defaults; a present but malformed file is a
hard ``ConfigurationError`` rather than a silent fallback.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from ..mcp_health_helpers.types import HealthTarget
from .errors import ConfigurationError
from .runtime import default_hydra_dir

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "hydra-config.json"


@dataclass(frozen=True)
class McpServerConfig:
    name: str
    port: int
    command: str
    args: List[str] = field(default_factory=list)
    enabled: bool = True


@dataclass(frozen=True)
class AiHandlerConfig:
    prefer_local: bool = True
    ollama_port: int = 11434
    default_model: str = "llama3.2:3b"


def _default_mcp_servers() -> List[McpServerConfig]:
    return [
        McpServerConfig("Serena", 9000, "npx", ["-y", "serena-mcp"]),
        McpServerConfig("Desktop Commander", 8100, "npx", ["-y", "@anthropics/desktop-commander-mcp"]),
        McpServerConfig("Playwright", 5200, "npx", ["-y", "@anthropics/playwright-mcp"]),
    ]


@dataclass(frozen=True)
class HydraConfig:
    version: str = "10.4.0"
    mode: str = "MCP Orchestration"
    yolo_enabled: bool = True
    mcp_servers: List[McpServerConfig] = field(default_factory=_default_mcp_servers)
    ai_handler: AiHandlerConfig = field(default_factory=AiHandlerConfig)

    @staticmethod
    def default_path() -> Path:
        return default_hydra_dir() / CONFIG_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "HydraConfig":
        """
        Load configuration from disk.

        Args:
            path: Config file location (default: ~/Desktop/ClaudeHYDRA/hydra-config.json)

        Returns:
            Parsed configuration, or defaults when the file does not exist

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        config_path = path if path is not None else cls.default_path()
        if not config_path.exists():
            logger.debug("No config at %s; using defaults", config_path)
            return cls()

        try:
            payload = orjson.loads(config_path.read_bytes())
        except OSError as exc:
            raise ConfigurationError.load_failed("config", str(config_path)) from exc
        except orjson.JSONDecodeError as exc:
            raise ConfigurationError(f"Failed to parse config {config_path}") from exc

        return cls.from_dict(payload, source=str(config_path))

    @classmethod
    def from_dict(cls, payload: Any, *, source: str = "<dict>") -> "HydraConfig":
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Config {source} must contain an object at the top level")

        required = ("version", "mode", "yolo_enabled", "mcp_servers", "ai_handler")
        for key in required:
            if key not in payload:
                raise ConfigurationError.missing_value(key, source)

        servers_raw = payload["mcp_servers"]
        if not isinstance(servers_raw, list):
            raise ConfigurationError.invalid_value("mcp_servers", servers_raw, "Expected a list")

        return cls(
            version=_require(payload, "version", str, source),
            mode=_require(payload, "mode", str, source),
            yolo_enabled=_require(payload, "yolo_enabled", bool, source),
            mcp_servers=[_parse_server(item, source) for item in servers_raw],
            ai_handler=_parse_ai_handler(payload["ai_handler"], source),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Optional[Path] = None) -> None:
        config_path = path if path is not None else self.default_path()
        try:
            config_path.write_bytes(orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2))
        except OSError as exc:
            raise ConfigurationError(f"Failed to write config {config_path}") from exc

    def health_targets(self) -> List[HealthTarget]:
        """Enabled MCP servers as probe targets."""
        return [HealthTarget(server.name, server.port) for server in self.mcp_servers if server.enabled]


def _require(payload: Dict[str, Any], key: str, expected: type, source: str) -> Any:
    if key not in payload:
        raise ConfigurationError.missing_value(key, source)
    value = payload[key]
    # bool is an int subclass; keep ports from accepting true/false
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigurationError.invalid_value(key, value, f"Expected {expected.__name__} in {source}")
    return value


def _require_port(payload: Dict[str, Any], key: str, source: str) -> int:
    port = _require(payload, key, int, source)
    if not 0 <= port <= 65535:
        raise ConfigurationError.invalid_value(key, port, "Port must be in 0..65535")
    return port


def _parse_server(item: Any, source: str) -> McpServerConfig:
    if not isinstance(item, dict):
        raise ConfigurationError.invalid_value("mcp_servers entry", item, "Expected an object")
    args = item.get("args", [])
    if not isinstance(args, list) or not all(isinstance(arg, str) for arg in args):
        raise ConfigurationError.invalid_value("args", args, "Expected a list of strings")
    return McpServerConfig(
        name=_require(item, "name", str, source),
        port=_require_port(item, "port", source),
        command=_require(item, "command", str, source),
        args=list(args),
        enabled=_require(item, "enabled", bool, source),
    )


def _parse_ai_handler(item: Any, source: str) -> AiHandlerConfig:
    if not isinstance(item, dict):
        raise ConfigurationError.invalid_value("ai_handler", item, "Expected an object")
    return AiHandlerConfig(
        prefer_local=_require(item, "prefer_local", bool, source),
        ollama_port=_require_port(item, "ollama_port", source),
        default_model=_require(item, "default_model", str, source),
    )


__all__ = ["AiHandlerConfig", "CONFIG_FILENAME", "HydraConfig", "McpServerConfig"]
