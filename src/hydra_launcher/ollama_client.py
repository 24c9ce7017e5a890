"""Client for the local Ollama model-serving daemon."""

import asyncio
import logging
import platform
from typing import List, Optional

import aiohttp
import orjson
from aiohttp import ClientError, ClientTimeout

from .claude_process_helpers.spawn import spawn_detached
from .config import env_str
from .exceptions import (
    ConnectionFailedError,
    ConnectionTimeoutError,
    MalformedResponseError,
    SpawnFailedError,
    UpstreamStatusError,
)
from .mcp_health_helpers.port_prober import DATA_FETCH_TIMEOUT_SECONDS, DEFAULT_PROBE_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_URL = "http://127.0.0.1:11434"
TAGS_PATH = "/api/tags"
STARTUP_WAIT_SECONDS = 3.0


class OllamaClient:
    """Liveness checks and model listing against ``/api/tags``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        liveness_timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        fetch_timeout_seconds: float = DATA_FETCH_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or env_str("OLLAMA_URL", DEFAULT_OLLAMA_URL)).rstrip("/")
        self.liveness_timeout_seconds = liveness_timeout_seconds
        self.fetch_timeout_seconds = fetch_timeout_seconds

    @property
    def tags_url(self) -> str:
        return f"{self.base_url}{TAGS_PATH}"

    async def is_running(self) -> bool:
        """True when the daemon answers ``/api/tags`` with a 2xx status."""
        try:
            async with aiohttp.ClientSession() as session:
                timeout = ClientTimeout(total=self.liveness_timeout_seconds)
                async with session.get(self.tags_url, timeout=timeout) as response:
                    return 200 <= response.status < 300
        except asyncio.TimeoutError:  # Daemon not answering  # policy_guard: allow-silent-handler
            logger.debug("Ollama liveness check timed out")
            return False
        except (ClientError, OSError):  # policy_guard: allow-silent-handler
            logger.debug("Ollama liveness check failed", exc_info=True)
            return False

    async def list_models(self) -> List[str]:
        """
        Return the names of the locally available models.

        Raises:
            ConnectionTimeoutError: If the daemon did not answer in time
            ConnectionFailedError: If the daemon could not be reached
            UpstreamStatusError: If the daemon returned a non-2xx status
            MalformedResponseError: If the body is not a ``{"models": [{"name"}]}`` document
        """
        try:
            async with aiohttp.ClientSession() as session:
                timeout = ClientTimeout(total=self.fetch_timeout_seconds)
                async with session.get(self.tags_url, timeout=timeout) as response:
                    if not 200 <= response.status < 300:
                        raise UpstreamStatusError(status=response.status)
                    body = await response.read()
        except asyncio.TimeoutError as exc:
            raise ConnectionTimeoutError("Ollama request timed out", url=self.tags_url) from exc
        except (ClientError, OSError) as exc:
            raise ConnectionFailedError(f"Failed to connect to Ollama: {exc}", url=self.tags_url) from exc

        return parse_model_names(body)

    async def start_ollama(self) -> None:
        """
        Start ``ollama serve`` detached and confirm it answers.

        Raises:
            SpawnFailedError: If the daemon could not be started or is not responding
        """
        if platform.system() == "Windows":
            spawn_detached(["cmd", "/c", "start", "ollama", "serve"])
        else:
            spawn_detached(["ollama", "serve"])

        await asyncio.sleep(STARTUP_WAIT_SECONDS)

        if not await self.is_running():
            raise SpawnFailedError("Ollama started but not responding")
        logger.info("Ollama is up at %s", self.base_url)


def parse_model_names(body: bytes) -> List[str]:
    """Extract model names from an ``/api/tags`` response body."""
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise MalformedResponseError(f"Failed to parse response: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("models"), list):
        raise MalformedResponseError("Failed to parse response: missing 'models' array")

    names: List[str] = []
    for entry in payload["models"]:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise MalformedResponseError(f"Failed to parse response: invalid model entry {entry!r}")
        names.append(entry["name"])
    return names


__all__ = ["DEFAULT_OLLAMA_URL", "OllamaClient", "parse_model_names"]
