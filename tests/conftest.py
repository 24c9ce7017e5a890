"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
import socket
import sys
from typing import AsyncIterator, Callable, Tuple

import pytest
import pytest_asyncio

from hydra_launcher.config import runtime


@pytest.fixture(autouse=True)
def isolate_runtime_defaults(monkeypatch):
    """Keep developer .env files from leaking into configuration lookups."""
    runtime._DEFAULT_VALUES = {}
    for name in ("HYDRA_PATH", "HYDRA_MCP_HOST", "HYDRA_PROBE_TIMEOUT_SECONDS", "HYDRA_CLAUDE_EXECUTABLE", "HYDRA_LOG_DIR", "OLLAMA_URL"):
        monkeypatch.delenv(name, raising=False)
    yield
    runtime._DEFAULT_VALUES = None


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest_asyncio.fixture
async def listening_port() -> AsyncIterator[int]:
    """A loopback port accepting connections for the duration of a test."""

    async def _handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.close()

    server = await asyncio.start_server(_handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port
    finally:
        server.close()
        await server.wait_closed()


@pytest.fixture
def python_child() -> Callable[[str], Tuple[str, ...]]:
    """Build an argv prefix running ``code`` in an unbuffered child interpreter."""

    def _build(code: str) -> Tuple[str, ...]:
        return (sys.executable, "-u", "-c", code)

    return _build
