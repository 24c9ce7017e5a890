from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import os
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

_DOTENV_CANDIDATES = (Path(".env"), Path.home() / ".hydra_env")

_DEFAULT_VALUES: dict[str, str] | None = None


def _load_default_values() -> dict[str, str]:
    """Load fallback values from .env-style files, first file wins per key."""
    from .runtime_helpers import DotenvLoader

    global _DEFAULT_VALUES
    if _DEFAULT_VALUES is not None:
        return _DEFAULT_VALUES

    defaults: dict[str, str] = {}
    for path in _DOTENV_CANDIDATES:
        for key, value in DotenvLoader.load_from_file(path).items():
            defaults.setdefault(key, value)

    _DEFAULT_VALUES = defaults
    return defaults


def _default_value(name: str) -> Optional[str]:
    return _load_default_values().get(name)


def _normalize(value: str | None, *, strip: bool) -> str | None:
    if value is None:
        return None
    return value.strip() if strip else value


def env_str(
    name: str,
    or_value: str | None = None,
    *,
    required: bool = False,
    strip: bool = True,
    allow_blank: bool = False,
) -> str | None:
    """Fetch an environment variable as a string with validation."""

    value = _normalize(os.getenv(name), strip=strip)

    if value is None or (not allow_blank and value == ""):
        configured_default = _default_value(name)
        if configured_default is not None:
            value = _normalize(configured_default, strip=strip)

    if value is None or (not allow_blank and value == ""):
        if required:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    return value


def env_float(name: str, or_value: float | None = None, *, required: bool = False) -> float | None:
    """Fetch an environment variable and coerce it to ``float``."""

    raw = env_str(name, strip=True, allow_blank=False)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {name!r} must be a float (got {raw!r})") from exc
    if value < 0:
        raise ConfigurationError(f"Environment variable {name!r} must be non-negative (got {value})")
    return value


def home_dir() -> Path:
    """Return the user's home directory, preferring USERPROFILE on Windows hosts."""

    raw = os.getenv("USERPROFILE") or os.getenv("HOME")
    if not raw:
        raise ConfigurationError("Could not determine home directory")
    return Path(raw)


def default_hydra_dir() -> Path:
    return home_dir() / "Desktop" / "ClaudeHYDRA"


def resolve_hydra_path() -> Path:
    """Return the HYDRA working directory.

    ``HYDRA_PATH`` wins when set; otherwise ``~/Desktop/ClaudeHYDRA`` is used
    if it exists.
    """

    configured = env_str("HYDRA_PATH")
    if configured:
        return Path(configured).expanduser()

    default_path = default_hydra_dir()
    if default_path.exists():
        return default_path
    raise ConfigurationError("HYDRA path not found. Set HYDRA_PATH environment variable.")


__all__ = [
    "ConfigurationError",
    "default_hydra_dir",
    "env_float",
    "env_str",
    "home_dir",
    "resolve_hydra_path",
]
