"""
Centralized logging configuration for the launcher.

setup_logging configures the root logger once with:
- Console output to stdout
- File output to <log dir>/hydra_<timestamp>.log, one fresh file per launch
- User-friendly console mode for the GUI shell's embedded console
"""

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import default_hydra_dir, env_str

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_directory() -> Path:
    """Log directory: HYDRA_LOG_DIR, else ~/Desktop/ClaudeHYDRA/hydra-logs."""
    configured = env_str("HYDRA_LOG_DIR")
    if configured:
        return Path(configured).expanduser()
    return default_hydra_dir() / "hydra-logs"


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation  # policy_guard: allow-silent-handler
            _MODULE_LOGGER.debug("Handler close failed: %s", e)
    logger.handlers = []


def _build_console_handler(user_friendly: bool) -> logging.Handler:
    if user_friendly:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING if user_friendly else logging.DEBUG)
    return console_handler


def _build_file_handler(service_name: str, log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_path = log_dir / f"{service_name}_{timestamp}.log"

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def setup_logging(service_name: Optional[str] = None, user_friendly: bool = False, log_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Configure logging for the application.

    Args:
        service_name: Log file prefix; no file is written when omitted
        user_friendly: Only warnings and above, message text only, on the console
        log_dir: Override for the log directory

    Returns:
        Path of the log file, if one was created
    """

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(user_friendly))

        log_path: Optional[Path] = None
        if service_name:
            file_handler = _build_file_handler(service_name, log_dir if log_dir is not None else get_log_directory())
            root_logger.addHandler(file_handler)
            log_path = Path(file_handler.baseFilename)

        root_logger.setLevel(logging.DEBUG if log_path is not None else logging.INFO)
        _suppress_noisy_third_parties()

    if log_path is not None:
        _MODULE_LOGGER.info("HYDRA Launcher initialized")
        _MODULE_LOGGER.info("Log file: %s", log_path)
    return log_path


__all__ = ["get_log_directory", "setup_logging"]
