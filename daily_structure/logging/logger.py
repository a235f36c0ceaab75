"""
Logging setup for daily_structure.

Analysis modules log under the ``daily_structure`` namespace. The console
handler always goes to stdout; ``log_to_file`` adds ``daily_structure.log``
in the configured log directory.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..config import AppConfig

PACKAGE_LOGGER = "daily_structure"
LOG_FILE_NAME = "daily_structure.log"

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _resolve_level(level: str) -> int:
    # Unknown names fall back to INFO
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_file: Optional[str | Path] = None,
    log_dir: str = "logs",
    format_string: Optional[str] = None,
) -> None:
    """
    Install console (and optional file) handlers on the root logger.

    Only the first call takes effect until ``reset_logging``.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_to_file: Also write to ``log_file``
        log_file: Explicit log file; defaults to ``<log_dir>/daily_structure.log``
        log_dir: Directory used when ``log_file`` is not given
        format_string: Overrides ``LOG_FORMAT``
    """
    global _configured

    if _configured:
        return

    numeric_level = _resolve_level(level)
    formatter = logging.Formatter(format_string or LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    target: Optional[Path] = None
    if log_to_file:
        target = Path(log_file) if log_file is not None else Path(log_dir) / LOG_FILE_NAME
        target.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(target, encoding="utf-8"))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    _configured = True

    logger = get_logger(__name__)
    if target is not None:
        logger.info(f"Logging to file: {target}")
    logger.debug(f"Logging configured at {level.upper()} level")


def configure_from_app_config(config: AppConfig) -> None:
    """Configure logging from the ``log_*`` fields of an ``AppConfig``."""
    configure_logging(
        level=config.log_level,
        log_to_file=config.log_to_file,
        log_dir=config.log_dir,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the package namespace.

    Names already inside ``daily_structure`` are used as-is; other names
    (scripts, tests) are nested below it.
    """
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def reset_logging() -> None:
    """Close and drop the root handlers (used by tests and the CLI tests)."""
    global _configured
    _configured = False

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)
