"""
daily_structure.logging
Root handler setup and package-scoped loggers.
"""

from .logger import (
    PACKAGE_LOGGER,
    configure_from_app_config,
    configure_logging,
    get_logger,
    reset_logging,
)

__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "configure_from_app_config",
    "get_logger",
    "reset_logging",
]
