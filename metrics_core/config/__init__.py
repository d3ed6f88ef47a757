"""
Configuration module: settings and logging.
"""

from metrics_core.config.settings import Settings, get_settings, settings
from metrics_core.config.logging import get_logger, setup_logging

__all__ = [
    # settings
    "Settings",
    "get_settings",
    "settings",
    # logging
    "get_logger",
    "setup_logging",
]
