"""Configuration for system_vitals.

``VITALS_*`` environment variables, .env files and defaults are merged
into a validated AppConfig. Nothing is loaded until ``get_settings()`` is
first called.
"""

from system_vitals.config.env_loader import Environment, get_environment, load_env_files
from system_vitals.config.settings import (
    HISTORY_CAPACITY,
    SYSTEM_INFO_INIT_INTERVAL,
    AppConfig,
    get_settings,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "get_settings",
    "load_app_config",
    "load_env_files",
    "Environment",
    "get_environment",
    "HISTORY_CAPACITY",
    "SYSTEM_INFO_INIT_INTERVAL",
]
