"""Environment detection and .env file loading."""

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from system_vitals.telemetry import get_logger

log = get_logger(__name__)


class Environment(str, Enum):
    """Deployment environment, from APP_ENV."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


_ALIASES = {"prod": Environment.PRODUCTION, "stage": Environment.STAGING}


def get_environment() -> Environment:
    """Map APP_ENV to an Environment; unknown or unset means development."""
    value = os.getenv("APP_ENV", "").lower()
    if value in _ALIASES:
        return _ALIASES[value]
    try:
        return Environment(value)
    except ValueError:
        return Environment.DEVELOPMENT


def load_env_files(project_root: Path | None = None) -> list[str]:
    """Load .env files into os.environ without overriding existing variables.

    Files are read highest priority first, so with override disabled the
    first file to define a variable wins:
    ``.env.{environment}.local``, ``.env.{environment}``, ``.env.local``, ``.env``.

    Args:
        project_root: Directory holding the files. Defaults to the project root.

    Returns:
        Names of the files that were loaded, in load order.
    """
    root = project_root or Path(__file__).resolve().parents[3]
    env_name = get_environment().value
    candidates = (f".env.{env_name}.local", f".env.{env_name}", ".env.local", ".env")

    loaded = [name for name in candidates if (root / name).is_file()]
    for name in loaded:
        load_dotenv(root / name, override=False)

    log.debug("env_files_loaded", environment=env_name, files=loaded, project_root=str(root))
    return loaded
