"""Application configuration settings.

This module provides the AppConfig class and the lazily loaded settings
singleton.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from system_vitals.config.env_loader import Environment, get_environment, load_env_files
from system_vitals.telemetry import get_logger

log = get_logger(__name__)

# Sampling cadence (seconds between ticks)
SYSTEM_INFO_INIT_INTERVAL = 1

# Retained samples per metric (60 ticks at 1 tick/s)
HISTORY_CAPACITY = 60

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json")

# src/system_vitals/config -> project root
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class AppConfig(BaseSettings):
    """Sampler and logging configuration.

    Values come from ``VITALS_*`` environment variables (plus the shared
    ``APP_*`` logging and environment variables) and the .env files loaded
    by ``load_app_config()``.
    """

    model_config = SettingsConfigDict(
        # .env files are loaded by env_loader so environment-specific files
        # can take priority
        env_prefix="VITALS_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    environment: Environment = Field(
        default_factory=get_environment, description="Current environment"
    )
    debug: bool = Field(default=False, alias="APP_DEBUG", description="Debug mode flag")

    # Logging
    log_level: str = Field(
        default="INFO", alias="APP_LOG_LEVEL", description="Console log level"
    )
    log_format: str = Field(
        default="console",
        alias="APP_LOG_FORMAT",
        description="Console log format (json or console)",
    )
    log_to_file: bool = Field(
        default=False, description="Also write JSON lines under log_dir (CLI only)"
    )
    log_dir: Path = Field(default=Path("telemetry/logs"), description="Log file directory")

    # Sampler
    sample_interval_seconds: float = Field(
        default=float(SYSTEM_INFO_INIT_INTERVAL),
        ge=1.0,
        description="Seconds between sampler ticks (sub-second sampling is not supported)",
    )
    history_capacity: int = Field(
        default=HISTORY_CAPACITY, ge=1, description="Samples retained per metric"
    )
    gpu_enabled: bool = Field(default=True, description="Poll NVIDIA GPUs through NVML")
    lock_timeout_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Maximum wait for a metric lock before the sampler skips the update",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard level names in any case."""
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Accept 'console' or 'json' in any case."""
        if v.lower() not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got {v}")
        return v.lower()

    @field_validator("log_dir")
    @classmethod
    def resolve_log_dir(cls, v: Path) -> Path:
        """Resolve a relative log directory against the project root."""
        return v if v.is_absolute() else (_PROJECT_ROOT / v).resolve()


_settings: AppConfig | None = None


def load_app_config() -> AppConfig:
    """Load .env files, then build and validate an AppConfig.

    Raises:
        ValidationError: If configuration validation fails.
    """
    loaded = load_env_files()

    try:
        config = AppConfig()
    except Exception as e:
        log.error("app_config_load_failed", error=str(e), error_type=type(e).__name__)
        raise

    log.info(
        "app_config_loaded",
        environment=config.environment.value,
        env_files=loaded,
        sample_interval_seconds=config.sample_interval_seconds,
        history_capacity=config.history_capacity,
        gpu_enabled=config.gpu_enabled,
    )
    return config


def get_settings() -> AppConfig:
    """Get the application settings singleton, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = load_app_config()
    return _settings
