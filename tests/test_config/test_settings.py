"""Tests for configuration settings."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from system_vitals.config import (
    HISTORY_CAPACITY,
    SYSTEM_INFO_INIT_INTERVAL,
    AppConfig,
    Environment,
    get_environment,
    get_settings,
)
from system_vitals.config.env_loader import load_env_files

_ENV_VARS = (
    "APP_ENV",
    "APP_DEBUG",
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "VITALS_SAMPLE_INTERVAL_SECONDS",
    "VITALS_HISTORY_CAPACITY",
    "VITALS_GPU_ENABLED",
    "VITALS_LOCK_TIMEOUT_SECONDS",
    "VITALS_LOG_TO_FILE",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable AppConfig reads."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestEnvironmentDetection:
    """Test environment detection."""

    def test_get_environment_default(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test default environment is development."""
        assert get_environment() == Environment.DEVELOPMENT

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("production", Environment.PRODUCTION),
            ("prod", Environment.PRODUCTION),
            ("staging", Environment.STAGING),
            ("stage", Environment.STAGING),
            ("test", Environment.TEST),
            ("TEST", Environment.TEST),
            ("unknown", Environment.DEVELOPMENT),
        ],
    )
    def test_get_environment_mapping(
        self, clean_env: pytest.MonkeyPatch, value: str, expected: Environment
    ) -> None:
        """Test APP_ENV values and aliases."""
        clean_env.setenv("APP_ENV", value)
        assert get_environment() == expected


class TestAppConfig:
    """Test AppConfig class."""

    def test_app_config_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test AppConfig has correct code defaults."""
        config = AppConfig()
        assert config.environment == Environment.DEVELOPMENT
        assert config.debug is False
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.log_to_file is False
        assert config.sample_interval_seconds == SYSTEM_INFO_INIT_INTERVAL
        assert config.history_capacity == HISTORY_CAPACITY
        assert config.gpu_enabled is True
        assert config.lock_timeout_seconds == 0.5

    def test_default_constants(self) -> None:
        """Test one-second cadence and sixty-sample window."""
        assert SYSTEM_INFO_INIT_INTERVAL == 1
        assert HISTORY_CAPACITY == 60

    def test_app_config_from_env_vars(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test AppConfig reads VITALS_ prefixed and APP_ variables."""
        clean_env.setenv("APP_DEBUG", "1")
        clean_env.setenv("APP_LOG_LEVEL", "debug")
        clean_env.setenv("VITALS_HISTORY_CAPACITY", "30")
        clean_env.setenv("VITALS_GPU_ENABLED", "false")
        clean_env.setenv("VITALS_SAMPLE_INTERVAL_SECONDS", "2")
        clean_env.setenv("VITALS_LOG_TO_FILE", "true")

        config = AppConfig()
        assert config.log_to_file is True
        assert config.debug is True
        assert config.log_level == "DEBUG"
        assert config.history_capacity == 30
        assert config.gpu_enabled is False
        assert config.sample_interval_seconds == 2.0

    def test_sub_second_interval_rejected(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test sampling faster than once per second is rejected."""
        with pytest.raises(ValidationError):
            AppConfig(sample_interval_seconds=0.5)

    def test_zero_capacity_rejected(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test a history window must hold at least one sample."""
        with pytest.raises(ValidationError):
            AppConfig(history_capacity=0)

    def test_non_positive_lock_timeout_rejected(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test lock waits must be bounded and positive."""
        with pytest.raises(ValidationError):
            AppConfig(lock_timeout_seconds=0)

    def test_app_config_log_level_validation(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test log level validation."""
        clean_env.setenv("APP_LOG_LEVEL", "INVALID")
        with pytest.raises(ValidationError):
            AppConfig()

    def test_app_config_log_format_validation(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test log format validation."""
        clean_env.setenv("APP_LOG_FORMAT", "invalid")
        with pytest.raises(ValidationError):
            AppConfig()

    def test_app_config_path_resolution(self) -> None:
        """Test that relative paths are resolved to absolute."""
        config = AppConfig(log_dir="some/relative/logs")
        assert config.log_dir.is_absolute()
        assert config.log_dir.parts[-3:] == ("some", "relative", "logs")


class TestSingleton:
    """Test singleton pattern."""

    def test_get_settings_returns_singleton(self) -> None:
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_import_does_not_load_settings(self) -> None:
        """Test importing the config package leaves settings unloaded."""
        import system_vitals.config as config_package

        assert not hasattr(config_package, "settings")


class TestEnvFileLoading:
    """Test .env file loading."""

    def test_load_env_files_priority(
        self, tmp_path: Path, clean_env: pytest.MonkeyPatch
    ) -> None:
        """Test the environment-specific local file wins."""
        (tmp_path / ".env").write_text("VITALS_TEST_VAR=base\n")
        (tmp_path / ".env.local").write_text("VITALS_TEST_VAR=local\n")
        (tmp_path / ".env.development").write_text("VITALS_TEST_VAR=development\n")
        (tmp_path / ".env.development.local").write_text(
            "VITALS_TEST_VAR=development_local\n"
        )
        clean_env.setenv("APP_ENV", "development")
        clean_env.delenv("VITALS_TEST_VAR", raising=False)

        try:
            loaded = load_env_files(tmp_path)

            assert os.getenv("VITALS_TEST_VAR") == "development_local"
            assert loaded == [
                ".env.development.local",
                ".env.development",
                ".env.local",
                ".env",
            ]
        finally:
            os.environ.pop("VITALS_TEST_VAR", None)

    def test_explicit_env_var_wins_over_files(
        self, tmp_path: Path, clean_env: pytest.MonkeyPatch
    ) -> None:
        """Test variables already in the environment are not overridden."""
        (tmp_path / ".env").write_text("VITALS_TEST_VAR=from_file\n")
        clean_env.setenv("VITALS_TEST_VAR", "explicit")

        load_env_files(tmp_path)

        assert os.getenv("VITALS_TEST_VAR") == "explicit"

    def test_load_env_files_missing(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        """Test a directory without .env files loads nothing."""
        assert load_env_files(tmp_path) == []
