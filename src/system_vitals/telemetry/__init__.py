"""Structured logging for system_vitals.

This module provides:
- Structured logging via structlog
- Semantic event constants
"""

from system_vitals.telemetry.events import (
    SAMPLER_ALREADY_RUNNING,
    SAMPLER_START_REFUSED,
    SAMPLER_STARTED,
    SAMPLER_STOPPED,
    SAMPLER_TICK_COMPLETED,
    SAMPLER_TICK_ERROR,
    SAMPLER_TICK_SKIPPED,
    SENSOR_POLL,
    SENSOR_READ_FAILED,
    SENSOR_UNAVAILABLE,
    STATE_LOCK_FAILED,
    SYSTEM_METRICS_SNAPSHOT,
)
from system_vitals.telemetry.logger import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    # Event constants
    "SENSOR_POLL",
    "SENSOR_UNAVAILABLE",
    "SENSOR_READ_FAILED",
    "SAMPLER_STARTED",
    "SAMPLER_STOPPED",
    "SAMPLER_ALREADY_RUNNING",
    "SAMPLER_START_REFUSED",
    "SAMPLER_TICK_COMPLETED",
    "SAMPLER_TICK_SKIPPED",
    "SAMPLER_TICK_ERROR",
    "STATE_LOCK_FAILED",
    "SYSTEM_METRICS_SNAPSHOT",
]
