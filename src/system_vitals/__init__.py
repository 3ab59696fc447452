"""Background host telemetry sampler.

A single background thread samples CPU, memory and GPU utilization once
per interval and keeps the latest value plus a bounded history per metric.

Usage:
    >>> from system_vitals import MonitorState, initialize_system, get_cpu_usage
    >>> state = MonitorState()
    >>> initialize_system(state)
    >>> get_cpu_usage(state)
"""

from system_vitals.accessors import (
    current,
    get_cpu_usage,
    get_cpu_usage_history,
    get_gpu_usage,
    get_gpu_usage_history,
    get_memory_usage,
    get_memory_usage_history,
    history,
    snapshot,
)
from system_vitals.config.settings import HISTORY_CAPACITY, SYSTEM_INFO_INIT_INTERVAL
from system_vitals.history import HistoryRing
from system_vitals.locks import StateLockError
from system_vitals.models import MetricReading, MetricsSnapshot
from system_vitals.sampler import Sampler, SamplerStatus, initialize_system
from system_vitals.sensors import (
    Metric,
    SensorAdapter,
    SensorError,
    SensorReadError,
    SensorUnavailableError,
)
from system_vitals.state import MonitorState

__all__ = [
    "HISTORY_CAPACITY",
    "SYSTEM_INFO_INIT_INTERVAL",
    "HistoryRing",
    "Metric",
    "MetricReading",
    "MetricsSnapshot",
    "MonitorState",
    "Sampler",
    "SamplerStatus",
    "SensorAdapter",
    "SensorError",
    "SensorReadError",
    "SensorUnavailableError",
    "StateLockError",
    "current",
    "history",
    "snapshot",
    "get_cpu_usage",
    "get_memory_usage",
    "get_gpu_usage",
    "get_cpu_usage_history",
    "get_memory_usage_history",
    "get_gpu_usage_history",
    "initialize_system",
]
