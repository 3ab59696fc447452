"""Sensor package.

Structure:
- types.py: Metric enum, sensor errors, percentage helpers
- sensors.py: SensorAdapter, the single sample(metric) entry point
- platforms/base.py: CPU and memory (psutil)
- platforms/nvidia.py: GPU (NVML)
"""

from system_vitals.sensors.platforms.base import HostSnapshot
from system_vitals.sensors.platforms.nvidia import NvmlGpuReader
from system_vitals.sensors.sensors import SensorAdapter
from system_vitals.sensors.types import (
    Metric,
    SensorError,
    SensorReadError,
    SensorUnavailableError,
    clamp_percentage,
    round_half_away,
)

__all__ = [
    "HostSnapshot",
    "Metric",
    "NvmlGpuReader",
    "SensorAdapter",
    "SensorError",
    "SensorReadError",
    "SensorUnavailableError",
    "clamp_percentage",
    "round_half_away",
]
