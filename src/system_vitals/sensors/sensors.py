"""Sensor adapter: one reader per metric behind a single sample() call.

CPU and memory come from the psutil-backed HostSnapshot; GPU comes from
NVML. Every reading is a percentage in [0, 100] or a SensorError.

The host snapshot is shared mutable state (its refresh calls overwrite the
cached counters), so it is guarded by ``host_lock``. The sampler holds that
lock for the whole CPU + memory refresh, which keeps both readings from the
same refresh window.
"""

import threading
from collections.abc import Callable

from system_vitals.sensors.platforms.base import HostSnapshot
from system_vitals.sensors.platforms.nvidia import NvmlGpuReader
from system_vitals.sensors.types import Metric, SensorUnavailableError
from system_vitals.telemetry import SENSOR_POLL, get_logger

log = get_logger(__name__)


class SensorAdapter:
    """Uniform access to the CPU, memory and GPU readers.

    Attributes:
        host: psutil-backed snapshot of CPU and memory counters.
        host_lock: Guard for ``host``; callers hold it around refresh + read.
        gpu_enabled: When False the GPU reader is never called and GPU
            reads report SensorUnavailableError.
    """

    def __init__(
        self,
        host: HostSnapshot | None = None,
        gpu_enabled: bool = True,
        gpu_reader: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            host: Host snapshot to read from. Defaults to a primed HostSnapshot.
            gpu_enabled: Whether to poll the GPU at all.
            gpu_reader: GPU reading function. Defaults to an NvmlGpuReader owned
                by this adapter and released by ``close()``.
        """
        self.host = host if host is not None else HostSnapshot()
        self.host_lock = threading.Lock()
        self.gpu_enabled = gpu_enabled
        self._gpu_reader = gpu_reader or NvmlGpuReader()

    def sample(self, metric: Metric) -> float:
        """Take one reading of ``metric``.

        CPU and memory readings refresh the OS counters first. The caller
        must hold ``host_lock`` for those two metrics.

        Args:
            metric: Metric to sample.

        Returns:
            Percentage in [0, 100], unrounded.

        Raises:
            SensorUnavailableError: The sensor has nothing to measure.
            SensorReadError: The sensor failed.
        """
        if metric is Metric.CPU:
            self.host.refresh_cpu()
            value = self.host.cpu_usage()
        elif metric is Metric.MEMORY:
            self.host.refresh_memory()
            value = self.host.memory_usage()
        elif metric is Metric.GPU:
            if not self.gpu_enabled:
                raise SensorUnavailableError(Metric.GPU, "GPU sampling disabled")
            value = self._gpu_reader()
        else:
            raise ValueError(f"Unknown metric: {metric!r}")

        log.debug(SENSOR_POLL, metric=metric.value, value=round(value, 2))
        return value

    def close(self) -> None:
        """Release sensor resources (the NVML session, if this adapter owns one)."""
        if isinstance(self._gpu_reader, NvmlGpuReader):
            self._gpu_reader.close()
