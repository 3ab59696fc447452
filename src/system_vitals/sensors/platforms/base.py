"""Cross-platform CPU and memory sensors using psutil.

psutil computes CPU utilization as the delta between two reads of the
kernel counters, so a read with ``interval=None`` is only meaningful after
an earlier read. HostSnapshot owns that counter state: ``refresh_cpu()``
takes the delta since the previous refresh and caches per-core values for
``cpu_usage()`` to average.
"""

from typing import Any

import psutil

from system_vitals.sensors.types import Metric, SensorReadError, clamp_percentage
from system_vitals.telemetry import get_logger

log = get_logger(__name__)


class HostSnapshot:
    """Refreshable snapshot of host CPU and memory counters.

    Not thread-safe on its own; callers hold ``SensorAdapter.host_lock``
    around refresh and read.

    Attributes:
        per_cpu: Per-logical-core utilization from the last CPU refresh.
        used_memory: Used memory in bytes from the last memory refresh.
        total_memory: Total memory in bytes from the last memory refresh.
    """

    def __init__(self, prime: bool = True) -> None:
        """Initialize the snapshot.

        Args:
            prime: Take an initial CPU counter read so the first refresh
                reports real utilization instead of 0.
        """
        self.per_cpu: list[float] = []
        self.used_memory: int = 0
        self.total_memory: int = 0
        if prime:
            try:
                psutil.cpu_percent(interval=None, percpu=True)
            except Exception as e:
                log.debug("cpu_counters_prime_failed", error=str(e), error_type=type(e).__name__)

    def refresh_cpu(self) -> None:
        """Refresh per-core CPU utilization.

        Raises:
            SensorReadError: If psutil cannot read the CPU counters.
        """
        try:
            self.per_cpu = [float(v) for v in psutil.cpu_percent(interval=None, percpu=True)]
        except Exception as e:
            raise SensorReadError(Metric.CPU, f"Failed to read CPU counters: {e}") from e

    def refresh_memory(self) -> None:
        """Refresh used and total memory.

        Raises:
            SensorReadError: If psutil cannot read memory statistics.
        """
        try:
            memory: Any = psutil.virtual_memory()
        except Exception as e:
            raise SensorReadError(Metric.MEMORY, f"Failed to read memory: {e}") from e
        self.used_memory = int(memory.used)
        self.total_memory = int(memory.total)

    def cpu_usage(self) -> float:
        """Mean utilization across all logical cores.

        Returns:
            CPU usage percentage in [0, 100].

        Raises:
            SensorReadError: If no per-core values are available.
        """
        if not self.per_cpu:
            raise SensorReadError(Metric.CPU, "No per-core CPU readings available")
        return clamp_percentage(sum(self.per_cpu) / len(self.per_cpu))

    def memory_usage(self) -> float:
        """Used memory as a percentage of total memory.

        Computed in floating point; rounding happens at presentation time.

        Returns:
            Memory usage percentage in [0, 100].

        Raises:
            SensorReadError: If total memory is unknown (zero).
        """
        if self.total_memory <= 0:
            raise SensorReadError(Metric.MEMORY, "Total memory reported as zero")
        return clamp_percentage(self.used_memory / self.total_memory * 100.0)
