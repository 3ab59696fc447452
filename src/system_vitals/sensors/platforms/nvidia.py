"""NVIDIA GPU utilization reader via NVML.

Uses the NVML bindings from the nvidia-ml-py package (imported as pynvml).
The library loads the NVML shared object lazily in nvmlInit(), so importing
it is safe on hosts without an NVIDIA driver; those hosts surface as
SensorUnavailableError.

NVML is initialized on the first read and stays initialized until
``close()``. A missing driver is remembered, so later reads fail fast
without retrying the library load.

Outcomes:
- Driver/library missing or no devices → SensorUnavailableError
- Devices present but none report graphics utilization → SensorUnavailableError
- Any other NVML failure during init, enumeration or query → SensorReadError
"""

import threading

import pynvml

from system_vitals.sensors.types import (
    Metric,
    SensorReadError,
    SensorUnavailableError,
    clamp_percentage,
)
from system_vitals.telemetry import get_logger

log = get_logger(__name__)

# NVML init failures that mean "no NVIDIA hardware here"
_NO_DRIVER_ERRORS = {
    pynvml.NVML_ERROR_LIBRARY_NOT_FOUND,
    pynvml.NVML_ERROR_DRIVER_NOT_LOADED,
    pynvml.NVML_ERROR_NO_PERMISSION,
}


class NvmlGpuReader:
    """Callable GPU reader holding one NVML session.

    Usage:
        >>> reader = NvmlGpuReader()
        >>> reader()  # average utilization across GPUs, in percent
        >>> reader.close()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._initialized = False
        self._unavailable: SensorUnavailableError | None = None

    @property
    def initialized(self) -> bool:
        """True while an NVML session is open."""
        return self._initialized

    def __call__(self) -> float:
        """Average graphics utilization across all physical NVIDIA GPUs.

        Devices that do not expose a utilization counter are left out of
        the average.

        Returns:
            GPU usage percentage in [0, 100].

        Raises:
            SensorUnavailableError: No driver, no devices, or no device reporting utilization.
            SensorReadError: Init, enumeration or a per-device query failed.
        """
        with self._lock:
            self._ensure_initialized()
            return self._average_utilization()

    def close(self) -> None:
        """Shut NVML down if this reader initialized it."""
        with self._lock:
            if not self._initialized:
                return
            self._initialized = False
            try:
                pynvml.nvmlShutdown()
            except pynvml.NVMLError as e:
                log.debug("nvml_shutdown_failed", error=str(e))

    def _ensure_initialized(self) -> None:
        if self._unavailable is not None:
            raise self._unavailable
        if self._initialized:
            return
        try:
            pynvml.nvmlInit()
        except pynvml.NVMLError as e:
            if e.value in _NO_DRIVER_ERRORS:
                self._unavailable = SensorUnavailableError(Metric.GPU, f"NVML unavailable: {e}")
                raise self._unavailable from e
            raise SensorReadError(Metric.GPU, f"NVML init failed: {e}") from e
        self._initialized = True

    def _average_utilization(self) -> float:
        try:
            count = int(pynvml.nvmlDeviceGetCount())
        except pynvml.NVMLError as e:
            raise SensorReadError(Metric.GPU, f"GPU enumeration failed: {e}") from e

        if count == 0:
            raise SensorUnavailableError(Metric.GPU, "No GPU devices found")

        readings: list[float] = []
        for index in range(count):
            try:
                handle = pynvml.nvmlDeviceGetHandleByIndex(index)
                rates = pynvml.nvmlDeviceGetUtilizationRates(handle)
            except pynvml.NVMLError as e:
                if e.value == pynvml.NVML_ERROR_NOT_SUPPORTED:
                    log.debug("gpu_utilization_not_supported", device_index=index)
                    continue
                raise SensorReadError(
                    Metric.GPU, f"Utilization query failed for GPU {index}: {e}"
                ) from e
            readings.append(float(rates.gpu))

        if not readings:
            raise SensorUnavailableError(
                Metric.GPU, f"None of {count} GPUs reported a utilization value"
            )

        return clamp_percentage(sum(readings) / len(readings))
