"""Read-only queries over the shared metric state.

Accessors never raise sampler or sensor errors: during sustained sensor
failures a metric simply keeps its last good value. Reads wait for the
metric's lock, so they return the last completed write, never a made-up
default.
"""

from system_vitals.models import MetricReading, MetricsSnapshot
from system_vitals.sensors.types import Metric, round_half_away
from system_vitals.state.cells import MonitorState
from system_vitals.telemetry import SYSTEM_METRICS_SNAPSHOT, get_logger

log = get_logger(__name__)


def current(state: MonitorState, metric: Metric) -> int:
    """Current value of ``metric`` as a whole percentage.

    Args:
        state: Shared monitor state.
        metric: Metric to read.

    Returns:
        Percentage in [0, 100]; 0 before the first tick.
    """
    return int(round_half_away(state.slot(metric).current.get()))


def history(state: MonitorState, metric: Metric, seconds: int) -> list[float]:
    """Most recent samples of ``metric``, newest first.

    One sample is taken per tick, so at the default 1s cadence ``seconds``
    is also a sample count. Asking for more than is retained returns what
    is available.

    Args:
        state: Shared monitor state.
        metric: Metric to read.
        seconds: Number of samples wanted.

    Returns:
        Up to ``min(seconds, capacity, held)`` samples.

    Raises:
        ValueError: If ``seconds`` is negative.
    """
    if seconds < 0:
        raise ValueError(f"seconds must be >= 0, got {seconds}")
    return state.slot(metric).history.snapshot_tail(seconds)


def get_cpu_usage(state: MonitorState) -> int:
    """Current CPU usage (%)."""
    return current(state, Metric.CPU)


def get_memory_usage(state: MonitorState) -> int:
    """Current memory usage (%)."""
    return current(state, Metric.MEMORY)


def get_gpu_usage(state: MonitorState) -> int:
    """Current GPU usage (%), 0 when no GPU is available."""
    return current(state, Metric.GPU)


def get_cpu_usage_history(state: MonitorState, seconds: int) -> list[float]:
    """CPU usage history, newest first."""
    return history(state, Metric.CPU, seconds)


def get_memory_usage_history(state: MonitorState, seconds: int) -> list[float]:
    """Memory usage history, newest first."""
    return history(state, Metric.MEMORY, seconds)


def get_gpu_usage_history(state: MonitorState, seconds: int) -> list[float]:
    """GPU usage history, newest first."""
    return history(state, Metric.GPU, seconds)


def snapshot(state: MonitorState, seconds: int = 0) -> MetricsSnapshot:
    """Current value and recent history of every metric.

    Args:
        state: Shared monitor state.
        seconds: History samples to include per metric (0 for none).

    Returns:
        MetricsSnapshot with one reading per metric.
    """
    result = MetricsSnapshot(
        readings=[
            MetricReading(
                metric=metric,
                current=current(state, metric),
                history=history(state, metric, seconds),
            )
            for metric in Metric
        ]
    )

    log.debug(
        SYSTEM_METRICS_SNAPSHOT,
        cpu=result.reading(Metric.CPU).current,
        memory=result.reading(Metric.MEMORY).current,
        gpu=result.reading(Metric.GPU).current,
        history_seconds=seconds,
    )
    return result
