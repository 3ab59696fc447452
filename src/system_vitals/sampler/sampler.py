"""Background sampler that feeds the shared metric state.

One daemon thread per process polls the sensors on a fixed interval,
writes each metric's current value, and pushes it into the metric's
history ring.

Tick:
    acquire host lock → refresh + read CPU, memory → release
    read GPU (best effort)
    write current values → push history
    wait interval on the stop event

Failures stay inside the tick that produced them:
- host lock not acquired → whole tick skipped, no immediate retry
- SensorUnavailableError → metric reads as 0
- SensorReadError → metric not updated this tick
- StateLockError on a cell or ring → that metric's update skipped
"""

import threading
from enum import Enum

from system_vitals.config.settings import AppConfig, get_settings
from system_vitals.locks import StateLockError, locked
from system_vitals.sensors.sensors import SensorAdapter
from system_vitals.sensors.types import (
    Metric,
    SensorReadError,
    SensorUnavailableError,
    round_half_away,
)
from system_vitals.state.cells import MonitorState
from system_vitals.telemetry import (
    SAMPLER_ALREADY_RUNNING,
    SAMPLER_START_REFUSED,
    SAMPLER_STARTED,
    SAMPLER_STOPPED,
    SAMPLER_TICK_COMPLETED,
    SAMPLER_TICK_ERROR,
    SAMPLER_TICK_SKIPPED,
    SENSOR_READ_FAILED,
    SENSOR_UNAVAILABLE,
    STATE_LOCK_FAILED,
    get_logger,
)

log = get_logger(__name__)

# Neutral reading for a sensor with nothing to measure
UNAVAILABLE_READING = 0.0

_HOST_METRICS = (Metric.CPU, Metric.MEMORY)


class SamplerStatus(str, Enum):
    """Lifecycle of a Sampler."""

    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class Sampler:
    """Periodic sensor poller and sole writer of a MonitorState.

    Usage:
        >>> sampler = Sampler(state, SensorAdapter(), interval_seconds=1.0)
        >>> sampler.start()  # runs until process exit...
        >>> sampler.stop()  # ...or until stopped explicitly

    Attributes:
        state: Shared state this sampler writes.
        adapter: Sensor adapter polled each tick.
        interval_seconds: Wait between ticks.
        status: Current lifecycle status.
        ticks_completed: Ticks that published readings.
        ticks_skipped: Ticks skipped because the host lock was unavailable.
    """

    def __init__(
        self,
        state: MonitorState,
        adapter: SensorAdapter,
        interval_seconds: float,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize the sampler without starting it.

        Args:
            state: Shared state to write.
            adapter: Sensor adapter to poll.
            interval_seconds: Seconds between ticks.
            stop_event: Cancellation event checked every tick. A fresh,
                never-set event (run forever) by default.
        """
        self.state = state
        self.adapter = adapter
        self.interval_seconds = interval_seconds
        self.status = SamplerStatus.CREATED
        self.ticks_completed = 0
        self.ticks_skipped = 0
        self._stop_event = stop_event or threading.Event()
        self._thread: threading.Thread | None = None
        self._unavailable_reported: set[Metric] = set()

    @property
    def is_running(self) -> bool:
        """True while the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background thread.

        A second call while running logs a warning and does nothing. A
        sampler whose stop event is already set (after ``stop()`` or an
        external cancel) is not restarted and stays STOPPED; create a new
        Sampler instead.
        """
        if self.is_running:
            log.warning(SAMPLER_ALREADY_RUNNING, interval_seconds=self.interval_seconds)
            return
        if self._stop_event.is_set():
            self.status = SamplerStatus.STOPPED
            log.warning(SAMPLER_START_REFUSED, reason="stop_event_set")
            return

        self._thread = threading.Thread(
            target=self._run, name="system-vitals-sampler", daemon=True
        )
        self.status = SamplerStatus.RUNNING
        self._thread.start()

        log.info(
            SAMPLER_STARTED,
            interval_seconds=self.interval_seconds,
            history_capacity=self.state.capacity,
            gpu_enabled=self.adapter.gpu_enabled,
        )

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to exit, wait for the thread, release sensors.

        Args:
            timeout: Maximum seconds to wait for the thread to finish.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self.status = SamplerStatus.STOPPED
        self.adapter.close()

        log.info(
            SAMPLER_STOPPED,
            ticks_completed=self.ticks_completed,
            ticks_skipped=self.ticks_skipped,
        )

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                # Unexpected error - log but keep sampling
                log.error(
                    SAMPLER_TICK_ERROR,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
            self._stop_event.wait(self.interval_seconds)
        self.status = SamplerStatus.STOPPED

    def tick(self) -> bool:
        """Run one sampling cycle synchronously.

        Returns:
            True if readings were published, False if the tick was skipped.
        """
        readings: dict[Metric, float] = {}

        try:
            with locked(self.adapter.host_lock, "host", self.state.lock_timeout):
                for metric in _HOST_METRICS:
                    value = self._read(metric)
                    if value is not None:
                        readings[metric] = value
        except StateLockError as e:
            self.ticks_skipped += 1
            log.warning(SAMPLER_TICK_SKIPPED, reason="host_lock_unavailable", error=str(e))
            return False

        gpu_value = self._read(Metric.GPU)
        if gpu_value is not None:
            readings[Metric.GPU] = gpu_value

        published = [
            metric for metric, value in readings.items() if self._write_current(metric, value)
        ]
        for metric in published:
            self._push_history(metric, readings[metric])

        self.ticks_completed += 1
        log.debug(
            SAMPLER_TICK_COMPLETED,
            cpu=readings.get(Metric.CPU),
            memory=readings.get(Metric.MEMORY),
            gpu=readings.get(Metric.GPU),
            tick=self.ticks_completed,
        )
        return True

    def _read(self, metric: Metric) -> float | None:
        """Sample one metric, mapping sensor errors to the tick policy.

        Returns:
            Rounded percentage, 0 for an unavailable sensor, or None when
            the metric should not be updated this tick.
        """
        try:
            value = round_half_away(self.adapter.sample(metric))
        except SensorUnavailableError as e:
            # Report once per metric; unavailable hardware stays unavailable
            if metric not in self._unavailable_reported:
                self._unavailable_reported.add(metric)
                log.info(SENSOR_UNAVAILABLE, metric=metric.value, reason=str(e))
            return UNAVAILABLE_READING
        except SensorReadError as e:
            log.warning(SENSOR_READ_FAILED, metric=metric.value, error=str(e))
            return None

        self._unavailable_reported.discard(metric)
        return value

    def _write_current(self, metric: Metric, value: float) -> bool:
        try:
            self.state.slot(metric).current.set(value)
        except StateLockError as e:
            log.warning(STATE_LOCK_FAILED, metric=metric.value, target="current", error=str(e))
            return False
        return True

    def _push_history(self, metric: Metric, value: float) -> None:
        try:
            self.state.slot(metric).history.push(value)
        except StateLockError as e:
            log.warning(STATE_LOCK_FAILED, metric=metric.value, target="history", error=str(e))


def initialize_system(
    state: MonitorState,
    adapter: SensorAdapter | None = None,
    settings: AppConfig | None = None,
    stop_event: threading.Event | None = None,
) -> Sampler:
    """Start the background sampler for ``state``.

    Call once per process. A repeated call returns the sampler that is
    already running instead of starting a second writer.

    Args:
        state: Shared state the sampler will write.
        adapter: Sensor adapter. Defaults to one configured from settings.
        settings: Application settings. Defaults to the settings singleton.
        stop_event: Optional cancellation event (default: run forever).

    Returns:
        The running Sampler.
    """
    if state.sampler is not None and state.sampler.is_running:
        log.warning(SAMPLER_ALREADY_RUNNING, interval_seconds=state.sampler.interval_seconds)
        return state.sampler

    config = settings or get_settings()
    sampler = Sampler(
        state,
        adapter or SensorAdapter(gpu_enabled=config.gpu_enabled),
        interval_seconds=config.sample_interval_seconds,
        stop_event=stop_event,
    )
    state.sampler = sampler
    sampler.start()
    return sampler
