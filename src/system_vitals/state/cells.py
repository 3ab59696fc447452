"""Shared metric state: per-metric current value cells and history rings.

Each metric has its own cell and ring, each behind its own lock, so
contention on one metric never blocks another. The sampler is the only
writer; accessors read copies.

Writes wait at most ``lock_timeout`` and raise StateLockError, so the
sampler can skip a stuck metric. Reads wait for the lock, which a writer
holds only for a single assignment or append, so readers always see a
value the sampler actually wrote.
"""

import threading
from typing import TYPE_CHECKING

from system_vitals.config.settings import HISTORY_CAPACITY, AppConfig
from system_vitals.history.ring import HistoryRing
from system_vitals.locks import DEFAULT_LOCK_TIMEOUT_SECONDS, locked
from system_vitals.sensors.types import Metric

if TYPE_CHECKING:
    from system_vitals.sampler.sampler import Sampler


class MetricCell:
    """Lock-guarded current value for one metric (initially 0)."""

    def __init__(self, name: str, lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS) -> None:
        self._value = 0.0
        self._lock = threading.Lock()
        self._name = name
        self._lock_timeout = lock_timeout

    def get(self) -> float:
        """Read the current value, waiting for any in-progress write."""
        with self._lock:
            return self._value

    def set(self, value: float) -> None:
        """Replace the current value.

        Raises:
            StateLockError: If the cell lock could not be acquired.
        """
        with locked(self._lock, self._name, self._lock_timeout):
            self._value = value


class MetricSlot:
    """Current value cell and history ring for one metric."""

    def __init__(self, metric: Metric, capacity: int, lock_timeout: float) -> None:
        self.metric = metric
        self.current = MetricCell(f"{metric.value}_current", lock_timeout)
        self.history = HistoryRing(capacity, f"{metric.value}_history", lock_timeout)


class MonitorState:
    """Owned context shared by the sampler (writer) and accessors (readers).

    One instance is created at startup and passed explicitly to every
    accessor; tests create as many independent instances as they need.

    Attributes:
        capacity: History capacity of every ring.
        lock_timeout: Bound on every sampler write to a cell or ring.
        sampler: The background sampler once initialize_system() started it.
    """

    def __init__(
        self,
        capacity: int = HISTORY_CAPACITY,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        self.capacity = capacity
        self.lock_timeout = lock_timeout
        self._slots = {metric: MetricSlot(metric, capacity, lock_timeout) for metric in Metric}
        self.sampler: Sampler | None = None

    @classmethod
    def from_settings(cls, settings: AppConfig) -> "MonitorState":
        """Build state sized by the application settings."""
        return cls(capacity=settings.history_capacity, lock_timeout=settings.lock_timeout_seconds)

    def slot(self, metric: Metric) -> MetricSlot:
        """Return the cell and ring for ``metric``."""
        return self._slots[Metric(metric)]
