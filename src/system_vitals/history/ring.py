"""Fixed-capacity history ring for one metric.

Samples are kept oldest-first. Once the ring is full each push evicts
exactly one sample, the oldest. All reads return copies.
"""

import threading
from collections import deque

from system_vitals.locks import DEFAULT_LOCK_TIMEOUT_SECONDS, locked


class HistoryRing:
    """Thread-safe, oldest-evicting buffer of percentage samples.

    Usage:
        >>> ring = HistoryRing(capacity=3)
        >>> for value in (10.0, 20.0, 30.0, 40.0):
        ...     ring.push(value)
        >>> ring.snapshot()
        [20.0, 30.0, 40.0]
        >>> ring.snapshot_tail(2)
        [40.0, 30.0]
    """

    def __init__(
        self,
        capacity: int,
        name: str = "history",
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize an empty ring.

        Args:
            capacity: Maximum number of retained samples (>= 1).
            name: Name used in lock error messages.
            lock_timeout: Seconds push() waits for the ring lock. Reads always wait.

        Raises:
            ValueError: If capacity is less than 1.
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._samples: deque[float] = deque()
        self._lock = threading.Lock()
        self._name = name
        self._lock_timeout = lock_timeout

    @property
    def capacity(self) -> int:
        """Maximum number of samples the ring holds."""
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)

    def push(self, sample: float) -> None:
        """Append ``sample``, evicting the oldest sample first if full.

        Raises:
            StateLockError: If the ring lock could not be acquired.
        """
        with locked(self._lock, self._name, self._lock_timeout):
            if len(self._samples) >= self._capacity:
                self._samples.popleft()
            self._samples.append(sample)

    def snapshot_tail(self, n: int) -> list[float]:
        """Return the ``min(n, len)`` most recent samples, newest first."""
        if n <= 0:
            return []
        with self._lock:
            newest_first = reversed(self._samples)
            return [sample for _, sample in zip(range(n), newest_first)]

    def snapshot(self) -> list[float]:
        """Return all samples, oldest first."""
        with self._lock:
            return list(self._samples)
