"""Bounded lock acquisition for the shared metric state."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

# Default bound on any single lock wait (seconds)
DEFAULT_LOCK_TIMEOUT_SECONDS = 0.5


class StateLockError(Exception):
    """Raised when a shared-state guard cannot be acquired in time.

    The sampler skips the affected update for the current tick; the next
    tick tries again with a fresh acquisition.
    """


@contextmanager
def locked(
    lock: threading.Lock, name: str, timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS
) -> Iterator[None]:
    """Hold ``lock`` for the body of the with-block.

    Args:
        lock: Lock to acquire.
        name: Human-readable guard name for the error message.
        timeout: Seconds to wait before giving up.

    Raises:
        StateLockError: If the lock was not acquired within ``timeout``.
    """
    if not lock.acquire(timeout=timeout):
        raise StateLockError(f"Timed out after {timeout}s waiting for {name} lock")
    try:
        yield
    finally:
        lock.release()
