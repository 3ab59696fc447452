"""Shared fixtures for system_vitals tests."""

from collections.abc import Callable
from typing import Any

import pytest

from system_vitals.sensors import HostSnapshot, Metric, SensorAdapter
from system_vitals.state import MonitorState


class FakeAdapter(SensorAdapter):
    """SensorAdapter returning scripted readings instead of polling hardware.

    Each reading may be a float, an exception instance to raise, or a
    zero-argument callable producing either.
    """

    def __init__(
        self,
        readings: dict[Metric, Any] | None = None,
        gpu_enabled: bool = True,
    ) -> None:
        super().__init__(host=HostSnapshot(prime=False), gpu_enabled=gpu_enabled)
        self.readings: dict[Metric, Any] = dict(readings or {})
        self.calls: list[Metric] = []

    def sample(self, metric: Metric) -> float:
        self.calls.append(metric)
        value = self.readings.get(metric, 0.0)
        if callable(value):
            value = value()
        if isinstance(value, Exception):
            raise value
        return float(value)


@pytest.fixture
def state() -> MonitorState:
    """Fresh monitor state with default capacity and a short lock timeout."""
    return MonitorState(lock_timeout=0.05)


@pytest.fixture
def make_adapter() -> Callable[..., FakeAdapter]:
    """Factory for scripted sensor adapters."""
    return FakeAdapter
