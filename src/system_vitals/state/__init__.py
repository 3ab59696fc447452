"""Shared metric state guarded by per-metric locks."""

from system_vitals.locks import StateLockError, locked
from system_vitals.state.cells import MetricCell, MetricSlot, MonitorState

__all__ = ["MetricCell", "MetricSlot", "MonitorState", "StateLockError", "locked"]
