"""Sliding-window sample history."""

from system_vitals.history.ring import HistoryRing

__all__ = ["HistoryRing"]
