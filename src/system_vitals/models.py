"""Pydantic models for metric snapshots handed to callers."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from system_vitals.sensors.types import Metric


class MetricReading(BaseModel):
    """Current value and recent history of one metric."""

    metric: Metric = Field(..., description="Metric identifier")
    current: int = Field(..., ge=0, le=100, description="Current value, whole percent")
    history: list[float] = Field(
        default_factory=list, description="Recent samples, newest first"
    )


class MetricsSnapshot(BaseModel):
    """Point-in-time view of every metric.

    Each metric is read independently; the readings are not guaranteed to
    come from the same sampler tick.
    """

    taken_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Snapshot time (UTC)"
    )
    readings: list[MetricReading] = Field(default_factory=list, description="Per-metric readings")

    def reading(self, metric: Metric) -> MetricReading:
        """Return the reading for ``metric``.

        Raises:
            KeyError: If the snapshot has no reading for the metric.
        """
        for item in self.readings:
            if item.metric == metric:
                return item
        raise KeyError(metric)
