"""Metric identifiers, sensor errors, and percentage helpers."""

import math
from enum import Enum


class Metric(str, Enum):
    """Monitored resource dimensions."""

    CPU = "cpu"
    MEMORY = "memory"
    GPU = "gpu"


class SensorError(Exception):
    """Raised when a sensor cannot produce a reading.

    Attributes:
        metric: The metric whose sensor failed.
    """

    def __init__(self, metric: Metric, message: str) -> None:
        super().__init__(message)
        self.metric = metric


class SensorUnavailableError(SensorError):
    """The sensor found no hardware (or no usable utilization data) to query.

    Non-fatal: the sampler substitutes a neutral reading of 0.
    """


class SensorReadError(SensorError):
    """The sensor call failed with an OS or driver error.

    Non-fatal: the sampler logs it and skips the metric for that tick.
    """


def clamp_percentage(value: float) -> float:
    """Clamp a reading into [0, 100]."""
    return min(100.0, max(0.0, float(value)))


def round_half_away(value: float) -> float:
    """Round to the nearest whole number, halves away from zero.

    Python's built-in round() uses banker's rounding (round(2.5) == 2),
    which would bias percentages downward.

    Args:
        value: Value to round.

    Returns:
        Rounded value as a float.
    """
    return math.copysign(math.floor(abs(value) + 0.5), value)
