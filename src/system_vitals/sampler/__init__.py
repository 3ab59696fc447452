"""Background sampling loop."""

from system_vitals.sampler.sampler import (
    UNAVAILABLE_READING,
    Sampler,
    SamplerStatus,
    initialize_system,
)

__all__ = ["Sampler", "SamplerStatus", "UNAVAILABLE_READING", "initialize_system"]
