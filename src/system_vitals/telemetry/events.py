"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying of JSON log output.
"""

# Sensor events
SENSOR_POLL = "sensor_poll"
SENSOR_UNAVAILABLE = "sensor_unavailable"
SENSOR_READ_FAILED = "sensor_read_failed"

# Sampler lifecycle events
SAMPLER_STARTED = "sampler_started"
SAMPLER_STOPPED = "sampler_stopped"
SAMPLER_ALREADY_RUNNING = "sampler_already_running"
SAMPLER_START_REFUSED = "sampler_start_refused"
SAMPLER_TICK_COMPLETED = "sampler_tick_completed"
SAMPLER_TICK_SKIPPED = "sampler_tick_skipped"
SAMPLER_TICK_ERROR = "sampler_tick_error"

# Shared state events
STATE_LOCK_FAILED = "state_lock_failed"

# Snapshot events
SYSTEM_METRICS_SNAPSHOT = "system_metrics_snapshot"
