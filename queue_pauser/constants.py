"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class MessageKind(StrEnum):
    """Broadcast message kinds used to propagate pause state."""

    PAUSE = "pause"
    RESUME = "resume"


class LifecyclePhase(StrEnum):
    """
    Process lifecycle phases.

    Phase transitions are forward only:
    - STARTING -> RUNNING (subscriptions and watchers are up)
    - RUNNING -> QUIESCING (stop picking up new work)
    - QUIESCING -> STOPPED (connections torn down)
    """

    STARTING = "starting"
    RUNNING = "running"
    QUIESCING = "quiescing"
    STOPPED = "stopped"


LIFECYCLE_ORDER: tuple[LifecyclePhase, ...] = (
    LifecyclePhase.STARTING,
    LifecyclePhase.RUNNING,
    LifecyclePhase.QUIESCING,
    LifecyclePhase.STOPPED,
)

# Default values
DEFAULT_PAUSED_QUEUES_KEY = "pauser:paused_queues"
DEFAULT_CHANNEL = "pauser:communicator"
DEFAULT_QUEUE_PREFIX = "queue:"
DEFAULT_RESYNC_INTERVAL_SECONDS = 60.0
DEFAULT_RECONNECT_DELAY_SECONDS = 1.0

# API constants
API_V1_PREFIX = "/v1"

# Metrics names
METRIC_PAUSE_OPERATIONS = "queue_pause_operations_total"
METRIC_MESSAGES_RECEIVED = "pause_messages_received_total"
METRIC_MESSAGE_FAILURES = "pause_message_failures_total"
METRIC_RESYNC_RUNS = "pause_resync_runs_total"
METRIC_LOCAL_PAUSED_QUEUES = "paused_queues_local"
METRIC_FILTER_FAILURES = "queue_filter_failures_total"
METRIC_JOBS_FETCHED = "jobs_fetched_total"

# Trace span names
SPAN_PAUSE_QUEUE = "pause_queue"
SPAN_RESUME_QUEUE = "resume_queue"
SPAN_RESYNC = "resync_paused_queues"
