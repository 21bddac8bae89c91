"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

from queue_pauser.constants import (
    METRIC_FILTER_FAILURES,
    METRIC_JOBS_FETCHED,
    METRIC_LOCAL_PAUSED_QUEUES,
    METRIC_MESSAGE_FAILURES,
    METRIC_MESSAGES_RECEIVED,
    METRIC_PAUSE_OPERATIONS,
    METRIC_RESYNC_RUNS,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for queue pausing.

    Collects metrics for:
    - Pause and resume operations
    - Broadcast messages received and failed handlers
    - Resync runs
    - Locally cached paused queues
    - Filter failures and fetched jobs
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.pause_operations = Counter(
            METRIC_PAUSE_OPERATIONS,
            "Total number of pause and resume operations",
            ["action"],
            registry=self._registry,
        )

        self.messages_received = Counter(
            METRIC_MESSAGES_RECEIVED,
            "Total number of broadcast messages received",
            ["kind"],
            registry=self._registry,
        )

        self.message_failures = Counter(
            METRIC_MESSAGE_FAILURES,
            "Total number of broadcast handlers that raised",
            ["kind"],
            registry=self._registry,
        )

        self.resync_runs = Counter(
            METRIC_RESYNC_RUNS,
            "Total number of full paused queue resyncs",
            ["outcome"],
            registry=self._registry,
        )

        self.local_paused_queues = Gauge(
            METRIC_LOCAL_PAUSED_QUEUES,
            "Number of paused queues in the local cache",
            registry=self._registry,
        )

        self.filter_failures = Counter(
            METRIC_FILTER_FAILURES,
            "Total number of queue filter calls that fell back to the unfiltered list",
            registry=self._registry,
        )

        self.jobs_fetched = Counter(
            METRIC_JOBS_FETCHED,
            "Total number of jobs fetched",
            ["queue"],
            registry=self._registry,
        )

    def record_pause_operation(self, action: str) -> None:
        """Record a pause or resume operation."""
        self.pause_operations.labels(action=action).inc()

    def record_message_received(self, kind: str) -> None:
        """Record a received broadcast message."""
        self.messages_received.labels(kind=kind).inc()

    def record_message_failure(self, kind: str) -> None:
        """Record a broadcast handler failure."""
        self.message_failures.labels(kind=kind).inc()

    def record_resync(self, success: bool) -> None:
        """Record the outcome of a resync run."""
        self.resync_runs.labels(outcome="success" if success else "failure").inc()

    def update_local_paused_queues(self, count: int) -> None:
        """Update the size of the local paused queue cache."""
        self.local_paused_queues.set(count)

    def record_filter_failure(self) -> None:
        """Record a degraded filter call."""
        self.filter_failures.inc()

    def record_job_fetched(self, queue: str) -> None:
        """Record a job fetched from a queue."""
        self.jobs_fetched.labels(queue=queue).inc()

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """
    Get the metrics collector instance, creating it on first use.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    if _metrics is None:
        return setup_metrics()
    return _metrics
