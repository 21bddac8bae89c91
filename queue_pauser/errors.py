"""
Exception hierarchy for queue pausing.
"""


class QueuePauserError(Exception):
    """Base class for all queue pauser errors."""


class StoreUnavailableError(QueuePauserError):
    """The shared store could not be reached or rejected the operation."""


class BroadcastError(QueuePauserError):
    """A pause state message could not be published."""


class InvalidQueueNameError(QueuePauserError, ValueError):
    """Queue name is empty once normalized."""


class LifecycleError(QueuePauserError):
    """Invalid process lifecycle transition."""
