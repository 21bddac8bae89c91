"""
Distributed Queue Pausing

Lets an operator pause and resume named job queues at runtime. Every worker
process keeps an in-memory copy of the paused set, updated through Redis
pub/sub and reconciled against Redis on a fixed interval.
"""

__version__ = "1.0.0"
