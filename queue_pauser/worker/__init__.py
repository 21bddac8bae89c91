"""
Worker module.
Contains the queue fetcher, job handlers and the worker process.
"""

from queue_pauser.worker.fetch import QueueFetcher
from queue_pauser.worker.main import Worker, run

__all__ = ["QueueFetcher", "Worker", "run"]
