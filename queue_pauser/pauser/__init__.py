"""
Pauser module.
Contains the pause coordinator, its resync watcher and queue name handling.
"""

from queue_pauser.pauser.coordinator import PauseCoordinator
from queue_pauser.pauser.factory import build_coordinator
from queue_pauser.pauser.names import QueueNameCodec
from queue_pauser.pauser.watcher import ResyncWatcher

__all__ = [
    "PauseCoordinator",
    "QueueNameCodec",
    "ResyncWatcher",
    "build_coordinator",
]
