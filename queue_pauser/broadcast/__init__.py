"""
Broadcast module.
Contains the pause state broadcasters.
"""

from queue_pauser.broadcast.base import Broadcaster, MessageHandler
from queue_pauser.broadcast.local import LocalBroadcaster, LocalChannel
from queue_pauser.broadcast.redis import RedisBroadcaster

__all__ = [
    "Broadcaster",
    "MessageHandler",
    "LocalBroadcaster",
    "LocalChannel",
    "RedisBroadcaster",
]
