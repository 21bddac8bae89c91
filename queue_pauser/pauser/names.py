"""
Queue name normalization.

Paused queues are stored and broadcast in normalized form (``default``),
while workers deal with expanded names that carry the key prefix of the
deployment (``queue:default`` or ``myapp:queue:default``).
"""

import re

from queue_pauser.constants import DEFAULT_QUEUE_PREFIX
from queue_pauser.errors import InvalidQueueNameError

# Any namespace followed by the conventional "queue:" marker
PREFIX_PATTERN = re.compile(r"\A(?:.*:)?queue:")


class QueueNameCodec:
    """Converts queue names between normalized and expanded form."""

    def __init__(self, prefix: str = DEFAULT_QUEUE_PREFIX):
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def normalize(self, queue: object) -> str:
        """
        Strip any prefix from a queue name.

        Raises:
            InvalidQueueNameError: If nothing is left of the name.
        """
        name = str(queue).strip()

        if self._prefix and name.startswith(self._prefix):
            name = name[len(self._prefix):]
        else:
            name = PREFIX_PATTERN.sub("", name, count=1)

        if not name:
            raise InvalidQueueNameError(f"Invalid queue name: {queue!r}")

        return name

    def expand(self, queue: object) -> str:
        """Apply this process's prefix to a queue name given in any form."""
        return f"{self._prefix}{self.normalize(queue)}"
