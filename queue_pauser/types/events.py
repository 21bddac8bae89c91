"""
Event type definitions for pause state broadcasting.
"""

from pydantic import BaseModel, Field


class BroadcastMessage(BaseModel):
    """
    Message published on the pause state channel.

    ``kind`` selects the handlers that receive ``payload``. For pause and
    resume messages the payload is a queue name in normalized form.
    """

    kind: str = Field(..., min_length=1)
    payload: str

    def encode(self) -> str:
        """Serialize the message for the wire."""
        return self.model_dump_json()

    @classmethod
    def decode(cls, data: str | bytes) -> "BroadcastMessage":
        """
        Parse a message received from the wire.

        Raises:
            pydantic.ValidationError: If the data is not a valid message.
        """
        return cls.model_validate_json(data)
