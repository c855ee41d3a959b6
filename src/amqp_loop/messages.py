"""Message records passed between the adapters and their collaborators."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OutgoingMessage(BaseModel):
    """Pending message buffered by a Producer until the exchange accepts it.

    Fields mirror ``IExchange.publish`` so a record can be replayed as-is.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    routing_key: str
    flags: int = Field(default=0, ge=0, description="AmqpFlag bitmask")
    attributes: dict[str, Any] = Field(default_factory=dict)

    def as_args(self) -> tuple[str, str, int, dict[str, Any]]:
        """Return the positional values used for ``publish`` and ``produce``."""
        return self.message, self.routing_key, self.flags, self.attributes


class IncomingMessage(BaseModel):
    """Envelope returned by the bundled queue adapters.

    Carries the raw body and the delivery metadata needed to acknowledge it.
    """

    model_config = ConfigDict(frozen=True)

    body: bytes = b""
    delivery_tag: int = 0
    routing_key: str = ""
    exchange: str = ""
    redelivered: bool = False
    message_count: int | None = None
    content_type: str | None = None
    headers: dict[str, Any] = Field(default_factory=dict)
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")
