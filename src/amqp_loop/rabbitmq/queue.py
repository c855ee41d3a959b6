"""PikaQueue — IQueue over a pika BlockingChannel using basic.get."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..flags import AmqpFlag
from ..messages import IncomingMessage
from .errors import translate_errors

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pika.adapters.blocking_connection import BlockingChannel

_PROPERTY_NAMES = (
    "content_type",
    "content_encoding",
    "delivery_mode",
    "priority",
    "correlation_id",
    "reply_to",
    "expiration",
    "message_id",
    "timestamp",
    "type",
    "user_id",
    "app_id",
    "cluster_id",
)


def _properties_to_dict(properties: Any) -> dict[str, Any]:
    if properties is None:
        return {}
    return {
        name: value
        for name in _PROPERTY_NAMES
        if (value := getattr(properties, name, None)) is not None
    }


class PikaQueue:
    """Queue handle polled with ``basic.get``.

    ``get()`` never blocks waiting for messages: it returns ``None`` as soon
    as the broker reports the queue empty. Pass ``AmqpFlag.AUTOACK`` in
    *flags* to have the broker acknowledge on delivery.
    """

    def __init__(self, channel: BlockingChannel, name: str, flags: int = 0) -> None:
        self._channel = channel
        self._name = name
        self._flags = flags

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def get_flags(self) -> int:
        return self._flags

    def set_flags(self, flags: int) -> None:
        self._flags = flags

    def get(self) -> IncomingMessage | None:
        with translate_errors():
            method, properties, body = self._channel.basic_get(
                self._name, auto_ack=bool(self._flags & AmqpFlag.AUTOACK)
            )
        if method is None:
            return None
        return IncomingMessage(
            body=body or b"",
            delivery_tag=method.delivery_tag,
            routing_key=method.routing_key or "",
            exchange=method.exchange or "",
            redelivered=bool(method.redelivered),
            message_count=method.message_count,
            content_type=getattr(properties, "content_type", None),
            headers=dict(getattr(properties, "headers", None) or {}),
            properties=_properties_to_dict(properties),
        )

    def ack(self, delivery_tag: int, flags: int = 0) -> None:
        with translate_errors():
            self._channel.basic_ack(
                delivery_tag=delivery_tag, multiple=bool(flags & AmqpFlag.MULTIPLE)
            )

    def nack(self, delivery_tag: int, flags: int = 0) -> None:
        """Negatively acknowledge; requeued only with ``AmqpFlag.REQUEUE``."""
        with translate_errors():
            self._channel.basic_nack(
                delivery_tag=delivery_tag,
                multiple=bool(flags & AmqpFlag.MULTIPLE),
                requeue=bool(flags & AmqpFlag.REQUEUE),
            )

    def reject(self, delivery_tag: int, flags: int = 0) -> None:
        with translate_errors():
            self._channel.basic_reject(
                delivery_tag=delivery_tag, requeue=bool(flags & AmqpFlag.REQUEUE)
            )

    def cancel(self, consumer_tag: str = "") -> None:
        with translate_errors():
            self._channel.basic_cancel(consumer_tag)

    def declare(
        self,
        *,
        durable: bool = True,
        exclusive: bool = False,
        auto_delete: bool = False,
        arguments: Mapping[str, Any] | None = None,
    ) -> int:
        """Declare the queue; returns the number of ready messages."""
        with translate_errors():
            frame = self._channel.queue_declare(
                self._name,
                durable=durable,
                exclusive=exclusive,
                auto_delete=auto_delete,
                arguments=dict(arguments) if arguments else None,
            )
        if not self._name:
            self._name = frame.method.queue
        return int(frame.method.message_count)

    def bind(self, exchange: str, routing_key: str | None = None) -> None:
        with translate_errors():
            self._channel.queue_bind(self._name, exchange, routing_key=routing_key)

    def purge(self) -> int:
        """Drop all ready messages; returns how many were removed."""
        with translate_errors():
            frame = self._channel.queue_purge(self._name)
        return int(frame.method.message_count)
