"""PikaExchange — IExchange over a pika BlockingChannel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pika

from ..flags import AmqpFlag
from .errors import translate_errors

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pika.adapters.blocking_connection import BlockingChannel

logger = logging.getLogger("amqp_loop.rabbitmq")

_ATTRIBUTE_NAMES = frozenset(
    {
        "content_type",
        "content_encoding",
        "headers",
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
    }
)


class PikaExchange:
    """Exchange handle publishing with ``basic.publish``.

    *attributes* map onto ``pika.BasicProperties``; unknown keys are logged
    and skipped. ``AmqpFlag.MANDATORY`` makes unroutable messages fail. With
    publisher confirms enabled on the channel, a refused message raises
    ``SendError``.
    """

    def __init__(
        self,
        channel: BlockingChannel,
        name: str = "",
        *,
        exchange_type: str = "direct",
    ) -> None:
        self._channel = channel
        self._name = name
        self._type = exchange_type

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def get_type(self) -> str:
        return self._type

    def set_type(self, exchange_type: str) -> None:
        self._type = exchange_type

    def declare(
        self,
        *,
        durable: bool = True,
        auto_delete: bool = False,
        internal: bool = False,
        arguments: Mapping[str, Any] | None = None,
    ) -> None:
        with translate_errors():
            self._channel.exchange_declare(
                self._name,
                exchange_type=self._type,
                durable=durable,
                auto_delete=auto_delete,
                internal=internal,
                arguments=dict(arguments) if arguments else None,
            )

    def publish(
        self,
        message: str,
        routing_key: str,
        flags: int = 0,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        properties = self._build_properties(attributes or {})
        with translate_errors(routing_key):
            self._channel.basic_publish(
                exchange=self._name,
                routing_key=routing_key,
                body=message.encode("utf-8"),
                properties=properties,
                mandatory=bool(flags & AmqpFlag.MANDATORY),
            )

    def _build_properties(self, attributes: Mapping[str, Any]) -> pika.BasicProperties:
        unknown = sorted(set(attributes) - _ATTRIBUTE_NAMES)
        if unknown:
            logger.warning("Ignoring unsupported message attributes: %s", unknown)
        return pika.BasicProperties(
            **{k: v for k, v in attributes.items() if k in _ATTRIBUTE_NAMES}
        )
