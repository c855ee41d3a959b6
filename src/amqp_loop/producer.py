"""Producer — buffers outgoing messages and flushes them on every loop tick."""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any

from .adapter import LoopAdapter
from .events import ERROR, PRODUCE
from .exceptions import SendError
from .messages import OutgoingMessage

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from .ports import IExchange, ILoop

logger = logging.getLogger("amqp_loop.producer")


class Producer(LoopAdapter):
    """Publishes to an AMQP exchange from a cooperative event loop.

    :meth:`publish` only enqueues. On each tick every pending message is sent
    in FIFO order; a message is dropped from the buffer once the exchange
    accepts it and ``produce(message, routing_key, flags, attributes)`` is
    emitted. A :class:`SendError` keeps the message pending for the next tick
    and emits ``error(exc)``; other transport errors propagate.

    ``len(producer)`` is the number of pending messages and
    :meth:`pending` returns a snapshot of them. Pending messages are discarded
    on close.
    """

    _kind = "Producer"

    def __init__(
        self, exchange: IExchange, loop: ILoop, interval: float | None
    ) -> None:
        self._messages: dict[int, OutgoingMessage] = {}
        self._slots = itertools.count()
        super().__init__(exchange, loop, interval)

    @property
    def exchange(self) -> IExchange | None:
        return self._handle

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[OutgoingMessage]:
        return iter(self.pending())

    def pending(self) -> list[OutgoingMessage]:
        """Return a copy of the pending messages in send order."""
        return list(self._messages.values())

    def publish(
        self,
        message: str,
        routing_key: str,
        flags: int = 0,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        """Queue a message for the next tick.

        Same signature as ``IExchange.publish``.

        Raises:
            AdapterClosedError: if the producer has been closed.
        """
        self._ensure_open("send any more messages")
        self._messages[next(self._slots)] = OutgoingMessage(
            message=message,
            routing_key=routing_key,
            flags=flags,
            attributes=dict(attributes or {}),
        )

    def __call__(self) -> int:
        """Try to send every pending message; returns how many were sent."""
        exchange = self._ensure_open("send any more messages")
        sent = 0
        # Messages queued by listeners during the pass wait for the next one.
        for slot, outgoing in list(self._messages.items()):
            if self._interrupted():
                break
            # A nested flush from a listener may already have sent it.
            if slot not in self._messages:
                continue
            try:
                exchange.publish(*outgoing.as_args())
            except SendError as e:
                logger.warning(
                    "Publishing to routing key %r failed, message kept pending: %s",
                    outgoing.routing_key,
                    e,
                )
                self._events.emit(ERROR, e)
                continue
            self._messages.pop(slot, None)
            sent += 1
            self._events.emit(PRODUCE, *outgoing.as_args())
        if sent:
            logger.debug(
                "Producer sent %d message(s), %d pending", sent, len(self._messages)
            )
        return sent

    def flush(self) -> int:
        return self()

    def _release(self) -> None:
        if self._messages:
            logger.debug(
                "Producer closed with %d pending message(s) discarded",
                len(self._messages),
            )
        self._messages.clear()

    # ── Exchange surface ─────────────────────────────────────────

    def get_name(self) -> Any:
        return self._ensure_open("forward 'get_name'").get_name()

    def set_name(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'set_name'").set_name(*args, **kwargs)

    def get_type(self) -> Any:
        return self._ensure_open("forward 'get_type'").get_type()

    def set_type(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'set_type'").set_type(*args, **kwargs)

    def declare(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'declare'").declare(*args, **kwargs)
