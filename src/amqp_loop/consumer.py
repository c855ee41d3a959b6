"""Consumer — drains a queue on every loop tick and emits one event per message."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .adapter import LoopAdapter
from .events import CLOSE_CONSUMER, CONSUME

if TYPE_CHECKING:
    from .ports import ILoop, IQueue

logger = logging.getLogger("amqp_loop.consumer")


class Consumer(LoopAdapter):
    """Polls an AMQP queue from a cooperative event loop.

    Each tick pulls messages with ``queue.get()`` until the queue reports
    ``None`` or ``max_messages`` have been handled, and emits
    ``consume(envelope, queue)`` for every message so listeners can ack or
    reject without another lookup. The cap keeps one tick from starving the
    rest of the loop; messages left over are picked up on the next tick.

    Transport errors raised by ``get()`` are not caught here. Emitting
    ``close_amqp_consumer`` on the consumer closes it.

    Usage::

        consumer = Consumer(queue, loop, 0.5, max_messages=20)
        consumer.on("consume", lambda envelope, queue: queue.ack(envelope.delivery_tag))
    """

    _kind = "Consumer"

    def __init__(
        self,
        queue: IQueue,
        loop: ILoop,
        interval: float | None,
        max_messages: int | None = None,
    ) -> None:
        """Store the queue and loop and register the polling timer.

        Args:
            queue: Queue handle to read from; owned until close().
            loop: Event loop the periodic timer is registered on.
            interval: Seconds between polls; None for the loop's fastest cadence.
            max_messages: Upper bound of messages handled per tick.
        """
        if max_messages is not None and max_messages < 1:
            raise ValueError("max_messages must be >= 1 or None")
        self._max_messages = max_messages
        super().__init__(queue, loop, interval)
        self.on(CLOSE_CONSUMER, self._on_close_requested)

    @property
    def queue(self) -> IQueue | None:
        return self._handle

    @property
    def max_messages(self) -> int | None:
        return self._max_messages

    def __call__(self) -> int:
        """Run one polling pass; returns the number of messages emitted."""
        queue = self._ensure_open("receive any more messages")
        count = 0
        while not self._interrupted():
            envelope = queue.get()
            if envelope is None:
                break
            count += 1
            self._events.emit(CONSUME, envelope, queue)
            if self._max_messages is not None and count >= self._max_messages:
                break
        if count:
            logger.debug("Consumer emitted %d message(s)", count)
        return count

    def poll(self) -> int:
        return self()

    def _on_close_requested(self, *_: Any) -> None:
        self.close()

    # ── Queue surface ────────────────────────────────────────────

    def ack(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'ack'").ack(*args, **kwargs)

    def nack(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'nack'").nack(*args, **kwargs)

    def reject(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'reject'").reject(*args, **kwargs)

    def cancel(self, *args: Any, **kwargs: Any) -> Any:
        return self._ensure_open("forward 'cancel'").cancel(*args, **kwargs)
