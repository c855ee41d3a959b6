"""InMemoryQueue — IQueue backed by a deque, with acknowledgement bookkeeping."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

from ..exceptions import TransportError
from ..flags import AmqpFlag
from ..messages import IncomingMessage

if TYPE_CHECKING:
    from collections.abc import Iterable


class InMemoryQueue:
    """In-memory queue for tests.

    Envelopes are handed out in FIFO order; ``get()`` returns ``None`` once the
    queue is empty. Acks, nacks and rejects are recorded by delivery tag, and
    requeued messages go back to the head of the queue. Set ``fail_with`` to
    make the next ``get()`` raise.
    """

    def __init__(self, name: str = "", messages: Iterable[Any] = ()) -> None:
        self._name = name
        self._ready: deque[Any] = deque()
        self._unacked: dict[int, Any] = {}
        self._next_tag = 1
        self.acked: list[int] = []
        self.nacked: list[int] = []
        self.rejected: list[int] = []
        self.cancelled: list[str] = []
        self.fail_with: TransportError | None = None
        for message in messages:
            self.put(message)

    def put(self, message: Any) -> None:
        """Add a message; str/bytes bodies are wrapped in an IncomingMessage."""
        if isinstance(message, str):
            message = message.encode("utf-8")
        if isinstance(message, bytes):
            message = IncomingMessage(
                body=message,
                delivery_tag=self._next_tag,
                routing_key=self._name,
            )
            self._next_tag += 1
        self._ready.append(message)

    def get(self) -> Any | None:
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error
        if not self._ready:
            return None
        message = self._ready.popleft()
        tag = getattr(message, "delivery_tag", None)
        if isinstance(tag, int):
            self._unacked[tag] = message
        return message

    def ack(self, delivery_tag: int, flags: int = 0) -> None:
        for tag in self._settle(delivery_tag, flags):
            self.acked.append(tag)

    def nack(self, delivery_tag: int, flags: int = 0) -> None:
        for tag in self._settle(delivery_tag, flags):
            self.nacked.append(tag)

    def reject(self, delivery_tag: int, flags: int = 0) -> None:
        for tag in self._settle(delivery_tag, flags & AmqpFlag.REQUEUE):
            self.rejected.append(tag)

    def cancel(self, consumer_tag: str = "") -> None:
        self.cancelled.append(consumer_tag)

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def purge(self) -> int:
        count = len(self._ready)
        self._ready.clear()
        return count

    def __len__(self) -> int:
        return len(self._ready)

    @property
    def unacked(self) -> list[int]:
        return sorted(self._unacked)

    def _settle(self, delivery_tag: int, flags: int) -> list[int]:
        if flags & AmqpFlag.MULTIPLE:
            tags = [t for t in sorted(self._unacked) if t <= delivery_tag]
        else:
            tags = [delivery_tag] if delivery_tag in self._unacked else []
        requeue = bool(flags & AmqpFlag.REQUEUE)
        for tag in reversed(tags):
            message = self._unacked.pop(tag)
            if requeue:
                self._ready.appendleft(message)
        return tags
