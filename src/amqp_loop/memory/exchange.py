"""InMemoryExchange — IExchange that records publishes for assertions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import SendError
from ..messages import OutgoingMessage

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class InMemoryExchange:
    """In-memory exchange for tests.

    Every accepted message is stored as an :class:`OutgoingMessage`.
    ``fail_when`` decides per message whether the publish raises
    :class:`SendError`; it can be swapped between ticks.
    """

    def __init__(self, name: str = "", exchange_type: str = "direct") -> None:
        self._name = name
        self._type = exchange_type
        self._declared = False
        self._published: list[OutgoingMessage] = []
        self.fail_when: Callable[[OutgoingMessage], bool] | None = None

    def publish(
        self,
        message: str,
        routing_key: str,
        flags: int = 0,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        outgoing = OutgoingMessage(
            message=message,
            routing_key=routing_key,
            flags=flags,
            attributes=dict(attributes or {}),
        )
        if self.fail_when is not None and self.fail_when(outgoing):
            raise SendError(
                f"Exchange {self._name!r} refused message", routing_key=routing_key
            )
        self._published.append(outgoing)

    def get_published(self) -> list[OutgoingMessage]:
        """Return all accepted messages in publish order."""
        return list(self._published)

    def clear(self) -> None:
        self._published.clear()

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def get_type(self) -> str:
        return self._type

    def set_type(self, exchange_type: str) -> None:
        self._type = exchange_type

    def declare(self) -> None:
        self._declared = True

    @property
    def declared(self) -> bool:
        return self._declared
