"""Ports for the collaborators the adapters are composed from.

The queue, exchange and event loop are external; concrete adapters live in
``amqp_loop.rabbitmq`` (pika), ``amqp_loop.loop`` (asyncio) and
``amqp_loop.memory`` (test doubles).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


@runtime_checkable
class IQueue(Protocol):
    """
    Blocking-style queue handle.

    ``get()`` returns the next envelope, or ``None`` when the queue is empty.
    Connection and channel failures are raised as ``TransportError``.
    """

    def get(self) -> Any | None:
        ...

    def ack(self, delivery_tag: int, flags: int = 0) -> None:
        ...

    def nack(self, delivery_tag: int, flags: int = 0) -> None:
        ...

    def reject(self, delivery_tag: int, flags: int = 0) -> None:
        ...

    def cancel(self, consumer_tag: str = "") -> None:
        ...


@runtime_checkable
class IExchange(Protocol):
    """
    Exchange handle messages are published to.

    ``publish`` raises ``SendError`` when one message cannot be delivered;
    other ``TransportError`` subclasses signal connection or channel failure.
    """

    def publish(
        self,
        message: str,
        routing_key: str,
        flags: int = 0,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        ...

    def get_name(self) -> str:
        ...

    def set_name(self, name: str) -> None:
        ...

    def get_type(self) -> str:
        ...

    def set_type(self, exchange_type: str) -> None:
        ...

    def declare(self) -> None:
        ...


@runtime_checkable
class ITimer(Protocol):
    """Handle returned by ``ILoop.add_periodic_timer``."""

    @property
    def interval(self) -> float:
        ...

    @property
    def callback(self) -> Callable[[], Any]:
        ...

    @property
    def periodic(self) -> bool:
        ...

    @property
    def cancelled(self) -> bool:
        ...


@runtime_checkable
class ILoop(Protocol):
    """
    Cooperative event loop able to run recurring timers.

    ``interval`` of ``None`` means the loop's shortest cadence.
    """

    def add_periodic_timer(
        self, interval: float | None, callback: Callable[[], Any]
    ) -> ITimer:
        ...

    def cancel_timer(self, timer: ITimer) -> None:
        ...
