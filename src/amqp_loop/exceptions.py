"""Exceptions raised by amqp-loop adapters."""

from __future__ import annotations


class AmqpLoopError(Exception):
    """Root exception for the amqp-loop package."""


class AdapterClosedError(AmqpLoopError, RuntimeError):
    """Raised when an operation is invoked on a closed Consumer or Producer.

    Usage: this is a programming error on the caller side; the instance is
    terminal and must not be used again.
    """

    def __init__(self, adapter: str, action: str = "be used") -> None:
        self.adapter = adapter
        self.action = action
        super().__init__(
            f"This {adapter} object is already closed and cannot {action}."
        )


class TransportError(AmqpLoopError):
    """Base class for failures reported by the underlying transport."""


class TransportConnectionError(TransportError):
    """Raised when the broker connection fails or is lost."""


class TransportChannelError(TransportError):
    """Raised when the AMQP channel is closed or in the wrong state."""


class SendError(TransportError):
    """Raised by an exchange when a single message could not be published.

    The Producer absorbs this error: the message stays pending and an
    ``error`` event is emitted instead.
    """

    def __init__(self, message: str, routing_key: str | None = None) -> None:
        self.routing_key = routing_key
        super().__init__(message)
