"""Translation of pika exceptions into the amqp-loop hierarchy."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

import pika.exceptions

from ..exceptions import (
    SendError,
    TransportChannelError,
    TransportConnectionError,
    TransportError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextlib.contextmanager
def translate_errors(routing_key: str | None = None) -> Iterator[None]:
    """Re-raise pika errors as TransportError subclasses.

    Unroutable and nacked publishes become :class:`SendError` so a Producer
    keeps the message and retries it.
    """
    try:
        yield
    except (pika.exceptions.UnroutableError, pika.exceptions.NackError) as e:
        raise SendError(
            f"Broker did not accept message: {type(e).__name__}",
            routing_key=routing_key,
        ) from e
    except pika.exceptions.AMQPChannelError as e:
        raise TransportChannelError(str(e) or type(e).__name__) from e
    except pika.exceptions.AMQPConnectionError as e:
        raise TransportConnectionError(str(e) or type(e).__name__) from e
    except pika.exceptions.AMQPError as e:
        raise TransportError(str(e) or type(e).__name__) from e
