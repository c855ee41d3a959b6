"""Event-loop adapters for blocking AMQP queues and exchanges."""

from __future__ import annotations

from .consumer import Consumer
from .events import CLOSE_CONSUMER, CONSUME, END, ERROR, PRODUCE, EventEmitter
from .exceptions import (
    AdapterClosedError,
    AmqpLoopError,
    SendError,
    TransportChannelError,
    TransportConnectionError,
    TransportError,
)
from .flags import AmqpFlag
from .loop import AsyncioLoop, Timer
from .messages import IncomingMessage, OutgoingMessage
from .ports import IExchange, ILoop, IQueue, ITimer
from .producer import Producer

__all__ = [
    "CLOSE_CONSUMER",
    "CONSUME",
    "END",
    "ERROR",
    "PRODUCE",
    "AdapterClosedError",
    "AmqpFlag",
    "AmqpLoopError",
    "AsyncioLoop",
    "Consumer",
    "EventEmitter",
    "IExchange",
    "ILoop",
    "IQueue",
    "ITimer",
    "IncomingMessage",
    "OutgoingMessage",
    "Producer",
    "SendError",
    "Timer",
    "TransportChannelError",
    "TransportConnectionError",
    "TransportError",
]
