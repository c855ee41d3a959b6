"""RabbitMQ transport adapters (optional extra: amqp-loop[rabbitmq])."""

from __future__ import annotations

from .connection import PikaConnectionManager
from .exchange import PikaExchange
from .queue import PikaQueue

__all__ = [
    "PikaConnectionManager",
    "PikaExchange",
    "PikaQueue",
]
