"""In-memory collaborators for testing the adapters without a broker."""

from __future__ import annotations

from .exchange import InMemoryExchange
from .loop import ManualLoop
from .queue import InMemoryQueue

__all__ = [
    "InMemoryExchange",
    "InMemoryQueue",
    "ManualLoop",
]
