"""LoopAdapter — shared lifecycle for adapters driven by a periodic timer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .events import END, EventEmitter
from .exceptions import AdapterClosedError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .ports import ILoop, ITimer

logger = logging.getLogger("amqp_loop.adapter")


class LoopAdapter(ABC):
    """Base class for the Consumer and Producer.

    Owns a transport handle until :meth:`close`, registers the instance itself
    as the callback of a periodic timer on *loop*, and composes an
    :class:`EventEmitter` for the events it raises.

    Attribute lookups that the adapter does not answer itself are delegated to
    the wrapped handle, so the adapter can stand in for the raw queue or
    exchange (``consumer.get_name()``, ``producer.set_type("topic")``, …).
    Names starting with an underscore are never delegated.
    """

    _kind = "adapter"

    def __init__(self, handle: Any, loop: ILoop, interval: float | None) -> None:
        if interval is not None and interval < 0:
            raise ValueError("interval must be >= 0 or None")
        self._handle: Any = handle
        self._loop = loop
        self._interval = interval
        self._closed = False
        self._closing = False
        self._events = EventEmitter()
        self._timer: ITimer = loop.add_periodic_timer(interval, self)

    @abstractmethod
    def __call__(self) -> Any:
        """Run one tick. Registered as the periodic timer callback."""

    # ── State ────────────────────────────────────────────────────

    @property
    def loop(self) -> ILoop:
        return self._loop

    @property
    def interval(self) -> float | None:
        return self._interval

    @property
    def timer(self) -> ITimer:
        return self._timer

    @property
    def closed(self) -> bool:
        """True once :meth:`close` has run; the instance is then unusable."""
        return self._closed

    def _ensure_open(self, action: str = "be used") -> Any:
        """Return the wrapped handle, or raise if the adapter is closed."""
        if self._closed or self._handle is None:
            raise AdapterClosedError(self._kind, action)
        return self._handle

    def _interrupted(self) -> bool:
        return self._closed or self._closing

    # ── Events ───────────────────────────────────────────────────

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        self._events.on(event, listener)

    def once(self, event: str, listener: Callable[..., Any]) -> None:
        self._events.once(event, listener)

    def remove_listener(self, event: str, listener: Callable[..., Any]) -> None:
        self._events.remove_listener(event, listener)

    def remove_all_listeners(self, event: str | None = None) -> None:
        self._events.remove_all_listeners(event)

    def listeners(self, event: str) -> list[Callable[..., Any]]:
        return self._events.listeners(event)

    def emit(self, event: str, *args: Any) -> None:
        self._events.emit(event, *args)

    # ── Lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        """Stop the adapter. Idempotent.

        Emits ``end`` with the adapter itself, cancels the periodic timer,
        drops every listener and releases the transport handle. Teardown runs
        even if an ``end`` listener raises.
        """
        if self._closed or self._closing:
            return
        self._closing = True
        try:
            self._events.emit(END, self)
        finally:
            self._loop.cancel_timer(self._timer)
            self._events.remove_all_listeners()
            self._release()
            self._handle = None
            self._closed = True
            self._closing = False
        logger.debug("%s closed", self._kind)

    def _release(self) -> None:
        """Hook for subclasses to drop their own state on close."""

    # ── Forwarding ───────────────────────────────────────────────

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._ensure_open(f"forward {name!r}"), name)
