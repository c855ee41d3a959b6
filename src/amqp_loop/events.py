"""EventEmitter — synchronous listener registry composed into the adapters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("amqp_loop.events")

CONSUME = "consume"
PRODUCE = "produce"
ERROR = "error"
END = "end"
CLOSE_CONSUMER = "close_amqp_consumer"


class EventEmitter:
    """Named events with listeners invoked in registration order.

    ``on`` and ``once`` registrations share one ordered list per event. A
    ``once`` entry is unregistered right before it is called; once-entries
    queued behind a listener that raises stay registered for the next emit.
    ``emit`` works on a copy of the list, so a listener may register or remove
    listeners (or tear the owner down) while an event is in flight. A listener
    that raises is logged and the exception propagates to the caller of
    ``emit``.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Callable[..., Any], bool]]] = {}

    # ── Registration ─────────────────────────────────────────────

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Register *listener* for every future *event*."""
        self._listeners.setdefault(event, []).append((listener, False))

    def once(self, event: str, listener: Callable[..., Any]) -> None:
        """Register *listener* for the next *event* only."""
        self._listeners.setdefault(event, []).append((listener, True))

    def remove_listener(self, event: str, listener: Callable[..., Any]) -> None:
        """Remove the first registration of *listener* for *event*, if any."""
        entries = self._listeners.get(event, [])
        for index, (registered, _) in enumerate(entries):
            if registered == listener:
                self._discard(event, index)
                return

    def remove_all_listeners(self, event: str | None = None) -> None:
        """Remove listeners for *event*, or for every event when omitted."""
        if event is None:
            self._listeners.clear()
            return
        self._listeners.pop(event, None)

    def listeners(self, event: str) -> list[Callable[..., Any]]:
        """Return the listeners currently registered for *event*."""
        return [listener for listener, _ in self._listeners.get(event, [])]

    def _discard(self, event: str, index: int) -> None:
        entries = self._listeners[event]
        del entries[index]
        if not entries:
            del self._listeners[event]

    # ── Dispatching ──────────────────────────────────────────────

    def emit(self, event: str, *args: Any) -> None:
        """Call every listener of *event* with *args*."""
        for entry in list(self._listeners.get(event, [])):
            listener, once = entry
            if once:
                # Skip once-entries already consumed by a nested emit.
                index = next(
                    (
                        i
                        for i, current in enumerate(self._listeners.get(event, []))
                        if current is entry
                    ),
                    None,
                )
                if index is None:
                    continue
                self._discard(event, index)
            try:
                listener(*args)
            except Exception:
                logger.exception(
                    "Error in listener %s for event %r",
                    getattr(listener, "__qualname__", type(listener).__name__),
                    event,
                )
                raise
