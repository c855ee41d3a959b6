"""AsyncioLoop — ILoop adapter that runs periodic timers on an asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("amqp_loop.loop")

MIN_TIMER_INTERVAL = 0.000001


class Timer:
    """Timer handle returned by :meth:`AsyncioLoop.add_periodic_timer`."""

    def __init__(
        self,
        interval: float | None,
        callback: Callable[[], Any],
        *,
        periodic: bool = True,
    ) -> None:
        if interval is None or interval < MIN_TIMER_INTERVAL:
            interval = MIN_TIMER_INTERVAL
        self._interval = float(interval)
        self._callback = callback
        self._periodic = periodic
        self._cancelled = False
        self._handle: asyncio.TimerHandle | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def callback(self) -> Callable[[], Any]:
        return self._callback

    @property
    def periodic(self) -> bool:
        return self._periodic

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        return (
            f"Timer(interval={self._interval}, periodic={self._periodic}, "
            f"cancelled={self._cancelled})"
        )


class AsyncioLoop:
    """Runs ``ILoop`` timers on an :mod:`asyncio` event loop.

    Each fire reschedules the next one before the callback runs, so a callback
    that raises does not stop its timer. The exception is handed to the
    asyncio loop's exception handler (see ``loop.set_exception_handler``),
    which lets the application decide whether to tear the loop down.

    Example::

        loop = AsyncioLoop()
        consumer = Consumer(queue, loop, 0.1)
        await asyncio.sleep(60)
        consumer.close()
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Bind to *loop*, or lazily to the running loop when None."""
        self._loop = loop
        self._timers: set[Timer] = set()

    @property
    def asyncio_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def add_timer(self, interval: float | None, callback: Callable[[], Any]) -> Timer:
        """Run *callback* once after *interval* seconds."""
        timer = Timer(interval, callback, periodic=False)
        self._schedule(timer)
        return timer

    def add_periodic_timer(
        self, interval: float | None, callback: Callable[[], Any]
    ) -> Timer:
        """Run *callback* every *interval* seconds until cancelled."""
        timer = Timer(interval, callback, periodic=True)
        self._schedule(timer)
        return timer

    def cancel_timer(self, timer: Timer) -> None:
        """Cancel *timer*. Cancelling twice or an unknown timer is a no-op."""
        timer._cancelled = True
        if timer._handle is not None:
            timer._handle.cancel()
            timer._handle = None
        self._timers.discard(timer)

    def is_timer_active(self, timer: Timer) -> bool:
        return timer in self._timers

    @property
    def active_timers(self) -> int:
        return len(self._timers)

    def _schedule(self, timer: Timer) -> None:
        self._timers.add(timer)
        timer._handle = self.asyncio_loop.call_later(
            timer.interval, self._fire, timer
        )

    def _fire(self, timer: Timer) -> None:
        if timer.cancelled:
            return
        if timer.periodic:
            self._schedule(timer)
        else:
            timer._handle = None
            self._timers.discard(timer)
        try:
            timer.callback()
        except Exception as e:
            logger.debug("Timer callback %r raised %r", timer.callback, e)
            self.asyncio_loop.call_exception_handler(
                {
                    "message": "Exception in periodic timer callback",
                    "exception": e,
                    "timer": timer,
                }
            )
