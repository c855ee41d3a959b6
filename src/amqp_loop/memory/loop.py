"""ManualLoop — deterministic ILoop whose timers fire only when asked to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..loop import Timer

if TYPE_CHECKING:
    from collections.abc import Callable


class ManualLoop:
    """Loop double for tests.

    Keeps a virtual clock; :meth:`advance` moves it forward and fires every
    timer that became due, in due order. :meth:`run_timers` fires each active
    timer once regardless of time.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._due: dict[Timer, float] = {}
        self.cancelled: list[Timer] = []

    def add_periodic_timer(
        self, interval: float | None, callback: Callable[[], Any]
    ) -> Timer:
        timer = Timer(interval, callback, periodic=True)
        self._due[timer] = self.now + timer.interval
        return timer

    def cancel_timer(self, timer: Timer) -> None:
        timer._cancelled = True
        if self._due.pop(timer, None) is not None:
            self.cancelled.append(timer)

    @property
    def timers(self) -> list[Timer]:
        return list(self._due)

    def run_timers(self) -> int:
        """Fire every active timer once; returns the number fired."""
        fired = 0
        for timer in list(self._due):
            if timer.cancelled:
                continue
            self._due[timer] = self.now + timer.interval
            timer.callback()
            fired += 1
        return fired

    def advance(self, seconds: float, *, max_fires: int = 1000) -> int:
        """Move the clock forward, firing due timers; returns the number of fires.

        A timer with a tiny interval (``None`` maps to 1 µs) would otherwise
        fire millions of times per simulated second, so at most *max_fires*
        callbacks run per call. Fires skipped by the cap stay due and run on
        the next call.
        """
        if max_fires < 1:
            raise ValueError("max_fires must be >= 1")
        target = self.now + seconds
        fired = 0
        while fired < max_fires:
            pending = [(due, t) for t, due in self._due.items() if due <= target]
            if not pending:
                break
            due, timer = min(pending, key=lambda item: item[0])
            self.now = due
            self._due[timer] = due + timer.interval
            timer.callback()
            fired += 1
        self.now = target
        return fired
