"""Pytest fixtures shared by the adapter tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def timer() -> MagicMock:
    return MagicMock(name="timer")


@pytest.fixture
def loop(timer: MagicMock) -> MagicMock:
    loop = MagicMock(name="loop")
    loop.add_periodic_timer.return_value = timer
    return loop


@pytest.fixture
def queue() -> MagicMock:
    return MagicMock(name="queue")


@pytest.fixture
def exchange() -> MagicMock:
    return MagicMock(name="exchange")


class Recorder:
    """Listener that records the positional arguments of every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, ...]] = []

    def __call__(self, *args: object) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
