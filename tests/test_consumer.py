"""Tests for Consumer."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from amqp_loop.consumer import Consumer
from amqp_loop.exceptions import AdapterClosedError, TransportChannelError

if TYPE_CHECKING:
    from .conftest import Recorder


@pytest.mark.parametrize(
    ("interval", "max_messages"),
    [(1.0, None), (1.0, 1), (0.05, 10), (None, None)],
)
def test_construct_registers_periodic_timer(
    queue: MagicMock,
    loop: MagicMock,
    timer: MagicMock,
    interval: float | None,
    max_messages: int | None,
) -> None:
    consumer = Consumer(queue, loop, interval, max_messages)
    loop.add_periodic_timer.assert_called_once_with(interval, consumer)
    assert consumer.queue is queue
    assert consumer.loop is loop
    assert consumer.interval == interval
    assert consumer.max_messages == max_messages
    assert consumer.timer is timer
    assert consumer.closed is False


def test_invalid_settings_raise(queue: MagicMock, loop: MagicMock) -> None:
    with pytest.raises(ValueError, match="max_messages"):
        Consumer(queue, loop, 1.0, 0)
    with pytest.raises(ValueError, match="interval"):
        Consumer(queue, loop, -1.0)
    loop.add_periodic_timer.assert_not_called()


def test_consuming_messages_until_queue_is_empty(
    queue: MagicMock, loop: MagicMock, recorder: Recorder
) -> None:
    queue.get.side_effect = ["foo", "bar", "baz", None]
    consumer = Consumer(queue, loop, 1.0)
    consumer.on("consume", recorder)

    assert consumer() == 3

    assert queue.get.call_count == 4
    assert recorder.calls == [("foo", queue), ("bar", queue), ("baz", queue)]


@pytest.mark.parametrize("max_messages", [1, 10, 45])
def test_consuming_messages_with_max_count(
    queue: MagicMock, loop: MagicMock, recorder: Recorder, max_messages: int
) -> None:
    queue.get.return_value = "foobar"
    consumer = Consumer(queue, loop, 1.0, max_messages)
    consumer.on("consume", recorder)

    consumer()

    assert queue.get.call_count == max_messages
    assert recorder.count == max_messages


def test_max_count_leaves_remainder_for_next_tick(
    queue: MagicMock, loop: MagicMock, recorder: Recorder
) -> None:
    queue.get.side_effect = ["a", "b", "c", None]
    consumer = Consumer(queue, loop, 1.0, max_messages=2)
    consumer.on("consume", recorder)

    assert consumer.poll() == 2
    assert consumer.poll() == 1
    assert [args[0] for args in recorder.calls] == ["a", "b", "c"]


def test_empty_queue_emits_nothing(
    queue: MagicMock, loop: MagicMock, recorder: Recorder
) -> None:
    queue.get.return_value = None
    consumer = Consumer(queue, loop, 1.0)
    consumer.on("consume", recorder)

    assert consumer() == 0
    assert recorder.count == 0


def test_transport_error_propagates(queue: MagicMock, loop: MagicMock) -> None:
    queue.get.side_effect = TransportChannelError("channel closed")
    consumer = Consumer(queue, loop, 1.0)
    with pytest.raises(TransportChannelError, match="channel closed"):
        consumer()
    assert consumer.closed is False


@pytest.mark.parametrize(
    ("method", "arg"),
    [("get_argument", "foo"), ("nack", "bar"), ("cancel", "baz"), ("ack", 7)],
)
def test_calls_are_forwarded_to_queue(
    queue: MagicMock, loop: MagicMock, method: str, arg: object
) -> None:
    consumer = Consumer(queue, loop, 1.0)
    result = getattr(consumer, method)(arg)
    getattr(queue, method).assert_called_once_with(arg)
    assert result is getattr(queue, method).return_value


def test_private_names_are_not_forwarded(queue: MagicMock, loop: MagicMock) -> None:
    consumer = Consumer(queue, loop, 1.0)
    with pytest.raises(AttributeError):
        consumer._secret  # noqa: B018


def test_close(
    queue: MagicMock, loop: MagicMock, timer: MagicMock, recorder: Recorder
) -> None:
    consumer = Consumer(queue, loop, 1.0)
    consumer.on("end", recorder)

    consumer.close()

    loop.cancel_timer.assert_called_once_with(timer)
    assert consumer.closed is True
    assert consumer.queue is None
    assert recorder.calls == [(consumer,)]
    assert consumer.listeners("consume") == []


def test_close_is_idempotent(
    queue: MagicMock, loop: MagicMock, recorder: Recorder
) -> None:
    consumer = Consumer(queue, loop, 1.0)
    consumer.on("end", recorder)

    consumer.close()
    consumer.close()

    assert recorder.count == 1
    loop.cancel_timer.assert_called_once()


def test_end_listener_can_still_use_queue(queue: MagicMock, loop: MagicMock) -> None:
    consumer = Consumer(queue, loop, 1.0)
    consumer.on("end", lambda c: c.cancel("tag"))

    consumer.close()

    queue.cancel.assert_called_once_with("tag")


def test_close_event_closes_consumer(
    queue: MagicMock, loop: MagicMock, timer: MagicMock
) -> None:
    consumer = Consumer(queue, loop, 1.0)

    consumer.emit("close_amqp_consumer")

    assert consumer.closed is True
    loop.cancel_timer.assert_called_once_with(timer)


def test_listener_closing_consumer_stops_the_tick(
    queue: MagicMock, loop: MagicMock
) -> None:
    queue.get.return_value = "msg"
    consumer = Consumer(queue, loop, 1.0)
    consumer.on("consume", lambda *_: consumer.close())

    assert consumer() == 1
    assert queue.get.call_count == 1


def test_invoking_consumer_after_closing(queue: MagicMock, loop: MagicMock) -> None:
    consumer = Consumer(queue, loop, 1.0)
    consumer.close()
    with pytest.raises(AdapterClosedError, match="already closed"):
        consumer()
    with pytest.raises(AdapterClosedError):
        consumer.poll()


def test_forwarding_after_closing(queue: MagicMock, loop: MagicMock) -> None:
    consumer = Consumer(queue, loop, 1.0)
    consumer.close()
    with pytest.raises(AdapterClosedError):
        consumer.ack(1)
    with pytest.raises(AdapterClosedError):
        consumer.get_argument("foo")
    queue.ack.assert_not_called()
    queue.get_argument.assert_not_called()
