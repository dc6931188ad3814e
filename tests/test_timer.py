from __future__ import annotations

import math

import pytest

from Timing import TimerHandle, clearTimeout, setHost, setTimeout


def test_timer_fires_once_after_delay(host) -> None:
    calls: list[str] = []

    handle = setTimeout(100, calls.append, "a", host=host)

    host.advance(99)
    assert calls == []
    assert handle.active

    host.advance(1)
    assert calls == ["a"]
    assert handle.closed
    assert not handle.active

    host.advance(500)
    assert calls == ["a"]


def test_zero_delay_is_scheduled_not_inline(host) -> None:
    calls: list[int] = []

    setTimeout(0, lambda: calls.append(1), host=host)
    assert calls == []

    host.tick()
    assert calls == [1]


def test_handle_is_inert_while_callback_runs(host) -> None:
    seen: list[tuple[bool, bool]] = []
    holder: list[TimerHandle] = []

    holder.append(
        setTimeout(10, lambda: seen.append((holder[0].active, holder[0].closed)), host=host)
    )
    host.advance(10)

    assert seen == [(False, True)]
    assert host.timers == []


def test_cancel_before_fire_prevents_callback(host) -> None:
    calls: list[int] = []

    handle = setTimeout(50, lambda: calls.append(1), host=host)
    host.advance(20)
    clearTimeout(handle)
    host.advance(100)

    assert calls == []
    assert handle.closed
    assert host.timers == []


def test_cancel_is_idempotent(host) -> None:
    calls: list[int] = []

    handle = setTimeout(50, lambda: calls.append(1), host=host)
    clearTimeout(handle)
    clearTimeout(handle)
    handle.cancel()
    clearTimeout(None)
    host.advance(100)

    assert calls == []


def test_cancel_after_fire_is_noop(host) -> None:
    calls: list[int] = []

    handle = setTimeout(5, lambda: calls.append(1), host=host)
    host.advance(5)
    epoch = handle.epoch

    clearTimeout(handle)
    clearTimeout(handle)
    host.advance(50)

    assert calls == [1]
    assert handle.epoch == epoch


def test_cancel_never_started_handle(host) -> None:
    handle = TimerHandle(host)
    assert not handle.active

    handle.cancel()
    handle.cancel()

    assert handle.closed


def test_already_posted_fire_is_dropped_after_cancel(host) -> None:
    calls: list[int] = []

    handle = setTimeout(10, lambda: calls.append(1), host=host)
    host.time = 10
    host.fireDue()
    assert len(host.posted) == 1

    clearTimeout(handle)
    host.drain()

    assert calls == []


def test_callback_can_start_another_timer(host) -> None:
    calls: list[float] = []

    def again() -> None:
        calls.append(host.now())
        if len(calls) < 3:
            setTimeout(10, again, host=host)

    setTimeout(10, again, host=host)
    host.advance(100)

    assert calls == [10, 20, 30]


@pytest.mark.parametrize(
    "delay", [-1, -0.5, math.nan, math.inf, -math.inf, 2**31, "10", None, True]
)
def test_invalid_delay_raises(host, delay) -> None:
    with pytest.raises(ValueError):
        setTimeout(delay, lambda: None, host=host)
    assert host.timers == []


def test_handle_cannot_be_restarted(host) -> None:
    handle = TimerHandle(host)
    handle.start(10, lambda: None)
    with pytest.raises(RuntimeError):
        handle.start(10, lambda: None)

    closed = TimerHandle(host)
    closed.cancel()
    with pytest.raises(RuntimeError):
        closed.start(10, lambda: None)


def test_default_host_is_used(host) -> None:
    calls: list[int] = []
    setHost(host)

    handle = setTimeout(5, lambda: calls.append(1))
    host.advance(5)

    assert calls == [1]
    assert handle.delay == 5


def test_largest_qtimer_delay_is_accepted(host) -> None:
    handle = setTimeout(2**31 - 1, lambda: None, host=host)

    assert handle.active
    clearTimeout(handle)
