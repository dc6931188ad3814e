from __future__ import annotations

import os
from typing import Callable

import pytest
from PyQt5.QtWidgets import QApplication

import Timing
from Timing import __config as _c
from Timing.__host import Host, HostTimer


class FakeHostTimer(HostTimer):
    def __init__(self, host: FakeHost) -> None:
        self._host = host
        self.due: float | None = None
        self.callback: Callable[[], None] | None = None
        self.closing = False

    def start(self, delayMs: float, callback: Callable[[], None]) -> None:
        self.due = self._host.time + delayMs
        self.callback = callback
        self._host.timers.append(self)

    def isActive(self) -> bool:
        return self.due is not None

    def stop(self) -> None:
        self.due = None
        if self in self._host.timers:
            self._host.timers.remove(self)

    def close(self) -> None:
        self.closing = True

    def isClosing(self) -> bool:
        return self.closing


class FakeHost(Host):
    """Deterministic event loop with a millisecond clock.

    Each tick fires the timers that are due and then runs every posted
    callback. Timers armed while callbacks run are looked at on the next tick.
    """

    def __init__(self) -> None:
        self.time = 0.0
        self.timers: list[FakeHostTimer] = []
        self.posted: list[Callable[[], None]] = []

    def now(self) -> float:
        return self.time

    def createTimer(self) -> FakeHostTimer:
        return FakeHostTimer(self)

    def scheduleWrap(self, callback: Callable[[], None]) -> Callable[[], None]:
        return lambda: self.posted.append(callback)

    def fireDue(self) -> None:
        due = sorted(
            (t for t in self.timers if t.due is not None and t.due <= self.time),
            key=lambda t: t.due,
        )
        for timer in due:
            self.timers.remove(timer)
            timer.due = None
            timer.callback()

    def drain(self) -> None:
        while self.posted:
            self.posted.pop(0)()

    def tick(self) -> None:
        self.fireDue()
        self.drain()

    def advance(self, ms: int) -> None:
        for _ in range(ms):
            self.time += 1
            self.tick()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture(autouse=True)
def resetDefaults():
    _c.config = Timing.TimingConfig()
    Timing.setHost(None)
    yield
    _c.config = Timing.TimingConfig()
    Timing.setHost(None)


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return QApplication.instance() or QApplication([])
