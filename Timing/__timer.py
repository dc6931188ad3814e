from typing import Any, Callable

from . import __host as _h
from . import __log as _l
from . import __utils as _u


class TimerHandle:
    """One-shot timer bound to exactly one host timer resource.

    The handle fires its callback at most once. It is released either when it
    fires or when cancelled; cancelling an inert handle is a no-op.
    """

    def __init__(self, host: _h.Host):
        self._host = host
        self._raw = host.createTimer()
        self._epoch = 0
        self._started = False
        self._delay: float | None = None

    def __repr__(self) -> str:
        state = "active" if self.active else "closed" if self.closed else "idle"
        return f"<TimerHandle {state} delay={self._delay} epoch={self._epoch}>"

    @property
    def active(self) -> bool:
        return self._started and not self.closed

    @property
    def closed(self) -> bool:
        return self._raw.isClosing()

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def delay(self) -> float | None:
        return self._delay

    def start(self, delayMs: float, callback: Callable[..., Any], *args: Any) -> None:
        if self.closed:
            raise RuntimeError("timer handle already closed")
        if self._started:
            raise RuntimeError("timer handle already started")
        delayMs = _u.checkDelay(delayMs)
        epoch = self._epoch

        def onTimeout() -> None:
            # a fire posted before cancel() may still reach us
            if epoch != self._epoch or self.closed:
                _l.debug(f"stale fire of {self!r} ignored")
                return
            self._epoch += 1
            self._release()
            callback(*args)

        self._raw.start(delayMs, self._host.scheduleWrap(onTimeout))
        self._started = True
        self._delay = delayMs
        _l.debug(f"timer started for {_callbackName(callback)} in {delayMs}ms")

    def cancel(self) -> None:
        if self.closed:
            return
        self._epoch += 1
        self._release()
        _l.debug(f"timer cancelled, epoch {self._epoch}")

    def _release(self) -> None:
        if self._raw.isActive():
            self._raw.stop()
        if not self._raw.isClosing():
            self._raw.close()


def _callbackName(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


def setTimeout(
    delayMs: float,
    callback: Callable[..., Any],
    *args: Any,
    host: _h.Host | None = None,
) -> TimerHandle:
    """Run `callback(*args)` once after `delayMs` milliseconds.

    Args:
        delayMs (float): Non-negative delay in milliseconds.
        callback (Callable): Function to call from the host's dispatch context.
        host (Host, optional): Event loop to schedule on, the default host if
            omitted.

    Returns:
        TimerHandle: Handle that can be passed to `clearTimeout`.
    """
    _u.checkDelay(delayMs)
    handle = TimerHandle(host or _h.getHost())
    handle.start(delayMs, callback, *args)
    return handle


def clearTimeout(handle: TimerHandle | None) -> None:
    """Cancel a pending timer. Safe on fired, cancelled or missing handles."""
    if handle is None:
        return
    handle.cancel()
