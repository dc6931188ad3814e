from functools import update_wrapper
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict

from . import __config as _c
from . import __host as _h
from . import __log as _l
from . import __timer as _t
from . import __utils as _u


class DebounceOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    leading: bool = False


class Debouncer:
    """Delay calls to `func` until `wait` milliseconds have passed since the
    last call.

    Arguments are bound once, at construction, and passed to every call of
    `func`. With `leading` set, the first call of a burst runs `func`
    immediately. Bursts are tracked with a single one-shot timer which, when
    it fires, either runs `func` or re-arms itself for the remaining wait.
    """

    def __init__(
        self,
        wait: float | None,
        func: Callable[..., Any],
        options: DebounceOptions | Mapping[str, Any] | None = None,
        *args: Any,
        host: _h.Host | None = None,
    ):
        if not callable(func):
            raise TypeError(f"{func!r} is not callable")
        defaults = _c.get().debounce
        self._wait = _u.checkDelay(defaults.wait if wait is None else wait, "wait")
        if options is None:
            options = DebounceOptions(leading=defaults.leading)
        elif not isinstance(options, DebounceOptions):
            options = DebounceOptions.model_validate(options)
        self._leading = options.leading
        self._func = func
        self._args = args
        self._host = host
        self._timer: _t.TimerHandle | None = None
        self._lastCallTime: float | None = None
        self._lastResult: Any = None

    def __repr__(self) -> str:
        return (
            f"<Debouncer {getattr(self._func, '__qualname__', self._func)!s}"
            f" wait={self._wait} leading={self._leading} pending={self.pending}>"
        )

    def __call__(self) -> Any:
        return self.invoke()

    @property
    def host(self) -> _h.Host:
        if self._host is None:
            self._host = _h.getHost()
        return self._host

    @property
    def wait(self) -> float:
        return self._wait

    @property
    def leading(self) -> bool:
        return self._leading

    @property
    def pending(self) -> bool:
        return self._timer is not None

    @property
    def lastCallTime(self) -> float | None:
        return self._lastCallTime

    @property
    def lastResult(self) -> Any:
        return self._lastResult

    def invoke(self) -> Any:
        time = self.host.now()
        # always true on the first call, otherwise checks the wait window
        isInvoking = self._shouldInvoke(time)
        self._lastCallTime = time

        if isInvoking and self._timer is None:
            return self._leadingEdge(time)

        if self._timer is None:
            self._startTimer(self._wait)
        else:
            _l.debug(f"debounced call to {self._name()} absorbed")
        return None

    def cancel(self) -> None:
        if self._timer is not None:
            _t.clearTimeout(self._timer)
            _l.debug(f"cancelled pending call to {self._name()}")
        self._timer = None
        self._lastCallTime = None

    def flush(self) -> Any:
        if self._timer is None:
            return self._lastResult
        _t.clearTimeout(self._timer)
        return self._trailingEdge(self.host.now())

    def _name(self) -> str:
        return getattr(self._func, "__name__", repr(self._func))

    def _invokeFunc(self, time: float) -> Any:
        _l.debug(f"calling {self._name()} at {time:.1f}ms")
        self._lastResult = self._func(*self._args)
        return self._lastResult

    def _shouldInvoke(self, time: float) -> bool:
        if self._lastCallTime is None:
            return True
        timeSinceLastCall = time - self._lastCallTime
        # a clock going backwards counts as a new burst
        return timeSinceLastCall > self._wait or timeSinceLastCall < 0

    def _remainingWait(self, time: float) -> float:
        return self._wait - (time - (self._lastCallTime or 0))

    def _startTimer(self, delay: float) -> None:
        self._timer = _t.setTimeout(delay, self._timerExpired, host=self.host)

    def _timerExpired(self) -> Any:
        time = self.host.now()
        if self._shouldInvoke(time):
            return self._trailingEdge(time)
        remaining = self._remainingWait(time)
        _l.debug(f"{self._name()} not due yet, re-arming for {remaining:.1f}ms")
        self._startTimer(remaining)

    def _leadingEdge(self, time: float) -> Any:
        self._startTimer(self._wait)
        return self._invokeFunc(time) if self._leading else self._lastResult

    def _trailingEdge(self, time: float) -> Any:
        self._timer = None
        return self._invokeFunc(time)


def debounce(
    wait: float | None,
    func: Callable[..., Any],
    options: DebounceOptions | Mapping[str, Any] | None = None,
    *args: Any,
    host: _h.Host | None = None,
) -> Debouncer:
    """Create a debounced version of `func`.

    Args:
        wait (float): Milliseconds of silence before `func` runs, the
            configured default if None.
        func (Callable): Function to guard.
        options (Mapping, optional): `{"leading": bool}`, the configured
            default if None.
        *args: Arguments passed to every call of `func`.
        host (Host, optional): Event loop to time on.

    Returns:
        Debouncer: Callable object with `cancel` and `flush` methods.
    """
    return Debouncer(wait, func, options, *args, host=host)


def debounced(
    wait: float | None = None,
    *,
    leading: bool | None = None,
    host: _h.Host | None = None,
) -> Callable[[Callable[[], Any]], Debouncer]:
    """Debounce decorator for functions taking no arguments.

    Args:
        wait (float, optional): Delay in milliseconds.
        leading (bool, optional): Call on the leading edge of a burst.

    Returns:
        Callable: Decorator function.
    """

    def decorator(function: Callable[[], Any]) -> Debouncer:
        options = None if leading is None else DebounceOptions(leading=leading)
        return update_wrapper(Debouncer(wait, function, options, host=host), function)

    return decorator
