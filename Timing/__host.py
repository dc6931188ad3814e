import abc
import math
import traceback
from typing import Callable

from PyQt5.QtCore import (
    QCoreApplication,
    QElapsedTimer,
    QObject,
    Qt,
    QTimer,
    pyqtSignal,
    pyqtSlot,
)

from . import __log as _l

HostCallbackType = Callable[[], None]


class HostTimer(abc.ABC):
    """A single one-shot timer resource owned by the host event loop."""

    @abc.abstractmethod
    def start(self, delayMs: float, callback: HostCallbackType) -> None:
        pass

    @abc.abstractmethod
    def isActive(self) -> bool:
        pass

    @abc.abstractmethod
    def stop(self) -> None:
        pass

    @abc.abstractmethod
    def close(self) -> None:
        pass

    @abc.abstractmethod
    def isClosing(self) -> bool:
        pass


class Host(abc.ABC):
    """Clock, timers and callback dispatch of the hosting event loop."""

    @abc.abstractmethod
    def now(self) -> float:
        """Monotonic time in milliseconds."""

    @abc.abstractmethod
    def createTimer(self) -> HostTimer:
        pass

    @abc.abstractmethod
    def scheduleWrap(self, callback: HostCallbackType) -> HostCallbackType:
        """Wrap `callback` so that calling the wrapper only queues it to run
        later inside the host's dispatch context."""


class _Dispatcher(QObject):
    posted = pyqtSignal(object)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.posted.connect(self._run, Qt.QueuedConnection)

    @pyqtSlot(object)
    def _run(self, callback: HostCallbackType) -> None:
        try:
            callback()
        except Exception as e:
            # an exception escaping a PyQt5 slot aborts the process
            _l.error(f"timer callback failed: {e}\n{traceback.format_exc()}")


class QtHostTimer(HostTimer):
    def __init__(self, host: "QtHost"):
        self._host = host
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._connected = False
        self._closing = False

    def start(self, delayMs: float, callback: HostCallbackType) -> None:
        if self._connected:
            self._timer.timeout.disconnect()
        self._timer.timeout.connect(callback)
        self._connected = True
        # QTimer only takes whole milliseconds
        self._timer.start(math.ceil(delayMs))
        self._host._live.add(self)

    def isActive(self) -> bool:
        return self._timer.isActive()

    def stop(self) -> None:
        self._timer.stop()

    def close(self) -> None:
        if self._closing:
            return
        self._closing = True
        if self._connected:
            self._timer.timeout.disconnect()
            self._connected = False
        self._timer.deleteLater()
        self._host._live.discard(self)

    def isClosing(self) -> bool:
        return self._closing


class QtHost(Host):
    """Host backed by the running Qt application.

    Timers must be created from a thread running a Qt event loop; their
    callbacks are always posted to the application thread.
    """

    def __init__(self, app: QCoreApplication | None = None):
        app = app or QCoreApplication.instance()
        if app is None:
            raise RuntimeError("no QCoreApplication instance, create one first")
        self._app = app
        # started timers stay referenced until they fire or close
        self._live: set[QtHostTimer] = set()
        self._dispatcher = _Dispatcher()
        self._dispatcher.moveToThread(app.thread())
        self._clock = QElapsedTimer()
        self._clock.start()
        _l.debug(f"qt host created, monotonic clock {self._clock.isMonotonic()}")

    def now(self) -> float:
        return self._clock.nsecsElapsed() / 1e6

    def createTimer(self) -> HostTimer:
        return QtHostTimer(self)

    def scheduleWrap(self, callback: HostCallbackType) -> HostCallbackType:
        return lambda: self._dispatcher.posted.emit(callback)


def getHost() -> Host:
    global _defaultHost
    if _defaultHost is None:
        _defaultHost = QtHost()
    return _defaultHost


def setHost(host: Host | None) -> None:
    global _defaultHost
    _defaultHost = host


_defaultHost: Host | None = None
