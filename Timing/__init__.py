import os

from . import __config as _c
from . import __log as _l
from .__config import DebounceDefaults, LogConfig, TimingConfig
from .__debounce import DebounceOptions, Debouncer, debounce, debounced
from .__host import Host, HostTimer, QtHost, QtHostTimer, getHost, setHost
from .__timer import TimerHandle, clearTimeout, setTimeout

__all__ = (
    "DebounceDefaults",
    "DebounceOptions",
    "Debouncer",
    "Host",
    "HostTimer",
    "LogConfig",
    "QtHost",
    "QtHostTimer",
    "TimerHandle",
    "TimingConfig",
    "clearTimeout",
    "debounce",
    "debounced",
    "getConfig",
    "getHost",
    "loadConfig",
    "runDemo",
    "saveConfig",
    "setHost",
    "setTimeout",
)


def getConfig() -> TimingConfig:
    return _c.get()


def loadConfig(path: str | os.PathLike | None = None) -> TimingConfig:
    config = _c.load(path)
    _l.setup(config.log.level, config.log.file)
    return config


def saveConfig(path: str | os.PathLike | None = None) -> None:
    _c.save(path)


def runDemo() -> int:
    from . import __demo as _demo

    return _demo.run()


loadConfig()
