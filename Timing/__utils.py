import math
import os
import sys
from numbers import Real
from pathlib import Path

import __main__

APP_NAME = "Timing"
IS_FROZEN = getattr(sys, "frozen", False)
MAIN_PATH = (
    Path(__main__.__file__).parent
    if hasattr(__main__, "__file__")
    else Path.cwd()
)
# QTimer takes a signed 32-bit millisecond interval
MAX_DELAY = 2**31 - 1


def getExeRelPath(relPath: str | os.PathLike) -> Path:
    return Path(sys.executable).parent / relPath if IS_FROZEN else MAIN_PATH / relPath


def checkDelay(delay: Real, name: str = "delay") -> float:
    # bool is a Real too, reject it explicitly
    if (
        isinstance(delay, bool)
        or not isinstance(delay, Real)
        or not math.isfinite(delay)
        or delay < 0
        or delay > MAX_DELAY
    ):
        raise ValueError(f"invalid {name} {delay!r}")
    return delay
