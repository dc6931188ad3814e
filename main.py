import sys
import traceback
from pathlib import Path

FAILURES_LOG = "failures.log"


def failuresLogPath() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent / FAILURES_LOG
    return Path(__file__).resolve().parent / FAILURES_LOG


def main() -> int:
    try:
        import Timing

        return Timing.runDemo()
    except Exception as e:
        with failuresLogPath().open("w", encoding="utf-8") as f:
            f.write(f"{e}\n{traceback.format_exc()}")
        raise


if __name__ == "__main__":
    sys.exit(main())
