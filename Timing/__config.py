import json as _json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from . import __log as _l
from . import __utils as _u

CONFIG_ENV = "TIMING_CONFIG"
CONFIG_FILE_NAME = "timing.json"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class DebounceDefaults(BaseModel):
    wait: int = Field(default=0, ge=0)
    leading: bool = False


class LogConfig(BaseModel):
    level: LogLevel = "INFO"
    file: str | None = None


class TimingConfig(BaseModel):
    debounce: DebounceDefaults = Field(default_factory=DebounceDefaults)
    log: LogConfig = Field(default_factory=LogConfig)


def getConfigPath() -> Path:
    if env := os.environ.get(CONFIG_ENV):
        return Path(env)
    return _u.getExeRelPath(CONFIG_FILE_NAME)


def load(path: str | os.PathLike | None = None) -> TimingConfig:
    global config
    file = Path(path) if path is not None else getConfigPath()
    if file.exists():
        try:
            with file.open("r", encoding="utf-8") as f:
                config = TimingConfig.model_validate(_json.load(f))
            _l.info(f"loaded config file {file}")
            return config
        except (OSError, ValidationError, ValueError) as e:
            _l.error(f"failed to load config file {file}: {e}")
            file.replace(file.with_name(f"{file.name}.bak"))
    else:
        _l.debug(f"config file {file} not found")
    _l.info("using default config")
    config = TimingConfig()
    return config


def save(path: str | os.PathLike | None = None) -> None:
    file = Path(path) if path is not None else getConfigPath()
    with file.open("w", encoding="utf-8") as f:
        _json.dump(config.model_dump(), f, ensure_ascii=False, indent=4)
    _l.info(f"saved config to {file}")


def get() -> TimingConfig:
    return config


def setDebounceDefaults(wait: int | None = None, leading: bool | None = None) -> None:
    global config
    update = {
        k: v for k, v in (("wait", wait), ("leading", leading)) if v is not None
    }
    config = config.model_copy(
        update={
            "debounce": DebounceDefaults.model_validate(
                config.debounce.model_dump() | update
            )
        }
    )


config: TimingConfig = TimingConfig()
