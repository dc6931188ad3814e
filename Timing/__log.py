import logging
import logging.handlers
import os

from . import __utils as _u

LOG_NAME = "timing"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 5


def debug(msg):
    _logger.debug(msg)


def info(msg):
    _logger.info(msg)


def warning(msg):
    _logger.warning(msg)


def error(msg):
    _logger.error(msg)


def setup(level: str = "INFO", logFile: str | os.PathLike | None = None) -> None:
    global _rotating_file_handler
    _logger.setLevel(level)
    _stream_handler.setLevel(level)
    if _rotating_file_handler is not None:
        _logger.removeHandler(_rotating_file_handler)
        _rotating_file_handler.close()
        _rotating_file_handler = None
    if logFile is not None:
        _rotating_file_handler = logging.handlers.RotatingFileHandler(
            _u.getExeRelPath(logFile),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        _rotating_file_handler.setFormatter(_formatter)
        _rotating_file_handler.setLevel(level)
        _logger.addHandler(_rotating_file_handler)


_logger = logging.getLogger(LOG_NAME)

_formatter = logging.Formatter("%(asctime)s %(levelname)s\t%(message)s")

_stream_handler = logging.StreamHandler()
_rotating_file_handler: logging.handlers.RotatingFileHandler | None = None
_stream_handler.setFormatter(_formatter)
_stream_handler.setLevel(logging.INFO)
_logger.addHandler(_stream_handler)
_logger.setLevel(logging.INFO)
