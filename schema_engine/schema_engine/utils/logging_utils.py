import logging
import sys
from typing import List, Optional, TextIO

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def _stream_handler(stream: TextIO, level: int, formatter: logging.Formatter) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    quiet_stdout: bool = False,
) -> List[logging.Handler]:
    """Route records below ``stderr_level`` to stdout and the rest to stderr.

    With ``quiet_stdout`` the stdout handler is not installed at all, which
    keeps a machine-readable report on stdout parseable. Returns the handlers
    now attached to the root logger.
    """
    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)
    stderr_level = max(stderr_level, logging.DEBUG)

    handlers: List[logging.Handler] = []
    if not quiet_stdout:
        stdout_handler = _stream_handler(sys.stdout, logging.DEBUG, formatter)
        stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
        handlers.append(stdout_handler)
    handlers.append(_stream_handler(sys.stderr, stderr_level, formatter))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)
    return handlers
