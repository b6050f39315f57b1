"""Fatal-error reporting and the package's default logger."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

_LOGGER_NAME = "raftquorum"
_init_lock = threading.Lock()
_initialized = False


class RaftFatalError(RuntimeError):
    """Raised when an invariant of the log or quorum state is violated."""


def _format_kv_list(logger: Any) -> str:
    extra = getattr(logger, "extra", None)
    if not isinstance(extra, Mapping) or not extra:
        return ""
    return ", ".join(f"{key}: {value}" for key, value in extra.items())


def fatal(logger: Any, msg: object) -> None:
    """Log ``msg`` as critical and raise :class:`RaftFatalError`.

    Key/value context carried by a :class:`logging.LoggerAdapter` is appended
    to the message, separated by a comma.
    """
    text = str(msg)
    context = _format_kv_list(logger)
    full = f"{text}, {context}" if context else text
    if logger is not None and hasattr(logger, "critical"):
        logger.critical(text)
    raise RaftFatalError(full)


def default_logger() -> logging.LoggerAdapter:
    """Return the fallback logger, tagged with the current test case name.

    The case name is the last ``:``-separated part of the current thread name.
    """
    global _initialized
    base = logging.getLogger(_LOGGER_NAME)
    with _init_lock:
        if not _initialized:
            base.addHandler(logging.NullHandler())
            _initialized = True
    name = threading.current_thread().name
    extra: dict[str, str] = {}
    if name:
        extra["case"] = name.split(":")[-1]
    return logging.LoggerAdapter(base, extra)