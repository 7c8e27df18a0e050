"""
Logging for showdeck.

Every module logs under the 'showdeck' namespace (logging.getLogger(__name__)),
so one handler on the 'showdeck' logger catches the deck, the editor and the
summary worker thread alike.

  File     : logs/showdeck.log, rotated at 5 MB, 3 backups kept
  Level    : LOG_LEVEL (DEBUG / INFO / WARNING / ERROR / CRITICAL), INFO if unset
  Threads  : each line carries the thread name; the summary request runs on
             'summary_0', everything else on 'MainThread'

Call tracing
------------
@log_call wraps CLI commands and the summary requester:

    2026-10-19 14:32:01 | DEBUG    | MainThread | CALL slide | args=(<ctx>, 8, '3')
    2026-10-19 14:32:01 | DEBUG    | summary_0  | CALL generate_executive_summary | args=(<11 exhibitions>)
    2026-10-19 14:32:03 | INFO     | summary_0  | OK   generate_executive_summary | 1840ms
    2026-10-19 14:32:03 | ERROR    | MainThread | FAIL export | PermissionError: ... | 3ms

Exhibition collections and click contexts are logged by shape rather than by
repr; other arguments are cut at 120 characters.
"""

import functools
import logging
import logging.handlers
import os
import time
from pathlib import Path

import click

from showdeck.models import Exhibition

_LOG_DIR = Path(__file__).parent.parent / "logs"
_LOG_FILE = _LOG_DIR / "showdeck.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)-10s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_MAX_ARG_REPR = 120


def configure_logging() -> logging.Logger:
    """Attach the rotating file handler to the 'showdeck' logger once and return it."""
    logger = logging.getLogger("showdeck")
    if logger.handlers:
        return logger

    _LOG_DIR.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.handlers.RotatingFileHandler(
        _LOG_FILE, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def _short_repr(value) -> str:
    if isinstance(value, click.Context):
        return "<ctx>"
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, Exhibition) for v in value):
        return f"<{len(value)} exhibitions>"
    text = repr(value)
    if len(text) > _MAX_ARG_REPR:
        return text[:_MAX_ARG_REPR] + "..."
    return text


def log_call(func):
    """
    Trace one call: DEBUG 'CALL' on entry, INFO 'OK' with elapsed ms on return,
    ERROR 'FAIL' with the exception and elapsed ms before re-raising.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger("showdeck")
        name = func.__name__
        parts = [_short_repr(a) for a in args] + [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        logger.debug(f"CALL {name} | args=({', '.join(parts) or '—'})")

        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            ms = int((time.perf_counter() - start) * 1000)
            logger.error(f"FAIL {name} | {type(exc).__name__}: {exc} | {ms}ms")
            raise
        ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"OK   {name} | {ms}ms")
        return result

    return wrapper
