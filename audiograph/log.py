"""
Logging facade for audiograph.

Every function accepts either a message or an exception. Exceptions are
written with their traceback, prefixed by the optional context:

    from audiograph import log

    log.info("Editor opened")
    try:
        evaluate()
    except Exception as e:
        log.error(e, "Node graph frame failed")

Records go to the "audiograph" logger of the standard logging package, so
the host application decides handlers and formatting. set_callback() adds
a hook for in-app consoles.
"""

from __future__ import annotations

import logging
import traceback

_logger = logging.getLogger("audiograph")


def format_exception(exc: BaseException, context: str = "") -> str:
    """'<context>: <Type>: <message>' followed by the traceback."""
    head = f"{type(exc).__name__}: {exc}"
    if context:
        head = f"{context}: {head}"
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return f"{head}\n{tb}"


def _emit(level: int, msg_or_exc, context: str) -> None:
    if isinstance(msg_or_exc, BaseException):
        text = format_exception(msg_or_exc, context)
    else:
        text = str(msg_or_exc)
    _logger.log(level, text)


def debug(msg_or_exc, context: str = ""):
    _emit(logging.DEBUG, msg_or_exc, context)


def info(msg_or_exc, context: str = ""):
    _emit(logging.INFO, msg_or_exc, context)


def warn(msg_or_exc, context: str = ""):
    _emit(logging.WARNING, msg_or_exc, context)


warning = warn


def error(msg_or_exc, context: str = ""):
    _emit(logging.ERROR, msg_or_exc, context)


def exception(msg: str = ""):
    """Log msg at error level with the exception currently being handled."""
    _logger.exception(msg)


def set_level(level) -> None:
    """Set minimum level for the audiograph logger (logging.DEBUG, "INFO", ...)."""
    _logger.setLevel(level)


class _CallbackHandler(logging.Handler):
    def __init__(self, callback):
        super().__init__()
        self._callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        self._callback(record.levelname, record.getMessage())


_callback_handler: _CallbackHandler | None = None


def set_callback(callback) -> None:
    """Route every audiograph log record to callback(level_name, message).

    Passing None removes the previously installed callback.
    """
    global _callback_handler
    if _callback_handler is not None:
        _logger.removeHandler(_callback_handler)
        _callback_handler = None
    if callback is not None:
        _callback_handler = _CallbackHandler(callback)
        _logger.addHandler(_callback_handler)
