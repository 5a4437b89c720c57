# File: src/mstair/emailparts/xlogging/core_logger.py
"""
Structured logging with environment-driven configuration.

Example:
    >>> from mstair.emailparts.xlogging.core_logger import CoreLogger
    >>> logger = CoreLogger(__name__)
    >>> logger.info("Application started")
    >>>
    >>> with logger.prefix_with("[parse]"):
    ...     logger.trace("rejected %r", value)

Design:
- Only the root logger owns handlers/formatters; CoreLogger instances propagate.
- Log levels are controlled per-logger via LOG_LEVEL* (see LogLevelConfig).
- initialize_root() is the only supported entry point for root setup.
"""

from __future__ import annotations

import contextvars
import logging
import os
import re
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

from mstair.emailparts.xlogging.logger_constants import (
    DEFAULT_LOG_DATEFMT,
    DEFAULT_LOG_FORMAT,
    TRACE,
    initialize_logger_constants,
)
from mstair.emailparts.xlogging.logger_formatter import CoreFormatter
from mstair.emailparts.xlogging.logger_util import LogLevelConfig, level_from_text


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

_LOG_ROOT_ATTR_NAME = "_emailparts_corelogger_initialized"

_log_prefix: contextvars.ContextVar[str] = contextvars.ContextVar("log_prefix", default="")


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - A TRACE level below DEBUG.
    - Levels resolved from LOG_LEVEL* environment variables.
    - A prefix context manager for scoped message prefixes.

    Handlers are not attached directly; all CoreLogger instances propagate
    to the root logger, which holds a single stderr handler per initialize_root().
    """

    def __init__(
        self,
        name: str,
        level: int | str | None = logging.NOTSET,
    ) -> None:
        """
        :param name: The name of the logger, typically the module name.
        :param level: The initial log level. NOTSET resolves from the environment.
        """
        initialize_logger_constants()
        if level in {None, logging.NOTSET, "NOTSET", ""}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{self.__class__.__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def log(self, level: int, msg: object, *args: Any, **kwargs: Any) -> None:
        """Emit a record, applying the active prefix. Disabled levels leave the root untouched."""
        if not self.isEnabledFor(level):
            return
        initialize_root()
        if prefix := _log_prefix.get():
            msg = f"{prefix}{msg}"
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        super().log(level, msg, *args, **kwargs)

    def trace(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(TRACE, msg, *args, **kwargs)

    def debug(self, msg: object, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: object, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: object, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: object, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.ERROR, msg, *args, **kwargs)

    @contextmanager
    def prefix_with(self, prefix: str) -> Iterator[None]:
        """
        Context manager to prefix all log messages within the current context.

        Nested prefixes stack. Uses contextvars, so it is safe across threads
        and asyncio tasks without modifying logger instances.
        """
        formatted_prefix = prefix + " > "
        current_prefix = _log_prefix.get()
        token = _log_prefix.set(current_prefix + formatted_prefix)
        try:
            yield
        finally:
            _log_prefix.reset(token)


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    - Ensures exactly one stderr StreamHandler with CoreFormatter exists.
    - If `force=True`, removes and recreates the stderr handler.
    - Sets root level to `level` if provided, otherwise uses WARNING if NOTSET.
    - Does not modify non-stderr handlers owned by the host application.

    Env overrides: LOG_FORMAT, LOG_DATEFMT, LOG_TIMEZONE. A LOG_DATEFMT without
    '%' directives removes the timestamp from the format.
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)

    initialize_logger_constants()

    if force:
        root.handlers = [
            h
            for h in root.handlers
            if not (isinstance(h, logging.StreamHandler) and h.stream is sys.stderr)
        ]

    _ensure_stderr_coreformatter(fmt=fmt, datefmt=datefmt)

    if level is not None:
        if isinstance(level, str):
            level = level_from_text(level) or logging.WARNING
        root.setLevel(level)
    elif root.level == logging.NOTSET:
        root.setLevel(logging.WARNING)


def _ensure_stderr_coreformatter(*, fmt: str | None = None, datefmt: str | None = None) -> None:
    """Give the root logger one stderr handler using CoreFormatter; other handlers are left alone."""
    fmt = fmt or os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT)
    datefmt = os.environ.get("LOG_DATEFMT", DEFAULT_LOG_DATEFMT) if datefmt is None else datefmt
    if "%" not in datefmt:
        fmt = re.sub(r"\s*%\(asctime\)s\s*", " ", fmt)
        datefmt = None
    timezone = os.environ.get("LOG_TIMEZONE")

    root: logging.Logger = logging.getLogger()
    stderr_handlers: list[logging.StreamHandler[TextIO]] = [
        h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    if not stderr_handlers:
        h: logging.StreamHandler[TextIO] = logging.StreamHandler(sys.stderr)
        h.setFormatter(CoreFormatter(fmt, datefmt, timezone=timezone))
        root.addHandler(h)
        return

    if not any(isinstance(h.formatter, CoreFormatter) for h in stderr_handlers):
        stderr_handlers[0].setFormatter(CoreFormatter(fmt, datefmt, timezone=timezone))


# End of file: src/mstair/emailparts/xlogging/core_logger.py
