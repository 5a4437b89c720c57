# File: src/mstair/emailparts/xlogging/logger_factory.py
"""
Logger factory for creating and configuring CoreLogger instances.

Loggers are created through logging.getLogger() so they take part in the
standard hierarchy (parents, propagation, caplog).
"""

import logging
import sys
from pathlib import Path

from mstair.emailparts.xlogging.core_logger import CoreLogger


def create_logger(
    name: str,
    *,
    level: int | str | None = None,
) -> CoreLogger:
    """
    Return the CoreLogger registered under `name`, creating it if needed.

    A `__main__` name is replaced with the running script's stem.

    :param name: Logger name, normally `__name__`.
    :param level: Explicit level; otherwise resolved from LOG_LEVEL* variables.
    :return: CoreLogger instance.
    """
    if name == "__main__":
        arg0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        name = arg0.stem if arg0 else "embedded_main"

    existing = logging.Logger.manager.loggerDict.get(name)
    logger = existing if isinstance(existing, CoreLogger) else _get_core_logger_from_logging(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def _get_core_logger_from_logging(name: str) -> CoreLogger:
    """
    Create or retrieve a CoreLogger through logging.getLogger().

    Temporarily sets CoreLogger as the logger class so the new logger is wired
    into the hierarchy (parent relationships, propagation).

    :raises TypeError: If a non-CoreLogger is already registered under `name`.
    """
    logging_class = logging.getLoggerClass()
    logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(logging_class)
    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    return logger


# End of file: src/mstair/emailparts/xlogging/logger_factory.py
