# File: src/mstair/emailparts/xlogging/logger_constants.py

import logging


K_COLOR = "color"
TRACE = logging.DEBUG - 1  # (9) LOG.trace() will not output at DEBUG level

DEFAULT_LOG_FORMAT = "%(levelName)s %(asctime)s %(name)s %(funcName)s() %(message)s"
DEFAULT_LOG_DATEFMT = "%-I:%M%p"
DEFAULT_LOG_TIMEZONE = "UTC"


_logging_constants_initialized = False


def initialize_logger_constants() -> None:
    """Register custom logging levels if not already registered."""
    global _logging_constants_initialized
    if _logging_constants_initialized:
        return
    _logging_constants_initialized = True
    if "TRACE" not in logging.getLevelNamesMapping():
        logging.addLevelName(TRACE, "TRACE")


# End of file: src/mstair/emailparts/xlogging/logger_constants.py
