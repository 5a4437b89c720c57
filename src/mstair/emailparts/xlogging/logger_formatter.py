import logging
import sys
import traceback
from datetime import datetime
from typing import Any, Literal

import pytz
from colorama import Fore, Style

from mstair.emailparts import config as cfg
from mstair.emailparts.xlogging.logger_constants import DEFAULT_LOG_TIMEZONE, K_COLOR


__all__ = ["CoreFormatter", "get_color_code", "rgb_code"]


FormatStyle = Literal["%", "{", "$"]


def rgb_code(r: int, g: int, b: int) -> str:
    """
    Convert RGB values to ANSI escape code for terminal color output.

    :param r: Red component (0-255)
    :param g: Green component (0-255)
    :param b: Blue component (0-255)
    :return str: ANSI escape code for the specified RGB color.
    """
    return f"\033[38;2;{max(0, min(255, r))};{max(0, min(255, g))};{max(0, min(255, b))}m"


COLOR_MAP: dict[str | None, str] = {
    "TRACE": rgb_code(96, 0, 64),  # Mauve for trace logs
    "DEBUG": Style.DIM,
    "INFO": rgb_code(184, 184, 216),
    "WARNING": Fore.YELLOW,
    "ERROR": rgb_code(224, 128, 0),  # Orange
    "CRITICAL": Fore.LIGHTRED_EX,
    None: Style.RESET_ALL,
}


def get_color_code(key: Any = None) -> str:
    """Return the ANSI code for a level name, COLOR_MAP key, "#rrggbb" or colorama Fore name."""
    if not cfg.in_desktop_mode():
        return ""

    if key in {"", "RESET"} or key is None:
        return Style.RESET_ALL

    if key in COLOR_MAP:
        return COLOR_MAP[key]

    if isinstance(key, str) and key.startswith("#") and len(key) == 7:
        return rgb_code(*[int(key[i : i + 2], 16) for i in (1, 3, 5)])

    _clean_key = str(key).upper().removesuffix("_EX").replace("_", "").replace("BRIGHT", "LIGHT")
    if _clean_key.startswith("LIGHT"):
        _clean_key += "_EX"
    if _clean_key in dir(Fore):
        return getattr(Fore, _clean_key)

    return Style.RESET_ALL


class CoreFormatter(logging.Formatter):
    """
    Formatter for CoreLogger output: color-coded level names, optional per-record
    message color (extra={"color": ...}),
    and timestamps rendered in a configurable pytz timezone.

    Adds the record attribute `levelName` (colored levelname) for use in `fmt`.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        timezone: str | None = None,
    ) -> None:
        """
        :param fmt: The format string for log messages.
        :param datefmt: The date format string for log timestamps.
        :param style: The style for the format string (default is "%").
        :param validate: Whether to validate the format strings (default is True).
        :param timezone: pytz timezone name for timestamps (default is UTC).
        """
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate)
        try:
            self.tz = pytz.timezone(timezone or DEFAULT_LOG_TIMEZONE)
        except pytz.UnknownTimeZoneError:
            print(f"Unknown log timezone {timezone!r}, using UTC", file=sys.stderr)
            self.tz = pytz.utc

    def format(self, record: logging.LogRecord) -> str:
        record.levelName = get_color_code(record.levelname) + record.levelname + get_color_code()
        message = super().format(record)
        color_key = getattr(record, K_COLOR, None)
        if color_key:
            message = get_color_code(color_key) + message + get_color_code()
        return message

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        _datetime = datetime.fromtimestamp(record.created, self.tz)
        _result: str = ""
        if datefmt:
            try:
                _result = _datetime.strftime(datefmt.replace("%-", "%"))
                _result = _result.replace("AM", "am").replace("PM", "pm").lstrip("0")
            except ValueError:
                traceback.print_exc(file=sys.stderr)
        return _result or _datetime.isoformat()


# End of file: src/mstair/emailparts/xlogging/logger_formatter.py
