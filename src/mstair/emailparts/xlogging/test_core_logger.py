"""
Tests for CoreLogger, create_logger, initialize_root and CoreFormatter.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest
from colorama import Fore

from mstair.emailparts import config as cfg
from mstair.emailparts.xlogging.core_logger import CoreLogger, initialize_root
from mstair.emailparts.xlogging.logger_constants import TRACE
from mstair.emailparts.xlogging.logger_factory import create_logger
from mstair.emailparts.xlogging.logger_formatter import CoreFormatter, get_color_code, rgb_code


@pytest.fixture
def clean_logging() -> Iterator[None]:
    """Reset root logger state (handlers, level, init flag) around tests."""
    root = logging.getLogger()
    prev_level = root.level
    prev_handlers = list(root.handlers)
    prev_attr = getattr(root, "_emailparts_corelogger_initialized", None)

    root.handlers = []
    root.setLevel(logging.NOTSET)
    if hasattr(root, "_emailparts_corelogger_initialized"):
        delattr(root, "_emailparts_corelogger_initialized")

    yield

    root.handlers = prev_handlers
    root.setLevel(prev_level)
    if prev_attr is not None:
        setattr(root, "_emailparts_corelogger_initialized", prev_attr)
    elif hasattr(root, "_emailparts_corelogger_initialized"):
        delattr(root, "_emailparts_corelogger_initialized")


@pytest.fixture
def no_color() -> Iterator[None]:
    cfg.in_desktop_mode(override=False)
    yield
    cfg.in_desktop_mode(unset_override=True)


def _record(msg: str = "hello %s", args: tuple[object, ...] = ("world",)) -> logging.LogRecord:
    return logging.LogRecord("demo", logging.WARNING, __file__, 10, msg, args, None)


def test_create_logger_returns_registered_core_logger() -> None:
    log = create_logger("mstair.emailparts.test_factory")
    assert isinstance(log, CoreLogger)
    assert create_logger("mstair.emailparts.test_factory") is log
    assert logging.getLogger("mstair.emailparts.test_factory") is log


def test_create_logger_applies_level() -> None:
    log = create_logger("mstair.emailparts.test_level", level="DEBUG")
    assert log.level == logging.DEBUG
    assert "DEBUG" in repr(log)


def test_create_logger_rejects_plain_logger() -> None:
    logging.getLogger("mstair.emailparts.test_plain")
    with pytest.raises(TypeError):
        create_logger("mstair.emailparts.test_plain")


def test_prefix_and_caller(caplog: pytest.LogCaptureFixture) -> None:
    log = create_logger("mstair.emailparts.test_prefix", level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG, logger=log.name):
        with log.prefix_with("[a]"):
            with log.prefix_with("[b]"):
                log.info("x=%d", 1)
            log.debug("y")
        log.warning("z")

    assert caplog.messages == ["[a] > [b] > x=1", "[a] > y", "z"]
    assert {r.funcName for r in caplog.records} == {"test_prefix_and_caller"}


def test_trace_level(caplog: pytest.LogCaptureFixture) -> None:
    log = create_logger("mstair.emailparts.test_trace")
    with caplog.at_level(logging.DEBUG, logger=log.name):
        log.trace("hidden")
    assert caplog.records == []

    with caplog.at_level(TRACE, logger=log.name):
        log.trace("shown %s", "now")
    assert caplog.records[-1].levelname == "TRACE"
    assert caplog.records[-1].getMessage() == "shown now"
    assert caplog.records[-1].funcName == "test_trace_level"


def test_initialize_root_is_idempotent(clean_logging: None) -> None:
    initialize_root()
    initialize_root()
    root = logging.getLogger()
    stderr_handlers = [
        h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    assert len(stderr_handlers) == 1
    assert isinstance(stderr_handlers[0].formatter, CoreFormatter)
    assert root.level == logging.WARNING


def test_initialize_root_force_sets_level(clean_logging: None) -> None:
    initialize_root()
    initialize_root(level="info", force=True)
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert sum(isinstance(h.formatter, CoreFormatter) for h in root.handlers) == 1


def test_formatter_without_color(no_color: None) -> None:
    formatter = CoreFormatter("%(levelName)s %(name)s %(message)s")
    assert formatter.format(_record()) == "WARNING demo hello world"


def test_formatter_with_color() -> None:
    cfg.in_desktop_mode(override=True)
    try:
        formatter = CoreFormatter("%(levelName)s %(message)s")
        out = formatter.format(_record())
        assert out.startswith(get_color_code("WARNING") + "WARNING")
        assert "\x1b[" in out
    finally:
        cfg.in_desktop_mode(unset_override=True)


def test_format_time_uses_timezone(no_color: None) -> None:
    record = _record()
    record.created = 0.0  # 1970-01-01T00:00:00Z
    assert CoreFormatter(timezone="UTC").formatTime(record, "%Y-%m-%d %H") == "1970-01-01 00"
    assert CoreFormatter(timezone="Asia/Tokyo").formatTime(record, "%H") == "9"
    assert CoreFormatter(timezone="Asia/Tokyo").formatTime(record).startswith("1970-01-01T09:00:00")


def test_unknown_timezone_falls_back_to_utc(capsys: pytest.CaptureFixture[str]) -> None:
    formatter = CoreFormatter(timezone="Mars/Olympus")
    assert formatter.tz.zone == "UTC"
    assert "Mars/Olympus" in capsys.readouterr().err


def test_color_codes() -> None:
    assert rgb_code(300, -5, 16) == "\033[38;2;255;0;16m"
    cfg.in_desktop_mode(override=True)
    try:
        assert get_color_code("#102030") == rgb_code(16, 32, 48)
        assert get_color_code("bright_red") == Fore.LIGHTRED_EX
        assert get_color_code("red") == Fore.RED
    finally:
        cfg.in_desktop_mode(unset_override=True)
    cfg.in_desktop_mode(override=False)
    try:
        assert get_color_code("WARNING") == ""
    finally:
        cfg.in_desktop_mode(unset_override=True)


def test_formatter_applies_record_color() -> None:
    cfg.in_desktop_mode(override=True)
    try:
        record = _record()
        record.color = "red"
        out = CoreFormatter("%(message)s").format(record)
        assert out == Fore.RED + "hello world" + get_color_code()
    finally:
        cfg.in_desktop_mode(unset_override=True)
