# File: src/mstair/emailparts/config.py
"""
Environment and execution context settings for mstair.emailparts.

Settings come from environment variables, optionally seeded from a `.env`
file, and may be overridden per thread. Overrides live in thread-local
storage so tests and callers can change behavior without leaking into
other threads.

Exports:
- SetterValidation: standalone validator policy (strict or prefix).
- setter_validation(): read or override the active policy.
- setter_validation_context(): temporarily switch the policy.
- in_test_mode(): check or override whether code is in test mode.
- in_desktop_mode(): check or override whether output is interactive.
- load_dotenv_once(): load `.env` into os.environ at most once.

Environment:
- EMAILPARTS_SETTER_VALIDATION: "strict" (default) or "prefix".
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from functools import cache

import dotenv


__all__ = [
    "ENV_SETTER_VALIDATION",
    "SetterValidation",
    "in_desktop_mode",
    "in_test_mode",
    "load_dotenv_once",
    "setter_validation",
    "setter_validation_context",
]

ENV_SETTER_VALIDATION = "EMAILPARTS_SETTER_VALIDATION"

_tls = threading.local()


class SetterValidation(StrEnum):
    """How standalone part validators anchor their patterns."""

    STRICT = "strict"
    """Anchor both ends; the whole value must match."""
    PREFIX = "prefix"
    """Legacy looseness; trailing (or surrounding) garbage is not rejected."""


@dataclass
class TLSAttrs:
    """Thread-local overrides for environment context."""

    setter_validation_override: SetterValidation | None = None
    in_test_mode_override: bool | None = None
    in_desktop_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


@cache
def load_dotenv_once() -> bool:
    """
    Load variables from the nearest `.env` file into os.environ, once per process.

    Existing environment variables are never overridden.

    :return: True if at least one variable was set, else False.
    """
    path = dotenv.find_dotenv(usecwd=True)
    if not path:
        return False
    return dotenv.load_dotenv(dotenv_path=path, override=False, encoding="utf-8")


def setter_validation(
    *,
    unset_override: bool = False,
    override: SetterValidation | str | None = None,
) -> SetterValidation:
    """
    Return the active standalone validator policy, with optional override.

    Detection order:
      1. Explicit override (thread-local).
      2. EMAILPARTS_SETTER_VALIDATION (after loading `.env`).
      3. SetterValidation.STRICT.

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If set, stores the override for this thread.
    :return: The policy in effect.
    :raises ValueError: If `override` is not a known policy name.
    """
    tls = _get_tls()
    if unset_override:
        tls.setter_validation_override = None
    if override is not None:
        tls.setter_validation_override = SetterValidation(override)
        return tls.setter_validation_override
    if tls.setter_validation_override is not None:
        return tls.setter_validation_override

    load_dotenv_once()
    raw = os.environ.get(ENV_SETTER_VALIDATION, "").strip().lower()
    if not raw:
        return SetterValidation.STRICT
    try:
        return SetterValidation(raw)
    except ValueError:
        # Plain logger: xlogging imports this module, so create_logger is not available here.
        logging.getLogger(__name__).warning(
            "Ignoring unknown %s=%r, using %r", ENV_SETTER_VALIDATION, raw, SetterValidation.STRICT.value
        )
        return SetterValidation.STRICT


@contextmanager
def setter_validation_context(policy: SetterValidation | str) -> Iterator[SetterValidation]:
    """
    Context manager to switch the standalone validator policy temporarily.

    Restores the previous override on exit. Nested contexts are supported.
    """
    tls = _get_tls()
    previous = tls.setter_validation_override
    tls.setter_validation_override = SetterValidation(policy)
    try:
        yield tls.setter_validation_override
    finally:
        tls.setter_validation_override = previous


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if running in test mode, with optional override.

    Detection order:
      1. Explicit override (thread-local).
      2. Presence of pytest/unittest in sys.modules.
      3. Known environment variables (e.g. PYTEST_CURRENT_TEST, CI).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if test mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_test_mode_override = None
    if override is not None:
        tls.in_test_mode_override = override
        return override
    if tls.in_test_mode_override is not None:
        return tls.in_test_mode_override
    if "pytest" in sys.modules or "unittest" in sys.modules:
        return True

    env = os.environ
    return bool(env.get("PYTEST_CURRENT_TEST")) or env.get("CI") == "true"


def in_desktop_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Determine if log output should carry terminal color codes.

    Rules:
      - Explicit override wins.
      - NO_COLOR in the environment disables color.
      - Returns True in test mode.
      - Otherwise True only when stderr is a terminal.

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if desktop mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_desktop_mode_override = None
    if override is not None:
        tls.in_desktop_mode_override = override
        return override
    if tls.in_desktop_mode_override is not None:
        return tls.in_desktop_mode_override

    if os.environ.get("NO_COLOR"):
        return False
    if in_test_mode():
        return True
    return bool(getattr(sys.stderr, "isatty", lambda: False)())


# End of file: src/mstair/emailparts/config.py
