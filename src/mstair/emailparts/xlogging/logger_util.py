"""
Environment variable-driven log level configuration.

Two sources are supported:
- LOG_LEVEL holding a bare level ("DEBUG") or a list of pattern=LEVEL
  fragments ("mstair.emailparts=TRACE, other.*=INFO, WARNING").
- Per-logger overrides such as LOG_LEVEL_MSTAIR_EMAILPARTS_GRAMMAR=TRACE,
  where "_" becomes "." and "__" becomes a literal "_".

Resolution precedence for a logger name: exact > ancestor > glob > default > fallback.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, Final, NamedTuple

from mstair.emailparts.config import load_dotenv_once
from mstair.emailparts.xlogging.logger_constants import initialize_logger_constants


__all__ = ["LogEnvVar", "LogLevelConfig", "level_from_text"]

_LOG_VAR_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_LOG_VAR_ASSIGNMENT_OPERATOR_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")

_log_level_config_instance: LogLevelConfig | None = None


def level_from_text(text: str) -> int | None:
    """Return a numeric level from a level name or decimal string, else None."""
    initialize_logger_constants()
    s = text.strip().strip("\"'")
    if not s:
        return None
    if s.isdigit():
        return int(s, 10)
    level = logging.getLevelNamesMapping().get(s.upper())
    if isinstance(level, int) and level != logging.NOTSET:
        return level
    return None


@dataclass(slots=True)
class LogEnvVar:
    """
    Parsed representation of a LOG_LEVEL or LOG_LEVEL_<NAME> environment variable.
    """

    NAME_RX: ClassVar[re.Pattern[str]] = re.compile(r"^LOG_LEVEL(?P<SUFFIX>(?:_[A-Z][A-Z0-9_]*)*)$")

    name: str = field(default="", repr=False)
    module: str = ""
    value: str = field(default="", repr=False)

    @classmethod
    def from_env_var(cls, name: str, value: str) -> LogEnvVar | None:
        """Return a LogEnvVar if `name` is a log level variable, else None."""
        match = cls.NAME_RX.match(name)
        if match is None:
            return None
        suffix = match["SUFFIX"].lstrip("_")
        module = suffix.replace("__", "\0").replace("_", ".").replace("\0", "_").lower()
        return cls(name=name, module=module, value=value)

    @classmethod
    def from_environ(cls) -> Iterator[LogEnvVar]:
        """Yield LogEnvVar instances for all matching environment variables."""
        load_dotenv_once()
        for name, value in sorted(os.environ.items(), reverse=True):
            if env_var := cls.from_env_var(name, value):
                yield env_var


class LogEnvPatternLevel(NamedTuple):
    """Mapping from a logger name pattern to an integer log level."""

    pattern: str
    level: int


@dataclass(slots=True)
class LogLevelConfig:
    """Resolve logger levels from LOG_LEVEL* environment variables."""

    pattern_to_level: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.pattern_to_level:
            self.update_from_environment()

    def update_from_environment(self) -> None:
        """Rebuild pattern->level mappings from the current environment."""
        self.pattern_to_level.clear()
        for var in LogEnvVar.from_environ():
            for entry in self.parse_log_var(var):
                self.pattern_to_level[entry.pattern] = entry.level

    @staticmethod
    def parse_log_var(var: LogEnvVar) -> Iterator[LogEnvPatternLevel]:
        """Parse one LogEnvVar into pattern->level mappings; bad fragments are skipped."""
        for fragment in _LOG_VAR_FRAGMENT_SEPARATOR_RX.split(var.value):
            fragment = fragment.strip()
            if not fragment:
                continue
            parts = _LOG_VAR_ASSIGNMENT_OPERATOR_RX.split(fragment, maxsplit=1)
            pattern, level_text = (parts[0].strip(), parts[1]) if len(parts) == 2 else ("", parts[0])
            pattern = pattern.strip("'\"")
            if var.module:
                pattern = f"{var.module}.{pattern}" if pattern else var.module
            level = level_from_text(level_text)
            if level is not None:
                yield LogEnvPatternLevel(pattern, level)

    def get_effective_level(self, logger_name: str, *, default: int = logging.WARNING) -> int:
        """Return the configured level for a logger name."""
        name_lc = logger_name.lower()
        lc_map = {k.lower(): v for k, v in self.pattern_to_level.items() if k}

        # 1) Exact
        if name_lc in lc_map:
            return lc_map[name_lc]

        # 2) Ancestor
        parts = name_lc.split(".")
        while len(parts) > 1:
            parts = parts[:-1]
            ancestor = ".".join(parts)
            if ancestor in lc_map:
                return lc_map[ancestor]

        # 3) Best glob, longest fixed prefix wins
        best: tuple[int, int] | None = None
        for pattern, level in lc_map.items():
            if not any(ch in pattern for ch in "*?["):
                continue
            if fnmatch.fnmatch(name_lc, pattern):
                score = min((i for i, ch in enumerate(pattern) if ch in "*?["), default=len(pattern))
                if best is None or score > best[0]:
                    best = (score, level)
        if best is not None:
            return best[1]

        # 4) Default, then fallback
        return self.pattern_to_level.get("", default)

    @classmethod
    def get_instance(cls) -> LogLevelConfig:
        """Return the singleton LogLevelConfig instance, creating it if needed."""
        global _log_level_config_instance
        if _log_level_config_instance is None:
            initialize_logger_constants()
            _log_level_config_instance = LogLevelConfig()
        return _log_level_config_instance


# End of file: src/mstair/emailparts/xlogging/logger_util.py
