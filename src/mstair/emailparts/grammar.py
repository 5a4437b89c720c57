"""
mstair.emailparts.grammar - Email address grammar and part helpers

A simplified ASCII subset of an email address:

    username    [a-zA-Z0-9._%+-]+
    domain      [a-zA-Z0-9.-]+ "." [a-zA-Z]+
    email       username "@" domain

The full email check always matches the whole string. Validators for a
single part follow the active SetterValidation policy (see config):
STRICT anchors both ends, PREFIX reproduces the legacy partial matches.
"""

from __future__ import annotations

import re
from typing import Final

from mstair.emailparts import config as cfg
from mstair.emailparts.config import SetterValidation


__all__ = [
    "DOMAIN_SEPARATOR",
    "EMAIL_SEPARATOR",
    "compose_domain",
    "compose_email",
    "is_domain",
    "is_domain_name",
    "is_domain_tld",
    "is_email",
    "is_username",
    "normalize_tld",
    "split_domain",
    "split_email",
]

EMAIL_SEPARATOR: Final = "@"
DOMAIN_SEPARATOR: Final = "."

_USERNAME: Final = r"[a-zA-Z0-9._%+-]+"
_DOMAIN_NAME: Final = r"[a-zA-Z0-9.-]+"
_DOMAIN_TLD: Final = r"[a-zA-Z]+"
_DOMAIN: Final = rf"{_DOMAIN_NAME}\.{_DOMAIN_TLD}"

# --- compiled once, shared by every call ------------------------------------------

_USERNAME_RE: Final[re.Pattern[str]] = re.compile(_USERNAME)
_DOMAIN_NAME_RE: Final[re.Pattern[str]] = re.compile(_DOMAIN_NAME)
_DOMAIN_TLD_RE: Final[re.Pattern[str]] = re.compile(_DOMAIN_TLD)
_DOMAIN_RE: Final[re.Pattern[str]] = re.compile(_DOMAIN)
_DOMAIN_END_RE: Final[re.Pattern[str]] = re.compile(rf"{_DOMAIN}$")
_EMAIL_RE: Final[re.Pattern[str]] = re.compile(rf"{_USERNAME}{EMAIL_SEPARATOR}{_DOMAIN}")

# A TLD given on its own may carry its leading dot and several labels (".co.id").
_TLD_VALUE_RE: Final[re.Pattern[str]] = re.compile(rf"\.?{_DOMAIN_TLD}(?:\.{_DOMAIN_TLD})*")


def _policy(policy: SetterValidation | str | None) -> SetterValidation:
    return cfg.setter_validation() if policy is None else SetterValidation(policy)


def is_email(value: str) -> bool:
    """Return True if the whole of `value` is username@domain."""
    return _EMAIL_RE.fullmatch(value) is not None


def is_username(value: str, *, policy: SetterValidation | str | None = None) -> bool:
    """
    Return True if `value` is a valid username.

    PREFIX only requires a valid username at the start, so "abc!!" passes.
    """
    if _policy(policy) is SetterValidation.PREFIX:
        return _USERNAME_RE.match(value) is not None
    return _USERNAME_RE.fullmatch(value) is not None


def is_domain(value: str, *, policy: SetterValidation | str | None = None) -> bool:
    """
    Return True if `value` is a valid name.tld domain.

    PREFIX only requires the domain to end the value, so "!!x.com" passes.
    """
    if _policy(policy) is SetterValidation.PREFIX:
        return _DOMAIN_END_RE.search(value) is not None
    return _DOMAIN_RE.fullmatch(value) is not None


def is_domain_name(value: str, *, policy: SetterValidation | str | None = None) -> bool:
    """Return True if `value` is a valid domain name (the part before the TLD)."""
    if _policy(policy) is SetterValidation.PREFIX:
        return _DOMAIN_NAME_RE.search(value) is not None
    return _DOMAIN_NAME_RE.fullmatch(value) is not None


def is_domain_tld(value: str, *, policy: SetterValidation | str | None = None) -> bool:
    """
    Return True if `value` is a valid TLD, with or without its leading dot.

    STRICT accepts "com", ".com", "co.id" and ".co.id". PREFIX accepts any
    value containing a letter.
    """
    if _policy(policy) is SetterValidation.PREFIX:
        return _DOMAIN_TLD_RE.search(value) is not None
    return _TLD_VALUE_RE.fullmatch(value) is not None


def split_email(email: str) -> tuple[str, str]:
    """Split at the first "@" into (username, domain)."""
    username, _, domain = email.partition(EMAIL_SEPARATOR)
    return username, domain


def split_domain(domain: str) -> tuple[str, str]:
    """
    Split at the first "." into (domain_name, domain_tld).

    The TLD keeps its leading dot: "b.co.id" -> ("b", ".co.id").
    """
    name, sep, rest = domain.partition(DOMAIN_SEPARATOR)
    return name, sep + rest


def normalize_tld(tld: str) -> str:
    """Prepend "." to `tld` unless it already starts with one."""
    return tld if tld.startswith(DOMAIN_SEPARATOR) else DOMAIN_SEPARATOR + tld


def compose_email(username: str, domain: str) -> str:
    return f"{username}{EMAIL_SEPARATOR}{domain}"


def compose_domain(domain_name: str, domain_tld: str) -> str:
    return domain_name + normalize_tld(domain_tld)
