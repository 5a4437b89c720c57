# File: src/mstair/emailparts/email_parts.py
"""
mstair.emailparts.email_parts - Structured, mutable access to an email address

EmailParts stores a username and a domain; the domain name and TLD are
derived on each read by splitting the domain at its first ".", so multi-label
TLDs are kept whole:

    >>> e = EmailParts("test.username@test-domain.com")
    >>> e.domain_name, e.domain_tld
    ('test-domain', '.com')
    >>> e.set_domain_tld(".co.id")
    >>> str(e)
    'test.username@test-domain.co.id'

Every setter validates its argument before writing, so a rejected value
leaves the instance unchanged.
"""

from __future__ import annotations

from typing import NamedTuple, Protocol, Self, runtime_checkable

from mstair.emailparts import grammar
from mstair.emailparts.errors import (
    InvalidEmailDomainFormatError,
    InvalidEmailDomainNameFormatError,
    InvalidEmailDomainTLDFormatError,
    InvalidEmailFormatError,
    InvalidEmailUsernameFormatError,
)
from mstair.emailparts.xlogging.logger_factory import create_logger


__all__ = [
    "EmailAddressParts",
    "EmailParts",
    "EmailPartsLike",
    "is_valid_email",
    "parse_email",
]

_LOG = create_logger(__name__)


@runtime_checkable
class EmailPartsLike(Protocol):
    """Read accessors and validating mutators shared by every email parts backing."""

    @property
    def email(self) -> str: ...
    @property
    def username(self) -> str: ...
    @property
    def domain(self) -> str: ...
    @property
    def domain_name(self) -> str: ...
    @property
    def domain_tld(self) -> str: ...
    @property
    def domain_tld_without_dot(self) -> str: ...

    def set_username(self, username: str) -> None: ...
    def set_domain(self, domain: str) -> None: ...
    def set_domain_name(self, domain_name: str) -> None: ...
    def set_domain_tld(self, domain_tld: str) -> None: ...


class EmailAddressParts(NamedTuple):
    username: str
    domain: str
    domain_name: str
    domain_tld: str


class EmailParts:
    """
    An email address held as username and domain.

    Construct from a full address with `EmailParts(email)`, or from parts with
    `from_username_and_domain()` / `from_full_parts()`. Failures raise an
    EmailPartsError subclass naming the part that did not validate.
    """

    __slots__ = ("_domain", "_username")

    def __init__(self, email: str) -> None:
        """
        :param email: Full address; the whole string must match username@name.tld.
        :raises InvalidEmailFormatError: If it does not.
        """
        if not grammar.is_email(email):
            _LOG.trace("rejected email %r", email)
            raise InvalidEmailFormatError(email)
        self._username, self._domain = grammar.split_email(email)
        _LOG.debug("parsed %r", email)

    @classmethod
    def from_email(cls, email: str) -> Self:
        return cls(email)

    @classmethod
    def from_username_and_domain(cls, username: str, domain: str) -> Self:
        """
        Build from a username and a full domain ("name.tld").

        The parts are checked first, then the composed address is parsed as a final gate.

        :raises InvalidEmailUsernameFormatError: If `username` is invalid.
        :raises InvalidEmailDomainFormatError: If `domain` is invalid.
        :raises InvalidEmailFormatError: If the composed address is invalid.
        """
        if not grammar.is_username(username):
            _LOG.trace("rejected username %r", username)
            raise InvalidEmailUsernameFormatError(username)
        if not grammar.is_domain(domain):
            _LOG.trace("rejected domain %r", domain)
            raise InvalidEmailDomainFormatError(domain)
        return cls(grammar.compose_email(username, domain))

    @classmethod
    def from_full_parts(cls, username: str, domain_name: str, domain_tld: str) -> Self:
        """
        Build from a username, a domain name and a TLD.

        The TLD may be given with or without its leading dot ("com", ".co.id").

        :raises InvalidEmailDomainNameFormatError: If `domain_name` is invalid.
        :raises InvalidEmailDomainTLDFormatError: If `domain_tld` is invalid.
        :raises InvalidEmailUsernameFormatError: If `username` is invalid.
        """
        if not grammar.is_domain_name(domain_name):
            _LOG.trace("rejected domain name %r", domain_name)
            raise InvalidEmailDomainNameFormatError(domain_name)
        if not grammar.is_domain_tld(domain_tld):
            _LOG.trace("rejected domain tld %r", domain_tld)
            raise InvalidEmailDomainTLDFormatError(domain_tld)
        return cls.from_username_and_domain(username, grammar.compose_domain(domain_name, domain_tld))

    # --- accessors ------------------------------------------------------------------

    @property
    def email(self) -> str:
        return grammar.compose_email(self._username, self._domain)

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self.set_username(value)

    @property
    def domain(self) -> str:
        return self._domain

    @domain.setter
    def domain(self, value: str) -> None:
        self.set_domain(value)

    @property
    def domain_name(self) -> str:
        """Domain up to (not including) its first "."."""
        return grammar.split_domain(self._domain)[0]

    @domain_name.setter
    def domain_name(self, value: str) -> None:
        self.set_domain_name(value)

    @property
    def domain_tld(self) -> str:
        """Domain from its first "." onward, e.g. ".co.id"."""
        return grammar.split_domain(self._domain)[1]

    @domain_tld.setter
    def domain_tld(self, value: str) -> None:
        self.set_domain_tld(value)

    @property
    def domain_tld_without_dot(self) -> str:
        return self.domain_tld.removeprefix(grammar.DOMAIN_SEPARATOR)

    def as_tuple(self) -> EmailAddressParts:
        return EmailAddressParts(
            username=self._username,
            domain=self._domain,
            domain_name=self.domain_name,
            domain_tld=self.domain_tld,
        )

    # --- mutators -------------------------------------------------------------------
    # The composed domain is not re-validated; under the strict policy a valid
    # name plus a valid TLD always yields a valid domain.

    def set_username(self, username: str) -> None:
        """:raises InvalidEmailUsernameFormatError: If `username` is invalid; nothing changes."""
        if not grammar.is_username(username):
            _LOG.trace("rejected username %r for %s", username, self)
            raise InvalidEmailUsernameFormatError(username)
        self._username = username

    def set_domain(self, domain: str) -> None:
        """:raises InvalidEmailDomainFormatError: If `domain` is invalid; nothing changes."""
        if not grammar.is_domain(domain):
            _LOG.trace("rejected domain %r for %s", domain, self)
            raise InvalidEmailDomainFormatError(domain)
        self._domain = domain

    def set_domain_name(self, domain_name: str) -> None:
        """
        Replace the domain name, keeping the current TLD.

        :raises InvalidEmailDomainNameFormatError: If `domain_name` is invalid; nothing changes.
        """
        if not grammar.is_domain_name(domain_name):
            _LOG.trace("rejected domain name %r for %s", domain_name, self)
            raise InvalidEmailDomainNameFormatError(domain_name)
        self._domain = grammar.compose_domain(domain_name, self.domain_tld)

    def set_domain_tld(self, domain_tld: str) -> None:
        """
        Replace the TLD, keeping the current domain name. A leading "." is added if missing.

        :raises InvalidEmailDomainTLDFormatError: If `domain_tld` is invalid; nothing changes.
        """
        if not grammar.is_domain_tld(domain_tld):
            _LOG.trace("rejected domain tld %r for %s", domain_tld, self)
            raise InvalidEmailDomainTLDFormatError(domain_tld)
        self._domain = grammar.compose_domain(self.domain_name, domain_tld)

    # --- dunders --------------------------------------------------------------------

    def __str__(self) -> str:
        return self.email

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.email!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmailParts):
            return NotImplemented
        return self.email == other.email

    __hash__ = None  # type: ignore[assignment]


def parse_email(email: str) -> EmailParts | None:
    """
    Parse `email` into EmailParts, or return None if it is not a valid address.

    :param str email: Source string like "user@example.com".
    :return: EmailParts, or None if invalid.
    """
    try:
        return EmailParts(email)
    except InvalidEmailFormatError:
        return None


def is_valid_email(email: str) -> bool:
    return grammar.is_email(email)


# End of file: src/mstair/emailparts/email_parts.py
