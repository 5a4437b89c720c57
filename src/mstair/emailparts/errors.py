# File: src/mstair/emailparts/errors.py
"""
Error kinds raised when an email address, or one of its parts, fails validation.

One exception class per grammar. All derive from EmailPartsError, itself a
ValueError, so callers may catch broadly or per part.
"""

from __future__ import annotations

from typing import ClassVar


__all__ = [
    "EmailPartsError",
    "InvalidEmailDomainFormatError",
    "InvalidEmailDomainNameFormatError",
    "InvalidEmailDomainTLDFormatError",
    "InvalidEmailFormatError",
    "InvalidEmailUsernameFormatError",
]


class EmailPartsError(ValueError):
    """Base class for all email part validation failures."""

    default_message: ClassVar[str] = "invalid email"

    def __init__(self, value: str, message: str | None = None) -> None:
        """
        :param value: The rejected input, kept for diagnostics.
        :param message: Optional override of the class default message.
        """
        self.value: str = value
        self.message: str = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class InvalidEmailFormatError(EmailPartsError):
    default_message = "invalid email format"


class InvalidEmailUsernameFormatError(EmailPartsError):
    default_message = "invalid email username format"


class InvalidEmailDomainFormatError(EmailPartsError):
    default_message = "invalid email domain format"


class InvalidEmailDomainNameFormatError(EmailPartsError):
    default_message = "invalid email domain name format"


class InvalidEmailDomainTLDFormatError(EmailPartsError):
    default_message = "invalid email domain tld format"


# End of file: src/mstair/emailparts/errors.py
