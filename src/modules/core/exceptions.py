"""Domain error taxonomy shared by all catalog modules.

Every business-rule violation is raised as a subclass of ``DomainError``
carrying an ``ErrorKind``.  The kinds form a closed set; translating a kind
into a transport status happens once, in ``modules.core.exception_handler``.
Domain code never knows about HTTP.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_EMPTY = "not_empty"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"


class DomainError(Exception):
    """Base class for every named failure raised by the service layer."""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "Request could not be processed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidRequest(DomainError):
    """The request body or query string is malformed."""

    kind = ErrorKind.BAD_REQUEST
    default_message = "Malformed request."


class Unauthorized(DomainError):
    """The caller is not allowed to perform the operation."""

    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized."
