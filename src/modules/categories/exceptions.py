"""Category domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exception_handler`` maps their kind to a response status.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, ErrorKind


class CategoryNotFound(DomainError):
    """No category exists with the requested name."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Category not found."


class CategoryAlreadyExists(DomainError):
    """A category with the same name already exists."""

    kind = ErrorKind.ALREADY_EXISTS
    default_message = "Category already exists."


class CategoryNotEmpty(DomainError):
    """The category still has products and cannot be deleted."""

    kind = ErrorKind.NOT_EMPTY
    default_message = "Category is not empty."
