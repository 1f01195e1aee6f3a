"""Tag domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError, ErrorKind


class TagNotFound(DomainError):
    """No tag exists with the requested name or id."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Tag not found."


class TagAlreadyExists(DomainError):
    """A tag with the same name already exists.

    Classified as an invalid argument (400), unlike category and product
    duplicates, which are conflicts (409).
    """

    kind = ErrorKind.INVALID_ARGUMENT
    default_message = "Tag already exists."


class TagReconciliationError(Exception):
    """A tag could neither be created nor re-fetched after repeated conflicts."""
