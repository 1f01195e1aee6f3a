"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exception_handler`` maps their kind to a response status.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, ErrorKind


class ProductAlreadyExists(DomainError):
    """A product with the same name already exists."""

    kind = ErrorKind.ALREADY_EXISTS
    default_message = "Product already exists."


class ProductNotFound(DomainError):
    """The requested product does not exist.

    Raised for both name and id look-ups.
    """

    kind = ErrorKind.NOT_FOUND
    default_message = "Product not found."


class StockOutOfRange(DomainError):
    """A stock adjustment would leave the quantity outside the stock column's range."""

    kind = ErrorKind.INVALID_ARGUMENT
    default_message = "Stock quantity out of range."
