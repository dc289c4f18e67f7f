"""Typed failures reported by the storefront engine.

Each error names its `kind`, so callers can branch on the kind instead of on
message text. They subclass Protean's own exceptions, which keeps them
compatible with Protean's handlers and the HTTP exception mapping.
"""

from enum import Enum

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError


class ErrorKind(Enum):
    NOT_FOUND = "NotFound"
    OUT_OF_STOCK = "OutOfStock"
    INVALID_QUANTITY = "InvalidQuantity"
    INVALID_TRANSITION = "InvalidTransition"
    DUPLICATE_EMAIL = "DuplicateEmail"
    PLACEMENT_FAILED = "PlacementFailed"
    CONFLICT = "Conflict"


class NotFound(ObjectNotFoundError):
    """A referenced product, order or user does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.message = message

    def __str__(self) -> str:
        return self.message


class OutOfStock(ValidationError):
    """The requested quantity exceeds the stock available on the product.

    A reservation that lost a race against a concurrent writer is reported the
    same way, with `conflict` set.
    """

    kind = ErrorKind.OUT_OF_STOCK

    def __init__(self, message: str, conflict: bool = False) -> None:
        super().__init__({"quantity": [message]})
        self.conflict = conflict


class InvalidQuantity(ValidationError):
    kind = ErrorKind.INVALID_QUANTITY

    def __init__(self, message: str, field: str = "quantity") -> None:
        super().__init__({field: [message]})


class InvalidTransition(ValidationError):
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, message: str) -> None:
        super().__init__({"status": [message]})


class DuplicateEmail(ValidationError):
    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self, email: str) -> None:
        super().__init__({"email": [f"User already exists with email: {email}"]})


class Conflict(ValidationError):
    """A write lost to a concurrent update of the same record and was not applied."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str, field: str = "version") -> None:
        super().__init__({field: [message]})


class PlacementFailed(ProteanException):
    """Stock was reserved but the order could not be recorded.

    The reservation has already been handed back when this is reported.
    """

    kind = ErrorKind.PLACEMENT_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def first_message(exc: ValidationError) -> str:
    """Flatten a validation error's messages into one human readable line."""
    messages = exc.messages
    if isinstance(messages, dict):
        for field_messages in messages.values():
            if isinstance(field_messages, list) and field_messages:
                return str(field_messages[0])
            if field_messages:
                return str(field_messages)
        return "Invalid request"
    if isinstance(messages, list):
        return str(messages[0]) if messages else "Invalid request"
    return str(messages)


def require_positive_quantity(value, field: str = "quantity") -> int:
    """Return `value` when it is a positive integer, raise InvalidQuantity otherwise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantity(f"{field.capitalize()} must be a whole number, got {value!r}", field=field)
    if value <= 0:
        raise InvalidQuantity(f"{field.capitalize()} must be greater than zero, got {value}", field=field)
    return value


def require_non_negative_quantity(value, field: str = "quantity") -> int:
    """Return `value` when it is a non-negative integer, raise InvalidQuantity otherwise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantity(f"{field.capitalize()} must be a whole number, got {value!r}", field=field)
    if value < 0:
        raise InvalidQuantity(f"{field.capitalize()} cannot be negative, got {value}", field=field)
    return value
