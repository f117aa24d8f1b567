"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each error keeps the values it was raised with as attributes so callers can
react to them without parsing the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidArgumentError(ValidationError):
    """An input value is malformed (negative quantity, non-positive price...)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    def __init__(self, entity_kind: str, key: object) -> None:
        self.entity_kind = entity_kind
        self.key = key
        super().__init__(f"{entity_kind} '{key}' not found")


class EmptyCartError(DomainException):
    """Checkout was attempted on a cart without lines."""

    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id
        super().__init__(f"Cannot check out an empty cart (owner '{owner_id}')")


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the product's available stock."""

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Available: {available}, Requested: {requested}"
        )


class InvalidStateTransitionError(DomainException):
    """A status change is not allowed by the state machine."""

    def __init__(self, from_status: object, to_status: object) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot move from {_label(from_status)} to {_label(to_status)}"
        )


class ConflictError(DomainException):
    """A concurrent update won the race and the retry budget is spent."""


def _label(status: object) -> str:
    return getattr(status, "value", str(status))
