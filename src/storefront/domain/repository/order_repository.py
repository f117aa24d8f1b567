"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def exists_by_order_number(self, order_number: str) -> bool:
        """True if any order already uses *order_number*."""

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Order]:
        """Return the owner's orders, oldest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and assign its ID.

        Raises ConflictError if the order number is already taken.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Update an existing order.

        Raises ConflictError if the stored version differs from
        ``order.version`` (someone else saved first); otherwise stores the
        order and bumps ``order.version``.
        """
