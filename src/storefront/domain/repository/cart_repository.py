"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_owner(self, owner_id: str) -> Cart | None:
        """Return the owner's cart, or None if none was created yet."""

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every cart."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""
