"""Abstract repository for customer addresses (external collaborator)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.address import Address


class AddressRepository(ABC):

    @abstractmethod
    def get_by_id(self, address_id: str) -> Address | None:
        """Return an address by its ID, or None if not found."""

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Address]:
        """Return every address in the owner's address book."""

    @abstractmethod
    def save(self, address: Address) -> None:
        """Persist a new or updated address."""
