"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the test fakes.

Implementations hand out independent copies: mutating a returned
Product has no effect until it is written back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product unconditionally.

        Bumps ``product.version``.
        """

    @abstractmethod
    def compare_and_swap(self, product: Product, expected_version: int) -> bool:
        """Persist *product* only if the stored version is *expected_version*.

        On success the stored and the passed product both carry
        ``expected_version + 1`` and True is returned. A stale or missing
        record leaves storage untouched and returns False.
        """
