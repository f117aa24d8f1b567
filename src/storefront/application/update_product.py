"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.keyed_lock import PRODUCT_LOCKS, KeyedLock


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        product_locks: KeyedLock = PRODUCT_LOCKS,
    ) -> None:
        self._product_repo = product_repo
        self._product_locks = product_locks

    def handle(self, product_id: str, new_price: str, sale_price: str | None = None) -> Product:
        """Update a product's price.

        This does NOT affect any existing carts or orders; they captured
        a price snapshot.
        """
        with self._product_locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)

            product.update_price(
                Money.of(new_price),
                Money.of(sale_price) if sale_price else None,
            )
            self._product_repo.save(product)
        return product
