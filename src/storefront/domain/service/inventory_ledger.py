"""Domain service: Inventory Ledger.

Owns every write to a product's stock counter. Each write is a
read-check-modify cycle done under the product's lock and committed
with a compare-and-swap on the product ``version``, so:

- two in-process callers on the same product run one after the other;
- callers on different products never wait for each other;
- a writer outside this process is detected by the version check and the
  cycle is retried, up to ``max_retries`` times, before ConflictError.

A failed reservation never writes anything, so stock cannot go negative
and nobody observes a partial decrement.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidArgumentError,
)
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.keyed_lock import PRODUCT_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)

DEFAULT_MAX_RETRIES = 5


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: KeyedLock = PRODUCT_LOCKS,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        if max_retries < 1:
            raise InvalidArgumentError("max_retries must be at least 1")
        self._product_repo = product_repo
        self._locks = locks
        self._max_retries = max_retries

    # --- Single-product operations --------------------------------------------

    def reserve(self, product_id: str, quantity: int, record_sale: bool = False) -> Product:
        """Atomically take *quantity* units out of stock.

        Raises InsufficientStockError (and writes nothing) if the product
        holds fewer than *quantity* units.
        """
        if quantity <= 0:
            raise InvalidArgumentError("Reservation quantity must be positive")

        def take(product: Product) -> None:
            product.remove_stock(quantity)
            if record_sale:
                product.record_sale(quantity)

        return self._apply(product_id, take)

    def release(self, product_id: str, quantity: int, revoke_sale: bool = False) -> Product:
        """Put *quantity* units back into stock."""
        if quantity < 0:
            raise InvalidArgumentError("Release quantity cannot be negative")

        def give_back(product: Product) -> None:
            product.add_stock(quantity)
            if revoke_sale:
                product.revoke_sale(quantity)

        return self._apply(product_id, give_back)

    def set_stock(self, product_id: str, quantity: int) -> Product:
        """Overwrite the stock counter (restock / stock-take)."""
        if quantity < 0:
            raise InvalidArgumentError("Stock quantity cannot be negative")

        def overwrite(product: Product) -> None:
            product.stock_quantity = quantity

        return self._apply(product_id, overwrite)

    # --- Multi-product operations ---------------------------------------------

    def check_available(self, items: list[tuple[str, int]]) -> list[Product]:
        """Verify every (product_id, quantity) pair without mutating anything.

        Fails on the first product that is missing or short of stock.
        """
        products: list[Product] = []
        for product_id, qty in items:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)
            if not product.has_stock_for(qty):
                raise InsufficientStockError(product.name, product.stock_quantity, qty)
            products.append(product)
        return products

    def reserve_all(self, items: list[tuple[str, int]], record_sale: bool = False) -> None:
        """Reserve every pair or none of them.

        If a reservation fails part-way, the ones already applied are
        released again before the error propagates.
        """
        applied: list[tuple[str, int]] = []
        try:
            for product_id, qty in items:
                self.reserve(product_id, qty, record_sale=record_sale)
                applied.append((product_id, qty))
        except Exception:
            self._undo(applied, lambda pid, q: self.release(pid, q, revoke_sale=record_sale))
            raise

    def release_all(self, items: list[tuple[str, int]]) -> None:
        """Release every pair or none of them."""
        applied: list[tuple[str, int]] = []
        try:
            for product_id, qty in items:
                self.release(product_id, qty)
                applied.append((product_id, qty))
        except Exception:
            self._undo(applied, self.reserve)
            raise

    def holding(self, product_ids: list[str]):
        """Keep every listed product locked for the duration of the block.

        Other callers cannot reserve or release these products meanwhile;
        this ledger's own writes still go through, as the locks are reentrant.
        """
        return self._locks.hold_all(product_ids)

    # --- Queries --------------------------------------------------------------

    @staticmethod
    def is_low(product: Product) -> bool:
        return product.is_low_stock

    @staticmethod
    def is_out_of_stock(product: Product) -> bool:
        return not product.is_in_stock

    def low_stock_report(self) -> list[Product]:
        """Products at or below their low-stock threshold, emptiest first."""
        low = [p for p in self._product_repo.list_all() if self.is_low(p)]
        return sorted(low, key=lambda p: (p.stock_quantity, p.name))

    # --- Internal helpers -----------------------------------------------------

    def _apply(self, product_id: str, mutate: Callable[[Product], None]) -> Product:
        with self._locks.hold(product_id):
            for attempt in range(1, self._max_retries + 1):
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError("Product", product_id)
                expected = product.version
                mutate(product)
                if self._product_repo.compare_and_swap(product, expected):
                    return product
                logger.warning(
                    "Stock write lost a version race",
                    product_id=product_id,
                    attempt=attempt,
                )
        raise ConflictError(
            f"Stock for product '{product_id}' changed concurrently "
            f"{self._max_retries} times in a row"
        )

    @staticmethod
    def _undo(applied: list[tuple[str, int]], compensate: Callable[[str, int], Product]) -> None:
        for product_id, qty in reversed(applied):
            try:
                compensate(product_id, qty)
            except Exception:
                logger.exception(
                    "Stock compensation failed",
                    product_id=product_id,
                    quantity=qty,
                )
