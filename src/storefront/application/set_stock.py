"""Application service: Set Stock use case (restock / stock-take)."""

from __future__ import annotations

import structlog

from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class SetStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        ledger: InventoryLedger | None = None,
    ) -> None:
        self._ledger = ledger or InventoryLedger(product_repo)

    def handle(self, product_id: str, quantity: int) -> Product:
        """Set the stock counter of a product to *quantity*."""
        product = self._ledger.set_stock(product_id, quantity)
        logger.info("Stock set", product_id=product_id, quantity=quantity)
        return product

    def add(self, product_id: str, quantity: int) -> Product:
        """Receive *quantity* more units."""
        product = self._ledger.release(product_id, quantity)
        logger.info(
            "Stock received",
            product_id=product_id,
            quantity=quantity,
            stock=product.stock_quantity,
        )
        return product
