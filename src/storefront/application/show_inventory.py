"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    stock: int
    sold: int
    low: bool
    out_of_stock: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, low_only: bool = False) -> list[InventoryLineDTO]:
        if low_only:
            products = InventoryLedger(self._product_repo).low_stock_report()
        else:
            products = self._product_repo.list_all()
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                stock=p.stock_quantity,
                sold=p.sales_count,
                low=InventoryLedger.is_low(p),
                out_of_stock=InventoryLedger.is_out_of_stock(p),
            )
            for p in products
        ]
