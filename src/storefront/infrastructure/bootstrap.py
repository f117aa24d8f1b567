"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.order_numbers import OrderNumberGenerator
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.persistence.json_address_repository import (
    JsonAddressRepository,
)
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().data_dir / "carts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def address_repository() -> JsonAddressRepository:
    return JsonAddressRepository(settings().data_dir / "addresses.json")


def inventory_ledger(product_repo: JsonProductRepository | None = None) -> InventoryLedger:
    return InventoryLedger(
        product_repo or product_repository(),
        max_retries=settings().stock_retries,
    )


def order_number_generator(order_repo: JsonOrderRepository | None = None) -> OrderNumberGenerator:
    return OrderNumberGenerator(
        order_repo or order_repository(),
        max_attempts=settings().order_number_attempts,
    )
