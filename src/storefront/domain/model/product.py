"""Product aggregate (inventory-relevant view).

Products are owned by the catalog. Checkout only reads price and stock
and writes the stock counter and sales counter; every stock write goes
through the InventoryLedger so the ``version`` token is honoured.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import (
    InsufficientStockError,
    InvalidArgumentError,
)
from storefront.domain.model.value_objects import Money, round2

DEFAULT_LOW_STOCK_THRESHOLD = 10


@dataclass
class Product:
    """A product in the catalog.

    ``version`` is a concurrency token: repositories bump it on every
    write and refuse a compare-and-swap whose expected version is stale.
    """

    id: str
    name: str
    price: Money
    sku: str = ""
    sale_price: Money | None = None
    stock_quantity: int = 0
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    sales_count: int = 0
    version: int = 0

    def __post_init__(self) -> None:
        if self.price.amount <= 0:
            raise InvalidArgumentError("Product price must be greater than zero")
        if self.sale_price is not None and self.sale_price.amount <= 0:
            raise InvalidArgumentError("Sale price must be greater than zero")
        if self.stock_quantity < 0:
            raise InvalidArgumentError("Stock quantity cannot be negative")
        if self.low_stock_threshold < 0:
            raise InvalidArgumentError("Low stock threshold cannot be negative")

    # --- Pricing --------------------------------------------------------------

    @property
    def effective_price(self) -> Money:
        """Sale price when one is set, otherwise the regular price."""
        if self.sale_price is not None and not self.sale_price.is_zero:
            return self.sale_price
        return self.price

    @property
    def is_on_sale(self) -> bool:
        return self.sale_price is not None and self.sale_price < self.price

    @property
    def discount_percentage(self) -> Decimal:
        if not self.is_on_sale:
            return Decimal("0.00")
        saved = self.price.amount - self.sale_price.amount  # type: ignore[union-attr]
        return round2(saved * 100 / self.price.amount)

    def update_price(self, new_price: Money, sale_price: Money | None = None) -> None:
        """Change the product price.

        This does NOT affect any existing carts or orders because they
        capture a price snapshot.
        """
        if new_price.amount <= 0:
            raise InvalidArgumentError("Product price must be greater than zero")
        if sale_price is not None and sale_price.amount <= 0:
            raise InvalidArgumentError("Sale price must be greater than zero")
        self.price = new_price
        self.sale_price = sale_price

    # --- Stock ----------------------------------------------------------------

    @property
    def is_in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.low_stock_threshold

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def remove_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise InvalidArgumentError("Cannot remove negative stock")
        if quantity > self.stock_quantity:
            raise InsufficientStockError(self.name, self.stock_quantity, quantity)
        self.stock_quantity -= quantity

    def add_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise InvalidArgumentError("Cannot add negative stock")
        self.stock_quantity += quantity

    def record_sale(self, quantity: int) -> None:
        self.sales_count += quantity

    def revoke_sale(self, quantity: int) -> None:
        self.sales_count = max(0, self.sales_count - quantity)
