"""Cart aggregate: a shopper's pending selection of products.

The Cart owns its lines. Each line carries the unit price seen when the
product was added; checkout uses that snapshot, not the live catalog price.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from storefront.domain.exceptions import EntityNotFoundError, InvalidArgumentError
from storefront.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartLine:
    """One product/quantity/price entry. ``cart_id`` points back at the owner."""

    cart_id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # snapshot taken when added

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a shopping cart.

    Invariants:
    - at most one line per product (repeated adds merge quantities)
    - every line quantity is >= 1
    """

    id: str
    owner_id: str
    lines: list[CartLine] = field(default_factory=list)
    last_activity: datetime = field(default_factory=_utcnow)
    abandoned: bool = False

    @staticmethod
    def create(owner_id: str, now: datetime | None = None) -> Cart:
        if not owner_id or not owner_id.strip():
            raise InvalidArgumentError("Cart owner is required")
        return Cart(
            id=uuid.uuid4().hex,
            owner_id=owner_id.strip(),
            last_activity=now or _utcnow(),
        )

    # --- Mutations ------------------------------------------------------------

    def add_line(
        self,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
        now: datetime | None = None,
    ) -> CartLine:
        """Add a product, merging into the existing line if there is one."""
        qty = Quantity(quantity)
        if unit_price.amount <= 0:
            raise InvalidArgumentError("Unit price must be greater than zero")

        line = self.find_line(product_id)
        if line is not None:
            line.quantity = line.quantity + qty
        else:
            line = CartLine(
                cart_id=self.id,
                product_id=product_id,
                product_name=product_name,
                quantity=qty,
                unit_price=unit_price,
            )
            self.lines.append(line)

        self.touch(now)
        return line

    def update_quantity(
        self, product_id: str, quantity: int, now: datetime | None = None
    ) -> None:
        """Set a line's quantity. Zero removes the line."""
        if quantity < 0:
            raise InvalidArgumentError("Quantity cannot be negative")
        line = self._require_line(product_id)
        if quantity == 0:
            self.lines.remove(line)
        else:
            line.quantity = Quantity(quantity)
        self.touch(now)

    def remove_line(self, product_id: str, now: datetime | None = None) -> None:
        self.lines.remove(self._require_line(product_id))
        self.touch(now)

    def clear(self, now: datetime | None = None) -> None:
        self.lines.clear()
        self.touch(now)

    def refresh_prices(
        self, prices: dict[str, Money], now: datetime | None = None
    ) -> list[str]:
        """Replace price snapshots with current prices.

        Returns the product IDs whose snapshot actually changed. Products
        missing from *prices* keep their old snapshot.
        """
        changed: list[str] = []
        for line in self.lines:
            price = prices.get(line.product_id)
            if price is not None and price != line.unit_price:
                line.unit_price = price
                changed.append(line.product_id)
        self.touch(now)
        return changed

    def touch(self, now: datetime | None = None) -> None:
        self.last_activity = now or _utcnow()
        self.abandoned = False

    def mark_abandoned(self) -> None:
        self.abandoned = True

    # --- Queries --------------------------------------------------------------

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def total_item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    @property
    def unique_item_count(self) -> int:
        return len(self.lines)

    def is_expired(self, hours: int, now: datetime | None = None) -> bool:
        return (now or _utcnow()) > self.last_activity + timedelta(hours=hours)

    # --- Internal helpers -----------------------------------------------------

    def _require_line(self, product_id: str) -> CartLine:
        line = self.find_line(product_id)
        if line is None:
            raise EntityNotFoundError("Cart line", product_id)
        return line
