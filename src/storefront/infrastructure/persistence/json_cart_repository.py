"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonCartRepository(JsonFileStore, CartRepository):

    # --- CartRepository interface ---------------------------------------------

    def get_by_owner(self, owner_id: str) -> Cart | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["owner_id"] == owner_id:
                    return self._to_domain(raw)
        return None

    def list_all(self) -> list[Cart]:
        with self._lock:
            return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, cart: Cart) -> None:
        with self._lock:
            records = self._load_raw()
            self._upsert(records, self._to_raw(cart), "owner_id")
            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "owner_id": cart.owner_id,
            "last_activity": cart.last_activity.isoformat(),
            "abandoned": cart.abandoned,
            "lines": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in cart.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        lines = [
            CartLine(
                cart_id=raw["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["lines"]
        ]
        return Cart(
            id=raw["id"],
            owner_id=raw["owner_id"],
            lines=lines,
            last_activity=datetime.fromisoformat(raw["last_activity"]),
            abandoned=raw.get("abandoned", False),
        )
