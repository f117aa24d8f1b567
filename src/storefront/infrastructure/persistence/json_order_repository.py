"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.status import OrderStatus, PaymentMethod, PaymentStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        return self._find("id", order_id)

    def get_by_order_number(self, order_number: str) -> Order | None:
        return self._find("order_number", order_number)

    def exists_by_order_number(self, order_number: str) -> bool:
        with self._lock:
            return any(r["order_number"] == order_number for r in self._load_raw())

    def list_by_owner(self, owner_id: str) -> list[Order]:
        with self._lock:
            return [
                self._to_domain(raw)
                for raw in self._load_raw()
                if raw["owner_id"] == owner_id
            ]

    def add(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()
            if any(r["order_number"] == order.order_number for r in orders):
                raise ConflictError(f"Order number {order.order_number} already exists")
            order.id = max((o["id"] for o in orders), default=0) + 1
            order.version = 1
            orders.append(self._to_raw(order))
            self._persist_raw(orders)

    def save(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    if raw["version"] != order.version:
                        raise ConflictError(
                            f"Order {order.order_number} was modified concurrently"
                        )
                    order.version += 1
                    orders[i] = self._to_raw(order)
                    self._persist_raw(orders)
                    return
        raise EntityNotFoundError("Order", order.id)

    # --- Serialization --------------------------------------------------------

    def _find(self, key: str, value: object) -> Order | None:
        with self._lock:
            for raw in self._load_raw():
                if raw[key] == value:
                    return self._to_domain(raw)
        return None

    @staticmethod
    def _money(value: Money) -> str:
        return str(value.amount)

    @staticmethod
    def _stamp(value: datetime | None) -> str | None:
        return value.isoformat() if value else None

    @classmethod
    def _to_raw(cls, order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "owner_id": order.owner_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method.value,
            "currency": order.total.currency,
            "subtotal": cls._money(order.subtotal),
            "tax": cls._money(order.tax),
            "shipping": cls._money(order.shipping),
            "discount": cls._money(order.discount),
            "total": cls._money(order.total),
            "created_at": order.created_at.isoformat(),
            "shipping_address": order.shipping_address,
            "billing_address": order.billing_address,
            "discount_code": order.discount_code,
            "notes": order.notes,
            "tracking_number": order.tracking_number,
            "carrier": order.carrier,
            "cancellation_reason": order.cancellation_reason,
            "cancelled_at": cls._stamp(order.cancelled_at),
            "delivered_at": cls._stamp(order.delivered_at),
            "deleted": order.deleted,
            "version": order.version,
            "lines": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "product_sku": line.product_sku,
                    "quantity": line.quantity.value,
                    "unit_price": cls._money(line.unit_price),
                    "discount": cls._money(line.discount),
                    "tax": cls._money(line.tax),
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")

        def money(value: str) -> Money:
            return Money(Decimal(value), currency)

        def stamp(value: str | None) -> datetime | None:
            return datetime.fromisoformat(value) if value else None

        lines = [
            OrderLine(
                order_number=raw["order_number"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                product_sku=i.get("product_sku", ""),
                quantity=Quantity(i["quantity"]),
                unit_price=money(i["unit_price"]),
                discount=money(i.get("discount", "0.00")),
                tax=money(i.get("tax", "0.00")),
            )
            for i in raw["lines"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            owner_id=raw["owner_id"],
            lines=lines,
            subtotal=money(raw["subtotal"]),
            tax=money(raw["tax"]),
            shipping=money(raw["shipping"]),
            discount=money(raw["discount"]),
            total=money(raw["total"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            shipping_address=raw.get("shipping_address", ""),
            billing_address=raw.get("billing_address", ""),
            discount_code=raw.get("discount_code"),
            notes=raw.get("notes"),
            tracking_number=raw.get("tracking_number"),
            carrier=raw.get("carrier"),
            cancellation_reason=raw.get("cancellation_reason"),
            cancelled_at=stamp(raw.get("cancelled_at")),
            delivered_at=stamp(raw.get("delivered_at")),
            deleted=raw.get("deleted", False),
            version=raw.get("version", 1),
        )
