"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from storefront.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonProductRepository(JsonFileStore, ProductRepository):

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == product_id:
                    return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["name"].lower() == name.lower():
                    return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        with self._lock:
            return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, product: Product) -> None:
        with self._lock:
            records = self._load_raw()
            stored = next((r for r in records if r["id"] == product.id), None)
            product.version = (stored["version"] if stored else product.version) + 1
            self._upsert(records, self._to_raw(product), "id")
            self._persist_raw(records)

    def compare_and_swap(self, product: Product, expected_version: int) -> bool:
        with self._lock:
            records = self._load_raw()
            stored = next((r for r in records if r["id"] == product.id), None)
            if stored is None or stored.get("version", 0) != expected_version:
                return False
            product.version = expected_version + 1
            self._upsert(records, self._to_raw(product), "id")
            self._persist_raw(records)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "price": str(product.price.amount),
            "sale_price": str(product.sale_price.amount) if product.sale_price else None,
            "currency": product.price.currency,
            "stock_quantity": product.stock_quantity,
            "low_stock_threshold": product.low_stock_threshold,
            "sales_count": product.sales_count,
            "version": product.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        sale_price = raw.get("sale_price")
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw.get("sku", ""),
            price=Money(Decimal(raw["price"]), currency),
            sale_price=Money(Decimal(sale_price), currency) if sale_price else None,
            stock_quantity=raw.get("stock_quantity", 0),
            low_stock_threshold=raw.get("low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD),
            sales_count=raw.get("sales_count", 0),
            version=raw.get("version", 0),
        )
