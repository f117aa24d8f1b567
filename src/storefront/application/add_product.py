"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import InvalidArgumentError, ValidationError
from storefront.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        sku: str = "",
        stock: int = 0,
        sale_price: str | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise InvalidArgumentError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            sku=sku.strip() or f"SKU-{next_id.zfill(5)}",
            price=Money.of(price),
            sale_price=Money.of(sale_price) if sale_price else None,
            stock_quantity=stock,
            low_stock_threshold=low_stock_threshold,
        )
        self._product_repo.save(product)
        return product
