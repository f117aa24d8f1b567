"""Application service: Add To Cart use case.

Creates the owner's cart on first use. The line's unit price is the
product's effective price right now; it stays frozen in the cart until
the owner refreshes prices.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.keyed_lock import CART_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        cart_locks: KeyedLock = CART_LOCKS,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._cart_locks = cart_locks

    def handle(self, owner_id: str, product_id: str, quantity: int) -> Cart:
        qty = Quantity(quantity)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)

        with self._cart_locks.hold(owner_id):
            cart = self._cart_repo.get_by_owner(owner_id) or Cart.create(owner_id)

            existing = cart.find_line(product_id)
            wanted = qty.value + (existing.quantity.value if existing else 0)
            if not product.has_stock_for(wanted):
                raise InsufficientStockError(product.name, product.stock_quantity, wanted)

            cart.add_line(product.id, product.name, qty.value, product.effective_price)
            self._cart_repo.save(cart)

        logger.info(
            "Added to cart",
            owner_id=owner_id,
            product_id=product_id,
            quantity=qty.value,
        )
        return cart
