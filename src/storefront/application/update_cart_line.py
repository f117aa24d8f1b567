"""Application service: Update Cart Line use case."""

from __future__ import annotations

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidArgumentError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.keyed_lock import CART_LOCKS, KeyedLock


class UpdateCartLineHandler:

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
        """Set the quantity of one line. Zero removes the line."""
        if quantity < 0:
            raise InvalidArgumentError("Quantity cannot be negative")

        with self._cart_locks.hold(owner_id):
            cart = self._cart_repo.get_by_owner(owner_id)
            if cart is None:
                raise EntityNotFoundError("Cart", owner_id)

            if quantity > 0:
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError("Product", product_id)
                if not product.has_stock_for(quantity):
                    raise InsufficientStockError(
                        product.name, product.stock_quantity, quantity
                    )

            cart.update_quantity(product_id, quantity)
            self._cart_repo.save(cart)
        return cart
