"""Application service: Refresh Cart Prices use case.

Re-reads the effective price of every product in the cart and replaces
the line snapshots. Lines whose product has left the catalog keep their
old price; checkout will reject them anyway.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.keyed_lock import CART_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)


class RefreshCartPricesHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        cart_locks: KeyedLock = CART_LOCKS,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._cart_locks = cart_locks

    def handle(self, owner_id: str) -> tuple[Cart, list[str]]:
        """Returns the cart and the product IDs whose price changed."""
        with self._cart_locks.hold(owner_id):
            cart = self._cart_repo.get_by_owner(owner_id)
            if cart is None:
                raise EntityNotFoundError("Cart", owner_id)

            prices: dict[str, Money] = {}
            for line in cart.lines:
                product = self._product_repo.get_by_id(line.product_id)
                if product is not None:
                    prices[product.id] = product.effective_price

            changed = cart.refresh_prices(prices)
            self._cart_repo.save(cart)

        if changed:
            logger.info("Cart prices refreshed", owner_id=owner_id, changed=changed)
        return cart, changed
