"""Application service: Remove Cart Line use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.service.keyed_lock import CART_LOCKS, KeyedLock


class RemoveCartLineHandler:

    def __init__(self, cart_repo: CartRepository, cart_locks: KeyedLock = CART_LOCKS) -> None:
        self._cart_repo = cart_repo
        self._cart_locks = cart_locks

    def handle(self, owner_id: str, product_id: str) -> Cart:
        with self._cart_locks.hold(owner_id):
            cart = self._cart_repo.get_by_owner(owner_id)
            if cart is None:
                raise EntityNotFoundError("Cart", owner_id)
            cart.remove_line(product_id)
            self._cart_repo.save(cart)
        return cart
