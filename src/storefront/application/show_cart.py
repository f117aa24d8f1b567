"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str) -> Cart:
        """The owner's cart, or an unsaved empty one if none exists yet."""
        return self._cart_repo.get_by_owner(owner_id) or Cart.create(owner_id)
