"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, owner_id: str) -> list[Order]:
        """The owner's orders, newest first. Soft-deleted orders are hidden."""
        orders = [o for o in self._order_repo.list_by_owner(owner_id) if not o.deleted]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)
