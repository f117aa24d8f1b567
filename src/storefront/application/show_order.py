"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        return order

    def by_number(self, order_number: str) -> Order:
        order = self._order_repo.get_by_order_number(order_number)
        if order is None:
            raise EntityNotFoundError("Order", order_number)
        return order
