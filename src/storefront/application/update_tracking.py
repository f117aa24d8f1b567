"""Application service: Update Tracking use case."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.keyed_lock import ORDER_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)


class UpdateTrackingHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        order_locks: KeyedLock = ORDER_LOCKS,
    ) -> None:
        self._order_repo = order_repo
        self._order_locks = order_locks

    def handle(self, order_id: int, tracking_number: str, carrier: str | None = None) -> Order:
        """Attach shipment tracking and mark the order SHIPPED."""
        with self._order_locks.hold(str(order_id)):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            order.update_tracking(tracking_number, carrier)
            self._order_repo.save(order)

        logger.info(
            "Order shipped",
            order_number=order.order_number,
            tracking_number=order.tracking_number,
            carrier=order.carrier,
        )
        return order
