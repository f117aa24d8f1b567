"""Application service: Update Order Status use case.

Moves an order along the fulfilment flow (CONFIRMED, PROCESSING,
SHIPPED, ...). Cancellation is not accepted here because it must return
stock; use CancelOrderHandler for that.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.status import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.keyed_lock import ORDER_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        order_locks: KeyedLock = ORDER_LOCKS,
    ) -> None:
        self._order_repo = order_repo
        self._order_locks = order_locks

    def handle(self, order_id: int, new_status: OrderStatus) -> Order:
        if new_status is OrderStatus.CANCELLED:
            raise ValidationError(
                "Orders are cancelled through the cancel operation, which returns stock"
            )

        with self._order_locks.hold(str(order_id)):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            previous = order.status
            order.transition_to(new_status)
            self._order_repo.save(order)

        logger.info(
            "Order status changed",
            order_number=order.order_number,
            from_status=previous.value,
            to_status=new_status.value,
        )
        return order
