"""Application service: Update Payment Status use case.

The payment side reports what happened to the money; a completed
payment also confirms an order that is still PENDING.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.model.status import PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.keyed_lock import ORDER_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        order_locks: KeyedLock = ORDER_LOCKS,
    ) -> None:
        self._order_repo = order_repo
        self._order_locks = order_locks

    def handle(self, order_id: int, new_status: PaymentStatus) -> Order:
        with self._order_locks.hold(str(order_id)):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            order.update_payment_status(new_status)
            self._order_repo.save(order)

        logger.info(
            "Payment status changed",
            order_number=order.order_number,
            payment_status=new_status.value,
            order_status=order.status.value,
        )
        return order
