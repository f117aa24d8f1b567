"""Application service: Cancel Order use case.

Only PENDING, CONFIRMED and PROCESSING orders can be cancelled. Every
line's quantity goes back into stock and the order is marked CANCELLED
as one unit: if the stock release or the save fails, the stock already
returned is taken out again and the order stays as it was.

The order is locked for the whole operation, so a concurrent status
update either finishes first (and this call re-validates against it) or
waits for the cancellation.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.keyed_lock import ORDER_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        ledger: InventoryLedger | None = None,
        order_locks: KeyedLock = ORDER_LOCKS,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger or InventoryLedger(product_repo)
        self._order_locks = order_locks

    def handle(self, order_id: int, reason: str) -> Order:
        with self._order_locks.hold(str(order_id)):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            # Stored order stays untouched until the save below
            cancelled = replace(order)
            cancelled.cancel(reason)

            items = [(line.product_id, line.quantity.value) for line in order.lines]
            # Nobody may reserve the returned units until the save settles
            with self._ledger.holding([product_id for product_id, _ in items]):
                self._ledger.release_all(items)
                try:
                    self._order_repo.save(cancelled)
                except Exception:
                    logger.warning(
                        "Cancellation could not be saved, taking stock back",
                        order_number=order.order_number,
                    )
                    try:
                        self._ledger.reserve_all(items)
                    except Exception:
                        logger.exception(
                            "Stock could not be taken back after a failed cancellation",
                            order_number=order.order_number,
                        )
                    raise

        logger.info(
            "Order cancelled",
            order_number=cancelled.order_number,
            reason=cancelled.cancellation_reason,
        )
        return cancelled
