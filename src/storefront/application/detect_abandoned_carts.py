"""Application service: Detect Abandoned Carts use case.

Meant to be run periodically (cron or similar). Flags every non-empty
cart whose last activity is older than the expiry window. Any later
activity on the cart clears the flag again.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.service.keyed_lock import CART_LOCKS, KeyedLock

logger = structlog.get_logger(__name__)

DEFAULT_EXPIRY_HOURS = 24


class DetectAbandonedCartsHandler:

    def __init__(self, cart_repo: CartRepository, cart_locks: KeyedLock = CART_LOCKS) -> None:
        self._cart_repo = cart_repo
        self._cart_locks = cart_locks

    def handle(
        self, expiry_hours: int = DEFAULT_EXPIRY_HOURS, now: datetime | None = None
    ) -> list[str]:
        """Returns the owner IDs of carts newly marked abandoned."""
        now = now or datetime.now(timezone.utc)
        logger.info("Checking for abandoned carts", threshold_hours=expiry_hours)

        flagged: list[str] = []
        for candidate in self._cart_repo.list_all():
            with self._cart_locks.hold(candidate.owner_id):
                # Re-read under the lock so fresh activity is not overwritten
                cart = self._cart_repo.get_by_owner(candidate.owner_id)
                if cart is None or cart.is_empty or cart.abandoned:
                    continue
                if not cart.is_expired(expiry_hours, now):
                    continue
                cart.mark_abandoned()
                self._cart_repo.save(cart)
                flagged.append(cart.owner_id)

        logger.info("Cart abandonment detection complete", abandoned_count=len(flagged))
        return flagged
