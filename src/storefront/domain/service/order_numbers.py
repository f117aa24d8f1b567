"""Order-number generation.

Numbers look like ``ORD-20260119143005-042``: the creation second plus a
random three-digit suffix. Two orders placed in the same second can
collide, so every candidate is checked against existing numbers and
regenerated a bounded number of times.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from storefront.domain.exceptions import ConflictError
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

PREFIX = "ORD"
SUFFIX_RANGE = 1000
DEFAULT_MAX_ATTEMPTS = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _random_suffix() -> int:
    return secrets.randbelow(SUFFIX_RANGE)


class OrderNumberGenerator:

    def __init__(
        self,
        order_repo: OrderRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Callable[[], datetime] = _utcnow,
        suffix: Callable[[], int] = _random_suffix,
    ) -> None:
        self._order_repo = order_repo
        self._max_attempts = max_attempts
        self._clock = clock
        self._suffix = suffix

    def candidate(self) -> str:
        stamp = self._clock().strftime("%Y%m%d%H%M%S")
        return f"{PREFIX}-{stamp}-{self._suffix():03d}"

    def generate(self) -> str:
        """Return a number no existing order uses."""
        for _ in range(self._max_attempts):
            number = self.candidate()
            if not self._order_repo.exists_by_order_number(number):
                return number
            logger.info("Order number collision, regenerating", order_number=number)
        raise ConflictError(
            f"Could not find a free order number in {self._max_attempts} attempts"
        )
