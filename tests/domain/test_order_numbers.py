"""Tests for order-number generation."""

import re
from datetime import datetime, timezone
from itertools import count

import pytest

from storefront.domain.exceptions import ConflictError
from storefront.domain.service.order_numbers import OrderNumberGenerator
from tests.fakes import FakeOrderRepository

FIXED = datetime(2026, 1, 19, 14, 30, 5, tzinfo=timezone.utc)


class _TakenNumbers(FakeOrderRepository):

    def __init__(self, taken: set[str]) -> None:
        super().__init__()
        self.taken = taken

    def exists_by_order_number(self, order_number: str) -> bool:
        return order_number in self.taken


def test_format():
    gen = OrderNumberGenerator(FakeOrderRepository(), clock=lambda: FIXED, suffix=lambda: 42)
    assert gen.generate() == "ORD-20260119143005-042"


def test_default_format_uses_current_second():
    number = OrderNumberGenerator(FakeOrderRepository()).generate()
    assert re.fullmatch(r"ORD-\d{14}-\d{3}", number)


def test_collision_is_regenerated():
    suffixes = count(1)
    repo = _TakenNumbers({"ORD-20260119143005-001", "ORD-20260119143005-002"})
    gen = OrderNumberGenerator(repo, clock=lambda: FIXED, suffix=lambda: next(suffixes))
    assert gen.generate() == "ORD-20260119143005-003"


def test_gives_up_after_budget():
    repo = _TakenNumbers({"ORD-20260119143005-007"})
    gen = OrderNumberGenerator(repo, max_attempts=4, clock=lambda: FIXED, suffix=lambda: 7)
    with pytest.raises(ConflictError, match="4 attempts"):
        gen.generate()
