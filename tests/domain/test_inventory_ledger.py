"""Tests for the InventoryLedger domain service.

Uses in-memory fake repositories, no file I/O.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidArgumentError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.keyed_lock import KeyedLock
from tests.fakes import FakeProductRepository


def _setup(stock: dict[str, int] | None = None) -> tuple[InventoryLedger, FakeProductRepository]:
    stock = stock if stock is not None else {"1": 5, "2": 3}
    repo = FakeProductRepository([
        Product(id=pid, name=f"Product {pid}", price=Money.of("10.00"), stock_quantity=qty)
        for pid, qty in stock.items()
    ])
    return InventoryLedger(repo, locks=KeyedLock()), repo


class _RacingRepository(FakeProductRepository):
    """Another process writes between every read and our compare-and-swap."""

    def __init__(self, products, races: int) -> None:
        super().__init__(products)
        self.races = races

    def compare_and_swap(self, product, expected_version):
        if self.races > 0:
            self.races -= 1
            self.save(self.get_by_id(product.id))
        return super().compare_and_swap(product, expected_version)


class TestReserve:

    def test_decrements_stock(self):
        ledger, repo = _setup()
        product = ledger.reserve("1", 2)
        assert product.stock_quantity == 3
        assert repo.get_by_id("1").stock_quantity == 3

    def test_records_sale_in_same_write(self):
        ledger, repo = _setup()
        ledger.reserve("1", 2, record_sale=True)
        stored = repo.get_by_id("1")
        assert (stored.stock_quantity, stored.sales_count) == (3, 2)

    def test_exact_stock_succeeds(self):
        ledger, repo = _setup()
        ledger.reserve("1", 5)
        assert repo.get_by_id("1").stock_quantity == 0

    def test_insufficient_stock_writes_nothing(self):
        ledger, repo = _setup()
        version = repo.get_by_id("1").version
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.reserve("1", 6)
        assert exc_info.value.product_name == "Product 1"
        assert (exc_info.value.available, exc_info.value.requested) == (5, 6)
        stored = repo.get_by_id("1")
        assert stored.stock_quantity == 5
        assert stored.version == version

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        ledger, _ = _setup()
        with pytest.raises(InvalidArgumentError):
            ledger.reserve("1", qty)

    def test_unknown_product(self):
        ledger, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ledger.reserve("99", 1)


class TestRelease:

    def test_increments_stock(self):
        ledger, repo = _setup()
        ledger.release("1", 4)
        assert repo.get_by_id("1").stock_quantity == 9

    def test_negative_rejected(self):
        ledger, _ = _setup()
        with pytest.raises(InvalidArgumentError):
            ledger.release("1", -1)

    def test_reserve_then_release_restores_stock(self):
        ledger, repo = _setup()
        ledger.reserve("1", 3, record_sale=True)
        ledger.release("1", 3, revoke_sale=True)
        stored = repo.get_by_id("1")
        assert (stored.stock_quantity, stored.sales_count) == (5, 0)


class TestMultiProduct:

    def test_reserve_all(self):
        ledger, repo = _setup()
        ledger.reserve_all([("1", 2), ("2", 3)])
        assert repo.get_by_id("1").stock_quantity == 3
        assert repo.get_by_id("2").stock_quantity == 0

    def test_reserve_all_compensates_on_failure(self):
        ledger, repo = _setup()
        with pytest.raises(InsufficientStockError):
            ledger.reserve_all([("1", 2), ("2", 4)], record_sale=True)
        first = repo.get_by_id("1")
        assert (first.stock_quantity, first.sales_count) == (5, 0)
        assert repo.get_by_id("2").stock_quantity == 3

    def test_check_available_reports_first_short_line(self):
        ledger, _ = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.check_available([("1", 1), ("2", 9)])
        assert exc_info.value.product_name == "Product 2"

    def test_release_all(self):
        ledger, repo = _setup()
        ledger.release_all([("1", 1), ("2", 1)])
        assert repo.get_by_id("1").stock_quantity == 6
        assert repo.get_by_id("2").stock_quantity == 4


class TestStockAdministration:

    def test_set_stock(self):
        ledger, repo = _setup()
        ledger.set_stock("1", 42)
        assert repo.get_by_id("1").stock_quantity == 42

    def test_set_negative_stock_rejected(self):
        ledger, _ = _setup()
        with pytest.raises(InvalidArgumentError):
            ledger.set_stock("1", -5)

    def test_low_stock_report_sorted_emptiest_first(self):
        ledger, _ = _setup({"1": 50, "2": 4, "3": 0})
        assert [p.id for p in ledger.low_stock_report()] == ["3", "2"]

    def test_predicates(self):
        ledger, repo = _setup({"1": 0})
        product = repo.get_by_id("1")
        assert InventoryLedger.is_out_of_stock(product)
        assert InventoryLedger.is_low(product)


class TestVersionConflicts:

    def test_lost_race_is_retried(self):
        repo = _RacingRepository(
            [Product(id="1", name="Widget", price=Money.of("10.00"), stock_quantity=5)],
            races=2,
        )
        ledger = InventoryLedger(repo, locks=KeyedLock(), max_retries=3)
        ledger.reserve("1", 1)
        assert repo.get_by_id("1").stock_quantity == 4

    def test_gives_up_after_retry_budget(self):
        repo = _RacingRepository(
            [Product(id="1", name="Widget", price=Money.of("10.00"), stock_quantity=5)],
            races=3,
        )
        ledger = InventoryLedger(repo, locks=KeyedLock(), max_retries=3)
        with pytest.raises(ConflictError):
            ledger.reserve("1", 1)
        assert repo.get_by_id("1").stock_quantity == 5


class TestHolding:

    def test_other_callers_wait_until_released(self):
        ledger, repo = _setup({"1": 5})
        with ThreadPoolExecutor(max_workers=1) as pool:
            with ledger.holding(["1"]):
                future = pool.submit(ledger.reserve, "1", 5)
                ledger.release("1", 2)
                assert not future.done()
            future.result(timeout=5)
        assert repo.get_by_id("1").stock_quantity == 2


class TestConcurrentReservations:

    def test_exactly_stock_many_callers_succeed(self):
        ledger, repo = _setup({"1": 10})

        def attempt(_):
            try:
                ledger.reserve("1", 1)
                return True
            except InsufficientStockError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(25)))

        assert results.count(True) == 10
        assert repo.get_by_id("1").stock_quantity == 0

    def test_mixed_reserve_and_release_balance_out(self):
        ledger, repo = _setup({"1": 20})

        def work(i):
            if i % 2:
                ledger.reserve("1", 2)
            else:
                ledger.release("1", 2)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(40)))

        assert repo.get_by_id("1").stock_quantity == 20
