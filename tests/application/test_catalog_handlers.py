"""Integration tests for the catalog, stock and address use cases."""

import pytest

from storefront.application.add_address import AddAddressHandler
from storefront.application.add_product import AddProductHandler
from storefront.application.set_stock import SetStockHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InvalidArgumentError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.keyed_lock import KeyedLock
from tests.fakes import FakeAddressRepository, FakeProductRepository


class TestAddProduct:

    def test_assigns_sequential_ids_and_skus(self):
        repo = FakeProductRepository()
        handler = AddProductHandler(repo)
        first = handler.handle("Widget", "15.00", stock=5)
        second = handler.handle("Gadget", "25.00", sku="GAD-1")
        assert (first.id, first.sku) == ("1", "SKU-00001")
        assert (second.id, second.sku) == ("2", "GAD-1")
        assert repo.get_by_id("1").stock_quantity == 5

    def test_duplicate_name_rejected(self):
        handler = AddProductHandler(FakeProductRepository())
        handler.handle("Widget", "15.00")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("widget", "12.00")

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidArgumentError):
            AddProductHandler(FakeProductRepository()).handle(" ", "15.00")

    def test_non_positive_price_rejected(self):
        with pytest.raises(InvalidArgumentError):
            AddProductHandler(FakeProductRepository()).handle("Widget", "0")

    def test_sale_price(self):
        product = AddProductHandler(FakeProductRepository()).handle(
            "Widget", "20.00", sale_price="15.00"
        )
        assert product.effective_price == Money.of("15.00")


class TestUpdateProduct:

    def test_price_change(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00")
        UpdateProductHandler(repo, product_locks=KeyedLock()).handle("1", "29.99")
        assert repo.get_by_id("1").price == Money.of("29.99")

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(FakeProductRepository(), product_locks=KeyedLock()).handle(
                "9", "1.00"
            )


class TestStock:

    def _setup(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00", stock=12)
        AddProductHandler(repo).handle("Gadget", "25.00", stock=3, low_stock_threshold=5)
        AddProductHandler(repo).handle("Gizmo", "5.00", stock=0)
        handler = SetStockHandler(repo, ledger=InventoryLedger(repo, locks=KeyedLock()))
        return handler, repo

    def test_set_stock(self):
        handler, repo = self._setup()
        handler.handle("1", 40)
        assert repo.get_by_id("1").stock_quantity == 40

    def test_receive_stock(self):
        handler, _ = self._setup()
        assert handler.add("2", 7).stock_quantity == 10

    def test_negative_stock_rejected(self):
        handler, _ = self._setup()
        with pytest.raises(InvalidArgumentError):
            handler.handle("1", -1)

    def test_inventory_flags(self):
        _, repo = self._setup()
        lines = {line.product_name: line for line in ShowInventoryHandler(repo).handle()}
        assert not lines["Widget"].low
        assert lines["Gadget"].low and not lines["Gadget"].out_of_stock
        assert lines["Gizmo"].out_of_stock

    def test_low_only(self):
        _, repo = self._setup()
        names = [line.product_name for line in ShowInventoryHandler(repo).handle(low_only=True)]
        assert names == ["Gizmo", "Gadget"]


class TestAddAddress:

    def test_saves_address(self):
        repo = FakeAddressRepository()
        address = AddAddressHandler(repo).handle(
            "alice", "Alice Smith", "1 Main St", "Springfield", "IL", "62701", country="US"
        )
        assert repo.list_by_owner("alice") == [address]
        assert address.shipping_label.splitlines() == [
            "Alice Smith",
            "1 Main St",
            "Springfield, IL 62701",
            "US",
        ]

    def test_missing_street_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Street"):
            AddAddressHandler(FakeAddressRepository()).handle(
                "alice", "Alice Smith", "", "Springfield", "IL", "62701"
            )
