"""End-to-end CLI tests through click's CliRunner against a temp data dir."""

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.persistence.json_address_repository import (
    JsonAddressRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {"STOREFRONT_DATA_DIR": str(tmp_path), "STOREFRONT_LOG_LEVEL": "WARNING"}

    def invoke(*args: str):
        return runner.invoke(cli, list(args), env=env)

    return invoke


@pytest.fixture
def shop(run, tmp_path):
    """A catalog with one Widget (stock 5) and an address for alice."""
    assert run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "5").exit_code == 0
    result = run(
        "address", "add",
        "--owner", "alice",
        "--name", "Alice Smith",
        "--street", "1 Main St",
        "--city", "Springfield",
        "--state", "IL",
        "--postal-code", "62701",
    )
    assert result.exit_code == 0, result.output
    address_id = JsonAddressRepository(tmp_path / "addresses.json").list_by_owner("alice")[0].id
    return address_id


def _stock(tmp_path) -> int:
    return JsonProductRepository(tmp_path / "products.json").get_by_id("1").stock_quantity


class TestProductCommands:

    def test_add_and_list(self, run):
        result = run("product", "add", "--name", "Widget", "--price", "15.00", "--sale-price", "12.00")
        assert result.exit_code == 0
        assert "Product #1 'Widget' (SKU-00001) added at $12.00" in result.output

        listing = run("product", "list")
        assert "Widget" in listing.output
        assert "-20.00%" in listing.output

    def test_non_numeric_price_rejected(self, run):
        result = run("product", "add", "--name", "Widget", "--price", "cheap")
        assert result.exit_code != 0
        assert "Invalid decimal" in result.output

    def test_update_price(self, run):
        run("product", "add", "--name", "Widget", "--price", "15.00")
        result = run("product", "update", "--id", "1", "--price", "29.99")
        assert result.exit_code == 0
        assert "$29.99" in result.output


class TestInventoryCommands:

    def test_set_add_and_show(self, run, shop, tmp_path):
        assert run("inventory", "set", "--product", "1", "--quantity", "2").exit_code == 0
        assert run("inventory", "add", "--product", "1", "--quantity", "3").exit_code == 0
        assert _stock(tmp_path) == 5

        result = run("inventory", "show", "--low")
        assert "Widget" in result.output
        assert "LOW" in result.output

    def test_negative_stock_rejected(self, run, shop):
        result = run("inventory", "set", "--product", "1", "--quantity", "-1")
        assert result.exit_code == 1
        assert "negative" in result.output


class TestCheckoutFlow:

    def test_full_lifecycle(self, run, shop, tmp_path):
        assert run("cart", "add", "--owner", "alice", "--product", "1").exit_code == 0

        result = run(
            "checkout", "--owner", "alice", "--shipping-address", shop, "--payment", "credit_card"
        )
        assert result.exit_code == 0, result.output
        assert "ORD-" in result.output
        assert "$32.00" in result.output
        assert _stock(tmp_path) == 4
        assert "is empty" in run("cart", "show", "--owner", "alice").output

        run("order", "payment", "--id", "1", "--to", "PROCESSING")
        result = run("order", "payment", "--id", "1", "--to", "COMPLETED")
        assert "status=CONFIRMED" in result.output

        result = run("order", "cancel", "--id", "1", "--reason", "changed mind")
        assert result.exit_code == 0, result.output
        assert _stock(tmp_path) == 5

        result = run("order", "status", "--id", "1", "--to", "SHIPPED")
        assert result.exit_code == 1
        assert "Cannot move from CANCELLED to SHIPPED" in result.output

        listing = run("order", "list", "--owner", "alice")
        assert "CANCELLED" in listing.output

    def test_checkout_empty_cart(self, run, shop):
        result = run("checkout", "--owner", "alice", "--shipping-address", shop, "--payment", "paypal")
        assert result.exit_code == 1
        assert "empty cart" in result.output

    def test_checkout_out_of_stock(self, run, shop, tmp_path):
        run("cart", "add", "--owner", "alice", "--product", "1", "--quantity", "2")
        run("inventory", "set", "--product", "1", "--quantity", "1")

        result = run("checkout", "--owner", "alice", "--shipping-address", shop, "--payment", "paypal")

        assert result.exit_code == 1
        assert "Insufficient stock for Widget. Available: 1, Requested: 2" in result.output
        assert _stock(tmp_path) == 1

    def test_tracking(self, run, shop):
        run("cart", "add", "--owner", "alice", "--product", "1")
        run("checkout", "--owner", "alice", "--shipping-address", shop, "--payment", "wallet")
        run("order", "status", "--id", "1", "--to", "CONFIRMED")
        run("order", "status", "--id", "1", "--to", "PROCESSING")

        result = run("order", "track", "--id", "1", "--tracking-number", "1Z999", "--carrier", "UPS")
        assert result.exit_code == 0, result.output

        shown = run("order", "show", "--id", "1")
        assert "status=SHIPPED" in shown.output
        assert "1Z999 (UPS)" in shown.output


class TestCartCommands:

    def test_update_remove_and_refresh(self, run, shop):
        run("cart", "add", "--owner", "alice", "--product", "1", "--quantity", "2")
        result = run("cart", "update", "--owner", "alice", "--product", "1", "--quantity", "3")
        assert "$60.00" in result.output

        run("product", "update", "--id", "1", "--price", "18.00")
        result = run("cart", "refresh", "--owner", "alice")
        assert "Prices changed for: 1" in result.output
        assert "$54.00" in result.output

        result = run("cart", "remove", "--owner", "alice", "--product", "1")
        assert "is empty" in result.output

    def test_abandon_with_fresh_carts(self, run, shop):
        run("cart", "add", "--owner", "alice", "--product", "1")
        result = run("cart", "abandon")
        assert "No abandoned carts." in result.output
