"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import InsufficientStockError, InvalidArgumentError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _product(**overrides) -> Product:
    fields = {"id": "1", "name": "Widget", "price": Money.of("20.00"), "stock_quantity": 5}
    fields.update(overrides)
    return Product(**fields)


class TestProductValidation:

    def test_zero_price_rejected(self):
        with pytest.raises(InvalidArgumentError, match="greater than zero"):
            _product(price=Money.of("0"))

    def test_negative_stock_rejected(self):
        with pytest.raises(InvalidArgumentError, match="negative"):
            _product(stock_quantity=-1)


class TestProductPricing:

    def test_effective_price_without_sale(self):
        assert _product().effective_price == Money.of("20.00")

    def test_effective_price_uses_sale_price(self):
        p = _product(sale_price=Money.of("15.00"))
        assert p.effective_price == Money.of("15.00")
        assert p.is_on_sale
        assert p.discount_percentage == Decimal("25.00")

    def test_no_discount_when_not_on_sale(self):
        assert _product().discount_percentage == Decimal("0.00")

    def test_update_price(self):
        p = _product(sale_price=Money.of("15.00"))
        p.update_price(Money.of("30.00"))
        assert p.effective_price == Money.of("30.00")
        assert not p.is_on_sale

    def test_update_price_rejects_zero(self):
        with pytest.raises(InvalidArgumentError):
            _product().update_price(Money.of("0"))


class TestProductStock:

    def test_remove_stock(self):
        p = _product()
        p.remove_stock(3)
        assert p.stock_quantity == 2

    def test_remove_more_than_available(self):
        p = _product(stock_quantity=2)
        with pytest.raises(InsufficientStockError) as exc_info:
            p.remove_stock(3)
        assert exc_info.value.available == 2
        assert exc_info.value.requested == 3
        assert p.stock_quantity == 2

    def test_add_negative_rejected(self):
        with pytest.raises(InvalidArgumentError):
            _product().add_stock(-1)

    def test_low_stock_at_threshold(self):
        assert _product(stock_quantity=10).is_low_stock
        assert not _product(stock_quantity=11).is_low_stock

    def test_out_of_stock(self):
        assert not _product(stock_quantity=0).is_in_stock

    def test_sales_counter_never_negative(self):
        p = _product()
        p.record_sale(2)
        p.revoke_sale(5)
        assert p.sales_count == 0
