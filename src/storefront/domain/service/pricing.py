"""Pricing engine: tax, shipping, discount and totals.

Pure functions over Decimal/Money. Every rounded figure uses half-up
rounding to cents, so the same inputs always produce the same cents.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.value_objects import Money, round2, to_decimal

TAX_RATE = Decimal("0.10")
FREE_SHIPPING_THRESHOLD = Decimal("100.00")
STANDARD_SHIPPING = Decimal("10.00")


def tax(amount: Money) -> Money:
    if amount.amount <= 0:
        return Money.zero(amount.currency)
    return Money(round2(amount.amount * TAX_RATE), amount.currency)


def shipping(subtotal: Money) -> Money:
    """Flat shipping, free from FREE_SHIPPING_THRESHOLD upwards."""
    if subtotal.amount >= FREE_SHIPPING_THRESHOLD:
        return Money.zero(subtotal.currency)
    return Money(STANDARD_SHIPPING, subtotal.currency)


def discount(amount: Money, percent: Decimal | str | int) -> Money:
    pct = to_decimal(percent)
    if amount.amount <= 0 or pct <= 0:
        return Money.zero(amount.currency)
    return Money(round2(amount.amount * pct / 100), amount.currency)


def total(
    subtotal: Money, tax_amount: Money, shipping_cost: Money, discount_amount: Money
) -> Money:
    """subtotal + tax + shipping - discount, never below zero."""
    gross = (
        subtotal.amount
        + tax_amount.amount
        + shipping_cost.amount
        - discount_amount.amount
    )
    return Money(max(gross, Decimal("0")), subtotal.currency)


def final_price(price: Money, percent: Decimal | str | int) -> Money:
    """Price after a percentage discount."""
    if price.amount <= 0:
        return Money.zero(price.currency)
    return price - discount(price, percent)


def profit_margin(selling: Money, cost: Money) -> Decimal:
    """Margin as a percentage of the selling price, e.g. 25.00."""
    if selling.amount <= 0 or cost.amount <= 0:
        return Decimal("0.00")
    return round2((selling.amount - cost.amount) / selling.amount * 100)


def resolve_discount_percent(discount_code: str | None) -> Decimal:
    """Discount codes are accepted and stored but not redeemed yet."""
    return Decimal("0")


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    tax: Money
    shipping: Money
    discount: Money
    total: Money


def price_subtotal(subtotal: Money, discount_percent: Decimal | str | int = 0) -> PriceBreakdown:
    """Full breakdown for an order whose line subtotal is *subtotal*."""
    subtotal = subtotal.rounded()
    tax_amount = tax(subtotal)
    shipping_cost = shipping(subtotal)
    discount_amount = discount(subtotal, discount_percent)
    return PriceBreakdown(
        subtotal=subtotal,
        tax=tax_amount,
        shipping=shipping_cost,
        discount=discount_amount,
        total=total(subtotal, tax_amount, shipping_cost, discount_amount),
    )


def price_lines(line_totals: list[Money], discount_percent: Decimal | str | int = 0) -> PriceBreakdown:
    subtotal = Money.zero()
    for amount in line_totals:
        subtotal = subtotal + amount
    return price_subtotal(subtotal, discount_percent)
