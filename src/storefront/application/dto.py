"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.status import PaymentMethod


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: how the owner wants the cart turned into an order."""

    shipping_address_id: str
    billing_address_id: str
    payment_method: PaymentMethod
    notes: str | None = None
    discount_code: str | None = None


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    owner_id: str
    items: list[CartLineDTO]
    subtotal: str
    item_count: int
    last_activity: str


@dataclass(frozen=True)
class OrderLineDTO:
    product_name: str
    product_sku: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    owner_id: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderLineDTO]
    subtotal: str
    tax: str
    shipping: str
    discount: str
    total: str
    created_at: str
    tracking_number: str | None
    carrier: str | None
    cancellation_reason: str | None


def _stamp(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        owner_id=cart.owner_id,
        items=[
            CartLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in cart.lines
        ],
        subtotal=str(cart.subtotal),
        item_count=cart.total_item_count,
        last_activity=_stamp(cart.last_activity),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        owner_id=order.owner_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        items=[
            OrderLineDTO(
                product_name=line.product_name,
                product_sku=line.product_sku,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        subtotal=str(order.subtotal),
        tax=str(order.tax),
        shipping=str(order.shipping),
        discount=str(order.discount),
        total=str(order.total),
        created_at=_stamp(order.created_at),
        tracking_number=order.tracking_number,
        carrier=order.carrier,
        cancellation_reason=order.cancellation_reason,
    )
