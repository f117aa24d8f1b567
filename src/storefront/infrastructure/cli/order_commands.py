"""CLI commands for checkout and the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CheckoutRequest, OrderDTO, order_to_dto
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.application.update_tracking import UpdateTrackingHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.status import OrderStatus, PaymentMethod, PaymentStatus
from storefront.infrastructure.bootstrap import (
    address_repository,
    cart_repository,
    inventory_ledger,
    order_number_generator,
    order_repository,
    product_repository,
)

_order_id = click.option("--id", "order_id", required=True, type=int, help="Order ID.")


def _choice(enum) -> click.Choice:
    return click.Choice([member.value for member in enum], case_sensitive=False)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Owner:    {dto.owner_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number} ({dto.carrier or 'unknown carrier'})")
    if dto.cancellation_reason:
        click.echo(f"Cancelled: {dto.cancellation_reason}")
    click.echo()

    click.echo(f"  {'Product':<20} {'SKU':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.product_sku:<12} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Subtotal':<40} {dto.subtotal:>20}")
    click.echo(f"  {'Tax':<40} {dto.tax:>20}")
    click.echo(f"  {'Shipping':<40} {dto.shipping:>20}")
    if dto.discount != "$0.00":
        click.echo(f"  {'Discount':<40} {'-' + dto.discount:>20}")
    click.echo(f"  {'Order Total':<40} {dto.total:>20}")


@click.command("checkout")
@click.option("--owner", required=True, help="Owner (customer) ID.")
@click.option("--shipping-address", required=True, help="Shipping address ID.")
@click.option("--billing-address", default=None, help="Billing address ID; defaults to shipping.")
@click.option("--payment", "payment_method", required=True, type=_choice(PaymentMethod))
@click.option("--notes", default=None)
@click.option("--discount-code", default=None)
def checkout(
    owner: str,
    shipping_address: str,
    billing_address: str | None,
    payment_method: str,
    notes: str | None,
    discount_code: str | None,
) -> None:
    """Turn the owner's cart into an order."""
    products = product_repository()
    orders = order_repository()
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        order_repo=orders,
        product_repo=products,
        address_repo=address_repository(),
        ledger=inventory_ledger(products),
        order_numbers=order_number_generator(orders),
    )
    request = CheckoutRequest(
        shipping_address_id=shipping_address,
        billing_address_id=billing_address or shipping_address,
        payment_method=PaymentMethod(payment_method.upper()),
        notes=notes,
        discount_code=discount_code,
    )

    try:
        order = handler.handle(owner_id=owner, request=request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order_to_dto(order))


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number to display.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.UsageError("Pass exactly one of --id or --number")
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        order = handler.handle(order_id) if order_id is not None else handler.by_number(order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order_to_dto(order))


@click.command("list")
@click.option("--owner", required=True, help="Owner (customer) ID.")
def order_list(owner: str) -> None:
    """List an owner's orders, newest first."""
    orders = ListOrdersHandler(order_repo=order_repository()).handle(owner)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<24} {'Status':<12} {'Payment':<12} {'Total':>10}")
    click.echo("-" * 68)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.order_number:<24} {o.status.value:<12} "
            f"{o.payment_status.value:<12} {str(o.total):>10}"
        )


@click.command("status")
@_order_id
@click.option("--to", "target", required=True, type=_choice(OrderStatus))
def order_status(order_id: int, target: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository())

    try:
        order = handler.handle(order_id, OrderStatus(target.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order.id} is now {order.status.display_name}.")


@click.command("payment")
@_order_id
@click.option("--to", "target", required=True, type=_choice(PaymentStatus))
def order_payment(order_id: int, target: str) -> None:
    """Record a payment status reported by the payment side."""
    handler = UpdatePaymentStatusHandler(order_repo=order_repository())

    try:
        order = handler.handle(order_id, PaymentStatus(target.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Order #{order.id} payment {order.payment_status.value} "
        f"(status={order.status.value})."
    )


@click.command("track")
@_order_id
@click.option("--tracking-number", required=True)
@click.option("--carrier", default=None)
def order_track(order_id: int, tracking_number: str, carrier: str | None) -> None:
    """Attach shipment tracking and mark the order shipped."""
    handler = UpdateTrackingHandler(order_repo=order_repository())

    try:
        order = handler.handle(order_id, tracking_number, carrier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order.id} shipped, tracking {order.tracking_number}.")


@click.command("cancel")
@_order_id
@click.option("--reason", required=True, help="Why the order is cancelled.")
def order_cancel(order_id: int, reason: str) -> None:
    """Cancel an order and return its stock."""
    products = product_repository()
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=products,
        ledger=inventory_ledger(products),
    )

    try:
        handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock returned.")
