"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.detect_abandoned_carts import DetectAbandonedCartsHandler
from storefront.application.dto import cart_to_dto
from storefront.application.refresh_cart_prices import RefreshCartPricesHandler
from storefront.application.remove_cart_line import RemoveCartLineHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_line import UpdateCartLineHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.cart import Cart
from storefront.infrastructure.bootstrap import (
    cart_repository,
    product_repository,
    settings,
)

_owner = click.option("--owner", required=True, help="Owner (customer) ID.")
_product = click.option("--product", "product_id", required=True, help="Product ID.")


def _display_cart(cart: Cart) -> None:
    """Shared formatting for displaying a cart."""
    dto = cart_to_dto(cart)
    if not dto.items:
        click.echo(f"Cart for {dto.owner_id} is empty.")
        return

    click.echo(f"Cart for {dto.owner_id}  ({dto.item_count} items, last activity {dto.last_activity})")
    click.echo()
    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<6} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Subtotal':<34} {dto.subtotal:>20}")


@click.command("add")
@_owner
@_product
@click.option("--quantity", default=1, type=int, show_default=True)
def cart_add(owner: str, product_id: str, quantity: int) -> None:
    """Put a product into the owner's cart."""
    handler = AddToCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        cart = handler.handle(owner_id=owner, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)


@click.command("update")
@_owner
@_product
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes the line.")
def cart_update(owner: str, product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartLineHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        cart = handler.handle(owner_id=owner, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)


@click.command("remove")
@_owner
@_product
def cart_remove(owner: str, product_id: str) -> None:
    """Remove a product from the cart."""
    handler = RemoveCartLineHandler(cart_repo=cart_repository())

    try:
        cart = handler.handle(owner_id=owner, product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)


@click.command("clear")
@_owner
def cart_clear(owner: str) -> None:
    """Empty the cart."""
    handler = ClearCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(owner_id=owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart for {owner} cleared.")


@click.command("show")
@_owner
def cart_show(owner: str) -> None:
    """Show the owner's cart."""
    cart = ShowCartHandler(cart_repo=cart_repository()).handle(owner)
    _display_cart(cart)


@click.command("refresh")
@_owner
def cart_refresh(owner: str) -> None:
    """Re-read current catalog prices into the cart."""
    handler = RefreshCartPricesHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        cart, changed = handler.handle(owner_id=owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if changed:
        click.echo(f"Prices changed for: {', '.join(changed)}")
    else:
        click.echo("Prices are up to date.")
    _display_cart(cart)


@click.command("abandon")
@click.option("--hours", type=int, default=None,
              help="Inactivity window; defaults to STOREFRONT_CART_EXPIRY_HOURS.")
def cart_abandon(hours: int | None) -> None:
    """Flag carts that have been idle longer than the expiry window."""
    window = hours if hours is not None else settings().cart_expiry_hours
    owners = DetectAbandonedCartsHandler(cart_repo=cart_repository()).handle(expiry_hours=window)

    if not owners:
        click.echo("No abandoned carts.")
        return
    click.echo(f"{len(owners)} cart(s) marked abandoned: {', '.join(owners)}")
