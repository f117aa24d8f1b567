"""CLI commands for stock levels."""

from __future__ import annotations

import click

from storefront.application.set_stock import SetStockHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import inventory_ledger, product_repository


def _handler() -> SetStockHandler:
    repo = product_repository()
    return SetStockHandler(product_repo=repo, ledger=inventory_ledger(repo))


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def inventory_set(product_id: str, quantity: int) -> None:
    """Set the stock level of a product (stock-take)."""
    try:
        product = _handler().handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product.name}' set to {product.stock_quantity}")


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def inventory_add(product_id: str, quantity: int) -> None:
    """Receive new units of a product."""
    try:
        product = _handler().add(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product.name}' is now {product.stock_quantity}")


@click.command("show")
@click.option("--low", "low_only", is_flag=True, default=False,
              help="Only products at or below their low-stock threshold.")
def inventory_show(low_only: bool) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle(low_only=low_only)

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Stock':>8} {'Sold':>8} {'Flag':>8}")
    click.echo("-" * 54)
    for line in lines:
        flag = "OUT" if line.out_of_stock else ("LOW" if line.low else "")
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.stock:>8} "
            f"{line.sold:>8} {flag:>8}"
        )
