"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--sku", default="", help="Stock keeping unit; generated when omitted.")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--sale-price", default=None, help="Optional sale price.")
@click.option("--low-stock", "low_stock", default=10, type=int, show_default=True,
              help="Low-stock threshold.")
def product_add(
    name: str, price: str, sku: str, stock: int, sale_price: str | None, low_stock: int
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            price=price,
            sku=sku,
            stock=stock,
            sale_price=sale_price,
            low_stock_threshold=low_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' ({product.sku}) added at "
        f"{product.effective_price}, stock {product.stock_quantity}"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<12} {'Name':<20} {'Price':>10} {'Sale':>10} {'Stock':>7}")
    click.echo("-" * 70)
    for p in products:
        sale = f"-{p.discount_percentage}%" if p.is_on_sale else ""
        click.echo(
            f"{p.id:<6} {p.sku:<12} {p.name:<20} {str(p.effective_price):>10} "
            f"{sale:>10} {p.stock_quantity:>7}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--sale-price", default=None, help="New sale price; omit to end a sale.")
def product_update(product_id: str, price: str, sale_price: str | None) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, new_price=price, sale_price=sale_price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} now sells at {product.effective_price}")
