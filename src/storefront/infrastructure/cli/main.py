import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.address_commands import address_add, address_list
from storefront.infrastructure.cli.cart_commands import (
    cart_abandon,
    cart_add,
    cart_clear,
    cart_refresh,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_set,
    inventory_show,
)
from storefront.infrastructure.cli.order_commands import (
    checkout,
    order_cancel,
    order_list,
    order_payment,
    order_show,
    order_status,
    order_track,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from storefront.infrastructure.logging_setup import configure_logging


@click.group()
def cli() -> None:
    """Storefront: carts, checkout and order lifecycle"""
    current = settings()
    configure_logging(current.log_level, json=current.log_json)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


@cli.group()
def address() -> None:
    """Manage shipping and billing addresses."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_add)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
address.add_command(address_add)
address.add_command(address_list)
cart.add_command(cart_abandon)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_refresh)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_track)
cli.add_command(checkout)
