"""CLI commands for addresses."""

from __future__ import annotations

import click

from storefront.application.add_address import AddAddressHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import address_repository


@click.command("add")
@click.option("--owner", required=True, help="Owner (customer) ID.")
@click.option("--name", "full_name", required=True, help="Recipient name.")
@click.option("--street", required=True)
@click.option("--line2", default="")
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--postal-code", required=True)
@click.option("--country", default="")
@click.option("--phone", default="")
def address_add(
    owner: str,
    full_name: str,
    street: str,
    line2: str,
    city: str,
    state: str,
    postal_code: str,
    country: str,
    phone: str,
) -> None:
    """Register an address for an owner."""
    handler = AddAddressHandler(address_repo=address_repository())

    try:
        addr = handler.handle(
            owner_id=owner,
            full_name=full_name,
            street=street,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            phone=phone,
            line2=line2,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Address {addr.id} added for {owner}")


@click.command("list")
@click.option("--owner", required=True, help="Owner (customer) ID.")
def address_list(owner: str) -> None:
    """List an owner's addresses."""
    addresses = address_repository().list_by_owner(owner)
    if not addresses:
        click.echo("No addresses found.")
        return

    for addr in addresses:
        click.echo(f"[{addr.id}]")
        for text in addr.shipping_label.splitlines():
            click.echo(f"  {text}")
