"""Application service: Add Address use case.

Address books belong to the customer profile; this handler exists so the
CLI can create the addresses checkout refers to.
"""

from __future__ import annotations

import uuid

from storefront.domain.exceptions import InvalidArgumentError
from storefront.domain.model.address import Address
from storefront.domain.repository.address_repository import AddressRepository


class AddAddressHandler:

    def __init__(self, address_repo: AddressRepository) -> None:
        self._address_repo = address_repo

    def handle(
        self,
        owner_id: str,
        full_name: str,
        street: str,
        city: str,
        state: str,
        postal_code: str,
        country: str = "",
        phone: str = "",
        line2: str = "",
    ) -> Address:
        for label, value in (
            ("Owner", owner_id),
            ("Full name", full_name),
            ("Street", street),
            ("City", city),
            ("Postal code", postal_code),
        ):
            if not value or not value.strip():
                raise InvalidArgumentError(f"{label} is required")

        address = Address(
            id=uuid.uuid4().hex[:12],
            owner_id=owner_id.strip(),
            full_name=full_name.strip(),
            street=street.strip(),
            city=city.strip(),
            state=state.strip(),
            postal_code=postal_code.strip(),
            country=country.strip(),
            phone=phone.strip(),
            line2=line2.strip(),
        )
        self._address_repo.save(address)
        return address
