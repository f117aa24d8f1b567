"""JSON-file-backed implementation of AddressRepository."""

from __future__ import annotations

from dataclasses import asdict

from storefront.domain.model.address import Address
from storefront.domain.repository.address_repository import AddressRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonAddressRepository(JsonFileStore, AddressRepository):

    def get_by_id(self, address_id: str) -> Address | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == address_id:
                    return Address(**raw)
        return None

    def list_by_owner(self, owner_id: str) -> list[Address]:
        with self._lock:
            return [Address(**raw) for raw in self._load_raw() if raw["owner_id"] == owner_id]

    def save(self, address: Address) -> None:
        with self._lock:
            records = self._load_raw()
            self._upsert(records, asdict(address), "id")
            self._persist_raw(records)
