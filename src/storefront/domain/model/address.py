"""Address, owned by the customer profile, read by checkout.

Orders keep a formatted label string rather than a reference, so later
edits to the address book never rewrite an order's destination.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Address:
    id: str
    owner_id: str
    full_name: str
    street: str
    city: str
    state: str
    postal_code: str
    country: str = ""
    phone: str = ""
    line2: str = ""

    @property
    def shipping_label(self) -> str:
        parts = [self.full_name]
        if self.phone:
            parts.append(self.phone)
        parts.append(self.street)
        if self.line2.strip():
            parts.append(self.line2)
        parts.append(f"{self.city}, {self.state} {self.postal_code}")
        if self.country:
            parts.append(self.country)
        return "\n".join(parts)
