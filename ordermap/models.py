"""Domain models shared by the read and write mappers."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple, Union

_WHITESPACE = re.compile(r"\s+")


def split_full_name(full_name: Optional[str]) -> Tuple[str, str]:
    """Split a full name on the first whitespace run into (first, last)."""
    if full_name is None:
        return "", ""
    parts = _WHITESPACE.split(full_name, maxsplit=1)
    return parts[0], parts[1] if len(parts) > 1 else ""


def _float_bits(value: float) -> bytes:
    if math.isnan(value):
        value = math.nan
    return struct.pack("<d", value)


@dataclass
class Address:
    street: str
    city: str
    zip_code: str
    country: str


@dataclass
class Customer:
    id: str
    first_name: str
    last_name: str
    email: str
    shipping_address: Address

    @classmethod
    def from_full_name(
        cls, id: str, full_name: Optional[str], email: str, shipping_address: Address
    ) -> "Customer":
        first, last = split_full_name(full_name)
        return cls(id, first, last, email, shipping_address)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class OrderItem:
    product_id: str
    product_name: str
    quantity: int
    unit_price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


@dataclass(eq=False)
class Order:
    """A customer order. ``total_amount`` compares by its IEEE-754 bits."""
    order_id: str
    customer: Customer
    items: List[OrderItem] = field(default_factory=list)
    total_amount: float = 0.0
    order_date: Optional[date] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self.order_id == other.order_id
            and self.customer == other.customer
            and self.order_date == other.order_date
            and self.items == other.items
            and _float_bits(self.total_amount) == _float_bits(other.total_amount)
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass
class Person:
    """Person record; ``enabled`` is tri-state (True, False or None for unset)."""
    name: Optional[str] = None
    email: Optional[str] = None
    person_id: Optional[int] = None
    birth_date: Optional[Union[date, datetime]] = None
    enabled: Optional[bool] = None
