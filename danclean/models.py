"""Domain models for the Dan Clean terminal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4


class OrderPaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    TRANSFER = "TRANSFER"


class OrderType(str, Enum):
    IRONING = "IRONING"
    CLEANING = "CLEANING"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    DAMAGED = "DAMAGED"
    LOST = "LOST"
    DELIVERED = "DELIVERED"


class OrderPaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class Role(str, Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


@dataclass(frozen=True)
class LineItem:
    """A single priced, quantified entry in an order."""

    item_name: str
    quantity: float
    price: float


@dataclass
class CleaningEntry:
    """A line item held by the order form, addressable by entry id."""

    item_name: str
    quantity: float
    price: float
    entry_id: str = field(default_factory=lambda: uuid4().hex)

    def as_line_item(self) -> LineItem:
        return LineItem(item_name=self.item_name, quantity=self.quantity, price=self.price)


@dataclass(frozen=True)
class CatalogItem:
    """A searchable garment with its unit cleaning price."""

    item_id: str
    name: str
    price: float


@dataclass(frozen=True)
class User:
    """The authenticated user as returned by the /me endpoint."""

    id: str
    email: str
    name: str
    last_name: str
    role: Role

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.last_name}".strip()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> User:
        """Build a user from the API's camelCase JSON payload."""
        return cls(
            id=str(payload["id"]),
            email=str(payload.get("email", "")),
            name=str(payload.get("name", "")),
            last_name=str(payload.get("lastName", "")),
            role=Role(payload.get("role", Role.EMPLOYEE.value)),
        )
