"""Order-service side of the domain.

These types mirror what the Order service returns. They are read-only
snapshots: the Order service remains the system of record, so nothing
here is mutated locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from miniorder.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderSummary:
    """A pending order as listed by the Order service, before full lookup."""

    order_id: int
    customer_name: str
    order_date: datetime


@dataclass(frozen=True)
class Address:
    street1: str
    street2: str
    city: str
    state: str
    zip: str


@dataclass(frozen=True)
class Customer:
    first_name: str
    last_name: str
    email: str
    billing_address: Address
    shipping_address: Address

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class LineItem:
    """A single product on an order.

    ``unit_price`` may be missing in the service's data; such a line
    contributes nothing to the order total.
    """

    product_name: str
    product_description: str
    unit_price: Money | None = None


@dataclass(frozen=True)
class Order:
    """A full order as returned by the Order service.

    An empty ``line_items`` tuple is unusual but valid: it produces a
    label request without products and a zero total.
    """

    order_id: int
    customer: Customer
    line_items: tuple[LineItem, ...] = ()


@dataclass(frozen=True)
class ConfirmationStatus:
    """The Order service's answer to a tracking-number update."""

    order_id: int
    tracking_number: str
    message: str
