"""Shipping-service side of the domain.

The customer, address and product shapes here deliberately duplicate
the ones in ``order.py``. The two services evolve independently, so the
only place allowed to know both schemas is ``LabelRequestBuilder``.
"""

from __future__ import annotations

from dataclasses import dataclass

from miniorder.domain.model.value_objects import Money


@dataclass(frozen=True)
class ShippingAddress:
    street1: str
    street2: str
    city: str
    state: str
    zip: str


@dataclass(frozen=True)
class ShippingCustomer:
    first_name: str
    last_name: str
    email: str
    billing_address: ShippingAddress
    shipping_address: ShippingAddress


@dataclass(frozen=True)
class ShippingProduct:
    name: str
    description: str
    price: Money | None = None


@dataclass(frozen=True)
class LabelRequest:
    """Everything the Shipping service needs to print one label."""

    customer: ShippingCustomer
    products: tuple[ShippingProduct, ...]


@dataclass(frozen=True)
class LabelResult:
    """A generated label.

    ``tracking_number`` is carrier-assigned and opaque; it is the key
    that joins the label back to its order.
    """

    tracking_number: str
    html: str
