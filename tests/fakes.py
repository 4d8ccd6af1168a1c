"""In-memory fake gateways for testing.

These implement the same abstract interfaces as the HTTP clients and the
file-system label writer but keep everything in dicts. No network, no
disk. Every call is appended to ``journal`` so tests can check the order
in which the pipeline touched its collaborators.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from miniorder.domain.exceptions import OrderNotFound, UpdateRejected
from miniorder.domain.gateway.label_artifact_store import LabelArtifactStore
from miniorder.domain.gateway.order_gateway import OrderGateway
from miniorder.domain.gateway.shipping_gateway import ShippingGateway
from miniorder.domain.model.order import (
    Address,
    ConfirmationStatus,
    Customer,
    LineItem,
    Order,
    OrderSummary,
)
from miniorder.domain.model.shipping import LabelRequest, LabelResult
from miniorder.domain.model.value_objects import Money


# ── Builders ─────────────────────────────────────────────────────────────────


def make_address(street1: str = "1 Main St", city: str = "Springfield") -> Address:
    return Address(street1=street1, street2="Apt 2", city=city, state="IL", zip="62701")


def make_customer(first_name: str = "Alice", last_name: str = "Smith") -> Customer:
    return Customer(
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}@example.com",
        billing_address=make_address("9 Billing Rd", "Chicago"),
        shipping_address=make_address(),
    )


def make_item(name: str = "Widget", price: str | None = "15.00") -> LineItem:
    return LineItem(
        product_name=name,
        product_description=f"A fine {name.lower()}",
        unit_price=Money.of(price) if price is not None else None,
    )


def make_order(order_id: int = 1, items: list[LineItem] | None = None) -> Order:
    return Order(
        order_id=order_id,
        customer=make_customer(),
        line_items=tuple(items if items is not None else [make_item()]),
    )


def make_summary(order_id: int = 1, customer_name: str = "Alice Smith") -> OrderSummary:
    return OrderSummary(
        order_id=order_id,
        customer_name=customer_name,
        order_date=datetime(2024, 3, order_id % 28 + 1, 9, 30),
    )


# ── Fakes ────────────────────────────────────────────────────────────────────


class FakeOrderGateway(OrderGateway):

    def __init__(
        self,
        orders: list[Order] | None = None,
        summaries: list[OrderSummary] | None = None,
        journal: list[tuple] | None = None,
    ) -> None:
        self._orders: dict[int, Order] = {o.order_id: o for o in orders or []}
        self._summaries = list(summaries or [])
        self.tracking_numbers: dict[int, str] = {}
        self.journal = journal if journal is not None else []
        # Set to an exception instance to make the next matching call fail
        self.list_error: Exception | None = None
        self.get_errors: dict[int, Exception] = {}
        self.update_errors: dict[int, Exception] = {}

    def list_pending_orders(self) -> list[OrderSummary]:
        self.journal.append(("list",))
        if self.list_error is not None:
            raise self.list_error
        return list(self._summaries)

    def get_order(self, order_id: int) -> Order:
        self.journal.append(("get", order_id))
        if order_id in self.get_errors:
            raise self.get_errors[order_id]
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        return order

    def update_tracking_number(
        self, order_id: int, tracking_number: str
    ) -> ConfirmationStatus:
        self.journal.append(("publish", order_id, tracking_number))
        if order_id in self.update_errors:
            raise self.update_errors[order_id]
        if order_id not in self._orders:
            raise UpdateRejected(f"Unknown order #{order_id}")
        self.tracking_numbers[order_id] = tracking_number
        return ConfirmationStatus(
            order_id=order_id, tracking_number=tracking_number, message="Updated."
        )


class FakeShippingGateway(ShippingGateway):
    """Hands out TRK-001, TRK-002, ... unless told otherwise."""

    def __init__(self, journal: list[tuple] | None = None) -> None:
        self.requests: list[LabelRequest] = []
        self.journal = journal if journal is not None else []
        self.errors: list[Exception | None] = []
        self.tracking_numbers: list[str] = []
        self.documents: list[str] = []
        self._counter = 0

    def get_label(self, request: LabelRequest) -> LabelResult:
        self.journal.append(("label", request.customer.email))
        self.requests.append(request)
        if self.errors:
            error = self.errors.pop(0)
            if error is not None:
                raise error
        self._counter += 1
        tracking = (
            self.tracking_numbers.pop(0)
            if self.tracking_numbers
            else f"TRK-{self._counter:03d}"
        )
        return LabelResult(
            tracking_number=tracking,
            html=(
                self.documents.pop(0)
                if self.documents
                else f"<html><body>Label {tracking}</body></html>"
            ),
        )


class FakeLabelStore(LabelArtifactStore):

    def __init__(self, journal: list[tuple] | None = None) -> None:
        self.labels: dict[str, str] = {}
        self.journal = journal if journal is not None else []
        self.error: Exception | None = None

    def write_label(self, tracking_number: str, html: str) -> Path:
        self.journal.append(("write", tracking_number))
        if self.error is not None:
            raise self.error
        self.labels[tracking_number] = html
        return Path("labels") / f"{tracking_number}.html"
