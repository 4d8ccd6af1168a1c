"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data from the application layer to the CLI without exposing
domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from miniorder.domain.model.fulfillment import OrderFulfillment
from miniorder.domain.model.order import OrderSummary


@dataclass(frozen=True)
class PendingOrderDTO:
    """Output: a pending order line as listed to the operator."""

    order_id: int
    customer_name: str
    order_date: str

    @staticmethod
    def from_summary(summary: OrderSummary) -> PendingOrderDTO:
        return PendingOrderDTO(
            order_id=summary.order_id,
            customer_name=summary.customer_name,
            order_date=summary.order_date.strftime("%Y-%m-%d %H:%M"),
        )


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a product on a processed order."""

    product_name: str
    product_description: str
    unit_price: str  # formatted, e.g. "$15.00", or "-" when absent


@dataclass(frozen=True)
class OrderOutcomeDTO:
    """Output: what happened to one order of the batch."""

    order_id: int
    customer_name: str
    order_date: str
    status: str
    items: list[LineItemDTO]
    total: str | None
    tracking_number: str | None
    confirmation: str | None
    failed_stage: str | None
    error: str | None

    @staticmethod
    def from_fulfillment(fulfillment: OrderFulfillment) -> OrderOutcomeDTO:
        in_process = fulfillment.order_in_process
        items: list[LineItemDTO] = []
        if in_process is not None:
            items = [
                LineItemDTO(
                    product_name=item.product_name,
                    product_description=item.product_description,
                    unit_price=str(item.unit_price) if item.unit_price is not None else "-",
                )
                for item in in_process.order.line_items
            ]

        error = fulfillment.error
        return OrderOutcomeDTO(
            order_id=fulfillment.order_id,
            customer_name=fulfillment.summary.customer_name,
            order_date=fulfillment.summary.order_date.strftime("%Y-%m-%d %H:%M"),
            status=fulfillment.state.value,
            items=items,
            total=str(in_process.total_price) if in_process else None,
            tracking_number=fulfillment.tracking_number,
            confirmation=(
                fulfillment.confirmation.message if fulfillment.confirmation else None
            ),
            failed_stage=fulfillment.failed_stage_name,
            error=f"{type(error).__name__}: {error}" if error else None,
        )
