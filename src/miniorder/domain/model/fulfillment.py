"""Per-order fulfillment state machine.

``OrderFulfillment`` tracks a single order through the pipeline stages.
Stages must be reached strictly in sequence; any of them may instead
end in ``FAILED``, which records the stage that could not be reached
and the error that stopped it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from miniorder.domain.exceptions import LabelGenerationFailed, ValidationError
from miniorder.domain.model.order import ConfirmationStatus, Order, OrderSummary
from miniorder.domain.model.shipping import LabelRequest, LabelResult, ShippingProduct
from miniorder.domain.model.value_objects import Money


class FulfillmentState(Enum):
    PENDING = "PENDING"
    AGGREGATED = "AGGREGATED"
    LABEL_REQUESTED = "LABEL_REQUESTED"
    LABEL_OBTAINED = "LABEL_OBTAINED"
    ARTIFACT_WRITTEN = "ARTIFACT_WRITTEN"
    TRACKING_PUBLISHED = "TRACKING_PUBLISHED"
    FAILED = "FAILED"


# Each state's successor on the happy path.
_NEXT_STATE = {
    FulfillmentState.PENDING: FulfillmentState.AGGREGATED,
    FulfillmentState.AGGREGATED: FulfillmentState.LABEL_REQUESTED,
    FulfillmentState.LABEL_REQUESTED: FulfillmentState.LABEL_OBTAINED,
    FulfillmentState.LABEL_OBTAINED: FulfillmentState.ARTIFACT_WRITTEN,
    FulfillmentState.ARTIFACT_WRITTEN: FulfillmentState.TRACKING_PUBLISHED,
}

# Human-readable name of the work done to reach each state.
STAGE_NAMES = {
    FulfillmentState.AGGREGATED: "fetch order",
    FulfillmentState.LABEL_REQUESTED: "build label request",
    FulfillmentState.LABEL_OBTAINED: "generate label",
    FulfillmentState.ARTIFACT_WRITTEN: "write label",
    FulfillmentState.TRACKING_PUBLISHED: "publish tracking number",
}


@dataclass(frozen=True)
class OrderInProcess:
    """An order fetched in full, with its label products and total."""

    order: Order
    shipping_products: tuple[ShippingProduct, ...]
    total_price: Money


@dataclass
class OrderFulfillment:
    """Progress record for one order in a batch."""

    summary: OrderSummary
    state: FulfillmentState = FulfillmentState.PENDING
    order_in_process: OrderInProcess | None = None
    label_request: LabelRequest | None = None
    label: LabelResult | None = None
    artifact_path: Path | None = None
    confirmation: ConfirmationStatus | None = None
    failed_stage: FulfillmentState | None = None
    error: Exception | None = field(default=None, repr=False)

    # --- State transitions ----------------------------------------------------

    def mark_aggregated(self, order_in_process: OrderInProcess) -> None:
        self._advance(FulfillmentState.AGGREGATED)
        self.order_in_process = order_in_process

    def mark_label_requested(self, label_request: LabelRequest) -> None:
        self._advance(FulfillmentState.LABEL_REQUESTED)
        self.label_request = label_request

    def mark_label_obtained(self, label: LabelResult) -> None:
        """Record the generated label.

        A label without a tracking number cannot be stored or published,
        so it counts as a failed label generation.
        """
        if not label.tracking_number or not label.tracking_number.strip():
            raise LabelGenerationFailed(
                f"Shipping service returned no tracking number for order "
                f"#{self.summary.order_id}"
            )
        self._advance(FulfillmentState.LABEL_OBTAINED)
        self.label = label

    def mark_artifact_written(self, artifact_path: Path) -> None:
        self._advance(FulfillmentState.ARTIFACT_WRITTEN)
        self.artifact_path = artifact_path

    def mark_tracking_published(self, confirmation: ConfirmationStatus) -> None:
        self._advance(FulfillmentState.TRACKING_PUBLISHED)
        self.confirmation = confirmation

    def fail(self, error: Exception) -> None:
        """Stop this order at the stage currently being attempted."""
        if self.is_terminal:
            raise ValidationError(
                f"Cannot fail order #{self.summary.order_id}: "
                f"already {self.state.value}"
            )
        self.failed_stage = _NEXT_STATE[self.state]
        self.error = error
        self.state = FulfillmentState.FAILED

    # --- Computed properties --------------------------------------------------

    @property
    def order_id(self) -> int:
        return self.summary.order_id

    @property
    def tracking_number(self) -> str | None:
        return self.label.tracking_number if self.label else None

    @property
    def succeeded(self) -> bool:
        return self.state == FulfillmentState.TRACKING_PUBLISHED

    @property
    def is_terminal(self) -> bool:
        return self.state in (
            FulfillmentState.TRACKING_PUBLISHED,
            FulfillmentState.FAILED,
        )

    @property
    def failed_stage_name(self) -> str | None:
        if self.failed_stage is None:
            return None
        return STAGE_NAMES[self.failed_stage]

    # --- Internal helpers -----------------------------------------------------

    def _advance(self, target: FulfillmentState) -> None:
        expected = _NEXT_STATE.get(self.state)
        if expected != target:
            raise ValidationError(
                f"Cannot move order #{self.summary.order_id} to {target.value}: "
                f"current state is {self.state.value}"
            )
        self.state = target


@dataclass
class BatchReport:
    """Outcome of a pipeline run, in processing order."""

    outcomes: list[OrderFulfillment] = field(default_factory=list)
    not_attempted: list[OrderSummary] = field(default_factory=list)

    @property
    def processed_count(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> list[OrderFulfillment]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[OrderFulfillment]:
        return [o for o in self.outcomes if o.state == FulfillmentState.FAILED]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed and not self.not_attempted
