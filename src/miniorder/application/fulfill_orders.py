"""Application service: Fulfill Orders use case.

Runs the first ``count`` pending orders through the fulfillment stages:

    fetch order -> build label request -> generate label
        -> write label -> publish tracking number

Orders are processed one at a time, and each stage of an order finishes
before the next one starts, so at most one order can be left half done
if the process dies mid-batch.

Batch policy: the batch halts at the first failed order and reports the
remaining orders as not attempted. Pass ``continue_on_error=True`` to
record the failure and move on to the next order instead.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from miniorder.application.aggregate_order import OrderAggregator
from miniorder.application.publish_tracking_number import TrackingNumberPublisher
from miniorder.domain.exceptions import FulfillmentError, InvalidOrderCount
from miniorder.domain.gateway.label_artifact_store import LabelArtifactStore
from miniorder.domain.gateway.shipping_gateway import ShippingGateway
from miniorder.domain.model.fulfillment import BatchReport, OrderFulfillment
from miniorder.domain.model.order import OrderSummary
from miniorder.domain.service.label_request_builder import LabelRequestBuilder

logger = structlog.get_logger(__name__)


class OrderFulfillmentPipeline:

    def __init__(
        self,
        aggregator: OrderAggregator,
        shipping_gateway: ShippingGateway,
        label_store: LabelArtifactStore,
        publisher: TrackingNumberPublisher,
        request_builder: LabelRequestBuilder | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._shipping_gateway = shipping_gateway
        self._label_store = label_store
        self._publisher = publisher
        self._request_builder = request_builder or LabelRequestBuilder()

    def run(
        self,
        pending_orders: Sequence[OrderSummary],
        count: int,
        continue_on_error: bool = False,
        on_order_done: Callable[[OrderFulfillment], None] | None = None,
    ) -> BatchReport:
        """Fulfill the first *count* orders of *pending_orders*, in order.

        Args:
            pending_orders: Summaries as returned by PendingOrderLister.
            count: How many orders to process, from the start of the list.
            continue_on_error: Keep going after a failed order instead of
                halting the batch.
            on_order_done: Called with each order's record as soon as it
                reaches a terminal state.

        Raises:
            InvalidOrderCount: *count* is negative or exceeds the number
                of pending orders. Nothing is processed.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidOrderCount(f"Order count must be an integer, got {count!r}")
        if count < 0 or count > len(pending_orders):
            raise InvalidOrderCount(
                f"Cannot process {count} orders: expected a number between 0 "
                f"and {len(pending_orders)}"
            )

        selected = list(pending_orders[:count])
        report = BatchReport()
        logger.info("Starting batch", count=count, pending=len(pending_orders))

        for index, summary in enumerate(selected):
            fulfillment = self.fulfill(summary)
            report.outcomes.append(fulfillment)
            if on_order_done is not None:
                on_order_done(fulfillment)

            if not fulfillment.succeeded and not continue_on_error:
                report.not_attempted = selected[index + 1:]
                logger.warning(
                    "Halting batch after failed order",
                    order_id=summary.order_id,
                    not_attempted=len(report.not_attempted),
                )
                break

        logger.info(
            "Finished batch",
            succeeded=len(report.succeeded),
            failed=len(report.failed),
            not_attempted=len(report.not_attempted),
        )
        return report

    def fulfill(self, summary: OrderSummary) -> OrderFulfillment:
        """Run a single order through every stage.

        Collaborator failures end the order in FAILED with the stage and
        cause recorded; they are not re-raised. Anything else is a bug
        and propagates.
        """
        fulfillment = OrderFulfillment(summary=summary)
        log = logger.bind(order_id=summary.order_id)

        try:
            order_in_process = self._aggregator.fetch_order(summary.order_id)
            fulfillment.mark_aggregated(order_in_process)

            label_request = self._request_builder.build_request(
                order_in_process.order, order_in_process.shipping_products
            )
            fulfillment.mark_label_requested(label_request)

            label = self._shipping_gateway.get_label(label_request)
            fulfillment.mark_label_obtained(label)
            log = log.bind(tracking_number=label.tracking_number)

            # The label must be stored before the order is marked shipped.
            artifact_path = self._label_store.write_label(
                label.tracking_number, label.html
            )
            fulfillment.mark_artifact_written(artifact_path)

            confirmation = self._publisher.publish(
                summary.order_id, label.tracking_number
            )
            fulfillment.mark_tracking_published(confirmation)
        except FulfillmentError as exc:
            fulfillment.fail(exc)
            log.warning(
                "Order fulfillment failed",
                stage=fulfillment.failed_stage_name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return fulfillment

        log.info("Order fulfilled", artifact=str(fulfillment.artifact_path))
        return fulfillment
