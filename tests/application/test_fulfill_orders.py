"""Integration tests for the OrderFulfillmentPipeline use case."""

import pytest

from miniorder.application.aggregate_order import OrderAggregator
from miniorder.application.fulfill_orders import OrderFulfillmentPipeline
from miniorder.application.publish_tracking_number import TrackingNumberPublisher
from miniorder.domain.exceptions import (
    ArtifactWriteFailed,
    InvalidOrderCount,
    LabelGenerationFailed,
    OrderNotFound,
    RemoteUnavailable,
    UpdateRejected,
)
from miniorder.domain.model.fulfillment import FulfillmentState
from miniorder.domain.model.value_objects import Money
from miniorder.infrastructure.persistence.label_artifact_writer import LabelArtifactWriter
from tests.fakes import (
    FakeLabelStore,
    FakeOrderGateway,
    FakeShippingGateway,
    make_item,
    make_order,
    make_summary,
)


def _setup(order_ids=(1, 2)):
    journal: list[tuple] = []
    orders = [
        make_order(
            order_id,
            items=[make_item("Widget", "10.00"), make_item("Gadget", "5.50"), make_item("Gift", None)],
        )
        for order_id in order_ids
    ]
    summaries = [make_summary(order_id) for order_id in order_ids]
    order_gateway = FakeOrderGateway(orders=orders, summaries=summaries, journal=journal)
    shipping_gateway = FakeShippingGateway(journal=journal)
    label_store = FakeLabelStore(journal=journal)
    pipeline = OrderFulfillmentPipeline(
        aggregator=OrderAggregator(order_gateway),
        shipping_gateway=shipping_gateway,
        label_store=label_store,
        publisher=TrackingNumberPublisher(order_gateway),
    )
    return pipeline, summaries, order_gateway, shipping_gateway, label_store, journal


class TestHappyPath:

    def test_single_order_of_two(self):
        pipeline, summaries, orders, shipping, store, journal = _setup()

        report = pipeline.run(summaries, 1)

        assert report.processed_count == 1
        assert report.all_succeeded
        outcome = report.outcomes[0]
        assert outcome.order_id == 1
        assert outcome.state == FulfillmentState.TRACKING_PUBLISHED
        assert outcome.tracking_number == "TRK-001"
        assert outcome.order_in_process.total_price == Money.of("15.50")
        assert store.labels == {"TRK-001": "<html><body>Label TRK-001</body></html>"}
        assert orders.tracking_numbers == {1: "TRK-001"}
        # order 2 untouched
        assert all(2 not in call for call in journal)

    def test_stages_run_in_order(self):
        pipeline, summaries, _, _, _, journal = _setup()

        pipeline.run(summaries, 1)

        assert journal == [
            ("get", 1),
            ("label", "alice@example.com"),
            ("write", "TRK-001"),
            ("publish", 1, "TRK-001"),
        ]

    def test_orders_processed_strictly_one_after_another(self):
        pipeline, summaries, _, _, _, journal = _setup((1, 2, 3))

        report = pipeline.run(summaries, 3)

        assert [o.tracking_number for o in report.outcomes] == ["TRK-001", "TRK-002", "TRK-003"]
        assert [call[0] for call in journal] == ["get", "label", "write", "publish"] * 3
        assert [call[1] for call in journal if call[0] == "get"] == [1, 2, 3]

    def test_label_request_carries_products(self):
        pipeline, summaries, _, shipping, _, _ = _setup()

        pipeline.run(summaries, 1)

        request = shipping.requests[0]
        assert [p.name for p in request.products] == ["Widget", "Gadget", "Gift"]
        assert request.customer.shipping_address.city == "Springfield"

    def test_on_order_done_called_per_order(self):
        pipeline, summaries, *_ = _setup()
        seen = []

        pipeline.run(summaries, 2, on_order_done=lambda f: seen.append((f.order_id, f.state)))

        assert seen == [
            (1, FulfillmentState.TRACKING_PUBLISHED),
            (2, FulfillmentState.TRACKING_PUBLISHED),
        ]


class TestOrderCount:

    def test_zero_does_nothing(self):
        pipeline, summaries, _, _, _, journal = _setup()

        report = pipeline.run(summaries, 0)

        assert report.processed_count == 0
        assert report.outcomes == []
        assert report.all_succeeded
        assert journal == []

    def test_all_pending(self):
        pipeline, summaries, *_ = _setup()
        assert pipeline.run(summaries, 2).processed_count == 2

    @pytest.mark.parametrize("count", [-1, 3])
    def test_out_of_range_rejected(self, count):
        pipeline, summaries, _, _, _, journal = _setup()
        with pytest.raises(InvalidOrderCount, match="between 0 and 2"):
            pipeline.run(summaries, count)
        assert journal == []

    def test_non_integer_rejected(self):
        pipeline, summaries, *_ = _setup()
        with pytest.raises(InvalidOrderCount, match="integer"):
            pipeline.run(summaries, "1")


class TestFailures:

    def test_label_failure_halts_batch(self):
        pipeline, summaries, orders, shipping, store, journal = _setup()
        shipping.errors = [LabelGenerationFailed("printer on fire")]

        report = pipeline.run(summaries, 2)

        outcome = report.outcomes[0]
        assert outcome.state == FulfillmentState.FAILED
        assert outcome.failed_stage == FulfillmentState.LABEL_OBTAINED
        assert outcome.failed_stage_name == "generate label"
        assert isinstance(outcome.error, LabelGenerationFailed)
        assert store.labels == {}
        assert orders.tracking_numbers == {}
        assert report.processed_count == 1
        assert [s.order_id for s in report.not_attempted] == [2]
        assert ("get", 2) not in journal
        assert not report.all_succeeded

    def test_artifact_failure_never_publishes(self):
        pipeline, summaries, orders, _, store, journal = _setup()
        store.error = ArtifactWriteFailed("read-only file system")

        report = pipeline.run(summaries, 1)

        outcome = report.outcomes[0]
        assert outcome.failed_stage == FulfillmentState.ARTIFACT_WRITTEN
        assert outcome.tracking_number == "TRK-001"
        assert not any(call[0] == "publish" for call in journal)
        assert orders.tracking_numbers == {}

    def test_blank_tracking_number_never_written(self):
        pipeline, summaries, _, shipping, store, journal = _setup()
        shipping.tracking_numbers = [""]

        report = pipeline.run(summaries, 1)

        assert report.outcomes[0].failed_stage_name == "generate label"
        assert not any(call[0] == "write" for call in journal)

    def test_unknown_order(self):
        pipeline, _, _, _, _, journal = _setup()

        report = pipeline.run([make_summary(99)], 1)

        outcome = report.outcomes[0]
        assert isinstance(outcome.error, OrderNotFound)
        assert outcome.failed_stage_name == "fetch order"
        assert journal == [("get", 99)]

    def test_publish_rejected(self):
        pipeline, summaries, orders, _, store, _ = _setup()
        orders.update_errors[1] = UpdateRejected("order closed")

        report = pipeline.run(summaries, 1)

        outcome = report.outcomes[0]
        assert outcome.failed_stage_name == "publish tracking number"
        # the label stays on disk even though the update was refused
        assert "TRK-001" in store.labels

    def test_continue_on_error_moves_to_next_order(self):
        pipeline, summaries, orders, shipping, _, _ = _setup((1, 2, 3))
        shipping.errors = [None, RemoteUnavailable("shipping down")]

        report = pipeline.run(summaries, 3, continue_on_error=True)

        assert [o.state for o in report.outcomes] == [
            FulfillmentState.TRACKING_PUBLISHED,
            FulfillmentState.FAILED,
            FulfillmentState.TRACKING_PUBLISHED,
        ]
        assert report.not_attempted == []
        assert orders.tracking_numbers == {1: "TRK-001", 3: "TRK-002"}
        assert not report.all_succeeded

    def test_unexpected_errors_propagate(self):
        pipeline, summaries, _, shipping, _, _ = _setup()
        shipping.errors = [RuntimeError("bug")]

        with pytest.raises(RuntimeError, match="bug"):
            pipeline.run(summaries, 1)

class TestWithFileSystemWriter:

    def _pipeline(self, labels_dir, order_ids=(1, 2)):
        orders = [make_order(order_id) for order_id in order_ids]
        summaries = [make_summary(order_id) for order_id in order_ids]
        order_gateway = FakeOrderGateway(orders=orders, summaries=summaries)
        shipping_gateway = FakeShippingGateway()
        pipeline = OrderFulfillmentPipeline(
            aggregator=OrderAggregator(order_gateway),
            shipping_gateway=shipping_gateway,
            label_store=LabelArtifactWriter(labels_dir),
            publisher=TrackingNumberPublisher(order_gateway),
        )
        return pipeline, summaries, order_gateway, shipping_gateway

    def test_unencodable_label_fails_the_write_stage(self, tmp_path):
        pipeline, summaries, orders, shipping = self._pipeline(tmp_path)
        shipping.documents = ["<html>\ud800</html>"]

        report = pipeline.run(summaries, 2, continue_on_error=True)

        first, second = report.outcomes
        assert first.state == FulfillmentState.FAILED
        assert first.failed_stage_name == "write label"
        assert isinstance(first.error, ArtifactWriteFailed)
        assert second.state == FulfillmentState.TRACKING_PUBLISHED
        assert orders.tracking_numbers == {2: "TRK-002"}
        assert [p.name for p in tmp_path.iterdir()] == ["TRK-002.html"]

    def test_whitespace_tracking_number_is_not_written(self, tmp_path):
        pipeline, summaries, orders, shipping = self._pipeline(tmp_path, (1,))
        shipping.tracking_numbers = ["TRK-001 "]

        report = pipeline.run(summaries, 1)

        assert report.outcomes[0].failed_stage_name == "write label"
        assert orders.tracking_numbers == {}
        assert list(tmp_path.iterdir()) == []
