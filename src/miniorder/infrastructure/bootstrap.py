"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. Both service clients
are built once here and handed to the components that need them.
"""

from __future__ import annotations

from dataclasses import dataclass

from miniorder.application.aggregate_order import OrderAggregator
from miniorder.application.fulfill_orders import OrderFulfillmentPipeline
from miniorder.application.list_pending_orders import PendingOrderLister
from miniorder.application.publish_tracking_number import TrackingNumberPublisher
from miniorder.domain.gateway.label_artifact_store import LabelArtifactStore
from miniorder.domain.gateway.order_gateway import OrderGateway
from miniorder.domain.gateway.shipping_gateway import ShippingGateway
from miniorder.infrastructure.config import Settings
from miniorder.infrastructure.persistence.label_artifact_writer import (
    LabelArtifactWriter,
)
from miniorder.infrastructure.remote.order_service_client import (
    HttpOrderServiceClient,
)
from miniorder.infrastructure.remote.shipping_service_client import (
    HttpShippingServiceClient,
)


@dataclass(frozen=True)
class ServiceCollection:
    """Everything the CLI needs to run a fulfillment batch."""

    lister: PendingOrderLister
    pipeline: OrderFulfillmentPipeline


def build_services(
    order_gateway: OrderGateway,
    shipping_gateway: ShippingGateway,
    label_store: LabelArtifactStore,
) -> ServiceCollection:
    return ServiceCollection(
        lister=PendingOrderLister(order_gateway),
        pipeline=OrderFulfillmentPipeline(
            aggregator=OrderAggregator(order_gateway),
            shipping_gateway=shipping_gateway,
            label_store=label_store,
            publisher=TrackingNumberPublisher(order_gateway),
        ),
    )


def configure_services(settings: Settings) -> ServiceCollection:
    return build_services(
        order_gateway=HttpOrderServiceClient(
            settings.order_service_url, timeout=settings.http_timeout
        ),
        shipping_gateway=HttpShippingServiceClient(
            settings.shipping_service_url, timeout=settings.http_timeout
        ),
        label_store=LabelArtifactWriter(
            settings.labels_dir, extension=settings.label_extension
        ),
    )
