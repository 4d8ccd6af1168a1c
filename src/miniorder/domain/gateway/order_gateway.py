"""Abstract port for the remote Order service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from miniorder.domain.model.order import ConfirmationStatus, Order, OrderSummary


class OrderGateway(ABC):

    @abstractmethod
    def list_pending_orders(self) -> list[OrderSummary]:
        """Return the pending orders, in the order the service lists them.

        Raises RemoteUnavailable if the service cannot be reached.
        """

    @abstractmethod
    def get_order(self, order_id: int) -> Order:
        """Return the full order.

        Raises OrderNotFound or RemoteUnavailable.
        """

    @abstractmethod
    def update_tracking_number(
        self, order_id: int, tracking_number: str
    ) -> ConfirmationStatus:
        """Record the tracking number on the order.

        Raises UpdateRejected or RemoteUnavailable.
        """
