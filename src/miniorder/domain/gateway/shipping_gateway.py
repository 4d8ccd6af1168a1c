"""Abstract port for the remote Shipping service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from miniorder.domain.model.shipping import LabelRequest, LabelResult


class ShippingGateway(ABC):

    @abstractmethod
    def get_label(self, request: LabelRequest) -> LabelResult:
        """Generate a shipping label.

        Raises LabelGenerationFailed or RemoteUnavailable.
        """
