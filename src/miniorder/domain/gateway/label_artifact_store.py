"""Abstract storage for generated label documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class LabelArtifactStore(ABC):

    @abstractmethod
    def write_label(self, tracking_number: str, html: str) -> Path:
        """Store the label under its tracking number, replacing any previous copy.

        Returns the artifact's location. Raises ArtifactWriteFailed.
        """
