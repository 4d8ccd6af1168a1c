"""File-system implementation of LabelArtifactStore.

One file per label, named after its tracking number. Writing the same
tracking number again replaces the file.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from miniorder.domain.exceptions import ArtifactWriteFailed
from miniorder.domain.gateway.label_artifact_store import LabelArtifactStore

logger = structlog.get_logger(__name__)

_FORBIDDEN_NAMES = {".", ".."}


class LabelArtifactWriter(LabelArtifactStore):

    def __init__(self, labels_dir: Path, extension: str = "html") -> None:
        self._labels_dir = labels_dir
        self._extension = extension.lstrip(".")

    # --- LabelArtifactStore interface -----------------------------------------

    def write_label(self, tracking_number: str, html: str) -> Path:
        path = self.path_for(tracking_number)
        # Encoded before the file is opened so a bad document never
        # truncates a label already on disk
        try:
            data = html.encode("utf-8")
        except (UnicodeError, AttributeError, TypeError) as exc:
            raise ArtifactWriteFailed(
                f"Label {tracking_number} is not a writable UTF-8 document: {exc}"
            ) from exc

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise ArtifactWriteFailed(
                f"Could not write label {tracking_number} to {path}: {exc}"
            ) from exc

        logger.info("Wrote label", tracking_number=tracking_number, path=str(path))
        return path

    # --- Path helpers ---------------------------------------------------------

    def path_for(self, tracking_number: str) -> Path:
        """Return the artifact path for *tracking_number*.

        The tracking number comes from a remote service, so it must be a
        plain file name that stays inside the labels directory.
        """
        name = tracking_number if isinstance(tracking_number, str) else ""
        if (
            not name
            or name != name.strip()
            or name in _FORBIDDEN_NAMES
            or "/" in name
            or "\\" in name
            or "\x00" in name
        ):
            raise ArtifactWriteFailed(
                f"Tracking number {tracking_number!r} is not a valid label file name"
            )
        return self._labels_dir / f"{name}.{self._extension}"
