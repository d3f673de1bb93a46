from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..contracts_models import AnalysisResult
from .client import GENERIC_ERROR_MESSAGE, RelayClient, UploaderError
from .normalize import NormalizedImage, normalize_orientation

logger = logging.getLogger("preisdetektiv")

NO_IMAGE_MESSAGE = "Bitte wählen Sie ein Bild aus."
NOT_AN_IMAGE_MESSAGE = "Die ausgewählte Datei ist kein Bild."


class UploaderState(str, Enum):
    EMPTY = "empty"
    IMAGE_SELECTED = "image_selected"
    SUBMITTING = "submitting"
    RESOLVED = "resolved"
    FAILED = "failed"


class UploaderSession:
    """Selection, submission and result state of one user's upload form.

    Empty -> ImageSelected -> Submitting -> Resolved | Failed. From Resolved
    or Failed a new selection or submit starts over, reset() goes back to
    Empty.
    """

    def __init__(self, client: Optional[RelayClient] = None) -> None:
        self.client = client or RelayClient()
        self.state = UploaderState.EMPTY
        self.image: Optional[NormalizedImage] = None
        self.image_source: Optional[tuple[str, int]] = None
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        # Key für das Datei-Widget; ein neuer Wert leert das Eingabefeld
        self.input_generation = 0

    @property
    def is_submitting(self) -> bool:
        return self.state == UploaderState.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return self.image is not None and not self.is_submitting

    def select_image(
        self,
        data: bytes,
        mime: Optional[str],
        filename: Optional[str] = None,
    ) -> Optional[NormalizedImage]:
        if self.is_submitting:
            return None
        self.result = None
        self.error = None
        self.image_source = (filename or "", len(data))

        if not mime or not mime.startswith("image/"):
            self.image = None
            self.state = UploaderState.EMPTY
            self.error = NOT_AN_IMAGE_MESSAGE
            return None

        self.image = normalize_orientation(data, declared_mime=mime, filename=filename)
        self.state = UploaderState.IMAGE_SELECTED
        return self.image

    def begin_submit(self) -> bool:
        """Enter Submitting; False when there is nothing (new) to send."""
        if self.image is None:
            self.error = NO_IMAGE_MESSAGE
            return False
        if self.is_submitting:
            return False

        self.state = UploaderState.SUBMITTING
        self.error = None
        self.result = None
        return True

    def submit(self) -> Optional[AnalysisResult]:
        if not self.begin_submit():
            return None
        return self.finish_submit()

    def finish_submit(self) -> Optional[AnalysisResult]:
        if not self.is_submitting or self.image is None:
            return None
        try:
            self.result = self.client.analyze(self.image)
            self.state = UploaderState.RESOLVED
        except UploaderError as exc:
            self.error = exc.message
            self.state = UploaderState.FAILED
        except Exception:
            logger.exception("Unexpected uploader failure")
            self.error = GENERIC_ERROR_MESSAGE
            self.state = UploaderState.FAILED
        return self.result

    def reset(self) -> None:
        self.state = UploaderState.EMPTY
        self.image = None
        self.image_source = None
        self.result = None
        self.error = None
        self.input_generation += 1
