from __future__ import annotations

import logging
from typing import Any

import requests

from ..config import get_settings
from ..contracts_models import AnalysisResult
from .normalize import NormalizedImage

settings = get_settings()
logger = logging.getLogger("preisdetektiv")

ANALYSIS_FAILED_MESSAGE = "Fehler bei der Analyse. Bitte versuchen Sie es erneut."
GENERIC_ERROR_MESSAGE = "Ein Fehler ist aufgetreten."


class UploaderError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RelayClient:
    """Sends one normalized image to the relay endpoint."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        session: Any = None,
    ) -> None:
        self.url = url or settings.RELAY_URL
        self.timeout = timeout or settings.REQUEST_TIMEOUT_SEC
        self._session = session or requests.Session()

    def analyze(self, image: NormalizedImage) -> AnalysisResult:
        files = {"image": (image.filename, image.data, image.mime)}
        try:
            response = self._session.post(self.url, files=files, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Relay request to %s failed: %s", self.url, exc)
            raise UploaderError(GENERIC_ERROR_MESSAGE) from exc

        if not response.ok:
            logger.warning("Relay answered %s: %s", response.status_code, response.text[:200])
            raise UploaderError(ANALYSIS_FAILED_MESSAGE)

        try:
            return AnalysisResult.model_validate(response.json())
        except ValueError as exc:
            logger.warning("Relay answer could not be read: %s", exc)
            raise UploaderError(ANALYSIS_FAILED_MESSAGE) from exc
