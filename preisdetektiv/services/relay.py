from __future__ import annotations

import json
from typing import Protocol

from pydantic import ValidationError

from ..config import get_settings
from ..contracts_models import AnalysisResult
from .errors import AiServiceError
from .prompts import build_analysis_messages

settings = get_settings()
RAW_LOG_MAX_CHARS = 500


class CompletionClient(Protocol):
    def complete(self, messages: list[dict]) -> str: ...


def _truncate_text(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def parse_model_json(raw: str) -> dict:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AiServiceError(
            code="MODEL_OUTPUT_INVALID",
            message="Model output is not valid JSON.",
            details={"error": str(exc), "raw": _truncate_text(raw, RAW_LOG_MAX_CHARS)},
        ) from exc
    if not isinstance(parsed, dict):
        raise AiServiceError(
            code="MODEL_OUTPUT_INVALID",
            message="Model output must be a JSON object.",
            details={"type": type(parsed).__name__},
        )
    return parsed


def validate_analysis(parsed: dict) -> AnalysisResult:
    try:
        return AnalysisResult.model_validate(parsed)
    except ValidationError as exc:
        raise AiServiceError(
            code="MODEL_OUTPUT_SCHEMA",
            message="Model output did not match the analysis schema.",
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc


def analyze_image(
    image_bytes: bytes,
    mime: str | None,
    model_client: CompletionClient,
    validate_output: bool | None = None,
) -> str:
    """Run one analysis and return the model's JSON text unchanged."""
    # Eine 0-Byte-Datei gilt als fehlendes Bild: das Modell kann damit nichts
    # erkennen, also kein externer Aufruf.
    if not image_bytes:
        raise AiServiceError(
            code="INVALID_INPUT",
            message="No image provided",
            http_status=400,
        )
    if validate_output is None:
        validate_output = settings.VALIDATE_MODEL_OUTPUT

    messages = build_analysis_messages(image_bytes, mime)
    raw = model_client.complete(messages)

    parsed = parse_model_json(raw)
    if validate_output:
        validate_analysis(parsed)
    return raw
