from __future__ import annotations

from typing import Any

from openai import OpenAI, OpenAIError

from ..config import get_settings
from .errors import AiServiceError

settings = get_settings()


class ModelClient:
    """Thin wrapper around the OpenAI chat completions API.

    The SDK client is built on the first call, so a missing API key only
    fails the requests that actually reach the model.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        client: Any = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or settings.OPENAI_MODEL
        self.base_url = base_url
        self._client = client

    @classmethod
    def from_settings(cls) -> "ModelClient":
        return cls(
            api_key=settings.OPENAI_API_KEY or None,
            model=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL or None,
        )

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    def complete(self, messages: list[dict]) -> str:
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
            )
        except OpenAIError as exc:
            raise AiServiceError(
                code="MODEL_CALL_FAILED",
                message="External model call failed.",
                details={"model": self.model, "error": str(exc)},
            ) from exc

        content = response.choices[0].message.content
        if not content:
            raise AiServiceError(
                code="MODEL_OUTPUT_INVALID",
                message="External model returned an empty completion.",
                details={"model": self.model},
            )
        return content
