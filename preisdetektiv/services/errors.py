from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

GENERIC_FAILURE_MESSAGE = "Analysis failed"


@dataclass
class AiServiceError(Exception):
    code: str
    message: str
    details: Optional[Any] = None
    http_status: int = 500

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500

    def to_contract_dict(self) -> dict[str, Any]:
        # Ursachen bleiben im Log, der Aufrufer sieht nur die generische Meldung.
        if self.is_client_error:
            return {"error": self.message}
        return {"error": GENERIC_FAILURE_MESSAGE}
