import os
from functools import lru_cache

from dotenv import load_dotenv

# .env-Datei aus Projektroot laden (wenn vorhanden)
load_dotenv()


def _bool_env(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Server
    RELAY_HOST: str = os.getenv("RELAY_HOST", "0.0.0.0")
    RELAY_PORT: int = int(os.getenv("RELAY_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")

    # Externes Modell (OpenAI); der Key wird erst beim ersten Aufruf geprüft
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")

    # 0 = Modellantwort ungeprüft durchreichen
    VALIDATE_MODEL_OUTPUT: bool = _bool_env("VALIDATE_MODEL_OUTPUT", "1")

    # Uploader
    RELAY_URL: str = os.getenv("RELAY_URL", "http://localhost:8000/api/analyze")
    REQUEST_TIMEOUT_SEC: float = float(os.getenv("REQUEST_TIMEOUT_SEC", "60"))
    JPEG_QUALITY: int = int(os.getenv("JPEG_QUALITY", "92"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
