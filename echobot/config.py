import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load .env BEFORE accessing os.getenv()
load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_env: str
    chat_endpoint_path: str
    cors_allow_origins: List[str]
    log_level: str
    host: str
    port: int
    api_base_url: str


def _split_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def _normalize_path(path: str) -> str:
    path = path.strip()
    if not path:
        return "/api/chat"
    if not path.startswith("/"):
        path = "/" + path
    # "/" is a valid mount point: POST / sits beside the GET / page
    return path.rstrip("/") or "/"


@lru_cache
def get_settings() -> Settings:
    """Read settings from the environment once per process."""
    return Settings(
        app_env=os.getenv("APP_ENV", "dev"),
        chat_endpoint_path=_normalize_path(os.getenv("CHAT_ENDPOINT_PATH", "/api/chat")),
        cors_allow_origins=_split_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        api_base_url=os.getenv("API_BASE_URL", "http://127.0.0.1:8000").rstrip("/"),
    )
