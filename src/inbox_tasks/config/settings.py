from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load .env once, globally
load_dotenv()

# Project root (independent of current working directory).
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def resolve_dir(env_key: str, default: str, *, create: bool = True) -> Path:
    """
    Resolve a directory path from ENV.
    Relative paths are resolved against PROJECT_ROOT.
    """
    path = Path(os.getenv(env_key, default))
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


def _env_list(key: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(key, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    secrets_dir: Path
    logs_dir: Path
    openai_api_key: Optional[str] = None
    model: str = "gpt-4.1-mini"
    llm_timeout: float = 30.0
    max_workers: int = 1
    lookback_days: int = 7
    max_results: int = 500
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: Optional[str] = None
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @property
    def client_secrets_path(self) -> Path:
        # OAuth client downloaded from Google Cloud Console.
        return self.secrets_dir / "credentials.json"


def load_settings() -> Settings:
    return Settings(
        secrets_dir=resolve_dir("INBOX_TASKS_SECRETS_DIR", "secrets"),
        logs_dir=resolve_dir("INBOX_TASKS_LOGS_DIR", "logs"),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        model=os.getenv("INBOX_TASKS_MODEL", "gpt-4.1-mini"),
        llm_timeout=_env_float("INBOX_TASKS_LLM_TIMEOUT", 30.0),
        max_workers=_env_int("INBOX_TASKS_MAX_WORKERS", 1),
        lookback_days=_env_int("INBOX_TASKS_LOOKBACK_DAYS", 7),
        max_results=_env_int("INBOX_TASKS_MAX_RESULTS", 500),
        google_client_id=os.getenv("GOOGLE_CLIENT_ID") or None,
        google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET") or None,
        google_redirect_uri=os.getenv("GOOGLE_REDIRECT_URI") or None,
        cors_origins=_env_list("INBOX_TASKS_CORS_ORIGINS", "*"),
        log_level=os.getenv("INBOX_TASKS_LOG_LEVEL", "INFO").upper(),
    )
