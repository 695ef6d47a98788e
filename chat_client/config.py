import logging
import os
from dataclasses import dataclass
from typing import List, Optional
from dotenv import load_dotenv

from chat_client.chat.capabilities import is_known_model

load_dotenv()

@dataclass
class Settings:
    CHAT_API_URL: str
    # Placeholder bearer value; the endpoint does not authenticate.
    CHAT_API_KEY: str
    DEFAULT_MODEL: str
    MAX_TOKENS: int
    TEMPERATURE: float
    MAX_ATTACHMENT_BYTES: int
    CHAT_API_TIMEOUT: Optional[float]
    CORS_ORIGINS: List[str]
    LOG_LEVEL: str
    MAX_SESSIONS: int

def _int(name: str, default: int) -> int:
    v = os.getenv(name)
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"{name} must be an integer")

def _float(name: str, default: Optional[float]) -> Optional[float]:
    v = os.getenv(name)
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        raise ValueError(f"{name} must be a number")

def _load_settings() -> Settings:
    cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    cors_origins = [o.strip() for o in cors_origins_str.split(",") if o.strip()]

    if "*" in cors_origins:
        raise ValueError("CORS_ORIGINS must not contain '*' when allow_credentials is set")

    max_tokens = _int("MAX_TOKENS", 4000)
    if max_tokens < 1:
        raise ValueError("MAX_TOKENS must be >= 1")

    max_attachment_bytes = _int("MAX_ATTACHMENT_BYTES", 10 * 1024 * 1024)
    if max_attachment_bytes < 1:
        raise ValueError("MAX_ATTACHMENT_BYTES must be >= 1")

    default_model = os.getenv("DEFAULT_MODEL", "gpt-4.1")
    if not is_known_model(default_model):
        raise ValueError(f"DEFAULT_MODEL {default_model!r} is not in the model catalog")

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"LOG_LEVEL {log_level!r} is not a logging level")

    max_sessions = _int("MAX_SESSIONS", 1000)
    if max_sessions < 1:
        raise ValueError("MAX_SESSIONS must be >= 1")

    return Settings(
        CHAT_API_URL=os.getenv("CHAT_API_URL", "https://api.llm7.io/v1/chat/completions"),
        CHAT_API_KEY=os.getenv("CHAT_API_KEY", "unused"),
        DEFAULT_MODEL=default_model,
        MAX_TOKENS=max_tokens,
        TEMPERATURE=_float("TEMPERATURE", 0.7),
        MAX_ATTACHMENT_BYTES=max_attachment_bytes,
        CHAT_API_TIMEOUT=_float("CHAT_API_TIMEOUT", None),
        CORS_ORIGINS=cors_origins,
        LOG_LEVEL=log_level,
        MAX_SESSIONS=max_sessions,
    )

settings = _load_settings()
