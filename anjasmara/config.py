from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GROQ_API_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_GROQ_MODEL = "llama-3.1-70b-versatile"


def _truthy(name: str, default: str = "0") -> bool:
    return (os.getenv(name) or default).strip().lower() in ("1", "true", "yes", "on")


def is_demo() -> bool:
    return _truthy("DEMO_MOCK")


def groq_key() -> str:
    return (os.getenv("GROQ_KEY") or "").strip()


def groq_api_url() -> str:
    return os.getenv("GROQ_API_URL", DEFAULT_GROQ_API_URL).strip()


def groq_model() -> str:
    return os.getenv("GROQ_MODEL", DEFAULT_GROQ_MODEL).strip()


def groq_max_tokens() -> int:
    return int(os.getenv("GROQ_MAX_TOKENS", "800"))


def groq_temperature() -> float:
    return float(os.getenv("GROQ_TEMPERATURE", "0.6"))


def history_file() -> str:
    return os.getenv("HISTORY_FILE", "history.json")


def stream_chunk_size() -> int:
    return int(os.getenv("STREAM_CHUNK_SIZE", "60"))


def stream_delay() -> float:
    """Pause between streamed fragments, in seconds."""
    return int(os.getenv("STREAM_DELAY_MS", "120")) / 1000.0


def host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def port() -> int:
    return int(os.getenv("PORT", "10000"))


def log_dir() -> str:
    return os.getenv("LOG_DIR", "logs").strip()
