from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from . import config
from .errors import ConfigurationError, UpstreamError
from .logger import logger


def build_payload(prompt: str) -> Dict[str, Any]:
    return {
        "model": config.groq_model(),
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": config.groq_max_tokens(),
        "temperature": config.groq_temperature(),
    }


def extract_text(data: Any) -> str:
    """First choice's text: chat `message.content`, else legacy `text`, else ""."""
    try:
        choice = data["choices"][0]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(choice, dict):
        return ""
    message = choice.get("message") or {}
    text = message.get("content") if isinstance(message, dict) else None
    return text or choice.get("text") or ""


async def complete(prompt: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    if config.is_demo():
        return "Echo: " + prompt

    key = config.groq_key()
    if not key:
        raise ConfigurationError("GROQ_KEY not set on server")

    headers = {
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
    }
    # single best-effort call: no timeout, no retry
    try:
        async with httpx.AsyncClient(timeout=None, transport=transport) as client:
            r = await client.post(config.groq_api_url(), json=build_payload(prompt), headers=headers)
    except httpx.HTTPError as e:
        logger.warning("Groq request failed: {}", e)
        raise UpstreamError(f"Groq API error: {e}") from e

    if not r.is_success:
        logger.warning("Groq returned HTTP {}", r.status_code)
        raise UpstreamError(f"Groq API error: {r.text}")

    try:
        data = r.json()
    except ValueError as e:
        raise UpstreamError(f"Groq API error: invalid JSON response: {e}") from e
    return extract_text(data)
