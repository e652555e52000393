# justyou/services/claude_api.py
"""
Prompt wrapper used by every AI feature: send a prompt through the relay and
reduce the response envelope to plain text.

With RELAY_URL set the relay is called over HTTP (same contract as
POST /api/claude); otherwise the in-process relay is used.
"""
import logging
from typing import Any, Dict

import httpx

from justyou.core.config import settings
from justyou.core.errors import MalformedResponseError, RelayError
from justyou.services import relay

logger = logging.getLogger(__name__)

RELAY_PATH = "/api/claude"


def extract_text(envelope: Any) -> str:
    """Return content[0].text, or raise MalformedResponseError."""
    if not isinstance(envelope, dict):
        raise MalformedResponseError("Relay response is not a JSON object")
    content = envelope.get("content")
    if not isinstance(content, list) or not content:
        raise MalformedResponseError("Relay response has no content")
    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str):
        raise MalformedResponseError("Relay response content[0] has no text")
    return text


async def _call_remote(prompt: str) -> Dict[str, Any]:
    url = str(settings.RELAY_URL).rstrip("/") + RELAY_PATH
    async with httpx.AsyncClient(timeout=settings.LLM_TIMEOUT_SEC) as client:
        try:
            resp = await client.post(url, json={"prompt": prompt})
        except httpx.HTTPError as exc:
            raise RelayError(f"Relay unreachable: {exc}") from exc
    if resp.is_error:
        raise RelayError(f"Relay returned {resp.status_code}: {resp.text[:200]}", status_code=resp.status_code)
    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponseError("Relay returned a non-JSON body") from exc


async def call_claude(prompt: str) -> str:
    if settings.RELAY_URL:
        envelope = await _call_remote(prompt)
    else:
        envelope = await relay.forward_prompt(prompt)
    return extract_text(envelope)
