# justyou/services/llm_adapters/anthropic_adapter.py
"""
Async HTTP adapter for the Anthropic Messages API.

The model id, the output token budget and the key are fixed by settings;
callers only supply the prompt. Retries with linear backoff when
LLM_RETRIES > 0 (default: a single attempt).
"""

import asyncio
import logging
from typing import Dict, Any

import httpx

from justyou.core.config import settings
from justyou.core.errors import ProviderError

logger = logging.getLogger(__name__)


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.LLM_TIMEOUT_SEC)


def build_request(prompt: str) -> Dict[str, Any]:
    return {
        "model": settings.CLAUDE_MODEL,
        "max_tokens": settings.CLAUDE_MAX_TOKENS,
        "messages": [{"role": "user", "content": prompt}],
    }


def _headers() -> Dict[str, str]:
    return {
        "content-type": "application/json",
        "x-api-key": settings.CLAUDE_API_KEY or "",
        "anthropic-version": settings.CLAUDE_API_VERSION,
    }


def _describe(resp: httpx.Response) -> str:
    try:
        err = resp.json().get("error") or {}
        message = err.get("message") if isinstance(err, dict) else str(err)
    except ValueError:
        message = None
    return f"Provider returned {resp.status_code}: {message or resp.reason_phrase}"


async def _post_once(client: httpx.AsyncClient, body: Dict[str, Any]) -> Dict[str, Any]:
    resp = await client.post(settings.CLAUDE_API_URL, json=body, headers=_headers())
    if resp.is_error:
        raise ProviderError(_describe(resp))
    try:
        return resp.json()
    except ValueError as exc:
        raise ProviderError("Provider returned a non-JSON body") from exc


async def complete(prompt: str) -> Dict[str, Any]:
    """
    Send one user message and return the provider's response envelope as-is.
    """
    if not settings.CLAUDE_API_KEY:
        raise ProviderError("CLAUDE_API_KEY is not configured")
    body = build_request(prompt)
    retries = max(0, settings.LLM_RETRIES)
    async with _client() as client:
        for attempt in range(1, retries + 2):
            try:
                return await _post_once(client, body)
            except (ProviderError, httpx.HTTPError) as exc:
                if attempt <= retries:
                    logger.warning("Provider call failed (attempt %s/%s): %s", attempt, retries + 1, exc)
                    await asyncio.sleep(settings.LLM_BACKOFF_FACTOR * attempt)
                    continue
                if isinstance(exc, ProviderError):
                    raise
                raise ProviderError(str(exc) or exc.__class__.__name__) from exc
