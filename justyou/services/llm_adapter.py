# justyou/services/llm_adapter.py
"""
Pluggable LLM adapter loader and facade.

Settings:
- LLM_ADAPTER: "anthropic" (default) or "mock", or a dotted module path
- LLM_ALLOW_FALLBACK: fall back to the mock adapter when the provider fails

Public:
- async def complete(prompt: str) -> dict
"""

import importlib
import logging
from typing import Any, Dict

from justyou.core.config import settings
from justyou.core.errors import ProviderError

logger = logging.getLogger(__name__)

_ADAPTERS = {
    "anthropic": "justyou.services.llm_adapters.anthropic_adapter",
    "mock": "justyou.services.llm_adapters.mock_adapter",
}

_loaded: Dict[str, Any] = {}


def load_adapter(name: str):
    if name in _loaded:
        return _loaded[name]
    mod = importlib.import_module(_ADAPTERS.get(name, name))
    # adapter module must implement async complete
    if not hasattr(mod, "complete"):
        raise RuntimeError(f"Adapter {name} does not expose complete()")
    _loaded[name] = mod
    return mod


async def complete(prompt: str) -> Dict[str, Any]:
    """
    Unified entry to call the configured adapter.
    If the adapter fails and fallback is allowed, answer from the mock adapter.
    """
    adapter = load_adapter(settings.LLM_ADAPTER)
    try:
        return await adapter.complete(prompt)
    except ProviderError:
        if settings.LLM_ALLOW_FALLBACK and settings.LLM_ADAPTER != "mock":
            logger.warning("Provider failed, answering from mock adapter", exc_info=True)
            return await load_adapter("mock").complete(prompt)
        raise
