# justyou/services/llm_adapters/mock_adapter.py
"""
Deterministic mock adapter returning a Messages API envelope.
Used in development and CI when no provider key is available.
"""

import asyncio
import hashlib
from typing import Dict, Any

from justyou.core.config import settings


async def complete(prompt: str) -> Dict[str, Any]:
    await asyncio.sleep(0)  # keep async signature
    h = hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:24]
    return {
        "id": f"msg_mock_{h}",
        "type": "message",
        "role": "assistant",
        "model": settings.CLAUDE_MODEL,
        "content": [{"type": "text", "text": f"[mock] {prompt[:200]}"}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": len(prompt.split()), "output_tokens": 0},
    }
