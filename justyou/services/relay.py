# justyou/services/relay.py
"""
The relay: attach the provider credential and fixed parameters to a prompt
and forward it. The provider's envelope comes back unmodified.
"""
import logging
from typing import Any, Dict, Optional

from justyou.services import llm_adapter

logger = logging.getLogger(__name__)

PROMPT_REQUIRED = "Prompt is required"


class PromptRequiredError(ValueError):
    pass


def validate_prompt(prompt: Any) -> str:
    if not isinstance(prompt, str) or not prompt.strip():
        raise PromptRequiredError(PROMPT_REQUIRED)
    return prompt


async def forward_prompt(prompt: Optional[str]) -> Dict[str, Any]:
    prompt = validate_prompt(prompt)
    logger.debug("Forwarding prompt (%s chars)", len(prompt))
    return await llm_adapter.complete(prompt)
