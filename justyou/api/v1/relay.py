# justyou/api/v1/relay.py
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks
from fastapi.responses import JSONResponse

from justyou.models.relay import RelayErrorBody, RelayRequest
from justyou.services import analytics, relay

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/claude", responses={400: {"model": RelayErrorBody}, 500: {"model": RelayErrorBody}})
async def claude_relay(background: BackgroundTasks, payload: Optional[RelayRequest] = None):
    """
    Forward ``{"prompt": ...}`` to the provider and return its response
    envelope untouched. 400 without a prompt, 500 ``{"error": ...}`` on any
    provider or network failure.
    """
    try:
        prompt = relay.validate_prompt(payload.prompt if payload else None)
    except relay.PromptRequiredError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    try:
        envelope = await relay.forward_prompt(prompt)
    except Exception as exc:
        logger.exception("Relay call failed")
        message = str(exc) or exc.__class__.__name__
        background.add_task(analytics.track_error, "relay_failed", errorType=exc.__class__.__name__)
        return JSONResponse(status_code=500, content={"error": message})
    return envelope
