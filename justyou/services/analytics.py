# justyou/services/analytics.py
"""
Forward named product events to Mixpanel's HTTP ingestion API.

Tracking is a no-op without MIXPANEL_TOKEN and never raises: a failed
delivery is logged as a warning and the request carries on.
"""
import base64
import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from justyou.core.config import settings

logger = logging.getLogger(__name__)

STORY_ACTION = "Story Action"
GOAL_ACTION = "Goal Action"
QUIZ_ACTION = "Quiz Action"
JOB_SEARCH_ACTION = "Job Search Action"
RESUME_ACTION = "Resume Action"
TODO_ACTION = "Todo Action"
COVER_LETTER_ACTION = "Cover Letter Action"
FEATURE_USED = "Feature Used"
ERROR = "Error"


def is_available() -> bool:
    return bool(settings.MIXPANEL_TOKEN and settings.MIXPANEL_TOKEN.strip())


def build_event(event: str, distinct_id: Optional[str], properties: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    props = dict(properties or {})
    props.update(
        {
            "token": settings.MIXPANEL_TOKEN,
            "distinct_id": distinct_id or "anonymous",
            "time": int(time.time()),
            "$insert_id": uuid.uuid4().hex,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
    return {"event": event, "properties": props}


async def _send(payload: Dict[str, Any]) -> None:
    data = base64.b64encode(json.dumps([payload]).encode("utf-8")).decode("ascii")
    async with httpx.AsyncClient(timeout=5.0) as client:
        resp = await client.post(settings.MIXPANEL_API_URL, data={"data": data})
        resp.raise_for_status()


async def track(event: str, distinct_id: Optional[str] = None, properties: Optional[Dict[str, Any]] = None) -> None:
    if not is_available():
        return
    try:
        await _send(build_event(event, distinct_id, properties))
    except Exception as exc:
        logger.warning("Failed to track %s: %s", event, exc)


async def track_action(family: str, action: str, distinct_id: Optional[str] = None, **properties) -> None:
    await track(family, distinct_id, {"action": action, **properties})


async def track_error(error: str, distinct_id: Optional[str] = None, **context) -> None:
    await track(ERROR, distinct_id, {"error": error, **context})
