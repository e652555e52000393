# justyou/models/relay.py
from pydantic import BaseModel
from typing import Any


class RelayRequest(BaseModel):
    # presence and type are checked by the route so a bad prompt is a 400, not a 422
    prompt: Any = None


class RelayErrorBody(BaseModel):
    error: str
