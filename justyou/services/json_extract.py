# justyou/services/json_extract.py
"""
Pull a JSON object or array out of free model text.

The match is greedy: from the first opening bracket to the last closing one,
across newlines. Prose before and after is ignored.
"""
import json
import re
from typing import Any, Dict, List

from justyou.core.errors import ExtractionError

_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


def _extract(text: str, pattern: re.Pattern, kind: type) -> Any:
    match = pattern.search(text or "")
    if not match:
        raise ExtractionError("No JSON found in response", raw=text)
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Invalid JSON in response: {exc.msg}", raw=text) from exc
    if not isinstance(data, kind):
        raise ExtractionError(f"Expected a JSON {kind.__name__}", raw=text)
    return data


def extract_json_object(text: str) -> Dict[str, Any]:
    return _extract(text, _OBJECT_RE, dict)


def extract_json_array(text: str) -> List[Any]:
    return _extract(text, _ARRAY_RE, list)
