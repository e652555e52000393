# justyou/services/stories.py
import re
from typing import Any, Dict, Optional

EXCERPT_LENGTH = 150

_YOUTUBE_RE = re.compile(r"^.*(?:youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def make_excerpt(content: str) -> str:
    return (content or "")[:EXCERPT_LENGTH] + "..."


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    match = _YOUTUBE_RE.match(url)
    if match and len(match.group(1)) == 11:
        return match.group(1)
    return None


def present(story: Dict[str, Any]) -> Dict[str, Any]:
    return {**story, "youtubeId": extract_youtube_id(story.get("youtubeLink"))}
