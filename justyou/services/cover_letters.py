# justyou/services/cover_letters.py
import logging
from typing import Any, Dict, List

from justyou.db import mongo
from justyou.repositories import documents
from justyou.services import claude_api, prompts

logger = logging.getLogger(__name__)


async def select_stories(user_id: str, story_ids: List[str], select_all: bool = False) -> List[Dict[str, Any]]:
    """The caller's stories in the requested order; ids of other users' stories are dropped."""
    own = await documents.list_owned(mongo.STORIES, user_id)
    if select_all:
        return own
    by_id = {s["id"]: s for s in own}
    return [by_id[i] for i in story_ids if i in by_id]


async def generate_cover_letter(job_description: str, stories: List[Dict[str, Any]]) -> str:
    prompt = prompts.cover_letter_prompt(job_description, stories)
    logger.info("Generating cover letter from %s stories", len(stories))
    return await claude_api.call_claude(prompt)
