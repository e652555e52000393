# justyou/db/mongo.py
from typing import Optional
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient

from justyou.core.config import settings

logger = logging.getLogger(__name__)

# collection names shared with the web client
STORIES = "stories"
GOALS = "goals"
TODOS = "todos"
ACTIVITIES = "activities"
COVER_LETTERS = "coverLetters"
RESUME_JOBS = "resumeJobs"
RESUME_PROJECTS = "resumeProjects"
RESUME_SKILLS = "resumeSkills"
RESUME_FILES = "resumeFiles"

# owner field per collection; stories predate the userId convention
OWNER_FIELDS = {
    STORIES: "authorId",
    GOALS: "userId",
    TODOS: "userId",
    ACTIVITIES: "userId",
    COVER_LETTERS: "userId",
    RESUME_JOBS: "userId",
    RESUME_PROJECTS: "userId",
    RESUME_SKILLS: "userId",
    RESUME_FILES: "userId",
}

_mongo_client: Optional[AsyncIOMotorClient] = None


def get_mongo_client() -> AsyncIOMotorClient:
    """
    Returns a cached Motor client.
    """
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = AsyncIOMotorClient(settings.MONGODB_URI)
    return _mongo_client


def set_mongo_client(client) -> None:
    """Swap the cached client (tests use an in-memory one)."""
    global _mongo_client
    _mongo_client = client


def get_db():
    return get_mongo_client()[settings.MONGODB_DB]


def to_object_id(value: str) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


async def init_db():
    db = get_db()
    try:
        for name, owner in OWNER_FIELDS.items():
            await db[name].create_index([(owner, 1), ("createdAt", -1)])
        await db[GOALS].create_index([("userId", 1), ("order", 1)])
    except Exception:
        # the API still serves the relay without a database
        logger.warning("Could not create MongoDB indexes at %s", settings.MONGODB_DB, exc_info=True)


def close_db():
    global _mongo_client
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
