# justyou/api/v1/stories.py
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Query, UploadFile

from justyou.api.v1.auth import ensure_owner, get_current_user
from justyou.core.config import settings
from justyou.core.security import CurrentUser
from justyou.db.mongo import STORIES
from justyou.models.story import StoryCreate, StoryOut, StoryUpdate, WritingPrompt
from justyou.repositories import documents
from justyou.services import analytics, prompts, storage
from justyou.services.activities import today
from justyou.services.stories import make_excerpt, present

router = APIRouter(prefix="/stories", tags=["stories"])

IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
IMAGE_URL_TTL = storage.MAX_PRESIGN_SECONDS


async def _load(story_id: str) -> dict:
    story = await documents.get_document(STORIES, story_id)
    if not story:
        raise HTTPException(status_code=404, detail="Story not found")
    return story


@router.get("/prompts/random", response_model=WritingPrompt)
async def random_writing_prompt(background: BackgroundTasks, current: Optional[str] = Query(None), user: CurrentUser = Depends(get_current_user)):
    background.add_task(analytics.track_action, analytics.FEATURE_USED, "Writing Prompt", user.id)
    return {"prompt": prompts.random_prompt(exclude=current)}


@router.post("", response_model=StoryOut, status_code=201)
async def create_story(payload: StoryCreate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    doc = await documents.create_document(
        STORIES,
        {
            "title": payload.title,
            "content": payload.content,
            "excerpt": make_excerpt(payload.content),
            "date": today(),
            "youtubeLink": payload.youtubeLink or "",
            "imageUrl": payload.imageUrl or "",
            "authorId": user.id,
            "authorEmail": user.email or "",
        },
    )
    background.add_task(
        analytics.track_action, analytics.STORY_ACTION, "Create Story", user.id,
        wordCount=len(payload.content.split()), hasVideo=bool(payload.youtubeLink),
    )
    return present(doc)


@router.get("", response_model=List[StoryOut])
async def list_my_stories(limit: int = Query(50, ge=1, le=200), skip: int = Query(0, ge=0), user: CurrentUser = Depends(get_current_user)):
    rows = await documents.list_owned(STORIES, user.id, skip=skip, limit=limit)
    return [present(r) for r in rows]


@router.get("/{story_id}", response_model=StoryOut)
async def get_story(story_id: str, user: CurrentUser = Depends(get_current_user)):
    # stories are readable by any signed-in user
    return present(await _load(story_id))


@router.patch("/{story_id}", response_model=StoryOut)
async def update_story(story_id: str, payload: StoryUpdate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    story = await _load(story_id)
    ensure_owner(story, user, owner_field="authorId")
    fields = payload.model_dump(exclude_unset=True)
    if "title" in fields:
        if not (fields["title"] or "").strip():
            raise HTTPException(status_code=400, detail="Please enter a title for your story")
        fields["title"] = fields["title"].strip()
    # null clears the optional text fields
    for name in ("content", "youtubeLink", "imageUrl"):
        if name in fields and fields[name] is None:
            fields[name] = ""
    if "content" in fields:
        fields["excerpt"] = make_excerpt(fields["content"])
    fields["updatedAt"] = datetime.now(timezone.utc)
    updated = await documents.update_document(STORIES, story_id, fields)
    if not updated:
        raise HTTPException(status_code=404, detail="Story not found")
    background.add_task(analytics.track_action, analytics.STORY_ACTION, "Edit Story", user.id, storyId=story_id)
    return present(updated)


@router.delete("/{story_id}")
async def delete_story(story_id: str, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    story = await _load(story_id)
    ensure_owner(story, user, owner_field="authorId", allow_admin=True)
    await documents.delete_document(STORIES, story_id)
    if story.get("imageKey"):
        storage.delete_object(story["imageKey"])
    background.add_task(analytics.track_action, analytics.STORY_ACTION, "Delete Story", user.id, storyId=story_id)
    return {"deleted": True}


@router.post("/{story_id}/image", response_model=StoryOut)
async def upload_story_image(story_id: str, file: UploadFile = File(...), user: CurrentUser = Depends(get_current_user)):
    story = await _load(story_id)
    ensure_owner(story, user, owner_field="authorId")
    if file.content_type not in IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Unsupported image type")
    contents = await file.read()
    if len(contents) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image too large")
    try:
        key = await storage.store_file(file, prefix=f"blog-images/{user.id}", contents=contents)
    except Exception as exc:
        raise HTTPException(status_code=500, detail="Failed to store image") from exc
    if story.get("imageKey"):
        storage.delete_object(story["imageKey"])
    url = storage.generate_presigned_url(key, expires_in=IMAGE_URL_TTL) or ""
    updated = await documents.update_document(STORIES, story_id, {"imageKey": key, "imageUrl": url})
    return present(updated)
