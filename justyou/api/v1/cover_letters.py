# justyou/api/v1/cover_letters.py
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from justyou.api.v1.auth import ensure_owner, get_current_user
from justyou.core.security import CurrentUser
from justyou.db.mongo import COVER_LETTERS
from justyou.models.cover_letter import CoverLetterCreate, CoverLetterGenerate, CoverLetterGenerated, CoverLetterOut
from justyou.repositories import documents
from justyou.services import analytics, cover_letters

router = APIRouter(prefix="/cover-letters", tags=["cover-letters"])


async def _load_owned(letter_id: str, user: CurrentUser) -> dict:
    letter = await documents.get_document(COVER_LETTERS, letter_id)
    if not letter:
        raise HTTPException(status_code=404, detail="Cover letter not found")
    ensure_owner(letter, user)
    return letter


@router.post("/generate", response_model=CoverLetterGenerated)
async def generate(payload: CoverLetterGenerate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    if not payload.jobDescription.strip():
        raise HTTPException(status_code=400, detail="Please enter a job description")
    stories = await cover_letters.select_stories(user.id, payload.storyIds, payload.selectAll)
    text = await cover_letters.generate_cover_letter(payload.jobDescription, stories)
    background.add_task(
        analytics.track_action, analytics.COVER_LETTER_ACTION, "Generate Cover Letter", user.id,
        storiesUsed=len(stories),
    )
    return {"coverLetter": text, "storyIds": [s["id"] for s in stories]}


@router.post("", response_model=CoverLetterOut, status_code=201)
async def save_cover_letter(payload: CoverLetterCreate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    doc = await documents.create_document(
        COVER_LETTERS,
        {
            "jobDescription": payload.jobDescription,
            "storyIds": payload.storyIds,
            "coverLetter": payload.coverLetter,
            "userId": user.id,
            "userEmail": user.email or "",
        },
    )
    background.add_task(analytics.track_action, analytics.COVER_LETTER_ACTION, "Save Cover Letter", user.id)
    return doc


@router.get("", response_model=List[CoverLetterOut])
async def list_cover_letters(user: CurrentUser = Depends(get_current_user)):
    return await documents.list_owned(COVER_LETTERS, user.id)


@router.get("/{letter_id}", response_model=CoverLetterOut)
async def get_cover_letter(letter_id: str, user: CurrentUser = Depends(get_current_user)):
    return await _load_owned(letter_id, user)


@router.delete("/{letter_id}")
async def delete_cover_letter(letter_id: str, user: CurrentUser = Depends(get_current_user)):
    await _load_owned(letter_id, user)
    await documents.delete_document(COVER_LETTERS, letter_id)
    return {"deleted": True}
