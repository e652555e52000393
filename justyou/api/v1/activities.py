# justyou/api/v1/activities.py
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from justyou.api.v1.auth import ensure_owner, get_current_user
from justyou.core.security import CurrentUser
from justyou.db.mongo import ACTIVITIES
from justyou.models.activity import ActivityCreate, ActivityOut, ActivitySummary, ActivityUpdate
from justyou.repositories import documents
from justyou.services import analytics
from justyou.services.activities import resolve_time_spent, summarize, today

router = APIRouter(prefix="/activities", tags=["activities"])


async def _load_owned(activity_id: str, user: CurrentUser) -> dict:
    activity = await documents.get_document(ACTIVITIES, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    ensure_owner(activity, user)
    return activity


@router.post("", response_model=ActivityOut, status_code=201)
async def create_activity(payload: ActivityCreate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    if not payload.title.strip():
        raise HTTPException(status_code=400, detail="Please enter a title for your activity")
    doc = await documents.create_document(
        ACTIVITIES,
        {
            "type": payload.type,
            "title": payload.title.strip(),
            "description": payload.description,
            "timeSpent": resolve_time_spent(payload.timeSpent, payload.startTime, payload.endTime),
            "startTime": payload.startTime,
            "endTime": payload.endTime,
            "status": payload.status,
            "date": payload.date or today(),
            "userId": user.id,
            "userEmail": user.email or "",
        },
    )
    background.add_task(
        analytics.track_action, analytics.JOB_SEARCH_ACTION, "Add Activity", user.id,
        activityType=doc["type"], timeSpent=doc["timeSpent"], status=doc["status"],
    )
    return doc


@router.get("", response_model=List[ActivityOut])
async def list_activities(date: Optional[str] = Query(None), user: CurrentUser = Depends(get_current_user)):
    extra = {"date": date} if date else None
    return await documents.list_owned(ACTIVITIES, user.id, extra=extra)


@router.get("/summary", response_model=ActivitySummary)
async def activity_summary(date: Optional[str] = Query(None), user: CurrentUser = Depends(get_current_user)):
    day = date or today()
    rows = await documents.list_owned(ACTIVITIES, user.id, extra={"date": day})
    return summarize(rows, day)


@router.patch("/{activity_id}", response_model=ActivityOut)
async def update_activity(activity_id: str, payload: ActivityUpdate, user: CurrentUser = Depends(get_current_user)):
    current = await _load_owned(activity_id, user)
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in fields:
        if not (fields["title"] or "").strip():
            raise HTTPException(status_code=400, detail="Please enter a title for your activity")
        fields["title"] = fields["title"].strip()
    if {"timeSpent", "startTime", "endTime"} & fields.keys():
        start = fields.get("startTime", current.get("startTime"))
        end = fields.get("endTime", current.get("endTime"))
        if "timeSpent" in fields and not {"startTime", "endTime"} <= fields.keys():
            # a direct entry replaces the stored start/end pair
            start = end = None
            fields["startTime"] = fields["endTime"] = None
        fields["timeSpent"] = resolve_time_spent(fields.get("timeSpent", current.get("timeSpent")), start, end)
    updated = await documents.update_document(ACTIVITIES, activity_id, fields)
    if not updated:
        raise HTTPException(status_code=404, detail="Activity not found")
    return updated


@router.delete("/{activity_id}")
async def delete_activity(activity_id: str, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    await _load_owned(activity_id, user)
    await documents.delete_document(ACTIVITIES, activity_id)
    background.add_task(analytics.track_action, analytics.JOB_SEARCH_ACTION, "Delete Activity", user.id)
    return {"deleted": True}
