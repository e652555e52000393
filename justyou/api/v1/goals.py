# justyou/api/v1/goals.py
"""
Goal boards. The board owner (or the admin) manages categories, tasks and
suggestions; every other signed-in user may only suggest tasks.

Task and suggestion lists are stored inside the category document and are
rewritten as a whole on each change.
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from justyou.api.v1.auth import ensure_owner, get_current_user
from justyou.core import security
from justyou.core.security import CurrentUser
from justyou.db.mongo import GOALS
from justyou.models.goal import GoalCategoryCreate, GoalCategoryOut, GoalCategoryRename, MoveRequest, TextIn
from justyou.repositories import documents
from justyou.services import analytics, goals

router = APIRouter(prefix="/goals", tags=["goals"])


def _present(cat: dict) -> dict:
    return {**cat, "tasks": goals.sort_by_order(cat.get("tasks") or [])}


async def _board(owner_id: str) -> List[dict]:
    return await documents.list_documents(GOALS, {"userId": owner_id}, sort=[("order", 1), ("_id", 1)])


async def _load(category_id: str) -> dict:
    cat = await documents.get_document(GOALS, category_id)
    if not cat:
        raise HTTPException(status_code=404, detail="Goal category not found")
    return cat


async def _manageable(category_id: str, user: CurrentUser) -> dict:
    cat = await _load(category_id)
    ensure_owner(cat, user, allow_admin=True)
    return cat


def _required_text(value: str, label: str) -> str:
    text = value.strip()
    if not text:
        raise HTTPException(status_code=400, detail=f"{label} is required")
    return text


async def _save_orders(items: List[dict]) -> None:
    for item in items:
        await documents.update_document(GOALS, item["id"], {"order": item["order"]})


async def _save(category_id: str, **fields) -> dict:
    updated = await documents.update_document(GOALS, category_id, fields)
    if not updated:
        raise HTTPException(status_code=404, detail="Goal category not found")
    return _present(updated)


@router.get("", response_model=List[GoalCategoryOut])
async def get_board(user_id: Optional[str] = Query(None), user: CurrentUser = Depends(get_current_user)):
    return [_present(c) for c in await _board(user_id or user.id)]


@router.post("", response_model=GoalCategoryOut, status_code=201)
async def create_category(payload: GoalCategoryCreate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    category = _required_text(payload.category, "Category name")
    order = len(await _board(user.id))
    cat = await documents.create_document(
        GOALS,
        {"category": category, "tasks": [], "suggestions": [], "userId": user.id, "order": order},
    )
    background.add_task(analytics.track_action, analytics.GOAL_ACTION, "Add Category", user.id, goalType=category)
    return _present(cat)


@router.post("/reorder", response_model=List[GoalCategoryOut])
async def reorder_categories(payload: MoveRequest, user_id: Optional[str] = Query(None), user: CurrentUser = Depends(get_current_user)):
    owner_id = user_id or user.id
    if owner_id != user.id and not security.is_admin(user):
        raise HTTPException(status_code=403, detail="Not allowed")
    try:
        moved = goals.move(await _board(owner_id), payload.from_index, payload.to_index)
    except IndexError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    await _save_orders(moved)
    return [_present(c) for c in moved]


@router.patch("/{category_id}", response_model=GoalCategoryOut)
async def rename_category(category_id: str, payload: GoalCategoryRename, user: CurrentUser = Depends(get_current_user)):
    await _manageable(category_id, user)
    return await _save(category_id, category=_required_text(payload.category, "Category name"))


@router.delete("/{category_id}")
async def delete_category(category_id: str, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    cat = await _manageable(category_id, user)
    await documents.delete_document(GOALS, category_id)
    await _save_orders(goals.renumber(await _board(cat["userId"])))
    background.add_task(analytics.track_action, analytics.GOAL_ACTION, "Delete Category", user.id, goalType=cat.get("category"))
    return {"deleted": True}


@router.post("/{category_id}/tasks", response_model=GoalCategoryOut)
async def add_task(category_id: str, payload: TextIn, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    text = _required_text(payload.text, "Task text")
    cat = await _manageable(category_id, user)
    tasks = goals.add_task(cat.get("tasks") or [], text)
    background.add_task(analytics.track_action, analytics.GOAL_ACTION, "Add Task", user.id, goalType=cat.get("category"))
    return await _save(category_id, tasks=tasks)


@router.post("/{category_id}/tasks/move", response_model=GoalCategoryOut)
async def move_task(category_id: str, payload: MoveRequest, user: CurrentUser = Depends(get_current_user)):
    cat = await _manageable(category_id, user)
    try:
        tasks = goals.move(cat.get("tasks") or [], payload.from_index, payload.to_index)
    except IndexError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return await _save(category_id, tasks=tasks)


@router.post("/{category_id}/tasks/{task_id}/toggle", response_model=GoalCategoryOut)
async def toggle_task(category_id: str, task_id: str, user: CurrentUser = Depends(get_current_user)):
    cat = await _manageable(category_id, user)
    try:
        tasks = goals.toggle_task(cat.get("tasks") or [], task_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Task not found")
    return await _save(category_id, tasks=tasks)


@router.delete("/{category_id}/tasks/{task_id}", response_model=GoalCategoryOut)
async def delete_task(category_id: str, task_id: str, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    cat = await _manageable(category_id, user)
    try:
        tasks = goals.remove(cat.get("tasks") or [], task_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Task not found")
    background.add_task(analytics.track_action, analytics.GOAL_ACTION, "Delete Task", user.id, goalType=cat.get("category"))
    return await _save(category_id, tasks=tasks)


@router.post("/{category_id}/suggestions", response_model=GoalCategoryOut)
async def suggest_task(category_id: str, payload: TextIn, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    text = _required_text(payload.text, "Suggestion text")
    cat = await _load(category_id)
    if cat.get("userId") == user.id or security.is_admin(user):
        raise HTTPException(status_code=403, detail="Board owners add tasks directly")
    suggestions = goals.add_suggestion(cat.get("suggestions") or [], text, user.email)
    background.add_task(analytics.track_action, analytics.GOAL_ACTION, "Suggest Task", user.id, goalType=cat.get("category"))
    return await _save(category_id, suggestions=suggestions)


@router.post("/{category_id}/suggestions/{suggestion_id}/approve", response_model=GoalCategoryOut)
async def approve_suggestion(category_id: str, suggestion_id: str, user: CurrentUser = Depends(get_current_user)):
    cat = await _manageable(category_id, user)
    try:
        tasks, suggestions = goals.approve_suggestion(cat.get("tasks") or [], cat.get("suggestions") or [], suggestion_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return await _save(category_id, tasks=tasks, suggestions=suggestions)


@router.delete("/{category_id}/suggestions/{suggestion_id}", response_model=GoalCategoryOut)
async def delete_suggestion(category_id: str, suggestion_id: str, user: CurrentUser = Depends(get_current_user)):
    cat = await _manageable(category_id, user)
    try:
        suggestions = goals.discard_suggestion(cat.get("suggestions") or [], suggestion_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return await _save(category_id, suggestions=suggestions)
