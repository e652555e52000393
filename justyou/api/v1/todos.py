# justyou/api/v1/todos.py
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from justyou.api.v1.auth import ensure_owner, get_current_user
from justyou.core.security import CurrentUser
from justyou.db.mongo import TODOS
from justyou.models.todo import TodoCreate, TodoOut
from justyou.repositories import documents
from justyou.services import analytics

router = APIRouter(prefix="/todos", tags=["todos"])


async def _load_owned(todo_id: str, user: CurrentUser) -> dict:
    todo = await documents.get_document(TODOS, todo_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    ensure_owner(todo, user)
    return todo


@router.get("", response_model=List[TodoOut])
async def list_todos(user: CurrentUser = Depends(get_current_user)):
    return await documents.list_owned(TODOS, user.id, sort=[("createdAt", 1), ("_id", 1)])


@router.post("", response_model=TodoOut, status_code=201)
async def add_todo(payload: TodoCreate, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Todo text is required")
    todo = await documents.create_document(TODOS, {"text": payload.text.strip(), "completed": False, "userId": user.id})
    background.add_task(analytics.track_action, analytics.TODO_ACTION, "Add Todo", user.id)
    return todo


@router.post("/{todo_id}/toggle", response_model=TodoOut)
async def toggle_todo(todo_id: str, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    todo = await _load_owned(todo_id, user)
    updated = await documents.update_document(TODOS, todo_id, {"completed": not todo.get("completed", False)})
    background.add_task(analytics.track_action, analytics.TODO_ACTION, "Toggle Todo", user.id, completed=updated["completed"])
    return updated


@router.delete("/{todo_id}")
async def delete_todo(todo_id: str, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    await _load_owned(todo_id, user)
    await documents.delete_document(TODOS, todo_id)
    background.add_task(analytics.track_action, analytics.TODO_ACTION, "Delete Todo", user.id)
    return {"deleted": True}
