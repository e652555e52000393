# justyou/services/goals.py
"""
Ordering rules for goal boards.

Categories and the tasks inside a category carry an ``order`` field. After
every insert, delete or move the list is renumbered to 0..n-1 in its current
sequence. These helpers work on plain lists of dicts and never mutate their
input.
"""
import uuid
from typing import Any, Dict, List, Optional


def new_id() -> str:
    return uuid.uuid4().hex


def sort_by_order(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # stable: equal orders keep their stored sequence
    return sorted(items, key=lambda i: i.get("order", 0))


def renumber(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{**item, "order": idx} for idx, item in enumerate(items)]


def move(items: List[Dict[str, Any]], from_index: int, to_index: int) -> List[Dict[str, Any]]:
    """Drag and drop: remove at from_index, insert at to_index (clamped)."""
    ordered = sort_by_order(items)
    if not 0 <= from_index < len(ordered):
        raise IndexError(f"from_index {from_index} out of range")
    item = ordered.pop(from_index)
    to_index = max(0, min(to_index, len(ordered)))
    ordered.insert(to_index, item)
    return renumber(ordered)


def add_task(tasks: List[Dict[str, Any]], text: str) -> List[Dict[str, Any]]:
    ordered = sort_by_order(tasks)
    ordered.append({"id": new_id(), "text": text, "completed": False, "order": len(ordered)})
    return renumber(ordered)


def find(items: List[Dict[str, Any]], item_id: str) -> Optional[Dict[str, Any]]:
    return next((i for i in items if i.get("id") == item_id), None)


def toggle_task(tasks: List[Dict[str, Any]], task_id: str) -> List[Dict[str, Any]]:
    if find(tasks, task_id) is None:
        raise KeyError(task_id)
    return [{**t, "completed": not t.get("completed", False)} if t.get("id") == task_id else dict(t) for t in tasks]


def remove(items: List[Dict[str, Any]], item_id: str) -> List[Dict[str, Any]]:
    """Drop one item and close the gap in the order sequence."""
    if find(items, item_id) is None:
        raise KeyError(item_id)
    return renumber([i for i in sort_by_order(items) if i.get("id") != item_id])


def add_suggestion(suggestions: List[Dict[str, Any]], text: str, suggested_by: Optional[str]) -> List[Dict[str, Any]]:
    return [*suggestions, {"id": new_id(), "text": text, "suggestedBy": suggested_by or "anonymous"}]


def approve_suggestion(tasks: List[Dict[str, Any]], suggestions: List[Dict[str, Any]], suggestion_id: str):
    """Returns (tasks, suggestions) with the suggestion turned into an open task."""
    remaining = discard_suggestion(suggestions, suggestion_id)
    return add_task(tasks, find(suggestions, suggestion_id)["text"]), remaining


def discard_suggestion(suggestions: List[Dict[str, Any]], suggestion_id: str) -> List[Dict[str, Any]]:
    if find(suggestions, suggestion_id) is None:
        raise KeyError(suggestion_id)
    return [s for s in suggestions if s.get("id") != suggestion_id]
