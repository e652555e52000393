# justyou/models/todo.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TodoCreate(BaseModel):
    text: str


class TodoOut(BaseModel):
    id: str
    text: str
    completed: bool = False
    userId: str
    createdAt: Optional[datetime] = None
