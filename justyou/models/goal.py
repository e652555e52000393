# justyou/models/goal.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class Task(BaseModel):
    id: str
    text: str
    completed: bool = False
    order: int = 0


class Suggestion(BaseModel):
    id: str
    text: str
    suggestedBy: str = "anonymous"


class GoalCategoryCreate(BaseModel):
    category: str = Field(..., min_length=1)


class GoalCategoryRename(BaseModel):
    category: str = Field(..., min_length=1)


class GoalCategoryOut(BaseModel):
    id: str
    category: str
    tasks: List[Task] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    userId: str
    order: int = 0
    createdAt: Optional[datetime] = None


class TextIn(BaseModel):
    text: str = Field(..., min_length=1)


class MoveRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)
