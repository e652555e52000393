# justyou/models/story.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class StoryCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = ""
    youtubeLink: Optional[str] = None
    imageUrl: Optional[str] = None


class StoryUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    youtubeLink: Optional[str] = None
    imageUrl: Optional[str] = None


class StoryOut(BaseModel):
    id: str
    title: str
    content: str = ""
    excerpt: str = ""
    date: Optional[str] = None
    imageUrl: Optional[str] = None
    imageKey: Optional[str] = None
    youtubeLink: Optional[str] = None
    youtubeId: Optional[str] = None
    authorId: str
    authorEmail: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class WritingPrompt(BaseModel):
    prompt: str
