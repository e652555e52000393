# justyou/models/cover_letter.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CoverLetterGenerate(BaseModel):
    jobDescription: str
    storyIds: List[str] = Field(default_factory=list)
    # use every story the caller owns instead of storyIds
    selectAll: bool = False


class CoverLetterGenerated(BaseModel):
    coverLetter: str
    storyIds: List[str]


class CoverLetterCreate(BaseModel):
    jobDescription: str
    storyIds: List[str] = Field(default_factory=list)
    coverLetter: str = Field(..., min_length=1)


class CoverLetterOut(BaseModel):
    id: str
    jobDescription: str
    storyIds: List[str] = Field(default_factory=list)
    coverLetter: str
    userId: str
    userEmail: Optional[str] = None
    createdAt: Optional[datetime] = None
