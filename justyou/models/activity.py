# justyou/models/activity.py
from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict
from datetime import datetime

ActivityType = Literal["job_search", "upskilling"]
ActivityStatus = Literal["completed", "in_progress", "planned"]

# "HH:MM", 24h clock
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ActivityCreate(BaseModel):
    type: ActivityType = "job_search"
    title: str = ""
    description: str = ""
    timeSpent: Optional[int] = Field(None, ge=0)
    startTime: Optional[str] = Field(None, pattern=TIME_PATTERN)
    endTime: Optional[str] = Field(None, pattern=TIME_PATTERN)
    status: ActivityStatus = "completed"
    date: Optional[str] = None


class ActivityUpdate(BaseModel):
    type: Optional[ActivityType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    timeSpent: Optional[int] = Field(None, ge=0)
    startTime: Optional[str] = Field(None, pattern=TIME_PATTERN)
    endTime: Optional[str] = Field(None, pattern=TIME_PATTERN)
    status: Optional[ActivityStatus] = None


class ActivityOut(BaseModel):
    id: str
    type: ActivityType
    title: str
    description: str = ""
    timeSpent: int = 0
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: ActivityStatus
    date: str
    userId: str
    userEmail: Optional[str] = None
    createdAt: Optional[datetime] = None


class ActivitySummary(BaseModel):
    date: str
    totalMinutes: int
    totalFormatted: str
    count: int
    byType: Dict[str, int] = Field(default_factory=dict)
    byStatus: Dict[str, int] = Field(default_factory=dict)
