# justyou/models/resume.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


# --- stored resume records ---

class ResumeJobIn(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = ""
    startDate: str = ""
    endDate: str = ""
    bulletPoints: List[str] = Field(default_factory=list)
    selected: bool = True


class ResumeJobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    bulletPoints: Optional[List[str]] = None
    selected: Optional[bool] = None


class ResumeProjectIn(BaseModel):
    name: str = Field(..., min_length=1)
    technologies: str = ""
    role: str = ""
    duration: str = ""
    description: str = ""
    selected: bool = True


class ResumeProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    technologies: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None
    selected: Optional[bool] = None


class ResumeSkillIn(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = "General"
    selected: bool = True


class ResumeSkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    selected: Optional[bool] = None


class ResumeFileOut(BaseModel):
    id: str
    filename: str
    contentType: Optional[str] = None
    storageKey: str
    fileType: str = "unknown"
    extractedText: str = ""
    selected: bool = False
    userId: str
    createdAt: Optional[datetime] = None


# --- document assembly ---

class PersonalInfo(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None


class Education(BaseModel):
    degree: str
    institution: str
    graduationDate: str = ""
    gpa: Optional[str] = None
    relevantCourses: Optional[str] = None


class Certification(BaseModel):
    name: str
    issuer: str = ""
    date: str = ""
    url: Optional[str] = None


class ExperienceEntry(BaseModel):
    title: str
    company: str = ""
    startDate: str = ""
    endDate: str = ""
    bulletPoints: List[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    name: str
    technologies: str = ""
    role: str = ""
    duration: str = ""
    description: str = ""


class SkillEntry(BaseModel):
    name: str
    category: str = "General"


class ResumeContent(BaseModel):
    personalInfo: PersonalInfo
    summary: Optional[str] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[SkillEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)


class ResumeBuildRequest(BaseModel):
    template: str = "classic"
    filename: str = "resume"
    personalInfo: PersonalInfo
    summary: Optional[str] = None
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)


# --- AI helpers ---

class ObjectiveRequest(BaseModel):
    jobDescription: str = ""
    currentObjective: str = ""


class OptimizeRequest(BaseModel):
    jobDescription: str = ""
    resumeText: Optional[str] = None
    resumeFileId: Optional[str] = None


class GeneratedText(BaseModel):
    text: str
