# justyou/models/quiz.py
from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Dict
from datetime import datetime

# index = difficulty level, 0 unused
DIFFICULTY_LABELS = [
    "",
    "Beginner",
    "Novice",
    "Easy",
    "Intermediate",
    "Competent",
    "Proficient",
    "Advanced",
    "Expert",
    "Genius",
    "Harvard",
]


class QuizQuestion(BaseModel):
    id: str
    type: Literal["multiple_choice", "short_answer"]
    question: str
    options: Optional[List[str]] = None
    correctAnswer: str


class QuizGenerateRequest(BaseModel):
    notes: str = ""
    difficulty: int = Field(3, ge=1, le=10)


class Quiz(BaseModel):
    id: str
    title: str
    questions: List[QuizQuestion]
    difficulty: int
    difficultyLabel: str
    createdAt: datetime


class QuizGradeRequest(BaseModel):
    title: Optional[str] = None
    questions: List[QuizQuestion] = Field(..., min_length=1)
    answers: Dict[str, str] = Field(default_factory=dict)


class QuizResult(BaseModel):
    questionId: str
    points: float
    maxPoints: float
    feedback: str = ""
    explanation: Optional[str] = None
    correctAnswer: str = ""


class QuizGradeResponse(BaseModel):
    results: List[QuizResult]
    totalScore: float
    maxScore: float
    percentage: int
