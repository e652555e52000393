# justyou/api/v1/quiz.py
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from justyou.api.v1.auth import get_current_user
from justyou.core.security import CurrentUser
from justyou.models.quiz import Quiz, QuizGenerateRequest, QuizGradeRequest, QuizGradeResponse
from justyou.services import analytics, quiz

router = APIRouter(prefix="/quiz", tags=["quiz"])


@router.post("/generate", response_model=Quiz)
async def generate_quiz(payload: QuizGenerateRequest, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    if not payload.notes.strip():
        raise HTTPException(status_code=400, detail="Please enter some notes to generate a quiz")
    result = await quiz.generate_quiz(payload.notes, payload.difficulty)
    background.add_task(
        analytics.track_action, analytics.QUIZ_ACTION, "Generate Quiz", user.id,
        difficulty=payload.difficulty, questionCount=len(result.questions),
    )
    return result


@router.post("/grade", response_model=QuizGradeResponse)
async def grade_quiz(payload: QuizGradeRequest, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    missing = quiz.unanswered(payload.questions, payload.answers)
    if missing:
        raise HTTPException(
            status_code=400,
            detail={"message": "Please answer all questions before submitting", "unanswered": missing},
        )
    graded = await quiz.grade_quiz(payload.questions, payload.answers)
    background.add_task(
        analytics.track_action, analytics.QUIZ_ACTION, "Submit Quiz", user.id,
        score=graded.totalScore, maxScore=graded.maxScore, percentage=graded.percentage,
    )
    return graded
