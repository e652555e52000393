# justyou/services/quiz.py
"""
Quiz generation and grading on top of the prompt wrapper.

Both steps ask the model for JSON, pull the JSON span out of whatever text
comes back and validate it. Quizzes are not persisted.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from pydantic import ValidationError

from justyou.core.errors import ExtractionError
from justyou.models.quiz import DIFFICULTY_LABELS, Quiz, QuizGradeResponse, QuizQuestion, QuizResult
from justyou.services import claude_api, prompts
from justyou.services.json_extract import extract_json_array, extract_json_object

logger = logging.getLogger(__name__)

GENERATE_FAILED = "Failed to generate quiz. Please try again."
GRADE_FAILED = "Failed to grade quiz. Please try again."


def difficulty_label(difficulty: int) -> str:
    if 1 <= difficulty < len(DIFFICULTY_LABELS):
        return DIFFICULTY_LABELS[difficulty]
    return ""


def parse_quiz(text: str, difficulty: int) -> Quiz:
    try:
        data = extract_json_object(text)
        questions = [QuizQuestion.model_validate(q) for q in data.get("questions") or []]
    except ExtractionError as exc:
        logger.error("Quiz response could not be parsed: %s\nraw response: %s", exc, text)
        raise ExtractionError(str(exc), user_message=GENERATE_FAILED, raw=text) from exc
    except (ValidationError, TypeError, AttributeError) as exc:
        logger.error("Quiz JSON did not match the question shape: %s", exc)
        raise ExtractionError("Quiz JSON has invalid questions", user_message=GENERATE_FAILED, raw=text) from exc
    if not questions:
        raise ExtractionError("Quiz JSON has no questions", user_message=GENERATE_FAILED, raw=text)
    return Quiz(
        id=uuid.uuid4().hex,
        title=str(data.get("title") or "Quiz"),
        questions=questions,
        difficulty=difficulty,
        difficultyLabel=difficulty_label(difficulty),
        createdAt=datetime.now(timezone.utc),
    )


async def generate_quiz(notes: str, difficulty: int = 3) -> Quiz:
    text = await claude_api.call_claude(prompts.quiz_generation_prompt(notes, difficulty))
    return parse_quiz(text, difficulty)


def unanswered(questions: List[QuizQuestion], answers: Dict[str, str]) -> List[str]:
    return [q.id for q in questions if not (answers.get(q.id) or "").strip()]


def grading_payload(questions: List[QuizQuestion], answers: Dict[str, str]) -> List[dict]:
    out = []
    for q in questions:
        item = {
            "id": q.id,
            "type": q.type,
            "question": q.question,
            "correctAnswer": q.correctAnswer,
            "userAnswer": answers.get(q.id),
        }
        if q.options:
            item["options"] = q.options
        out.append(item)
    return out


def summarize(results: List[QuizResult]) -> QuizGradeResponse:
    total = sum(r.points for r in results)
    max_score = sum(r.maxPoints or 0 for r in results)
    percentage = round(total / max_score * 100) if results and max_score else 0
    return QuizGradeResponse(results=results, totalScore=total, maxScore=max_score, percentage=percentage)


def parse_results(text: str) -> List[QuizResult]:
    try:
        return [QuizResult.model_validate(r) for r in extract_json_array(text)]
    except ExtractionError as exc:
        logger.error("Grading response could not be parsed: %s\nraw response: %s", exc, text)
        raise ExtractionError(str(exc), user_message=GRADE_FAILED, raw=text) from exc
    except ValidationError as exc:
        logger.error("Grading JSON did not match the result shape: %s", exc)
        raise ExtractionError("Grading JSON has invalid results", user_message=GRADE_FAILED, raw=text) from exc


async def grade_quiz(questions: List[QuizQuestion], answers: Dict[str, str]) -> QuizGradeResponse:
    text = await claude_api.call_claude(prompts.quiz_grading_prompt(grading_payload(questions, answers)))
    return summarize(parse_results(text))
