# tests/test_quiz.py
import json
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

from justyou.core.errors import ExtractionError
from justyou.main import app
from justyou.models.quiz import QuizQuestion
from justyou.services import claude_api, quiz

QUIZ_REPLY = """Here is your quiz!
{
  "title": "Photosynthesis",
  "questions": [
    {"id": "q1", "type": "multiple_choice", "question": "Where does it happen?",
     "options": ["Chloroplast", "Nucleus", "Ribosome"], "correctAnswer": "Chloroplast"},
    {"id": "q2", "type": "short_answer", "question": "What gas is released?", "correctAnswer": "Oxygen"}
  ]
}"""

GRADE_REPLY = json.dumps(
    [
        {"questionId": "q1", "points": 5, "maxPoints": 5, "feedback": "Correct", "explanation": "...", "correctAnswer": "Chloroplast"},
        {"questionId": "q2", "points": 7, "maxPoints": 10, "feedback": "Mostly", "explanation": "...", "correctAnswer": "Oxygen"},
    ]
)

QUESTIONS = [
    {"id": "q1", "type": "multiple_choice", "question": "Where?", "options": ["Chloroplast", "Nucleus"], "correctAnswer": "Chloroplast"},
    {"id": "q2", "type": "short_answer", "question": "What gas?", "correctAnswer": "Oxygen"},
]


def test_parse_quiz_reads_questions():
    result = quiz.parse_quiz(QUIZ_REPLY, 7)
    assert result.title == "Photosynthesis"
    assert [q.id for q in result.questions] == ["q1", "q2"]
    assert result.difficultyLabel == "Advanced"
    assert result.questions[1].options is None


def test_parse_quiz_without_json_has_user_message():
    with pytest.raises(ExtractionError) as exc_info:
        quiz.parse_quiz("Sorry, I can't help with that.", 3)
    assert exc_info.value.user_message == quiz.GENERATE_FAILED


def test_parse_quiz_rejects_bad_question_shape():
    with pytest.raises(ExtractionError):
        quiz.parse_quiz('{"title": "x", "questions": [{"id": "q1", "type": "essay"}]}', 3)


def test_unanswered_lists_blank_answers():
    questions = [QuizQuestion(**q) for q in QUESTIONS]
    assert quiz.unanswered(questions, {"q1": "Chloroplast", "q2": "  "}) == ["q2"]
    assert quiz.unanswered(questions, {"q1": "A", "q2": "B"}) == []


def test_summarize_totals_and_percentage():
    results = quiz.parse_results(GRADE_REPLY)
    summary = quiz.summarize(results)
    assert summary.totalScore == 12
    assert summary.maxScore == 15
    assert summary.percentage == 80


def test_summarize_empty():
    summary = quiz.summarize([])
    assert summary.percentage == 0
    assert summary.maxScore == 0


@pytest.mark.asyncio
async def test_generate_endpoint(monkeypatch, login):
    fake = AsyncMock(return_value=QUIZ_REPLY)
    monkeypatch.setattr(claude_api, "call_claude", fake)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/quiz/generate", json={"notes": "Plants make food from light.", "difficulty": 4})
    assert r.status_code == 200
    body = r.json()
    assert body["title"] == "Photosynthesis"
    assert body["difficulty"] == 4
    assert body["difficultyLabel"] == "Intermediate"
    prompt = fake.await_args.args[0]
    assert "Plants make food from light." in prompt
    assert "difficulty level 4" in prompt


@pytest.mark.asyncio
async def test_generate_requires_notes(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/quiz/generate", json={"notes": "   "})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_generate_unparseable_reply_is_502(monkeypatch, login):
    monkeypatch.setattr(claude_api, "call_claude", AsyncMock(return_value="no json here"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/quiz/generate", json={"notes": "notes"})
    assert r.status_code == 502
    assert r.json() == {"detail": "Failed to generate quiz. Please try again."}


@pytest.mark.asyncio
async def test_grade_endpoint(monkeypatch, login):
    fake = AsyncMock(return_value="Results:\n" + GRADE_REPLY)
    monkeypatch.setattr(claude_api, "call_claude", fake)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post(
            "/api/v1/quiz/grade",
            json={"questions": QUESTIONS, "answers": {"q1": "Chloroplast", "q2": "O2"}},
        )
    assert r.status_code == 200
    body = r.json()
    assert body["totalScore"] == 12
    assert body["percentage"] == 80
    assert '"userAnswer": "O2"' in fake.await_args.args[0]


@pytest.mark.asyncio
async def test_grade_refuses_unanswered(monkeypatch, login):
    fake = AsyncMock(return_value=GRADE_REPLY)
    monkeypatch.setattr(claude_api, "call_claude", fake)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/quiz/grade", json={"questions": QUESTIONS, "answers": {"q1": "Chloroplast"}})
    assert r.status_code == 400
    assert r.json()["detail"]["unanswered"] == ["q2"]
    fake.assert_not_awaited()


@pytest.mark.asyncio
async def test_grade_unparseable_reply_is_502(monkeypatch, login):
    monkeypatch.setattr(claude_api, "call_claude", AsyncMock(return_value="I could not grade this."))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/quiz/grade", json={"questions": QUESTIONS, "answers": {"q1": "a", "q2": "b"}})
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to grade quiz. Please try again."


@pytest.mark.asyncio
async def test_quiz_requires_login():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/quiz/generate", json={"notes": "x"})
    assert r.status_code == 401
