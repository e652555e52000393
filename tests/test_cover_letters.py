# tests/test_cover_letters.py
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

from justyou.main import app
from justyou.services import claude_api, prompts
from conftest import OTHER, OWNER


def test_cover_letter_prompt_lists_stories():
    prompt = prompts.cover_letter_prompt(
        "Backend engineer at Acme",
        [{"title": "Hackathon", "content": "Won first place."}, {"title": "Mentoring", "content": "Led juniors."}],
    )
    assert "write a professional cover letter for this job: Backend engineer at Acme" in prompt
    assert "Title: Hackathon\nWon first place.\n\nTitle: Mentoring\nLed juniors." in prompt


@pytest.mark.asyncio
async def test_generate_uses_only_selected_own_stories(monkeypatch, login):
    fake = AsyncMock(return_value="Dear hiring manager, ...")
    monkeypatch.setattr(claude_api, "call_claude", fake)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        a = (await ac.post("/api/v1/stories", json={"title": "Story A", "content": "alpha"})).json()["id"]
        b = (await ac.post("/api/v1/stories", json={"title": "Story B", "content": "beta"})).json()["id"]
        login(OTHER)
        foreign = (await ac.post("/api/v1/stories", json={"title": "Not yours", "content": "gamma"})).json()["id"]

        login(OWNER)
        r = await ac.post(
            "/api/v1/cover-letters/generate",
            json={"jobDescription": "Data analyst", "storyIds": [b, foreign, a]},
        )
    assert r.status_code == 200
    body = r.json()
    assert body["coverLetter"] == "Dear hiring manager, ..."
    assert body["storyIds"] == [b, a]
    prompt = fake.await_args.args[0]
    assert "Story B" in prompt and "Story A" in prompt
    assert "Not yours" not in prompt
    assert prompt.index("Story B") < prompt.index("Story A")


@pytest.mark.asyncio
async def test_generate_select_all(monkeypatch, login):
    fake = AsyncMock(return_value="letter")
    monkeypatch.setattr(claude_api, "call_claude", fake)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        for t in ("one", "two"):
            await ac.post("/api/v1/stories", json={"title": t, "content": t})
        r = await ac.post("/api/v1/cover-letters/generate", json={"jobDescription": "PM", "selectAll": True})
    assert len(r.json()["storyIds"]) == 2


@pytest.mark.asyncio
async def test_generate_requires_job_description(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/cover-letters/generate", json={"jobDescription": " "})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_generate_malformed_relay_reply_is_502(monkeypatch, login):
    from justyou.services import relay

    async def empty_envelope(prompt):
        return {"content": []}

    monkeypatch.setattr(relay, "forward_prompt", empty_envelope)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/cover-letters/generate", json={"jobDescription": "PM"})
    assert r.status_code == 502
    assert "detail" in r.json()


@pytest.mark.asyncio
async def test_saved_letters_are_private(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post(
            "/api/v1/cover-letters",
            json={"jobDescription": "PM", "storyIds": [], "coverLetter": "Dear team"},
        )
        assert r.status_code == 201
        lid = r.json()["id"]
        assert [c["id"] for c in (await ac.get("/api/v1/cover-letters")).json()] == [lid]
        assert (await ac.get(f"/api/v1/cover-letters/{lid}")).json()["coverLetter"] == "Dear team"

        login(OTHER)
        assert (await ac.get("/api/v1/cover-letters")).json() == []
        assert (await ac.get(f"/api/v1/cover-letters/{lid}")).status_code == 403
        assert (await ac.delete(f"/api/v1/cover-letters/{lid}")).status_code == 403
