# tests/test_todos.py
import pytest
from httpx import AsyncClient, ASGITransport

from justyou.main import app
from conftest import OTHER


@pytest.mark.asyncio
async def test_todo_flow(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/todos", json={"text": "  Email recruiter  "})
        assert r.status_code == 201
        todo = r.json()
        assert todo["text"] == "Email recruiter"
        assert todo["completed"] is False

        await ac.post("/api/v1/todos", json={"text": "Prep interview"})
        r = await ac.get("/api/v1/todos")
        assert [t["text"] for t in r.json()] == ["Email recruiter", "Prep interview"]

        r = await ac.post(f"/api/v1/todos/{todo['id']}/toggle")
        assert r.json()["completed"] is True
        r = await ac.post(f"/api/v1/todos/{todo['id']}/toggle")
        assert r.json()["completed"] is False

        r = await ac.delete(f"/api/v1/todos/{todo['id']}")
        assert r.status_code == 200
        r = await ac.get("/api/v1/todos")
        assert [t["text"] for t in r.json()] == ["Prep interview"]


@pytest.mark.asyncio
async def test_blank_todo_rejected(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/todos", json={"text": "   "})
        assert r.status_code == 400


@pytest.mark.asyncio
async def test_todos_scoped_to_user(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        tid = (await ac.post("/api/v1/todos", json={"text": "mine"})).json()["id"]
        login(OTHER)
        assert (await ac.get("/api/v1/todos")).json() == []
        r = await ac.post(f"/api/v1/todos/{tid}/toggle")
        assert r.status_code == 403
        r = await ac.delete("/api/v1/todos/000000000000000000000000")
        assert r.status_code == 404
