# tests/test_stories.py
import pytest
from httpx import AsyncClient, ASGITransport

from justyou.main import app
from justyou.services import prompts
from justyou.services.stories import extract_youtube_id, make_excerpt
from conftest import ADMIN, OTHER


def test_excerpt_is_first_150_chars_plus_ellipsis():
    content = "x" * 400
    assert make_excerpt(content) == "x" * 150 + "..."
    assert make_excerpt("short") == "short..."


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ?start=3", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?v=short", None),
        ("not a link", None),
        (None, None),
    ],
)
def test_extract_youtube_id(url, expected):
    assert extract_youtube_id(url) == expected


def test_random_prompt_skips_current():
    current = prompts.WRITING_PROMPTS[0]
    for _ in range(50):
        assert prompts.random_prompt(exclude=current) != current


@pytest.mark.asyncio
async def test_story_crud(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post(
            "/api/v1/stories",
            json={"title": "First job", "content": "A" * 200, "youtubeLink": "https://youtu.be/dQw4w9WgXcQ"},
        )
        assert r.status_code == 201
        story = r.json()
        assert story["excerpt"] == "A" * 150 + "..."
        assert story["youtubeId"] == "dQw4w9WgXcQ"
        assert story["authorEmail"] == "owner@example.com"
        sid = story["id"]

        r = await ac.patch(f"/api/v1/stories/{sid}", json={"content": "Rewritten"})
        assert r.status_code == 200
        assert r.json()["excerpt"] == "Rewritten..."
        assert r.json()["title"] == "First job"
        assert r.json()["updatedAt"] is not None

        r = await ac.get("/api/v1/stories")
        assert [s["id"] for s in r.json()] == [sid]

        r = await ac.delete(f"/api/v1/stories/{sid}")
        assert r.status_code == 200
        r = await ac.get(f"/api/v1/stories/{sid}")
        assert r.status_code == 404


@pytest.mark.asyncio
async def test_story_title_required(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/stories", json={"title": "", "content": "x"})
        assert r.status_code == 422


@pytest.mark.asyncio
async def test_only_author_edits_admin_may_delete(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        sid = (await ac.post("/api/v1/stories", json={"title": "Mine", "content": "c"})).json()["id"]

        login(OTHER)
        r = await ac.get(f"/api/v1/stories/{sid}")
        assert r.status_code == 200
        r = await ac.patch(f"/api/v1/stories/{sid}", json={"title": "Hijacked"})
        assert r.status_code == 403
        r = await ac.delete(f"/api/v1/stories/{sid}")
        assert r.status_code == 403
        r = await ac.get("/api/v1/stories")
        assert r.json() == []

        login(ADMIN)
        r = await ac.patch(f"/api/v1/stories/{sid}", json={"title": "Moderated"})
        assert r.status_code == 403
        r = await ac.delete(f"/api/v1/stories/{sid}")
        assert r.status_code == 200


@pytest.mark.asyncio
async def test_story_list_newest_first(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        for title in ("one", "two", "three"):
            await ac.post("/api/v1/stories", json={"title": title, "content": title})
        r = await ac.get("/api/v1/stories")
        assert [s["title"] for s in r.json()] == ["three", "two", "one"]
        r = await ac.get("/api/v1/stories", params={"limit": 1, "skip": 1})
        assert [s["title"] for s in r.json()] == ["two"]


@pytest.mark.asyncio
async def test_story_image_upload_local_storage(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        sid = (await ac.post("/api/v1/stories", json={"title": "Pic", "content": "c"})).json()["id"]
        files = {"file": ("photo.png", b"\x89PNG fake", "image/png")}
        r = await ac.post(f"/api/v1/stories/{sid}/image", files=files)
        assert r.status_code == 200
        body = r.json()
        assert body["imageKey"].startswith("blog-images/user-owner/")
        assert body["imageKey"].endswith(".png")
        assert body["imageUrl"].startswith("file://")

        r = await ac.post(f"/api/v1/stories/{sid}/image", files={"file": ("notes.txt", b"hi", "text/plain")})
        assert r.status_code == 400


@pytest.mark.asyncio
async def test_writing_prompt_endpoint(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.get("/api/v1/stories/prompts/random", params={"current": prompts.WRITING_PROMPTS[3]})
        assert r.status_code == 200
        assert r.json()["prompt"] in prompts.WRITING_PROMPTS
        assert r.json()["prompt"] != prompts.WRITING_PROMPTS[3]


@pytest.mark.asyncio
async def test_story_patch_rejects_null_or_blank_title(login):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        r = await ac.post("/api/v1/stories", json={"title": "Draft", "content": "x", "youtubeLink": "https://youtu.be/dQw4w9WgXcQ"})
        story_id = r.json()["id"]

        assert (await ac.patch(f"/api/v1/stories/{story_id}", json={"title": None})).status_code == 400
        assert (await ac.patch(f"/api/v1/stories/{story_id}", json={"title": "   "})).status_code == 400

        r = await ac.patch(f"/api/v1/stories/{story_id}", json={"youtubeLink": None, "content": None})
        assert r.status_code == 200
        assert r.json()["youtubeLink"] == ""
        assert r.json()["youtubeId"] is None
        assert r.json()["content"] == ""

        r = await ac.get(f"/api/v1/stories/{story_id}")
        assert r.status_code == 200
        assert r.json()["title"] == "Draft"
