# justyou/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from justyou.api.v1.activities import router as activities_router
from justyou.api.v1.cover_letters import router as cover_letters_router
from justyou.api.v1.goals import router as goals_router
from justyou.api.v1.quiz import router as quiz_router
# the relay keeps its historical root path /api/claude
from justyou.api.v1.relay import router as relay_router
from justyou.api.v1.resume import router as resume_router
from justyou.api.v1.stories import router as stories_router
from justyou.api.v1.todos import router as todos_router
from justyou.core.config import settings
from justyou.core.errors import AIServiceError, NotFoundError, PermissionDeniedError
from justyou.db.mongo import close_db, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("justyou")

app = FastAPI(title="JustYou API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(relay_router)
app.include_router(stories_router, prefix="/api/v1")
app.include_router(goals_router, prefix="/api/v1")
app.include_router(activities_router, prefix="/api/v1")
app.include_router(todos_router, prefix="/api/v1")
app.include_router(resume_router, prefix="/api/v1")
app.include_router(cover_letters_router, prefix="/api/v1")
app.include_router(quiz_router, prefix="/api/v1")


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc) or "Not found"})


@app.exception_handler(PermissionDeniedError)
async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
    return JSONResponse(status_code=403, content={"detail": str(exc) or "Not allowed"})


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    logger.error("AI request %s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=502, content={"detail": exc.user_message})


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    await init_db()
    logger.info("Relay running on %s:%s", settings.HOST, settings.PORT)


@app.on_event("shutdown")
async def shutdown_event():
    close_db()


def run():
    import uvicorn

    uvicorn.run("justyou.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
