# justyou/api/v1/resume.py
"""
Resume builder: stored jobs, projects and skills, uploaded resume files,
LaTeX/PDF rendering and the two AI helpers (objective and resume optimizer).
"""
import asyncio
import logging
from typing import List, Type

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Response, UploadFile
from pydantic import BaseModel

from justyou.api.v1.auth import ensure_owner, get_current_user
from justyou.core.config import settings
from justyou.core.security import CurrentUser
from justyou.db.mongo import RESUME_FILES, RESUME_JOBS, RESUME_PROJECTS, RESUME_SKILLS
from justyou.models.resume import (
    GeneratedText,
    ObjectiveRequest,
    OptimizeRequest,
    ResumeBuildRequest,
    ResumeFileOut,
    ResumeJobIn,
    ResumeJobUpdate,
    ResumeProjectIn,
    ResumeProjectUpdate,
    ResumeSkillIn,
    ResumeSkillUpdate,
)
from justyou.repositories import documents
from justyou.services import analytics, resume_tools, storage
from justyou.services.latex_compiler import compile_latex, sanitize_filename
from justyou.services.parse_utils import extract_text_auto, is_allowed_filename
from justyou.services.resume_pdf import UnknownTemplateError, assemble_content, render_latex

router = APIRouter(prefix="/resume", tags=["resume"])
logger = logging.getLogger(__name__)

DOWNLOAD_URL_TTL = 3600


async def _load_owned(collection: str, record_id: str, user: CurrentUser, label: str) -> dict:
    doc = await documents.get_document(collection, record_id)
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    ensure_owner(doc, user)
    return doc


def _record_routes(path: str, collection: str, create_model: Type[BaseModel], update_model: Type[BaseModel], label: str) -> None:
    """Register list/create/update/delete for one kind of stored resume record."""

    @router.get(f"/{path}", name=f"list_{path}")
    async def list_records(user: CurrentUser = Depends(get_current_user)) -> List[dict]:
        return await documents.list_owned(collection, user.id, sort=[("createdAt", 1), ("_id", 1)])

    @router.post(f"/{path}", status_code=201, name=f"create_{path}")
    async def create_record(payload: create_model, user: CurrentUser = Depends(get_current_user)) -> dict:
        return await documents.create_document(collection, {**payload.model_dump(), "userId": user.id})

    @router.patch(f"/{path}/{{record_id}}", name=f"update_{path}")
    async def update_record(record_id: str, payload: update_model, user: CurrentUser = Depends(get_current_user)) -> dict:
        await _load_owned(collection, record_id, user, label)
        updated = await documents.update_document(collection, record_id, payload.model_dump(exclude_unset=True, exclude_none=True))
        if not updated:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return updated

    @router.delete(f"/{path}/{{record_id}}", name=f"delete_{path}")
    async def delete_record(record_id: str, user: CurrentUser = Depends(get_current_user)) -> dict:
        await _load_owned(collection, record_id, user, label)
        await documents.delete_document(collection, record_id)
        return {"deleted": True}


_record_routes("jobs", RESUME_JOBS, ResumeJobIn, ResumeJobUpdate, "Job")
_record_routes("projects", RESUME_PROJECTS, ResumeProjectIn, ResumeProjectUpdate, "Project")
_record_routes("skills", RESUME_SKILLS, ResumeSkillIn, ResumeSkillUpdate, "Skill")


# --- uploaded resume files ---

@router.post("/files", response_model=ResumeFileOut, status_code=201)
async def upload_resume_file(background: BackgroundTasks, file: UploadFile = File(...), user: CurrentUser = Depends(get_current_user)):
    if not is_allowed_filename(file.filename):
        raise HTTPException(status_code=400, detail="Only PDF, DOCX and TXT files are supported")
    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(contents) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")
    try:
        key = await storage.store_file(file, prefix=f"resume-files/{user.id}", contents=contents)
    except Exception as exc:
        logger.exception("Storing resume file %s failed", file.filename)
        raise HTTPException(status_code=500, detail="Failed to store file") from exc
    text, file_type = extract_text_auto(contents, file.filename)
    doc = await documents.create_document(
        RESUME_FILES,
        {
            "filename": file.filename,
            "contentType": file.content_type,
            "storageKey": key,
            "fileType": file_type,
            "extractedText": text,
            "selected": False,
            "userId": user.id,
        },
    )
    background.add_task(analytics.track_action, analytics.RESUME_ACTION, "Upload Resume", user.id, fileType=file_type)
    return doc


@router.get("/files", response_model=List[ResumeFileOut])
async def list_resume_files(user: CurrentUser = Depends(get_current_user)):
    return await documents.list_owned(RESUME_FILES, user.id)


@router.post("/files/{file_id}/select", response_model=ResumeFileOut)
async def toggle_resume_file(file_id: str, user: CurrentUser = Depends(get_current_user)):
    doc = await _load_owned(RESUME_FILES, file_id, user, "File")
    return await documents.update_document(RESUME_FILES, file_id, {"selected": not doc.get("selected", False)})


@router.get("/files/{file_id}/url")
async def resume_file_url(file_id: str, user: CurrentUser = Depends(get_current_user)):
    doc = await _load_owned(RESUME_FILES, file_id, user, "File")
    url = storage.generate_presigned_url(doc["storageKey"], expires_in=DOWNLOAD_URL_TTL)
    if not url:
        raise HTTPException(status_code=404, detail="File content not available")
    return {"url": url, "expires_in": DOWNLOAD_URL_TTL}


@router.delete("/files/{file_id}")
async def delete_resume_file(file_id: str, user: CurrentUser = Depends(get_current_user)):
    doc = await _load_owned(RESUME_FILES, file_id, user, "File")
    await documents.delete_document(RESUME_FILES, file_id)
    storage.delete_object(doc["storageKey"])
    return {"deleted": True}


# --- rendering ---

async def _build_tex(payload: ResumeBuildRequest, user: CurrentUser) -> str:
    if not payload.personalInfo.name.strip():
        raise HTTPException(status_code=400, detail="Please enter your name")
    jobs = await documents.list_owned(RESUME_JOBS, user.id, sort=[("createdAt", 1), ("_id", 1)])
    projects = await documents.list_owned(RESUME_PROJECTS, user.id, sort=[("createdAt", 1), ("_id", 1)])
    skills = await documents.list_owned(RESUME_SKILLS, user.id, sort=[("createdAt", 1), ("_id", 1)])
    content = assemble_content(payload, jobs, projects, skills)
    try:
        return render_latex(content, payload.template)
    except UnknownTemplateError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/render")
async def render_resume_tex(payload: ResumeBuildRequest, user: CurrentUser = Depends(get_current_user)):
    return {"template": payload.template, "tex_source": await _build_tex(payload, user)}


@router.post("/pdf")
async def render_resume_pdf(payload: ResumeBuildRequest, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    tex = await _build_tex(payload, user)
    jobname = sanitize_filename(payload.filename)

    loop = asyncio.get_running_loop()
    success, pdf_bytes, log = await loop.run_in_executor(None, compile_latex, tex, jobname, None)
    if not success:
        logger.error("Resume PDF compile failed for user %s:\n%s", user.id, log[-2000:])
        raise HTTPException(status_code=500, detail={"message": "Failed to generate PDF", "compiled": False, "log": log[-2000:]})
    if len(pdf_bytes) > settings.LATEX_MAX_PDF_BYTES:
        raise HTTPException(status_code=500, detail="Generated PDF is too large")

    background.add_task(analytics.track_action, analytics.RESUME_ACTION, "Download PDF", user.id, template=payload.template)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{jobname}.pdf"'},
    )


# --- AI helpers ---

@router.post("/objective", response_model=GeneratedText)
async def optimize_objective(payload: ObjectiveRequest, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    if not payload.jobDescription.strip() or not payload.currentObjective.strip():
        raise HTTPException(status_code=400, detail="Please enter both a job description and your current objective")
    text = await resume_tools.optimize_objective(payload.jobDescription, payload.currentObjective)
    background.add_task(analytics.track_action, analytics.RESUME_ACTION, "Optimize Objective", user.id)
    return {"text": text}


@router.post("/optimize", response_model=GeneratedText)
async def optimize_resume(payload: OptimizeRequest, background: BackgroundTasks, user: CurrentUser = Depends(get_current_user)):
    if not payload.jobDescription.strip():
        raise HTTPException(status_code=400, detail="Please enter a job description")
    resume_text = (payload.resumeText or "").strip()
    if not resume_text and payload.resumeFileId:
        doc = await _load_owned(RESUME_FILES, payload.resumeFileId, user, "File")
        resume_text = (doc.get("extractedText") or "").strip()
    if not resume_text:
        raise HTTPException(status_code=400, detail="Please provide your resume text or an uploaded resume")
    text = await resume_tools.optimize_resume(payload.jobDescription, resume_text)
    background.add_task(analytics.track_action, analytics.RESUME_ACTION, "Optimize Resume", user.id)
    return {"text": text}
