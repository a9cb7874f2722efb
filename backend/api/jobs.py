# api/jobs.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from db import get_db
from dependencies import job_form
from schemas.jobs import JobApplicationIn, JobApplicationOut
from services import jobs as store
from services.jobs import JobNotFoundError
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["jobs"])

FLASH_MESSAGES = {
    "delete": "Failed to delete job application",
    "deleted": "Job application deleted successfully",
}


def _flash(error: Optional[str], success: Optional[str], job_id: Optional[str]):
    """Turn the ?error= / ?success= redirect parameters into (message, type)."""
    if error:
        if error == "notfound":
            if job_id:
                return f"Job application with ID {job_id} not found", "error"
            return "Job application not found", "error"
        return FLASH_MESSAGES.get(error, ""), "error"
    if success:
        return FLASH_MESSAGES.get(success, ""), "success"
    return "", ""


def _render_list(request: Request, db: Session, jobs, current_filter: str = "",
                 message: str = "", message_type: str = ""):
    return templates.TemplateResponse(request, "index.html", {
        "jobs": jobs,
        "status_counts": store.status_counts(db),
        "total_count": store.total_count(db),
        "current_filter": current_filter,
        "status_message": message,
        "status_type": message_type,
    })


# ---------- LIST ----------
@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    error: Optional[str] = None,
    success: Optional[str] = None,
    id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    message, message_type = _flash(error, success, id)
    return _render_list(request, db, store.list_jobs(db), "", message, message_type)


@router.get("/filter", response_class=HTMLResponse)
def filter_jobs(
    request: Request,
    status: str = Query(default="", description="exact status, blank for all"),
    db: Session = Depends(get_db),
):
    status = status.strip()
    jobs = store.list_jobs_by_status(db, status) if status else store.list_jobs(db)
    return _render_list(request, db, jobs, status)


# ---------- CREATE ----------
@router.get("/add", response_class=HTMLResponse)
def add_job_form(request: Request):
    return templates.TemplateResponse(request, "add_job.html", {})


@router.post("/create")
def create_job(
    app_in: JobApplicationIn = Depends(job_form),
    db: Session = Depends(get_db),
):
    rec = store.create_job(db, app_in)
    logger.info(f"Created job application {rec.id}: {rec.job_title} at {rec.company}")
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


# ---------- UPDATE ----------
@router.get("/edit/{job_id}", response_class=HTMLResponse)
def edit_job_form(job_id: int, request: Request, db: Session = Depends(get_db)):
    try:
        rec = store.get_job(db, job_id)
    except JobNotFoundError:
        logger.warning(f"Edit requested for missing job application {job_id}")
        raise HTTPException(status_code=404, detail="Job application not found")
    return templates.TemplateResponse(request, "edit_job.html", {"job": rec})


@router.post("/update/{job_id}")
def update_job(
    job_id: int,
    app_in: JobApplicationIn = Depends(job_form),
    db: Session = Depends(get_db),
):
    try:
        store.update_job(db, job_id, app_in)
    except JobNotFoundError:
        logger.warning(f"Update requested for missing job application {job_id}")
        raise HTTPException(status_code=404, detail="Job application not found")
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


# ---------- DELETE ----------
@router.post("/delete/{job_id}")
def delete_job(job_id: int, db: Session = Depends(get_db)):
    try:
        store.delete_job(db, job_id)
    except JobNotFoundError:
        logger.warning(f"Job application not found: ID {job_id}")
        return RedirectResponse(f"/?error=notfound&id={job_id}", status_code=status.HTTP_303_SEE_OTHER)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Error deleting job application {job_id}: {exc}")
        return RedirectResponse("/?error=delete", status_code=status.HTTP_303_SEE_OTHER)
    return RedirectResponse("/?success=deleted", status_code=status.HTTP_303_SEE_OTHER)


# ---------- JSON ----------
@router.get("/api/jobs", response_model=list[JobApplicationOut])
def list_jobs_json(
    status: Optional[str] = Query(default=None, description="exact status match"),
    db: Session = Depends(get_db),
):
    if status:
        return store.list_jobs_by_status(db, status)
    return store.list_jobs(db)


@router.get("/api/jobs/{job_id}", response_model=JobApplicationOut)
def get_job_json(job_id: int, db: Session = Depends(get_db)):
    try:
        return store.get_job(db, job_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Not found")
