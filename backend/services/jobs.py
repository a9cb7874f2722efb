"""Store helpers for job applications.

Routes and the CSV importer go through these functions instead of building
queries inline, so ordering and not-found handling stay in one place.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Any, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.jobs import JobApplication, DEFAULT_STATUS
from schemas.jobs import JobApplicationIn


MUTABLE_FIELDS = ("date_applied", "job_title", "company", "status", "job_url", "notes")


class JobNotFoundError(LookupError):
    """Raised when no job application has the requested id."""

    def __init__(self, job_id: int):
        super().__init__(f"job application {job_id} not found")
        self.job_id = job_id


def _newest_first(q):
    return q.order_by(
        JobApplication.date_applied.desc(),
        JobApplication.created_at.desc(),
        JobApplication.id.desc(),
    )


def create_job(db: Session, data: JobApplicationIn) -> JobApplication:
    rec = JobApplication(**data.model_dump(include=set(MUTABLE_FIELDS)))
    db.add(rec)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(rec)
    return rec


def get_job(db: Session, job_id: int) -> JobApplication:
    rec = db.get(JobApplication, job_id)
    if rec is None:
        raise JobNotFoundError(job_id)
    return rec


def list_jobs(db: Session) -> List[JobApplication]:
    return _newest_first(db.query(JobApplication)).all()


def list_jobs_by_status(db: Session, status: str) -> List[JobApplication]:
    return _newest_first(db.query(JobApplication).filter(JobApplication.status == status)).all()


def update_job(db: Session, job_id: int, data: JobApplicationIn) -> JobApplication:
    """Replace every mutable field of the record; missing optionals are cleared."""
    rec = get_job(db, job_id)
    values = data.model_dump(include=set(MUTABLE_FIELDS))
    for k in MUTABLE_FIELDS:
        setattr(rec, k, values.get(k))
    # onupdate only fires when a column changed; a resubmitted form still counts
    rec.updated_at = func.now()
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(rec)
    return rec


def delete_job(db: Session, job_id: int) -> None:
    deleted = db.query(JobApplication).filter(JobApplication.id == job_id).delete()
    if not deleted:
        db.rollback()
        raise JobNotFoundError(job_id)
    db.commit()


def status_counts(db: Session) -> Dict[str, int]:
    rows = (
        db.query(JobApplication.status, func.count(JobApplication.id).label("cnt"))
        .group_by(JobApplication.status)
        .order_by(func.count(JobApplication.id).desc(), JobApplication.status)
        .all()
    )
    return {s: c for s, c in rows}


def total_count(db: Session) -> int:
    return db.query(func.count(JobApplication.id)).scalar() or 0


def weekly_summary(db: Session, window_days: int = 90, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Totals by status plus per-week counts for the last `window_days` days.

    Weeks start on Monday and are keyed by that Monday's ISO date. SQLite has
    no date_trunc, so the bucketing is done here rather than in SQL.
    """
    now = now or datetime.now(timezone.utc)
    since: date = (now - timedelta(days=window_days)).date()

    by_status = status_counts(db)
    totals = {"all": sum(by_status.values())}
    totals.update(by_status)

    rows = (
        db.query(JobApplication.date_applied, JobApplication.status)
        .filter(JobApplication.date_applied >= since)
        .all()
    )
    # bucket into {week_start: {status: count}}
    bucket: Dict[str, Dict[str, int]] = {}
    for applied, status in rows:
        week_start = applied - timedelta(days=applied.weekday())
        counts = bucket.setdefault(week_start.isoformat(), {})
        key = status or DEFAULT_STATUS
        counts[key] = counts.get(key, 0) + 1

    weekly = []
    for week_start in sorted(bucket.keys()):
        item = {"week_start": week_start}
        item.update(bucket[week_start])
        weekly.append(item)

    return {
        "window_days": window_days,
        "totals": totals,
        "weekly": weekly,
    }
