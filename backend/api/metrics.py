# api/metrics.py
from typing import Dict, Any
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from db import get_db
from services import jobs as store

router = APIRouter(prefix="/api/stats", tags=["jobs-metrics"])


@router.get("")
def job_stats(db: Session = Depends(get_db)) -> Dict[str, int]:
    """Number of job applications per status."""
    return store.status_counts(db)


@router.get("/summary")
def jobs_summary(
    window_days: int = Query(default=90, ge=1, le=3650),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    return store.weekly_summary(db, window_days)
