from fastapi import Form, HTTPException, status
from typing import Optional
from datetime import datetime
from pydantic import ValidationError

from schemas.jobs import JobApplicationIn

FORM_DATE_FORMAT = "%Y-%m-%d"   # what <input type="date"> submits


def job_form(date_applied: str = Form(""),
             job_title: str = Form(""),
             company: str = Form(""),
             status_value: Optional[str] = Form("", alias="status"),
             job_url: Optional[str] = Form(""),
             notes: Optional[str] = Form("")) -> JobApplicationIn:
    """Build a JobApplicationIn from the add/edit form or reject the request with 400."""
    try:
        applied = datetime.strptime(date_applied.strip(), FORM_DATE_FORMAT).date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format"
        )
    try:
        return JobApplicationIn(
            date_applied=applied,
            job_title=job_title,
            company=company,
            status=status_value,
            job_url=job_url,
            notes=notes,
        )
    except ValidationError as exc:
        # pydantic prefixes custom messages with "Value error, "
        messages = [err["msg"].removeprefix("Value error, ") for err in exc.errors()]
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="; ".join(messages)
        )
