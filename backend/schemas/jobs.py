from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import date, datetime

from models.jobs import DEFAULT_STATUS


class JobApplicationIn(BaseModel):   # for create and full-record update
    date_applied: date
    job_title: str
    company: str
    status: Optional[str] = DEFAULT_STATUS
    job_url: Optional[str] = None
    notes: Optional[str] = None
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @field_validator("job_title")
    @classmethod
    def title_required(cls, v):
        if not v:
            raise ValueError("job title is required")
        return v

    @field_validator("company")
    @classmethod
    def company_required(cls, v):
        if not v:
            raise ValueError("company is required")
        return v

    @field_validator("status")
    @classmethod
    def default_status(cls, v):
        return v or DEFAULT_STATUS

    @field_validator("job_url", "notes")
    @classmethod
    def blank_to_none(cls, v):
        return v or None


class JobApplicationOut(JobApplicationIn):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
