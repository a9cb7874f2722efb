from sqlalchemy import Column, Integer, String, Text, Date, DateTime, func
from db import Base

DEFAULT_STATUS = "Applied"

# suggested values for the status dropdowns, status itself stays free text
COMMON_STATUSES = [
    "Applied",
    "In Review",
    "Phone Screen",
    "Interview",
    "Technical Test",
    "Offer",
    "Rejected",
    "Withdrawn",
    "No Response",
]


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)

    date_applied = Column(Date, nullable=False, index=True)
    job_title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    status = Column(String(50), default=DEFAULT_STATUS, server_default=DEFAULT_STATUS, nullable=False, index=True)
    job_url = Column(String(1024))  # store as string
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<JobApplication {self.id} {self.job_title} @ {self.company} ({self.status})>"
