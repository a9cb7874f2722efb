"""Bulk import of job applications from an uploaded CSV file.

Columns, in order: date applied, job title, company, [status], [url], [notes].
A header row is optional and is recognised by keywords in its first column.
Rows are inserted one at a time: a bad row is reported and skipped, the rest
of the file is still imported.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.jobs import DEFAULT_STATUS
from schemas.jobs import JobApplicationIn
from services.jobs import create_job

logger = logging.getLogger(__name__)

# Tried in order, first match wins. %m and %d accept values without a
# leading zero, so "1/2/2024" and "2024-1-2" are covered too. US month/day
# is tried before European day/month.
DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d-%b-%Y",
]

HEADER_KEYWORDS = ["date", "job", "title", "company", "position", "role"]

MIN_COLUMNS = 3


class CSVImportError(Exception):
    """Raised when the uploaded file cannot be read as CSV at all."""


class CSVRowError(ValueError):
    """Raised for a single row that cannot be turned into a job application."""


@dataclass
class ImportResult:
    success_count: int = 0
    error_count: int = 0
    errors: List[str] = field(default_factory=list)
    total_rows: int = 0

    def add_error(self, row_number: int, message: str) -> None:
        self.error_count += 1
        self.errors.append(f"Row {row_number}: {message}")


def parse_date(raw: str) -> date:
    value = (raw or "").strip()
    if not value:
        raise CSVRowError("date is required")
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise CSVRowError("unrecognized date format")


def is_header_row(record: Sequence[str]) -> bool:
    if not record:
        return False
    first_col = record[0].strip().lower()
    return any(keyword in first_col for keyword in HEADER_KEYWORDS)


def _is_blank(record: Sequence[str]) -> bool:
    # an empty line, or a line holding a single blank cell; ",," is a row with
    # empty required fields and gets reported
    return not record or (len(record) == 1 and not record[0].strip())


def _column(record: Sequence[str], idx: int) -> str:
    return record[idx].strip() if len(record) > idx else ""


def parse_csv_record(record: Sequence[str]) -> JobApplicationIn:
    if len(record) < MIN_COLUMNS:
        raise CSVRowError("insufficient columns (need at least: date_applied, job_title, company)")

    raw_date = record[0].strip()
    try:
        date_applied = parse_date(raw_date)
    except CSVRowError as exc:
        raise CSVRowError(f"invalid date format '{raw_date}': {exc}") from exc

    job_title = _column(record, 1)
    if not job_title:
        raise CSVRowError("job title is required")

    company = _column(record, 2)
    if not company:
        raise CSVRowError("company is required")

    try:
        return JobApplicationIn(
            date_applied=date_applied,
            job_title=job_title,
            company=company,
            status=_column(record, 3) or DEFAULT_STATUS,
            job_url=_column(record, 4) or None,
            notes=_column(record, 5) or None,
        )
    except ValidationError as exc:
        raise CSVRowError("; ".join(err["msg"].removeprefix("Value error, ") for err in exc.errors())) from exc


def read_records(content: bytes | str) -> List[List[str]]:
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CSVImportError("Failed to parse CSV file") from exc
    try:
        records = list(csv.reader(io.StringIO(content)))
    except csv.Error as exc:
        raise CSVImportError("Failed to parse CSV file") from exc
    if all(_is_blank(record) for record in records):
        raise CSVImportError("CSV file is empty")
    return records


def import_csv(db: Session, content: bytes | str) -> ImportResult:
    """Parse `content` and insert every valid row.

    Blank lines are dropped before anything else: they are neither errors nor
    part of `total_rows`, and the header check looks at the first non-blank
    row. Row numbers in error messages are still 1-based line positions in the
    file (header and blank lines included) so they can be found in an editor.
    """
    records = read_records(content)

    rows = [(idx + 1, record) for idx, record in enumerate(records) if not _is_blank(record)]
    if is_header_row(rows[0][1]):
        rows = rows[1:]
    result = ImportResult(total_rows=len(rows))

    for row_number, record in rows:
        try:
            job = parse_csv_record(record)
        except CSVRowError as exc:
            result.add_error(row_number, str(exc))
            continue

        try:
            create_job(db, job)
        except SQLAlchemyError as exc:
            logger.error(f"CSV row {row_number} could not be saved: {exc}")
            result.add_error(row_number, f"Failed to save {job.job_title} at {job.company}: {exc}")
        else:
            result.success_count += 1

    logger.info(
        f"CSV import finished: {result.success_count} imported, "
        f"{result.error_count} failed, {result.total_rows} rows"
    )
    return result
