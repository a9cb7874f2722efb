#!/usr/bin/env python3
"""
Job tracker debug CLI

Prints what is stored in the tracker database, or seeds/clears it.

Usage:
    python debug_jobs.py                      # list every record + status summary
    python debug_jobs.py add-test-data        # insert a handful of sample records
    python debug_jobs.py clear                # delete every record
    python debug_jobs.py --db /tmp/other.db   # any command against another file
"""

import argparse
import logging
import sys
from datetime import date, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from db import DB_PATH, init_db
from models.jobs import JobApplication
from schemas.jobs import JobApplicationIn
from services import jobs as store

logger = logging.getLogger(__name__)

SAMPLE_JOBS = [
    ("Senior Software Engineer", "Tech Corp", "Applied", "https://techcorp.com/jobs/123", "Applied through company website"),
    ("Backend Developer", "StartupXYZ", "Phone Screen", "https://startupxyz.com/careers", "Had initial phone call with HR"),
    ("Full Stack Developer", "BigTech Inc", "Interview", "https://bigtech.com/jobs/456", "Technical interview scheduled"),
    ("DevOps Engineer", "Cloud Systems", "Rejected", None, "Not a good fit for the role"),
    ("Platform Engineer", "DataWorks", "Offer", "https://dataworks.io/jobs/9", None),
]


def list_jobs(db: Session, out=None) -> int:
    out = out or sys.stdout
    jobs = store.list_jobs(db)
    print(f"Total job applications: {len(jobs)}\n", file=out)
    if not jobs:
        print("No job applications found.", file=out)
        print("Use 'python debug_jobs.py add-test-data' to add sample data.", file=out)
        return 0

    for i, job in enumerate(jobs, start=1):
        print(f"--- Job Application {i} ---", file=out)
        print(f"ID: {job.id}", file=out)
        print(f"Date Applied: {job.date_applied.isoformat()}", file=out)
        print(f"Job Title: {job.job_title}", file=out)
        print(f"Company: {job.company}", file=out)
        print(f"Status: {job.status}", file=out)
        if job.job_url:
            print(f"Job URL: {job.job_url}", file=out)
        if job.notes:
            print(f"Notes: {job.notes}", file=out)
        print(f"Created: {job.created_at:%Y-%m-%d %H:%M:%S}", file=out)
        print(f"Updated: {job.updated_at:%Y-%m-%d %H:%M:%S}", file=out)
        print(file=out)

    print("--- Status Summary ---", file=out)
    for status, count in store.status_counts(db).items():
        print(f"{status}: {count}", file=out)
    return len(jobs)


def add_test_data(db: Session, today=None) -> int:
    today = today or date.today()
    for offset, (title, company, status, url, notes) in enumerate(SAMPLE_JOBS):
        store.create_job(db, JobApplicationIn(
            date_applied=today - timedelta(days=offset * 3),
            job_title=title,
            company=company,
            status=status,
            job_url=url,
            notes=notes,
        ))
    return len(SAMPLE_JOBS)


def clear_jobs(db: Session) -> int:
    deleted = db.query(JobApplication).delete()
    db.commit()
    return deleted


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Inspect or seed the job tracker database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "command", nargs="?", default="list", choices=["list", "add-test-data", "clear"],
        help="What to do (default: list)",
    )
    parser.add_argument(
        "--db", type=str, default=DB_PATH,
        help=f"SQLite database file (default: {DB_PATH})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    engine = create_engine(f"sqlite:///{args.db}")
    init_db(engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    print(f"Database: {args.db}")
    with SessionLocal() as db:
        if args.command == "add-test-data":
            added = add_test_data(db)
            logger.info(f"Added {added} sample job applications")
        elif args.command == "clear":
            deleted = clear_jobs(db)
            logger.info(f"Deleted {deleted} job applications")
        else:
            list_jobs(db)
    engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
