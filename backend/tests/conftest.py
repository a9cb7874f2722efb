"""
Shared fixtures for the job tracker tests.

Every test gets its own in-memory SQLite database. StaticPool keeps a single
connection alive so the tables created here are visible to the sessions the
app opens through the overridden get_db dependency.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import get_db, init_db
from main import app
from schemas.jobs import JobApplicationIn


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # no `with` block: the lifespan would create the on-disk database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_job():
    """Build a valid JobApplicationIn, overriding any field by keyword."""
    def _make(**overrides):
        data = {
            "date_applied": date(2024, 1, 15),
            "job_title": "Software Engineer",
            "company": "Acme Corp",
            "status": "Applied",
            "job_url": "https://acme.example/jobs/1",
            "notes": "Referral from Sam",
        }
        data.update(overrides)
        return JobApplicationIn(**data)
    return _make
