"""
Tests for the store helpers in services/jobs.py.
"""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from models.jobs import JobApplication
from schemas.jobs import JobApplicationIn
from services import jobs as store
from services.jobs import JobNotFoundError


# ============================================================
# create / get
# ============================================================


class TestCreateAndGet:
    def test_create_assigns_id_and_timestamps(self, db_session, make_job):
        rec = store.create_job(db_session, make_job())
        assert rec.id is not None
        assert rec.created_at is not None
        assert rec.updated_at is not None

    def test_fetch_returns_same_values(self, db_session, make_job):
        data = make_job(status="Phone Screen", notes="Talked to HR")
        rec = store.create_job(db_session, data)
        db_session.expire_all()

        fetched = store.get_job(db_session, rec.id)
        assert fetched.date_applied == date(2024, 1, 15)
        assert fetched.job_title == "Software Engineer"
        assert fetched.company == "Acme Corp"
        assert fetched.status == "Phone Screen"
        assert fetched.job_url == "https://acme.example/jobs/1"
        assert fetched.notes == "Talked to HR"

    def test_ids_are_unique(self, db_session, make_job):
        a = store.create_job(db_session, make_job())
        b = store.create_job(db_session, make_job())
        assert a.id != b.id

    def test_status_defaults_to_applied(self, db_session, make_job):
        rec = store.create_job(db_session, make_job(status=""))
        assert rec.status == "Applied"

    def test_free_text_status_is_kept(self, db_session, make_job):
        rec = store.create_job(db_session, make_job(status="Ghosted"))
        assert store.get_job(db_session, rec.id).status == "Ghosted"

    def test_get_missing_raises_not_found(self, db_session):
        with pytest.raises(JobNotFoundError) as exc:
            store.get_job(db_session, 999)
        assert exc.value.job_id == 999


# ============================================================
# input validation
# ============================================================


class TestJobApplicationIn:
    def test_blank_title_rejected(self, make_job):
        with pytest.raises(ValidationError, match="job title is required"):
            make_job(job_title="   ")

    def test_blank_company_rejected(self, make_job):
        with pytest.raises(ValidationError, match="company is required"):
            make_job(company="")

    def test_blank_optionals_become_none(self, make_job):
        data = make_job(job_url="  ", notes="")
        assert data.job_url is None
        assert data.notes is None

    def test_whitespace_is_stripped(self, make_job):
        data = make_job(job_title="  Data Engineer ", company=" Initech ")
        assert data.job_title == "Data Engineer"
        assert data.company == "Initech"


# ============================================================
# update / delete
# ============================================================


class TestUpdateAndDelete:
    def test_update_replaces_every_field(self, db_session, make_job):
        rec = store.create_job(db_session, make_job())
        replacement = JobApplicationIn(
            date_applied=date(2024, 2, 1),
            job_title="Staff Engineer",
            company="Globex",
            status="Interview",
        )
        store.update_job(db_session, rec.id, replacement)
        db_session.expire_all()

        updated = store.get_job(db_session, rec.id)
        assert updated.id == rec.id
        assert updated.date_applied == date(2024, 2, 1)
        assert updated.job_title == "Staff Engineer"
        assert updated.company == "Globex"
        assert updated.status == "Interview"
        # full replace: omitted optionals are cleared
        assert updated.job_url is None
        assert updated.notes is None

    @staticmethod
    def _backdate(db_session, job_id, when):
        db_session.query(JobApplication).filter(JobApplication.id == job_id).update(
            {JobApplication.updated_at: when}, synchronize_session=False
        )
        db_session.commit()

    def test_update_refreshes_updated_at(self, db_session, make_job):
        rec = store.create_job(db_session, make_job())
        old = datetime(2020, 1, 1, 12, 0, 0)
        self._backdate(db_session, rec.id, old)

        updated = store.update_job(db_session, rec.id, make_job(status="Offer"))
        assert updated.updated_at.replace(tzinfo=None) > old

    def test_resubmitted_identical_edit_refreshes_updated_at(self, db_session, make_job):
        rec = store.create_job(db_session, make_job())
        old = datetime(2020, 1, 1, 12, 0, 0)
        self._backdate(db_session, rec.id, old)
        db_session.expire_all()
        assert store.get_job(db_session, rec.id).updated_at.replace(tzinfo=None) == old

        updated = store.update_job(db_session, rec.id, make_job())
        assert updated.updated_at.replace(tzinfo=None) > old
        assert updated.job_title == "Software Engineer"

    def test_update_missing_raises_not_found(self, db_session, make_job):
        with pytest.raises(JobNotFoundError):
            store.update_job(db_session, 42, make_job())

    def test_delete_removes_record(self, db_session, make_job):
        rec = store.create_job(db_session, make_job())
        store.delete_job(db_session, rec.id)
        with pytest.raises(JobNotFoundError):
            store.get_job(db_session, rec.id)
        assert store.list_jobs(db_session) == []

    def test_delete_missing_raises_not_found(self, db_session):
        with pytest.raises(JobNotFoundError):
            store.delete_job(db_session, 12345)


# ============================================================
# listing, filtering, counts
# ============================================================


class TestListing:
    def test_list_newest_date_first(self, db_session, make_job):
        store.create_job(db_session, make_job(job_title="old", date_applied=date(2024, 1, 1)))
        store.create_job(db_session, make_job(job_title="new", date_applied=date(2024, 3, 1)))
        store.create_job(db_session, make_job(job_title="mid", date_applied=date(2024, 2, 1)))

        titles = [j.job_title for j in store.list_jobs(db_session)]
        assert titles == ["new", "mid", "old"]

    def test_same_date_latest_created_first(self, db_session, make_job):
        first = store.create_job(db_session, make_job(job_title="first"))
        second = store.create_job(db_session, make_job(job_title="second"))

        ids = [j.id for j in store.list_jobs(db_session)]
        assert ids == [second.id, first.id]

    def test_filter_returns_exactly_matching_status(self, db_session, make_job):
        store.create_job(db_session, make_job(job_title="a", status="Interview", date_applied=date(2024, 1, 5)))
        store.create_job(db_session, make_job(job_title="b", status="Rejected"))
        store.create_job(db_session, make_job(job_title="c", status="Interview", date_applied=date(2024, 1, 20)))
        store.create_job(db_session, make_job(job_title="d", status="interview"))

        jobs = store.list_jobs_by_status(db_session, "Interview")
        assert [j.job_title for j in jobs] == ["c", "a"]
        assert all(j.status == "Interview" for j in jobs)

    def test_filter_unknown_status_is_empty(self, db_session, make_job):
        store.create_job(db_session, make_job())
        assert store.list_jobs_by_status(db_session, "Offer") == []

    def test_status_counts_sum_to_total(self, db_session, make_job):
        for status in ["Applied", "Applied", "Interview", "Rejected", "Applied", "Offer"]:
            store.create_job(db_session, make_job(status=status))

        counts = store.status_counts(db_session)
        assert counts == {"Applied": 3, "Interview": 1, "Offer": 1, "Rejected": 1}
        assert list(counts)[0] == "Applied"
        assert sum(counts.values()) == store.total_count(db_session) == 6

    def test_counts_on_empty_store(self, db_session):
        assert store.status_counts(db_session) == {}
        assert store.total_count(db_session) == 0


class TestWeeklySummary:
    def test_buckets_by_monday(self, db_session, make_job):
        store.create_job(db_session, make_job(date_applied=date(2024, 1, 3), status="Applied"))
        store.create_job(db_session, make_job(date_applied=date(2024, 1, 5), status="Interview"))
        store.create_job(db_session, make_job(date_applied=date(2024, 1, 8), status="Applied"))
        # outside the window, still part of the all-time totals
        store.create_job(db_session, make_job(date_applied=date(2023, 6, 1), status="Rejected"))

        now = datetime(2024, 1, 10, tzinfo=timezone.utc)
        summary = store.weekly_summary(db_session, window_days=30, now=now)

        assert summary["window_days"] == 30
        assert summary["totals"] == {"all": 4, "Applied": 2, "Interview": 1, "Rejected": 1}
        assert summary["weekly"] == [
            {"week_start": "2024-01-01", "Applied": 1, "Interview": 1},
            {"week_start": "2024-01-08", "Applied": 1},
        ]

    def test_empty_store(self, db_session):
        summary = store.weekly_summary(db_session)
        assert summary["totals"] == {"all": 0}
        assert summary["weekly"] == []


def test_model_repr(db_session, make_job):
    rec = store.create_job(db_session, make_job())
    assert isinstance(rec, JobApplication)
    assert "Software Engineer" in repr(rec)
