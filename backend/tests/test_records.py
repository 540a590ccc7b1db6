"""Tests for the owner-scoped record service (in-memory SQLite)."""

from datetime import datetime

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import hirely.models  # noqa: F401
from hirely.database import Base
from hirely.models.candidate import Candidate
from hirely.models.user import User
from hirely.schemas.records import (
    CandidateCreate,
    CandidateUpdate,
    JDTemplateCreate,
    JobApplicationCreate,
    MockInterviewCreate,
    RecommendationStatusUpdate,
    ResumeVersionCreate,
    ResumeVersionUpdate,
    SkillRecommendationCreate,
    StatusUpdate,
    UserProfileUpdate,
)
from hirely.services import records


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def users(db):
    alice = User(email="alice@example.com", password_hash="x", full_name="Alice")
    bob = User(email="bob@example.com", password_hash="x", full_name="Bob")
    db.add_all([alice, bob])
    db.commit()
    return alice.id, bob.id


class TestCandidates:

    def test_create_get_update(self, db, users):
        alice, _ = users
        created = records.create_candidate(db, alice, CandidateCreate(name="Grace", cv_text="cv", jd_text="jd"))
        assert created.success
        cid = created.data.id

        updated = records.update_candidate(
            db, alice, cid, CandidateUpdate(transcript="hello", human_grades={"communication": 7})
        )
        assert updated.success
        assert updated.data.transcript == "hello"
        assert updated.data.human_grades == {"communication": 7}
        assert updated.data.name == "Grace"

        fetched = records.get_candidate(db, alice, cid)
        assert fetched.data.transcript == "hello"

    def test_other_users_rows_are_invisible(self, db, users):
        alice, bob = users
        cid = records.create_candidate(db, alice, CandidateCreate(name="Grace")).data.id

        assert records.list_candidates(db, bob).data == []
        missing = records.get_candidate(db, bob, cid)
        assert not missing.success
        assert missing.error == "Candidate not found"
        assert not records.delete_candidate(db, bob, cid).success
        assert records.get_candidate(db, alice, cid).success

    def test_delete(self, db, users):
        alice, _ = users
        cid = records.create_candidate(db, alice, CandidateCreate(name="Grace")).data.id
        assert records.delete_candidate(db, alice, cid).success
        assert records.list_candidates(db, alice).data == []


class TestApplications:

    def _create(self, db, user_id, **overrides):
        data = {"company_name": "Acme", "morphed_resume_name": "Acme - Backend"}
        data.update(overrides)
        return records.create_job_application(db, user_id, JobApplicationCreate(**data))

    def test_new_application_starts_not_applied(self, db, users):
        alice, _ = users
        result = self._create(db, alice)
        assert result.success
        assert result.data.status == "not_applied"

    def test_any_transition_is_allowed(self, db, users):
        alice, _ = users
        app_id = self._create(db, alice).data.id
        before = records.list_job_applications(db, alice).data[0].last_updated

        offer = records.update_application_status(db, alice, app_id, StatusUpdate(status="offer"))
        assert offer.data.status == "offer"
        back = records.update_application_status(
            db, alice, app_id,
            StatusUpdate(status="applied", applied_at=datetime(2026, 3, 1), notes="re-applied"),
        )
        assert back.data.status == "applied"
        assert back.data.notes == "re-applied"
        assert back.data.applied_at == datetime(2026, 3, 1)
        assert back.data.last_updated >= before

    def test_status_filter(self, db, users):
        alice, _ = users
        first = self._create(db, alice).data.id
        self._create(db, alice, company_name="Globex")
        records.update_application_status(db, alice, first, StatusUpdate(status="rejected"))

        rejected = records.list_job_applications(db, alice, status="rejected").data
        assert [a.company_name for a in rejected] == ["Acme"]

    def test_foreign_resume_version_is_rejected(self, db, users):
        alice, bob = users
        version = records.save_resume_version(db, bob, ResumeVersionCreate(version_name="Bob v1", content={}))
        result = self._create(db, alice, resume_version_id=version.data.id)
        assert not result.success
        assert result.error == "Resume version not found"

    def test_update_missing(self, db, users):
        alice, _ = users
        result = records.update_application_status(db, alice, "nope", StatusUpdate(status="applied"))
        assert result.error == "Job application not found"


class TestResumeVersionsTemplatesSessions:

    def test_resume_versions(self, db, users):
        alice, _ = users
        saved = records.save_resume_version(
            db, alice, ResumeVersionCreate(version_name="v1", content={"skills": ["Go"]}, mode="leadership")
        )
        assert saved.data.is_active
        updated = records.update_resume_version(db, alice, saved.data.id, ResumeVersionUpdate(is_active=False))
        assert updated.data.is_active is False
        assert updated.data.content == {"skills": ["Go"]}
        assert records.delete_resume_version(db, alice, saved.data.id).success

    def test_jd_templates(self, db, users):
        alice, bob = users
        saved = records.save_jd_template(
            db, alice, JDTemplateCreate(title="Platform", content="ABOUT THE ROLE", talent_density_score=78)
        )
        assert [t.title for t in records.list_jd_templates(db, alice).data] == ["Platform"]
        assert records.list_jd_templates(db, bob).data == []
        assert records.delete_jd_template(db, alice, saved.data.id).success

    def test_mock_interviews(self, db, users):
        alice, _ = users
        saved = records.save_mock_interview(
            db, alice, MockInterviewCreate(persona="ceo", performance_score=7.5, questions_asked=4)
        )
        assert saved.success
        listed = records.list_mock_interviews(db, alice).data
        assert listed[0].persona == "ceo"
        assert listed[0].performance_score == 7.5


class TestBackendFailure:

    def test_failure_rolls_back_and_reports(self, db, users, monkeypatch):
        alice, _ = users

        def broken_commit():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db, "commit", broken_commit)
        result = records.create_candidate(db, alice, CandidateCreate(name="Grace"))

        assert not result.success
        assert "disk I/O error" in result.error
        monkeypatch.undo()
        assert records.list_candidates(db, alice).data == []


class TestUserProfile:

    def test_missing_profile_is_none(self, db, users):
        alice, _ = users
        result = records.get_user_profile(db, alice)
        assert result.success
        assert result.data is None

    def test_upsert_creates_then_merges(self, db, users):
        alice, bob = users
        created = records.upsert_user_profile(db, alice, UserProfileUpdate(skills=["Go", "SQL"], current_title="SRE"))
        assert created.data.skills == ["Go", "SQL"]
        assert created.data.experience_years == 0

        merged = records.upsert_user_profile(db, alice, UserProfileUpdate(experience_years=6))
        assert merged.data.id == created.data.id
        assert merged.data.skills == ["Go", "SQL"]
        assert merged.data.current_title == "SRE"
        assert merged.data.experience_years == 6

        assert records.get_user_profile(db, alice).data.experience_years == 6
        assert records.get_user_profile(db, bob).data is None


class TestSkillRecommendations:

    def test_ordered_by_market_demand(self, db, users):
        alice, _ = users
        for name, demand in [("Rust", 70), ("Terraform", None), ("Kubernetes", 92)]:
            records.save_skill_recommendation(
                db, alice, SkillRecommendationCreate(skill_name=name, market_demand_score=demand)
            )
        listed = records.list_skill_recommendations(db, alice).data
        assert [r.skill_name for r in listed] == ["Kubernetes", "Rust", "Terraform"]
        assert {r.status for r in listed} == {"suggested"}

    def test_status_update_is_owner_scoped(self, db, users):
        alice, bob = users
        rec = records.save_skill_recommendation(db, alice, SkillRecommendationCreate(skill_name="Rust")).data

        moved = records.update_skill_recommendation_status(
            db, alice, rec.id, RecommendationStatusUpdate(status="learning")
        )
        assert moved.data.status == "learning"

        foreign = records.update_skill_recommendation_status(
            db, bob, rec.id, RecommendationStatusUpdate(status="dismissed")
        )
        assert foreign.error == "Skill recommendation not found"
        assert records.list_skill_recommendations(db, bob).data == []


class TestDashboardInsights:

    def _candidate(self, db, user_id, name, grades, updated_at):
        db.add(Candidate(user_id=user_id, name=name, ai_grades=grades, updated_at=updated_at))
        db.commit()

    def test_scores_recent_candidates(self, db, users):
        alice, _ = users
        self._candidate(db, alice, "Oldest", {"communication": 2}, datetime(2024, 1, 1))
        self._candidate(db, alice, "Grace", {"communication": 8, "technical": 9}, datetime(2024, 3, 1))
        self._candidate(db, alice, "Linus", {}, datetime(2024, 2, 1))
        self._candidate(db, alice, "Ada", {"communication": 7.45}, datetime(2024, 4, 1))
        records.upsert_user_profile(db, alice, UserProfileUpdate(skills=["Go", "SQL", "Rust", "K8s", "Lua"]))

        insights = records.dashboard_insights(db, alice).data

        assert [c.name for c in insights.recent_candidates] == ["Ada", "Grace", "Linus"]
        assert [c.score for c in insights.recent_candidates] == [75, 85, None]
        assert insights.candidate_count == 4
        assert insights.average_score == 80
        assert insights.profile_skills == ["Go", "SQL", "Rust", "K8s"]

    def test_empty_dashboard(self, db, users):
        _, bob = users
        insights = records.dashboard_insights(db, bob).data
        assert insights.recent_candidates == []
        assert insights.candidate_count == 0
        assert insights.average_score is None
        assert insights.profile_skills == []

    def test_candidate_score_ignores_non_numeric_grades(self):
        assert records.candidate_score({"communication": 6, "notes": "good", "flag": True}) == 60
        assert records.candidate_score({}) is None
