"""End-to-end API tests through FastAPI's TestClient."""

import json

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hirely.database import Base, get_db
from hirely.main import app
from hirely.middleware.rate_limit import limiter


@pytest.fixture
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True
        engine.dispose()


def auth_headers(client, email="ada@example.com"):
    client.post("/api/auth/register", json={"email": email, "password": "s3cret!", "full_name": "Ada"})
    token = client.post("/api/auth/login", json={"email": email, "password": "s3cret!"}).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


class TestAuth:

    def test_register_login_me(self, client):
        resp = client.post("/api/auth/register", json={"email": "Ada@Example.com", "password": "pw", "full_name": "Ada"})
        assert resp.status_code == 201
        assert resp.json()["email"] == "ada@example.com"

        login = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "pw"})
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
        assert client.get("/api/auth/me", headers=headers).json()["full_name"] == "Ada"

    def test_duplicate_email(self, client):
        body = {"email": "ada@example.com", "password": "pw"}
        client.post("/api/auth/register", json=body)
        assert client.post("/api/auth/register", json=body).status_code == 409

    def test_bad_password(self, client):
        client.post("/api/auth/register", json={"email": "ada@example.com", "password": "pw"})
        resp = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope"})
        assert resp.status_code == 401

    def test_records_require_a_token(self, client):
        assert client.get("/api/applications").status_code in (401, 403)


class TestHealth:

    def test_root_and_health(self, client):
        assert client.get("/").json()["name"] == "Hirely.ai API"
        assert client.get("/health").json()["status"] == "ok"


class TestApplicationsApi:

    def test_lifecycle(self, client):
        headers = auth_headers(client)
        created = client.post(
            "/api/applications",
            json={"company_name": "Acme", "morphed_resume_name": "Acme - Backend"},
            headers=headers,
        )
        assert created.status_code == 201
        app_id = created.json()["id"]
        assert created.json()["status"] == "not_applied"

        moved = client.patch(f"/api/applications/{app_id}/status", json={"status": "interview_scheduled"}, headers=headers)
        assert moved.json()["status"] == "interview_scheduled"

        bad = client.patch(f"/api/applications/{app_id}/status", json={"status": "ghosted"}, headers=headers)
        assert bad.status_code == 422

        assert client.delete(f"/api/applications/{app_id}", headers=headers).status_code == 204
        assert client.get("/api/applications", headers=headers).json() == []

    def test_other_users_cannot_touch(self, client):
        alice = auth_headers(client, "alice@example.com")
        bob = auth_headers(client, "bob@example.com")
        app_id = client.post(
            "/api/applications",
            json={"company_name": "Acme", "morphed_resume_name": "r"},
            headers=alice,
        ).json()["id"]

        resp = client.patch(f"/api/applications/{app_id}/status", json={"status": "offer"}, headers=bob)
        assert resp.status_code == 404


class TestAiRoutes:

    def test_morph_fallback_is_200_with_flag(self, client, fake_groq):
        fake_groq("not json")
        headers = auth_headers(client)
        resp = client.post(
            "/api/resume/morph",
            json={"resume": {"skills": ["Go"]}, "job_description": "Go developer"},
            headers=headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["analysisAvailable"] is False
        assert body["matchScore"] == 0
        assert body["prioritizedSections"] == ["experience", "skills", "education"]

    def test_battle_plan_validation_is_400(self, client, fake_groq):
        fake = fake_groq("{}")
        headers = auth_headers(client)
        resp = client.post(
            "/api/interview/battle-plan",
            json={"candidate_name": "Grace", "cv_text": "", "jd_text": "JD"},
            headers=headers,
        )
        assert resp.status_code == 400
        assert fake.call_count == 0

    def test_provider_failure_is_502(self, client, fake_groq):
        fake_groq("still not json")
        headers = auth_headers(client)
        resp = client.post("/api/jd/generate", json={"role_title": "PM"}, headers=headers)
        assert resp.status_code == 502

    def test_jd_generate(self, client, fake_groq):
        fake_groq(json.dumps({"roleTitle": "Senior PM", "coreRequirements": ["a", "b"], "talentDensity": "A ninja."}))
        headers = auth_headers(client)
        resp = client.post("/api/jd/generate", json={"role_title": "PM", "seniority": "Senior"}, headers=headers)
        body = resp.json()
        assert resp.status_code == 200
        assert body["talentDensityScore"] == 60
        assert body["biasFlags"][0]["text"] == "ninja"
        assert body["text"].startswith("Senior PM")

    def test_shadow_turn(self, client, fake_groq):
        fake_groq(json.dumps({"message": "Why that design?", "feedback": {"score": 6, "refinement": "r", "trap": "t"}}))
        headers = auth_headers(client)
        resp = client.post(
            "/api/shadow/turn",
            json={"persona_id": "ceo", "resume_text": "R", "jd_text": "J", "answer": "Because.", "history": []},
            headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["feedback"]["score"] == 6

    def test_shadow_stream(self, client, fake_groq):
        fake = fake_groq(["Hello ", "candidate."])
        headers = auth_headers(client)
        resp = client.post(
            "/api/shadow/stream",
            json={"persona_id": "recruiter", "resume_text": "R", "jd_text": "J", "answer": ""},
            headers=headers,
        )
        assert resp.status_code == 200
        events = [json.loads(line[len("data: "):]) for line in resp.text.splitlines() if line.startswith("data: ")]
        assert [e["data"] for e in events if e["event"] == "chunk"] == ["Hello ", "candidate."]
        assert events[-1]["event"] == "complete"
        assert fake.streams[0].closed

    def test_shadow_stream_rejects_bad_input_up_front(self, client, fake_groq):
        fake = fake_groq(["unused"])
        headers = auth_headers(client)
        resp = client.post(
            "/api/shadow/stream",
            json={"persona_id": "intern", "resume_text": "R", "jd_text": "J", "answer": ""},
            headers=headers,
        )
        assert resp.status_code == 400
        assert fake.call_count == 0


class TestOfflineRoutes:

    def test_bias_scan_and_fix_all(self, client):
        scan = client.post("/api/jd/bias/scan", json={"text": "A young guru."}).json()
        assert scan["clean"] is False
        assert {f["text"] for f in scan["flags"]} == {"young", "guru"}

        fixed = client.post("/api/jd/bias/fix-all", json={"text": "A young guru."}).json()
        assert fixed["text"] == "A energetic specialist."
        assert fixed["clean"] is True

    def test_bias_fix_one(self, client):
        resp = client.post(
            "/api/jd/bias/fix",
            json={"text": "Culture fit matters.", "term": "Culture fit", "suggestion": "values alignment"},
        )
        assert resp.json()["text"] == "values alignment matters."

    def test_difficulty(self, client):
        resp = client.post("/api/shadow/difficulty", json={"scores": [9, 8], "current": "coaching"})
        assert resp.json() == {"difficulty": "standard", "average_score": 8.5}

    def test_personas(self, client):
        body = client.get("/api/shadow/personas").json()
        assert body["default"] == "tech-lead"
        assert {p["id"] for p in body["personas"]} == {"ceo", "tech-lead", "recruiter"}

    def test_fit_score(self, client):
        resp = client.post("/api/market/fit-score", json={"user_skills": ["Python"], "job_skills": ["python", "Go"]})
        assert resp.json() == {"fit_score": 0.5}


class TestProfileApi:

    def test_profile_and_recommendations(self, client):
        headers = auth_headers(client)
        assert client.get("/api/profile", headers=headers).json() is None

        saved = client.put("/api/profile", json={"skills": ["Go"], "current_title": "SRE"}, headers=headers)
        assert saved.status_code == 200
        assert client.get("/api/profile", headers=headers).json()["skills"] == ["Go"]

        rec = client.post(
            "/api/profile/skill-recommendations",
            json={"skill_name": "Rust", "market_demand_score": 80},
            headers=headers,
        )
        assert rec.status_code == 201
        rec_id = rec.json()["id"]

        moved = client.patch(
            f"/api/profile/skill-recommendations/{rec_id}/status", json={"status": "completed"}, headers=headers
        )
        assert moved.json()["status"] == "completed"

        bad = client.patch(
            f"/api/profile/skill-recommendations/{rec_id}/status", json={"status": "abandoned"}, headers=headers
        )
        assert bad.status_code == 422

    def test_dashboard_insights(self, client):
        headers = auth_headers(client)
        client.post("/api/interview/candidates", json={"name": "Grace"}, headers=headers)

        body = client.get("/api/dashboard/insights", headers=headers).json()
        assert body["candidate_count"] == 1
        assert body["recent_candidates"][0]["name"] == "Grace"
        assert body["recent_candidates"][0]["score"] is None
        assert body["profile_skills"] == []
