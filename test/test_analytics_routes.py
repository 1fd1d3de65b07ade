"""
Test suite for the analytics HTTP endpoints

Auth is replaced through dependency_overrides and the service through
monkeypatch, so no database is touched.
"""
import pytest
from fastapi.testclient import TestClient

import app.infra.mongodb.repositories as repositories
import app.routes.analytics as analytics_routes
from app.middleware.auth import verify_key
from app.services.analytics_service import AnalyticsService
from app.services.history_service import HistoryService
from conftest import NOW, FULL_PROFILE, FakeCompanyRepo, FakeProposalRepo
from main import app

ACME_USER = {"role": "member", "name": "Tester", "user_id": "usr_1", "company_id": "cmp_acme"}


class PinnedClockService(AnalyticsService):
    """Scores as of NOW so the recency window is stable."""

    def get_proposal_report(self, proposal_id, company_id, now=None):
        return super().get_proposal_report(proposal_id, company_id, now=now or NOW)


@pytest.fixture
def client(acme_proposals, monkeypatch):
    service = PinnedClockService(HistoryService(
        FakeProposalRepo(acme_proposals),
        FakeCompanyRepo({"cmp_acme": FULL_PROFILE}),
        max_workers=2,
    ))
    monkeypatch.setattr(analytics_routes, "get_analytics_service", lambda: service)
    app.dependency_overrides[verify_key] = lambda: ACME_USER
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_get_proposal_analytics(client):
    response = client.get("/api/analytics/target")

    assert response.status_code == 200
    body = response.json()
    assert body["success_rate"] == 79
    assert body["confidence_level"] == "low"
    assert body["data_points"]["total_proposals"] == 5
    assert body["factors"][0] == {
        "factor": "Overall historical win rate", "value": "50.0%", "impact": "positive"
    }
    assert body["best_practices"][0]["priority"] == "high"
    assert "generated_at" in body
    assert "error" not in body


def test_foreign_and_missing_proposals_look_identical(client):
    foreign = client.get("/api/analytics/foreign")
    missing = client.get("/api/analytics/does-not-exist")

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()


def test_user_without_company_is_forbidden(client):
    app.dependency_overrides[verify_key] = lambda: dict(ACME_USER, company_id=None)

    response = client.get("/api/analytics/target")

    assert response.status_code == 403


def test_missing_api_key_is_unauthorized(client):
    app.dependency_overrides.clear()

    response = client.get("/api/analytics/target")

    assert response.status_code == 401


def test_degraded_report_is_still_200(client, monkeypatch):
    class BrokenHistory(HistoryService):
        def load(self, proposal_id, company_id, now=None):
            raise KeyError("status")

    service = AnalyticsService(BrokenHistory(max_workers=1))
    monkeypatch.setattr(analytics_routes, "get_analytics_service", lambda: service)

    response = client.get("/api/analytics/target")

    assert response.status_code == 200
    body = response.json()
    assert body["success_rate"] == 0
    assert body["confidence_level"] == "low"
    assert body["factors"] == []
    assert body["best_practices"] == []
    assert body["error"] == "analysis_failed"


def test_company_completeness(client):
    response = client.get("/api/analytics/company/completeness")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["overall"] == 100
    assert body["incomplete_items"] == []


def test_root_and_health(client):
    assert client.get("/").json()["service"] == "Bid Analytics Backend"
    assert client.get("/health").json() == {"status": "ok"}


class FakeUserRepo:
    def __init__(self, user):
        self.user = user

    def get_by_api_key(self, api_key):
        return self.user


def test_api_key_user_gets_company_scope(client, monkeypatch):
    app.dependency_overrides.clear()
    user = {"role": "admin", "name": "Ops", "user_id": "usr_2", "company_id": "cmp_acme"}
    monkeypatch.setattr(repositories, "get_user_repo", lambda: FakeUserRepo(user))

    response = client.get("/api/analytics/target", headers={"X-API-Key": "user-key"})

    assert response.status_code == 200
    assert response.json()["data_points"]["total_proposals"] == 5


def test_unknown_role_is_rejected(client, monkeypatch):
    app.dependency_overrides.clear()
    user = {"role": "owner", "name": "Ops", "user_id": "usr_3", "company_id": "cmp_acme"}
    monkeypatch.setattr(repositories, "get_user_repo", lambda: FakeUserRepo(user))

    response = client.get("/api/analytics/target", headers={"X-API-Key": "user-key"})

    assert response.status_code == 403
    assert response.json() == {"detail": "Invalid API key"}


def test_unknown_api_key_is_forbidden(client, monkeypatch):
    app.dependency_overrides.clear()
    monkeypatch.setattr(repositories, "get_user_repo", lambda: FakeUserRepo(None))

    response = client.get("/api/analytics/target", headers={"X-API-Key": "nope"})

    assert response.status_code == 403
