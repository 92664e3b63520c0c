# tests/test_api.py
"""
API endpoint tests: root, health, quiz, submissions and admin.

Runs against the in-memory store (see conftest.py); Redis is disabled.
"""

import csv
import io
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest
import redis
from fastapi import status

from champ_funnel.config import Settings, get_settings
from champ_funnel.core.dependencies import get_quiz_scorer, get_submission_repository
from champ_funnel.core.exceptions import DatabaseConnectionException, InvalidChoiceException
from champ_funnel.main import app
from champ_funnel.models.submission import SubmissionCreate
from champ_funnel.scoring.quiz_scorer import QuizScorer
from champ_funnel.services.submission_service import EXPORT_COLUMNS, build_record


def store_submission(repository, data, created_at=None):
    """Score and insert directly, bypassing the gate."""
    submission = SubmissionCreate(**data)
    result = QuizScorer().score(
        submission.answers,
        submission.capacity.availability_hours,
        submission.contribution.shipped_text,
        submission.capacity.handle_disagreement.value,
    )
    record = build_record(submission, result)
    if created_at is not None:
        record = record.model_copy(update={"created_at": created_at})
    return repository.create(record)


@pytest.fixture
def settings_override():
    """Install a Settings instance for the duration of one test."""
    def _install(**values):
        settings = Settings(_env_file=None, **values)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings
    yield _install
    app.dependency_overrides.pop(get_settings, None)


# =============================================================================
# ROOT & HEALTH
# =============================================================================

class TestRootAndHealth:
    """Tests for / and /health."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"
        assert response.json()["service"] == "Champ Funnel API"

    def test_health_memory_store(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "healthy"
        assert body["dependencies"]["store"].startswith("healthy")
        assert body["dependencies"]["redis"] == "disabled"

    def test_health_redis_unreachable(self, client, settings_override):
        settings_override(CACHE_ENABLED=True)
        with patch("champ_funnel.routers.health.RedisCache") as mock_cache_class:
            mock_cache_class.return_value.ping.side_effect = redis.ConnectionError("refused")
            response = client.get("/health")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        body = response.json()
        assert body["status"] == "degraded"
        assert body["dependencies"]["redis"] == "unhealthy: refused"

    def test_health_redis_reachable(self, client, settings_override):
        settings_override(CACHE_ENABLED=True)
        with patch("champ_funnel.routers.health.RedisCache") as mock_cache_class:
            mock_cache_class.return_value.ping.return_value = True
            response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["dependencies"]["redis"] == "healthy"

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/api/v1/nope")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "HTTP_ERROR"


# =============================================================================
# QUIZ
# =============================================================================

class TestQuizAPI:
    """Tests for /api/v1/quiz endpoints."""

    def test_get_quiz(self, client):
        response = client.get("/api/v1/quiz")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert len(body["questions"]) == 6
        assert body["questions"][4]["id"] == "scenario4"
        assert body["questions"][4]["weight"] == 1.5

    def test_preview(self, client, all_builder_answers):
        response = client.post("/api/v1/quiz/preview", json=all_builder_answers)
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["scores"] == {"builder": 5.5, "translator": 0.0, "architect": 0.0}
        assert body["archetype"] == "Builder"
        assert body["track"].startswith("Green Jobs Pipeline")
        assert "tier" not in body

    def test_preview_hybrid(self, client):
        answers = {"identity": "A", "scenario1": "A", "scenario2": "B", "scenario3": "A",
                   "scenario4": "B", "scenario5": "C"}
        body = client.post("/api/v1/quiz/preview", json=answers).json()
        assert body["archetype"] == "Builder–Translator"

    def test_preview_invalid_choice(self, client, all_builder_answers):
        response = client.post("/api/v1/quiz/preview", json={**all_builder_answers, "scenario1": "D"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert response.json()["details"]["field"] == "scenario1"

    def test_scoring_error_envelope(self, client, all_builder_answers):
        scorer = MagicMock()
        scorer.profile.side_effect = InvalidChoiceException("scenario2", "Z")
        app.dependency_overrides[get_quiz_scorer] = lambda: scorer
        try:
            response = client.post("/api/v1/quiz/preview", json=all_builder_answers)
        finally:
            app.dependency_overrides.pop(get_quiz_scorer, None)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = response.json()
        assert body["error_code"] == "INVALID_ANSWERS"
        assert body["details"]["field"] == "scenario2"

    def test_malformed_json(self, client):
        response = client.post(
            "/api/v1/quiz/preview",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"


# =============================================================================
# SUBMISSIONS
# =============================================================================

class TestSubmissionAPI:
    """Tests for POST /api/v1/submissions."""

    def test_submit(self, client, repository, valid_submission_data, calibration_headers):
        response = client.post("/api/v1/submissions", json=valid_submission_data, headers=calibration_headers)
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["archetype"] == "Builder"
        assert body["description"].startswith("You ship.")
        assert "hidden_tier" not in body
        assert "tier" not in body

        stored = repository.get_by_id(UUID(body["id"]))
        assert stored.hidden_tier.value == "Tier1"
        assert stored.email == "ada.okafor@example.org"
        assert stored.builder_score == 5.5
        assert stored.identity_choice.value == "C"

    def test_submit_minimal(self, client, repository, minimal_submission_data, calibration_headers):
        response = client.post("/api/v1/submissions", json=minimal_submission_data, headers=calibration_headers)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["archetype"] == "Architect"
        (record,) = repository.list()
        assert record.hidden_tier.value == "OpenNetwork"
        assert record.shipped_text is None

    def test_submit_without_gate_is_403(self, client, repository, valid_submission_data):
        response = client.post("/api/v1/submissions", json=valid_submission_data)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error_code"] == "GATE_LOCKED"
        assert repository.count() == 0

    def test_submit_with_locked_gate_is_403(self, client, repository, valid_submission_data):
        session_id = client.post("/api/v1/gate/sessions").json()["id"]
        response = client.post(
            "/api/v1/submissions",
            json=valid_submission_data,
            headers={"X-Calibration-Id": session_id},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_submit_with_unknown_gate_is_403(self, client, repository, valid_submission_data):
        response = client.post(
            "/api/v1/submissions",
            json=valid_submission_data,
            headers={"X-Calibration-Id": str(uuid4())},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_calibration_can_be_disabled(self, client, repository, valid_submission_data, settings_override):
        settings_override(REQUIRE_CALIBRATION=False)
        response = client.post("/api/v1/submissions", json=valid_submission_data)
        assert response.status_code == status.HTTP_201_CREATED

    def test_consent_false_is_422(self, client, repository, valid_submission_data, calibration_headers):
        response = client.post(
            "/api/v1/submissions",
            json={**valid_submission_data, "consent": False},
            headers=calibration_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["message"] == "Consent is required to submit"
        assert repository.count() == 0

    def test_age_message(self, client, repository, valid_submission_data, calibration_headers):
        data = {**valid_submission_data, "contact": {**valid_submission_data["contact"], "age": 12}}
        response = client.post("/api/v1/submissions", json=data, headers=calibration_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Age must be between 18 and 100"
        assert response.json()["details"]["field"] == "contact.age"

    def test_client_cannot_set_tier(self, client, repository, valid_submission_data, calibration_headers):
        response = client.post(
            "/api/v1/submissions",
            json={**valid_submission_data, "hidden_tier": "Tier1"},
            headers=calibration_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_store_unavailable_is_503(self, client, valid_submission_data, calibration_headers):
        repo = MagicMock()
        repo.create.side_effect = DatabaseConnectionException()
        app.dependency_overrides[get_submission_repository] = lambda: repo
        try:
            response = client.post("/api/v1/submissions", json=valid_submission_data, headers=calibration_headers)
        finally:
            app.dependency_overrides.pop(get_submission_repository, None)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error_code"] == "DATABASE_UNAVAILABLE"


# =============================================================================
# ADMIN
# =============================================================================

class TestAdminAuth:
    """Tests for admin password handling."""

    def test_auth_ok(self, client):
        response = client.post("/api/v1/admin/auth", json={"password": "test-admin-password"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"authenticated": True}

    def test_auth_wrong_password(self, client):
        response = client.post("/api/v1/admin/auth", json={"password": "guess"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_auth_disabled_without_password(self, client, settings_override):
        settings_override(ADMIN_PASSWORD="")
        response = client.post("/api/v1/admin/auth", json={"password": ""})
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error_code"] == "ADMIN_DISABLED"

    def test_routes_disabled_without_password(self, client, repository, settings_override):
        settings_override(ADMIN_PASSWORD="")
        response = client.get("/api/v1/admin/submissions", headers={"X-Admin-Password": ""})
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    @pytest.mark.parametrize(
        "path",
        [
            "/api/v1/admin/submissions",
            "/api/v1/admin/submissions/export",
            f"/api/v1/admin/submissions/{uuid4()}",
            "/api/v1/admin/archetypes",
            "/api/v1/admin/stats",
        ],
    )
    def test_routes_require_header(self, client, repository, path):
        assert client.get(path).status_code == status.HTTP_401_UNAUTHORIZED
        wrong = client.get(path, headers={"X-Admin-Password": "nope"})
        assert wrong.status_code == status.HTTP_401_UNAUTHORIZED


class TestAdminSubmissions:
    """Tests for admin listing, detail, stats and export."""

    def test_empty_list(self, client, repository, admin_headers):
        body = client.get("/api/v1/admin/submissions", headers=admin_headers).json()
        assert body["items"] == []
        assert body["total"] == 0
        assert body["total_pages"] == 0

    def test_list_newest_first(self, client, repository, admin_headers, valid_submission_data,
                               minimal_submission_data):
        now = datetime.now(timezone.utc)
        old = store_submission(repository, valid_submission_data, now - timedelta(days=1))
        new = store_submission(repository, minimal_submission_data, now)
        body = client.get("/api/v1/admin/submissions", headers=admin_headers).json()
        assert [i["id"] for i in body["items"]] == [str(new.id), str(old.id)]
        assert body["items"][1]["hidden_tier"] == "Tier1"

    def test_filter_by_archetype_and_tier(self, client, repository, admin_headers,
                                          valid_submission_data, minimal_submission_data):
        store_submission(repository, valid_submission_data)
        store_submission(repository, minimal_submission_data)

        body = client.get(
            "/api/v1/admin/submissions", params={"archetype": "Architect"}, headers=admin_headers
        ).json()
        assert body["total"] == 1
        assert body["items"][0]["archetype_label"] == "Architect"

        body = client.get(
            "/api/v1/admin/submissions", params={"tier": "Tier1"}, headers=admin_headers
        ).json()
        assert body["total"] == 1
        assert body["items"][0]["archetype_label"] == "Builder"

    def test_bad_tier_filter(self, client, repository, admin_headers):
        response = client.get("/api/v1/admin/submissions", params={"tier": "Gold"}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_pagination(self, client, repository, admin_headers, valid_submission_data):
        for _ in range(5):
            store_submission(repository, valid_submission_data)
        body = client.get(
            "/api/v1/admin/submissions", params={"page": 3, "page_size": 2}, headers=admin_headers
        ).json()
        assert body["total"] == 5
        assert body["total_pages"] == 3
        assert len(body["items"]) == 1
        assert body["cache"]["hit"] is False

    def test_detail(self, client, repository, admin_headers, valid_submission_data):
        record = store_submission(repository, valid_submission_data)
        response = client.get(f"/api/v1/admin/submissions/{record.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["shipped_text"] == valid_submission_data["contribution"]["shipped_text"]
        assert body["led_team"] is True
        assert body["scenario4"] == "A"

    def test_detail_not_found(self, client, repository, admin_headers):
        response = client.get(f"/api/v1/admin/submissions/{uuid4()}", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "SUBMISSION_NOT_FOUND"

    def test_archetypes(self, client, repository, admin_headers, valid_submission_data,
                        minimal_submission_data):
        store_submission(repository, valid_submission_data)
        store_submission(repository, valid_submission_data)
        store_submission(repository, minimal_submission_data)
        body = client.get("/api/v1/admin/archetypes", headers=admin_headers).json()
        assert body["labels"] == ["Architect", "Builder"]

    def test_stats(self, client, repository, admin_headers, valid_submission_data,
                   minimal_submission_data):
        store_submission(repository, valid_submission_data)
        store_submission(repository, minimal_submission_data)
        body = client.get("/api/v1/admin/stats", headers=admin_headers).json()
        assert body["total"] == 2
        assert body["by_tier"] == {"Tier1": 1, "Tier2": 0, "OpenNetwork": 1}
        assert body["by_archetype"] == {"Architect": 1, "Builder": 1}

    def test_stats_does_not_need_scorer(self, client, repository, admin_headers, make_record):
        repository.create(make_record())
        calls = []
        app.dependency_overrides[get_quiz_scorer] = lambda: calls.append("scorer")
        try:
            response = client.get("/api/v1/admin/stats", headers=admin_headers)
        finally:
            app.dependency_overrides.pop(get_quiz_scorer, None)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 1
        assert calls == []

    def test_export_csv(self, client, repository, admin_headers, valid_submission_data):
        record = store_submission(repository, valid_submission_data)
        response = client.get("/api/v1/admin/submissions/export", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/csv")

        today = datetime.now(timezone.utc).date().isoformat()
        assert response.headers["content-disposition"] == f'attachment; filename="champ_entries_{today}.csv"'

        header_line, first_row = response.text.splitlines()[:2]
        assert header_line == ",".join(h for h, _ in EXPORT_COLUMNS)
        assert first_row.startswith(f'"{record.id}"')

        rows = list(csv.DictReader(io.StringIO(response.text)))
        assert len(rows) == 1
        assert rows[0]["Led Team"] == "Yes"
        assert rows[0]["Consent"] == "Yes"
        assert rows[0]["Project Text"] == ""
        assert rows[0]["Tier"] == "Tier1"
        assert rows[0]["Archetype"] == "Builder"

    def test_export_empty(self, client, repository, admin_headers):
        response = client.get("/api/v1/admin/submissions/export", headers=admin_headers)
        assert response.text.strip() == ",".join(h for h, _ in EXPORT_COLUMNS)
