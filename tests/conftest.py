# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration and data for models, scoring and APIs

The API runs against the in-memory store with Redis disabled; a fresh store is
injected per test through app.dependency_overrides.
"""

import os

os.environ["SUBMISSION_STORE"] = "memory"
os.environ["CACHE_ENABLED"] = "false"
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["REQUIRE_CALIBRATION"] = "true"
os.environ["APP_ENV"] = "development"
os.environ["LOG_FORMAT"] = "console"

import pytest
from fastapi.testclient import TestClient

from champ_funnel.core.dependencies import get_submission_repository
from champ_funnel.gate.calibration import TARGET_VERTEX, VERTICES
from champ_funnel.main import app
from champ_funnel.models.submission import SubmissionRecord
from champ_funnel.repositories.memory_repository import InMemorySubmissionRepository

ADMIN_PASSWORD = "test-admin-password"


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def repository():
    """Fresh in-memory submission store wired into the app."""
    repo = InMemorySubmissionRepository()
    app.dependency_overrides[get_submission_repository] = lambda: repo
    yield repo
    app.dependency_overrides.pop(get_submission_repository, None)


@pytest.fixture
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}


# =============================================================================
# CALIBRATION GATE FIXTURES
# =============================================================================

@pytest.fixture
def unlocked_gate_id(client):
    """Calibration session with all three nodes snapped onto their vertices."""
    session_id = client.post("/api/v1/gate/sessions").json()["id"]
    for node, vertex in TARGET_VERTEX.items():
        x, y = VERTICES[vertex]
        client.post(f"/api/v1/gate/sessions/{session_id}/placements", json={"node": node, "x": x, "y": y})
    return session_id


@pytest.fixture
def calibration_headers(unlocked_gate_id):
    return {"X-Calibration-Id": unlocked_gate_id}


# =============================================================================
# SUBMISSION FIXTURES
# =============================================================================

@pytest.fixture
def all_builder_answers():
    """Every scenario answered A → Builder 5.5."""
    return {
        "identity": "C",
        "scenario1": "A",
        "scenario2": "A",
        "scenario3": "A",
        "scenario4": "A",
        "scenario5": "A",
    }


@pytest.fixture
def valid_submission_data(all_builder_answers):
    """Complete funnel submission that lands in Tier1 as a Builder."""
    return {
        "contact": {
            "first_name": "Ada",
            "last_name": "Okafor",
            "age": 29,
            "country": "Kenya",
            "city": "Nairobi",
            "timezone": "Africa/Nairobi",
            "email": "Ada.Okafor@Example.org",
            "linkedin_url": "https://www.linkedin.com/in/ada-okafor",
        },
        "answers": all_builder_answers,
        "contribution": {
            "shipped_text": "Shipped a solar micro-grid billing app to 40 villages",
            "created_link": "https://github.com/ada/microgrid",
            "project_text": "",
        },
        "capacity": {
            "availability_hours": 8,
            "led_team": True,
            "handle_disagreement": "Mediate it",
            "drains_most": "Endless talk",
        },
        "consent": True,
    }


@pytest.fixture
def minimal_submission_data():
    """Required fields only; scores as an Architect in the open network."""
    return {
        "contact": {
            "first_name": "Lin",
            "last_name": "Park",
            "age": 41,
            "country": "Korea",
            "timezone": "Asia/Seoul",
            "email": "lin@example.com",
        },
        "answers": {
            "identity": "A",
            "scenario1": "C",
            "scenario2": "C",
            "scenario3": "C",
            "scenario4": "B",
            "scenario5": "A",
        },
        "capacity": {
            "availability_hours": 2,
            "handle_disagreement": "Avoid it",
            "drains_most": "Chaos",
        },
        "consent": True,
    }


@pytest.fixture
def make_record():
    """Factory for stored SubmissionRecords; defaults to a Tier1 Builder."""
    def _make(**overrides) -> SubmissionRecord:
        data = {
            "first_name": "Ada",
            "last_name": "Okafor",
            "age": 29,
            "country": "Kenya",
            "timezone": "Africa/Nairobi",
            "email": "ada@example.org",
            "identity_choice": "C",
            "scenario1": "A",
            "scenario2": "A",
            "scenario3": "A",
            "scenario4": "A",
            "scenario5": "A",
            "availability_hours": 8,
            "led_team": True,
            "handle_disagreement": "Mediate it",
            "drains_most": "Chaos",
            "builder_score": 5.5,
            "translator_score": 0.0,
            "architect_score": 0.0,
            "archetype_label": "Builder",
            "hidden_tier": "Tier1",
            "consent": True,
        }
        data.update(overrides)
        return SubmissionRecord(**data)
    return _make
