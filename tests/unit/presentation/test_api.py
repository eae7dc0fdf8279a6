"""HTTP surface tests running the real app against the in-memory store."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from certtracker.config import Settings
from certtracker.infrastructure.adapters import AdapterProvider
from certtracker.main import app
from certtracker.presentation.api.dependencies import get_clock, get_provider, get_runner
from certtracker.presentation.middleware import AuthenticatedUser, get_current_user
from certtracker.scheduler import ReminderJobRunner

from ...factories import ALICE, BOB, TODAY, RecordingDispatcher, make_instance

AUTH = {"Authorization": "Bearer test-token"}


@pytest.fixture
def runner(store, clock):
    return ReminderJobRunner(
        provider=AdapterProvider(store=store),
        dispatcher=RecordingDispatcher(),
        clock=clock,
        settings=Settings(dispatch_timeout_seconds=1.0),
    )


@pytest.fixture
def client(store, clock, runner):
    """Client wired to the test store; the lifespan is not entered."""
    provider = AdapterProvider(store=store)
    app.dependency_overrides[get_provider] = lambda: provider
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_runner] = lambda: runner
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def as_regular_user():
    app.dependency_overrides[get_current_user] = lambda: AuthenticatedUser(
        sub=BOB, email="bob@example.com", name="Bob", groups=["engineers"]
    )


def submit(client, definition_id="aws-sap"):
    return client.post(
        "/api/v1/certifications",
        json={
            "master_definition_id": definition_id,
            "obtained_date": "2024-01-15",
            "certificate_number": "AWS-123",
        },
        headers=AUTH,
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_in_memory(self, client):
        response = client.get("/health/ready")

        assert response.json()["status"] == "ready"

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]


class TestCatalog:
    def test_list_active_definitions(self, client):
        response = client.get("/api/v1/catalog")

        assert response.status_code == 200
        ids = {d["id"] for d in response.json()}
        assert {"aws-sap", "az-500"} <= ids

    def test_search_by_name_and_vendor(self, client):
        response = client.get(
            "/api/v1/catalog/search", params={"name": "security engineer", "vendor": "microsoft"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == "az-500"

    def test_unknown_definition_returns_404(self, client):
        assert client.get("/api/v1/catalog/nope").status_code == 404


class TestCertificationFlow:
    def test_submit_then_approve(self, client):
        submitted = submit(client)
        assert submitted.status_code == 201
        assert submitted.json()["status"] == "PENDING_APPROVAL"
        assert submitted.json()["expiration_date"] == "2027-01-15"

        pending = client.get("/api/v1/admin/approvals/pending", headers=AUTH).json()
        assert len(pending) == 1

        decided = client.post(
            f"/api/v1/admin/approvals/{pending[0]['id']}",
            json={"decision": "APPROVE", "comments": "verified"},
            headers=AUTH,
        )
        assert decided.status_code == 200
        body = decided.json()
        assert body["certification"]["status"] == "ACTIVE"
        assert body["history"]["processed_by"] == "dev-user"

        mine = client.get("/api/v1/certifications/mine", headers=AUTH).json()
        assert [c["status"] for c in mine] == ["ACTIVE"]

        competency = client.get("/api/v1/certifications/competency", headers=AUTH).json()
        assert competency["total_points"] == 30

    def test_duplicate_submission_conflicts(self, client):
        assert submit(client).status_code == 201

        response = submit(client)

        assert response.status_code == 409
        assert "detail" in response.json()

    def test_unknown_definition_returns_404(self, client):
        assert submit(client, "no-such-cert").status_code == 404

    def test_missing_token_is_rejected(self, client):
        response = client.get("/api/v1/certifications/mine")

        assert response.status_code == 401

    def test_admin_routes_require_admin_group(self, client, as_regular_user):
        response = client.get("/api/v1/admin/approvals/pending", headers=AUTH)

        assert response.status_code == 403

    def test_admin_assignment(self, client):
        response = client.post(
            "/api/v1/admin/certifications",
            json={"user_id": ALICE, "master_definition_id": "gcp-pca"},
            headers=AUTH,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "ADMIN_ASSIGNED"
        assert body["assignment"]["assigned_by"] == "dev-user"

    def test_repeat_assignment_conflicts(self, client):
        payload = {"user_id": ALICE, "master_definition_id": "gcp-pca"}
        client.post("/api/v1/admin/certifications", json=payload, headers=AUTH)

        response = client.post("/api/v1/admin/certifications", json=payload, headers=AUTH)

        assert response.status_code == 409


class TestReminderEndpoints:
    def test_trigger_and_report(self, client, store):
        instance = make_instance(expiration_date=TODAY + timedelta(days=5))
        store.instances[instance.id] = instance

        triggered = client.post("/api/v1/admin/reminders/trigger", headers=AUTH)
        assert triggered.status_code == 200
        assert triggered.json()["sent"] == 1

        stats = client.get("/api/v1/admin/reminders/stats", headers=AUTH).json()
        assert stats["total"] == 1
        assert stats["delivered"] == 1

        log = client.get(
            f"/api/v1/admin/reminders/log/certifications/{instance.id}", headers=AUTH
        ).json()
        assert [r["tier"] for r in log] == ["critical"]

    def test_trigger_while_running_conflicts(self, client, runner):
        with patch.object(runner, "run_daily_reminders", AsyncMock(return_value=None)):
            response = client.post("/api/v1/admin/reminders/trigger", headers=AUTH)

        assert response.status_code == 409

    def test_status_without_scheduler(self, client):
        response = client.get("/api/v1/admin/reminders/status", headers=AUTH)

        assert response.status_code == 200
        assert response.json()["scheduler_running"] is False


class TestBountyEndpoints:
    def test_create_and_claim(self, client):
        created = client.post(
            "/api/v1/bounties",
            json={
                "title": "Get cloud certified",
                "description": "Any professional cloud architect cert",
                "certification_ids": ["aws-sap", "gcp-pca"],
                "bounty_amount": "500",
                "deadline": "2024-12-31",
            },
            headers=AUTH,
        )
        assert created.status_code == 201
        bounty_id = created.json()["id"]

        listed = client.get("/api/v1/bounties").json()
        assert [b["id"] for b in listed] == [bounty_id]

        claimed = client.post(f"/api/v1/bounties/{bounty_id}/claims", headers=AUTH)
        assert claimed.status_code == 201
        assert claimed.json()["user_id"] == "dev-user"

        again = client.post(f"/api/v1/bounties/{bounty_id}/claims", headers=AUTH)
        assert again.status_code == 400
