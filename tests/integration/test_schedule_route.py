"""
Tests for the FastAPI schedule endpoint.
"""

import json
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.api.schedule_response import error_response, success_response
from app.routes.schedule import get_schedule_orchestrator
from app.services.scheduling.orchestrator import ScheduleOrchestrator
from conftest import build_body

client = TestClient(app)


@pytest.fixture
def stub_orchestrator():
    orchestrator = AsyncMock()
    app.dependency_overrides[get_schedule_orchestrator] = lambda: orchestrator
    yield orchestrator
    app.dependency_overrides.clear()


def test_post_delegates_to_orchestrator(stub_orchestrator):
    stub_orchestrator.handle.return_value = success_response(
        {"_id": "abc", "visitor": {"name": "John Doe"}}
    )

    response = client.post(
        "/schedule", content=json.dumps(build_body()), headers={"X-Request-ID": "req-42"}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "_id": "abc", "visitor": {"name": "John Doe"}}
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET,POST,OPTIONS"

    inbound = stub_orchestrator.handle.await_args.args[0]
    assert inbound.method == "POST"
    assert inbound.path == "/schedule"
    assert inbound.request_id == "req-42"
    assert json.loads(inbound.body)["agentEmail"] == "agent@test.com"


def test_error_status_is_passed_through(stub_orchestrator):
    stub_orchestrator.handle.return_value = error_response("Authentication failed", 400)

    response = client.post("/schedule", content=json.dumps(build_body()))

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Authentication failed"}


def test_empty_body_passed_as_none(stub_orchestrator):
    stub_orchestrator.handle.return_value = error_response("Request body is required", 400)

    client.post("/schedule")

    assert stub_orchestrator.handle.await_args.args[0].body is None


def test_preflight_returns_cors_headers(stub_orchestrator):
    response = client.options("/schedule")

    assert response.status_code == 200
    assert response.headers["access-control-allow-headers"] == "*"
    stub_orchestrator.handle.assert_not_awaited()


def test_get_is_rejected_by_validator(test_settings):
    app.dependency_overrides[get_schedule_orchestrator] = lambda: ScheduleOrchestrator(
        settings=test_settings, connect_client=AsyncMock()
    )
    try:
        response = client.get("/schedule")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Only POST method is allowed"}
