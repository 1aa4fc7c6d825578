import json
from datetime import UTC, datetime, timedelta

import pytest

from app.config import Settings
from app.models.domain.schedule_domain import ConnectTaskRequest, InboundRequest
from app.services.scheduling.connect_client import ConnectTaskError

VE_BASE_URL = "https://test-ve.com"
IMPERSONATE_URL = f"{VE_BASE_URL}/api/partners/impersonate/test-pak/test-external-id/agent@test.com"
SCHEDULES_URL = f"{VE_BASE_URL}/api/schedules/my/"

FIXED_NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)


def iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def build_body(**overrides) -> dict:
    body = {
        "agentEmail": "agent@test.com",
        "date": iso(FIXED_NOW + timedelta(days=1)),
        "duration": 30,
        "visitor": {
            "name": "John Doe",
            "email": "visitor@test.com",
            "phone": "+1234567890",
            "subject": "Test meeting",
        },
    }
    body.update(overrides)
    return body


def build_request(body=None, *, method="POST", path="/schedule", raw_body=None, context=True):
    if raw_body is None and body is not None:
        raw_body = json.dumps(body)
    request_context = (
        {"requestId": "test-request-id", "httpMethod": method, "resourcePath": path}
        if context
        else None
    )
    return InboundRequest(method=method, path=path, request_context=request_context, body=raw_body)


class FakeConnectClient:
    def __init__(self, error: Exception | None = None, contact_id: str = "test-contact-id"):
        self.error = error
        self.contact_id = contact_id
        self.tasks: list[ConnectTaskRequest] = []

    async def start_task(self, task: ConnectTaskRequest) -> str:
        self.tasks.append(task)
        if self.error:
            raise self.error
        return self.contact_id


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        VE_BASE_URL=VE_BASE_URL,
        PAK="test-pak",
        EXTERNAL_ID="test-external-id",
        INSTANCE_ID="test-instance-id",
        FLOW_ID="test-flow-id",
        AWS_REGION="us-east-1",
    )


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def fake_connect():
    return FakeConnectClient()


@pytest.fixture
def failing_connect():
    return FakeConnectClient(error=ConnectTaskError("Flow not found", error_code="ResourceNotFoundException"))


@pytest.fixture
def ve_happy_path(httpx_mock):
    """Register the authentication and schedule-create responses of a normal run."""

    def _register(record: dict | None = None):
        httpx_mock.add_response(method="GET", url=IMPERSONATE_URL, json={"token": "test-auth-token"})
        httpx_mock.add_response(
            method="POST",
            url=f"{SCHEDULES_URL}?agentEmail=agent@test.com",
            json=record
            if record is not None
            else {
                "_id": "abc",
                "date": "2026-03-03T12:00:00.000Z",
                "duration": 30,
                "visitor": {"name": "", "email": "", "phone": ""},
            },
        )

    return _register
