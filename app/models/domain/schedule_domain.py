# app/models/domain/schedule_domain.py
"""
Scheduling Domain Models
Request-scoped values passed between the validator, resolver, VE client and orchestrator.
None of these outlive a single request.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class InboundRequest:
    """Transport-neutral view of an incoming HTTP request."""

    method: str | None
    path: str | None
    request_context: dict[str, Any] | None = None
    body: str | None = None

    @property
    def request_id(self) -> str:
        if not self.request_context:
            return "unknown"
        return str(self.request_context.get("requestId") or "unknown")


@dataclass(slots=True)
class ResolvedParameters:
    """Effective parameters for one request: body overrides plus process configuration."""

    instance_id: str
    flow_id: str
    partner_key: str
    external_id: str
    ve_base_url: str
    agent_email: str
    meeting_time: datetime


@dataclass(slots=True)
class ApiResult:
    """Outcome of a VE HTTP call. Transport faults arrive as status 0 with an error."""

    status: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200

    @property
    def error_message(self) -> str:
        return str(self.data.get("error") or self.data.get("message") or "Unknown error")


class VeScheduleRecord:
    """Domain model for a schedule record stored by VideoEngager."""

    def __init__(self, data: dict):
        self.id = data.get("_id")
        self.date = data.get("date")
        self.duration = data.get("duration")
        self.visitor = data.get("visitor") or {}
        self.raw_data = data

    def has_id(self) -> bool:
        return bool(self.id)

    def with_visitor(self, name: str, email: str, phone: str) -> dict[str, Any]:
        """Record payload with the caller's own visitor details laid over the stored blanks."""
        visitor = self.visitor if isinstance(self.visitor, dict) else {}
        return {
            **self.raw_data,
            "visitor": {**visitor, "name": name, "email": email, "phone": phone},
        }


@dataclass(slots=True)
class ConnectTaskRequest:
    """Scheduled task to create in Amazon Connect."""

    instance_id: str
    flow_id: str
    name: str
    description: str
    scheduled_time: datetime
    attributes: dict[str, str | None] = field(default_factory=dict)

    def clean_attributes(self) -> dict[str, str]:
        """Connect only accepts string attribute values; unset ones are dropped."""
        return {key: str(value) for key, value in self.attributes.items() if value is not None}
