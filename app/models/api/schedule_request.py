# app/models/api/schedule_request.py
"""
Schedule API request models.
Built by the request validator once the raw body has passed every check.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VisitorInfo(BaseModel):
    """Customer details for the meeting. Only ever forwarded to the Connect task."""

    name: str = Field(..., min_length=1, description="Visitor display name")
    email: str = Field(..., min_length=1, description="Visitor email address")
    phone: str = Field(..., min_length=1, description="Visitor phone number")
    subject: str | None = Field(default=None, description="Optional meeting subject")


class ScheduleRequest(BaseModel):
    """Validated body of a schedule request."""

    model_config = ConfigDict(populate_by_name=True)

    agent_email: str = Field(..., alias="agentEmail", description="Agent hosting the call")
    date: datetime = Field(..., description="Meeting start, timezone-aware UTC")
    duration: int = Field(..., ge=15, description="Meeting length in minutes")
    visitor: VisitorInfo
    instance_id: str | None = Field(default=None, alias="instanceId")
    flow_id: str | None = Field(default=None, alias="flowId")

    def iso_date(self) -> str:
        """Meeting start as an ISO-8601 UTC string with millisecond precision."""
        return self.date.isoformat(timespec="milliseconds").replace("+00:00", "Z")
