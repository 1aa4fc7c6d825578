# app/models/api/schedule_response.py
"""
Schedule API response envelope.
Shared by the FastAPI route and the Lambda adapter so both return identical payloads.
"""

import json
from typing import Any

from pydantic import BaseModel, Field

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

GENERIC_ERROR_MESSAGE = "Something went wrong while scheduling the meeting. Please try again."


class ScheduleResponse(BaseModel):
    """HTTP-style response produced by the orchestrator."""

    status_code: int = Field(..., description="HTTP status code")
    headers: dict[str, str] = Field(default_factory=lambda: dict(CORS_HEADERS))
    body: dict[str, Any] = Field(..., description="JSON body")

    def to_proxy_result(self) -> dict[str, Any]:
        """Render as an API Gateway proxy integration result."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": json.dumps(self.body, default=str),
        }


def success_response(data: dict[str, Any]) -> ScheduleResponse:
    return ScheduleResponse(status_code=200, body={"success": True, **data})


def error_response(message: str, status_code: int = 500) -> ScheduleResponse:
    return ScheduleResponse(status_code=status_code, body={"success": False, "message": message})
