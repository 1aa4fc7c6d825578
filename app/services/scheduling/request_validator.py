"""
Inbound schedule request validation.

Checks run in a fixed order and the first failure wins. The browser form mirrors
these rules for early feedback, but this module is authoritative.
"""

import json
import math
import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.models.api.schedule_request import ScheduleRequest
from app.models.domain.schedule_domain import InboundRequest
from app.services.scheduling.errors import ValidationError

MIN_DURATION_MINUTES = 15
MAX_DAYS_AHEAD = 6

REQUIRED_FIELDS = ("agentEmail", "date", "visitor", "duration")
REQUIRED_VISITOR_FIELDS = ("name", "email", "phone")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def _is_missing(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def parse_duration(value: Any) -> int | None:
    """Integer-prefix parse: 30, 30.9, "30" and "30 min" all give 30."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def parse_meeting_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime. Naive input is UTC."""
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        # Offsets can push the edges of the calendar out of range
        return None


def validate_http_request(request: InboundRequest, resource_path: str) -> None:
    if not request.request_context:
        raise ValidationError("Missing request context")
    if (request.method or "").upper() != "POST":
        raise ValidationError("Only POST method is allowed")
    if request.path != resource_path:
        raise ValidationError("Invalid resource path")


def validate_body(raw_body: str | None, now: datetime) -> ScheduleRequest:
    if not raw_body:
        raise ValidationError("Request body is required")

    try:
        body = json.loads(raw_body)
    except ValueError:
        raise ValidationError("Invalid JSON format")
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON format")

    for field_name in REQUIRED_FIELDS:
        if _is_missing(body.get(field_name)):
            raise ValidationError(f"{field_name} is required")

    visitor = body["visitor"]
    if not isinstance(visitor, dict):
        raise ValidationError("visitor must be an object")

    for field_name in REQUIRED_VISITOR_FIELDS:
        if _is_missing(visitor.get(field_name)):
            raise ValidationError(f"visitor {field_name} is required")

    if not is_valid_email(body["agentEmail"]):
        raise ValidationError("Please enter a valid email address for agent email")
    if not is_valid_email(visitor["email"]):
        raise ValidationError("Please enter a valid email address for visitor email")

    duration = parse_duration(body["duration"])
    if duration is None or duration < MIN_DURATION_MINUTES:
        raise ValidationError(f"Meeting duration must be at least {MIN_DURATION_MINUTES} minutes")

    meeting_time = parse_meeting_date(body["date"])
    if meeting_time is None:
        raise ValidationError("Please enter a valid date")
    if meeting_time <= now:
        raise ValidationError("Please select a date in the future")
    if meeting_time > now + timedelta(days=MAX_DAYS_AHEAD):
        raise ValidationError(f"Please select a date within the next {MAX_DAYS_AHEAD} days")

    subject = visitor.get("subject")
    try:
        return ScheduleRequest(
            agentEmail=body["agentEmail"],
            date=meeting_time,
            duration=duration,
            visitor={
                "name": str(visitor["name"]),
                "email": visitor["email"],
                "phone": str(visitor["phone"]),
                "subject": str(subject) if subject else None,
            },
            instanceId=_optional_str(body.get("instanceId")),
            flowId=_optional_str(body.get("flowId")),
        )
    except PydanticValidationError:
        raise ValidationError("Invalid request body")


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def validate_schedule_request(
    request: InboundRequest,
    resource_path: str,
    clock: Callable[[], datetime] | None = None,
) -> ScheduleRequest:
    """
    Validate an inbound request and return the parsed body.

    Raises:
        ValidationError: On the first failing check
    """
    validate_http_request(request, resource_path)
    now = clock() if clock else datetime.now(UTC)
    return validate_body(request.body, now)
