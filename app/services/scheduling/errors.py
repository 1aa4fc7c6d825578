"""
Error types for the scheduling workflow.

ValidationError messages are safe to show to the caller. InternalError messages are
only logged; the caller always receives the generic message.
"""

from app.models.api.schedule_response import GENERIC_ERROR_MESSAGE


class ScheduleError(Exception):
    """Base exception for schedule request failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        return GENERIC_ERROR_MESSAGE


class ValidationError(ScheduleError):
    """Bad input, or an external rejection translated into actionable text."""

    status_code = 400

    @property
    def user_message(self) -> str:
        return self.message


class InternalError(ScheduleError):
    """Unexpected or operator-side failure."""


class ConfigurationError(InternalError):
    """Required process configuration is missing."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing environment variables: {', '.join(missing)}")
        self.missing = missing
