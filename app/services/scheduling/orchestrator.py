"""
Schedule orchestration: validate, resolve configuration, authenticate against
VideoEngager, create the VE schedule record, then create the Amazon Connect task.

If the Connect task cannot be created the VE record is deleted again. That delete is
best effort: its result is logged and discarded, and the caller always sees the
original failure. Nothing is retried.

Visitor PII never goes to VideoEngager. It travels only in the Connect task attributes.
"""

from collections.abc import Callable
from datetime import datetime

import httpx

from app.config import Settings
from app.infrastructure.observability.logging import get_logger
from app.models.api.schedule_request import ScheduleRequest
from app.models.api.schedule_response import (
    GENERIC_ERROR_MESSAGE,
    ScheduleResponse,
    error_response,
    success_response,
)
from app.models.domain.schedule_domain import (
    ApiResult,
    ConnectTaskRequest,
    InboundRequest,
    ResolvedParameters,
    VeScheduleRecord,
)
from app.services.scheduling.config_resolver import resolve_parameters
from app.services.scheduling.connect_client import ConnectTaskClient
from app.services.scheduling.errors import ScheduleError, ValidationError
from app.services.scheduling.request_validator import validate_schedule_request
from app.services.scheduling.ve_client import VideoEngagerClient

logger = get_logger(__name__)

TASK_DESCRIPTION = "Scheduled video conference"


def build_task_request(
    params: ResolvedParameters, request: ScheduleRequest, ve_record_id: str
) -> ConnectTaskRequest:
    visitor = request.visitor
    return ConnectTaskRequest(
        instance_id=params.instance_id,
        flow_id=params.flow_id,
        name=f"Video Call with {visitor.name}",
        description=TASK_DESCRIPTION,
        scheduled_time=params.meeting_time,
        attributes={
            "veVisitorId": ve_record_id,
            "visitorName": visitor.name,
            "visitorEmail": visitor.email,
            "visitorPhone": visitor.phone,
            "visitorSubject": visitor.subject,
        },
    )


class ScheduleOrchestrator:
    """Runs one schedule request end to end and folds every outcome into a response."""

    def __init__(
        self,
        settings: Settings,
        connect_client: ConnectTaskClient | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings
        self.connect_client = connect_client or ConnectTaskClient(region_name=settings.AWS_REGION)
        self.http_client = http_client
        self.clock = clock

    async def handle(self, request: InboundRequest) -> ScheduleResponse:
        """Process a request. Never raises."""
        log = logger.bind(request_id=request.request_id)

        try:
            data = await self._run(request, log)
        except ScheduleError as e:
            if e.status_code >= 500:
                log.error("Schedule request failed", error_type=type(e).__name__, error=e.message)
            else:
                log.warning("Schedule request rejected", error=e.message)
            return error_response(e.user_message, status_code=e.status_code)
        except Exception as e:
            log.error("Unexpected error processing schedule request", error=str(e), exc_info=True)
            return error_response(GENERIC_ERROR_MESSAGE, status_code=500)

        return success_response(data)

    async def _run(self, request: InboundRequest, log) -> dict:
        schedule = validate_schedule_request(
            request, self.settings.SCHEDULE_RESOURCE_PATH, clock=self.clock
        )
        params = resolve_parameters(schedule, self.settings)

        log.info(
            "Processing schedule request",
            agent_email=params.agent_email,
            meeting_time=params.meeting_time.isoformat(),
        )

        async with VideoEngagerClient(
            params.ve_base_url,
            http_client=self.http_client,
            timeout=self.settings.VE_REQUEST_TIMEOUT,
        ) as ve:
            token = await ve.authenticate(params.partner_key, params.external_id, params.agent_email)
            if not token:
                raise ValidationError("Authentication failed")

            result = await ve.create_schedule_record(
                token, params.agent_email, schedule.iso_date(), schedule.duration
            )
            if not result.ok:
                raise ValidationError(
                    f"VE scheduling failed with {result.status}: {result.error_message}"
                )

            record = VeScheduleRecord(result.data)
            if not record.has_id():
                raise ValidationError("VE schedule created but no ID returned")

            task = build_task_request(params, schedule, record.id)
            log.info("Creating Connect task", ve_record_id=record.id)
            try:
                contact_id = await self.connect_client.start_task(task)
            except Exception as e:
                # Any failure here leaves an orphaned VE record behind
                log.error(
                    "Connect task creation failed, removing VE schedule",
                    ve_record_id=record.id,
                    error_type=type(e).__name__,
                    error_code=getattr(e, "error_code", None),
                    error=str(e),
                )
                await self._compensate(ve, token, record.id, log)
                raise ValidationError("Failed to create Connect task") from e

        log.info("Schedule and task created", ve_record_id=record.id, contact_id=contact_id)
        visitor = schedule.visitor
        return record.with_visitor(visitor.name, visitor.email, visitor.phone)

    async def _compensate(
        self, ve: VideoEngagerClient, token: str, record_id: str, log
    ) -> ApiResult | None:
        """Delete the VE record once. The outcome is logged and never changes the response."""
        try:
            result = await ve.delete_schedule_record(token, record_id)
        except Exception as e:
            log.error("VE schedule cleanup raised", ve_record_id=record_id, error=str(e))
            return None

        if 200 <= result.status < 300:
            log.info("VE schedule cleanup successful", ve_record_id=record_id)
        else:
            log.error(
                "VE schedule cleanup failed",
                ve_record_id=record_id,
                status_code=result.status,
                error=result.error_message,
            )
        return result
