"""
Schedule API Routes
HTTP endpoint the browser form posts meeting details to.

Method and path checks belong to the request validator, so the route accepts the
common verbs and lets the orchestrator answer with the standard error envelope.
"""

import uuid

from fastapi import APIRouter, Depends, Request, Response

from app.config import settings
from app.models.api.schedule_response import CORS_HEADERS
from app.models.domain.schedule_domain import InboundRequest
from app.services.scheduling.connect_client import ConnectTaskClient
from app.services.scheduling.orchestrator import ScheduleOrchestrator

router = APIRouter(tags=["schedule"])

connect_client = ConnectTaskClient(region_name=settings.AWS_REGION)


def get_schedule_orchestrator(request: Request) -> ScheduleOrchestrator:
    """Build an orchestrator around the app-wide HTTP client, if one is running."""
    http_client = getattr(request.app.state, "http_client", None)
    return ScheduleOrchestrator(
        settings=settings, connect_client=connect_client, http_client=http_client
    )


@router.options(settings.SCHEDULE_RESOURCE_PATH)
async def schedule_preflight():
    """CORS preflight for the browser form."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route(
    settings.SCHEDULE_RESOURCE_PATH,
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
)
async def schedule_meeting(
    request: Request,
    orchestrator: ScheduleOrchestrator = Depends(get_schedule_orchestrator),
):
    """Schedule a video meeting and its Connect task."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    raw_body = (await request.body()).decode("utf-8", errors="replace")

    inbound = InboundRequest(
        method=request.method,
        path=request.url.path,
        request_context={
            "requestId": request_id,
            "httpMethod": request.method,
            "resourcePath": request.url.path,
        },
        body=raw_body or None,
    )

    result = await orchestrator.handle(inbound)
    proxy = result.to_proxy_result()
    return Response(
        content=proxy["body"],
        status_code=result.status_code,
        headers=proxy["headers"],
        media_type="application/json",
    )
