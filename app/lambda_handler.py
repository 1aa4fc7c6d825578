"""
AWS Lambda entry point for API Gateway REST proxy events.

Each invocation gets its own event loop and HTTP client, so nothing is shared
between requests.
"""

import asyncio
import base64
from typing import Any

from app.config import settings
from app.infrastructure.observability.logging import get_logger, setup_logging
from app.models.domain.schedule_domain import InboundRequest
from app.services.scheduling.connect_client import ConnectTaskClient
from app.services.scheduling.orchestrator import ScheduleOrchestrator

setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)

_connect_client = ConnectTaskClient(region_name=settings.AWS_REGION)


def inbound_from_event(event: dict[str, Any]) -> InboundRequest:
    """Map an API Gateway proxy event onto the transport-neutral request."""
    context = event.get("requestContext")
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8", errors="replace")
        except ValueError:
            logger.warning("Could not decode base64 request body")

    return InboundRequest(
        method=(context or {}).get("httpMethod") or event.get("httpMethod"),
        path=(context or {}).get("resourcePath") or event.get("resource"),
        request_context=context,
        body=body,
    )


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    inbound = inbound_from_event(event or {})
    logger.info(
        "Received schedule event",
        request_id=inbound.request_id,
        method=inbound.method,
        path=inbound.path,
    )

    orchestrator = ScheduleOrchestrator(settings=settings, connect_client=_connect_client)
    result = asyncio.run(orchestrator.handle(inbound))
    return result.to_proxy_result()
