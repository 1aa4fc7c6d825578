"""
Resolve the effective per-request parameters from the request body and settings.
"""

from app.config import Settings
from app.infrastructure.observability.logging import get_logger
from app.models.api.schedule_request import ScheduleRequest
from app.models.domain.schedule_domain import ResolvedParameters
from app.services.scheduling.errors import ConfigurationError, ValidationError

logger = get_logger(__name__)


def resolve_parameters(request: ScheduleRequest, config: Settings) -> ResolvedParameters:
    """
    Combine request overrides with process configuration.

    Raises:
        ConfigurationError: VideoEngager credentials or base URL are not configured
        ValidationError: No instance or flow id in either the body or the settings
    """
    missing = config.missing_ve_settings()
    if missing:
        logger.error("VideoEngager configuration incomplete", missing=missing)
        raise ConfigurationError(missing)

    instance_id = request.instance_id or config.INSTANCE_ID
    flow_id = request.flow_id or config.FLOW_ID

    if not instance_id:
        raise ValidationError("instanceId is required")
    if not flow_id:
        raise ValidationError("flowId is required")

    return ResolvedParameters(
        instance_id=instance_id,
        flow_id=flow_id,
        partner_key=config.PAK,
        external_id=config.EXTERNAL_ID,
        ve_base_url=config.VE_BASE_URL.rstrip("/"),
        agent_email=request.agent_email,
        meeting_time=request.date,
    )
