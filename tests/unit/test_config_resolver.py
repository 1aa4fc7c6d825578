from datetime import timedelta

import pytest

from app.config import Settings
from app.models.api.schedule_request import ScheduleRequest
from app.services.scheduling.config_resolver import resolve_parameters
from app.services.scheduling.errors import ConfigurationError, ValidationError
from conftest import FIXED_NOW


def _schedule(**overrides) -> ScheduleRequest:
    data = {
        "agentEmail": "agent@test.com",
        "date": FIXED_NOW + timedelta(days=1),
        "duration": 30,
        "visitor": {"name": "John Doe", "email": "visitor@test.com", "phone": "+1234567890"},
    }
    data.update(overrides)
    return ScheduleRequest(**data)


def test_defaults_come_from_settings(test_settings):
    params = resolve_parameters(_schedule(), test_settings)

    assert params.instance_id == "test-instance-id"
    assert params.flow_id == "test-flow-id"
    assert params.partner_key == "test-pak"
    assert params.external_id == "test-external-id"
    assert params.ve_base_url == "https://test-ve.com"
    assert params.agent_email == "agent@test.com"
    assert params.meeting_time == FIXED_NOW + timedelta(days=1)


def test_body_overrides_settings(test_settings):
    params = resolve_parameters(
        _schedule(instanceId="custom-instance-id", flowId="custom-flow-id"), test_settings
    )

    assert params.instance_id == "custom-instance-id"
    assert params.flow_id == "custom-flow-id"


def test_trailing_slash_stripped_from_base_url(test_settings):
    test_settings.VE_BASE_URL = "https://test-ve.com/"
    assert resolve_parameters(_schedule(), test_settings).ve_base_url == "https://test-ve.com"


@pytest.mark.parametrize("missing", ["PAK", "EXTERNAL_ID", "VE_BASE_URL"])
def test_missing_secret_is_internal_error(test_settings, missing):
    setattr(test_settings, missing, None)

    with pytest.raises(ConfigurationError) as exc:
        resolve_parameters(_schedule(), test_settings)

    assert exc.value.status_code == 500
    assert exc.value.missing == [missing]
    # Operator details stay out of the user-facing message
    assert missing not in exc.value.user_message


def test_missing_secrets_win_over_missing_ids():
    settings = Settings(_env_file=None, INSTANCE_ID=None, FLOW_ID=None)
    with pytest.raises(ConfigurationError):
        resolve_parameters(_schedule(), settings)


def test_missing_instance_id(test_settings):
    test_settings.INSTANCE_ID = None
    with pytest.raises(ValidationError, match="instanceId is required"):
        resolve_parameters(_schedule(), test_settings)


def test_missing_flow_id(test_settings):
    test_settings.FLOW_ID = ""
    with pytest.raises(ValidationError, match="flowId is required"):
        resolve_parameters(_schedule(), test_settings)
