"""
Amazon Connect client for creating scheduled task contacts.
"""

import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.infrastructure.observability.logging import get_logger
from app.models.domain.schedule_domain import ConnectTaskRequest

logger = get_logger(__name__)


class ConnectTaskError(Exception):
    """Raised when Amazon Connect rejects or fails a task request."""

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


class ConnectTaskClient:
    """Thin async wrapper over the boto3 ``connect`` client."""

    def __init__(self, region_name: str | None = None, client=None):
        self._region_name = region_name
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("connect", region_name=self._region_name)
        return self._client

    async def start_task(self, task: ConnectTaskRequest) -> str | None:
        """
        Create a scheduled task contact.

        Returns:
            The new contact id

        Raises:
            ConnectTaskError: If the Connect API call fails
        """
        params = {
            "InstanceId": task.instance_id,
            "ContactFlowId": task.flow_id,
            "Name": task.name,
            "Description": task.description,
            "ScheduledTime": task.scheduled_time,
            "Attributes": task.clean_attributes(),
        }

        try:
            response = await asyncio.to_thread(self.client.start_task_contact, **params)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise ConnectTaskError(
                error.get("Message") or str(e), error_code=error.get("Code")
            ) from e
        except BotoCoreError as e:
            raise ConnectTaskError(str(e)) from e

        return response.get("ContactId")
