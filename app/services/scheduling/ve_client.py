"""
VideoEngager API client for agent impersonation and schedule records.

Every call goes through _request, which never raises: transport failures come back
as an ApiResult with status 0 and an "error" entry so callers inspect one shape.
"""

from typing import Any
from urllib.parse import quote

import httpx

from app.infrastructure.observability.logging import get_logger
from app.models.domain.schedule_domain import ApiResult

logger = get_logger(__name__)

IMPERSONATE_PATH = "/api/partners/impersonate/{partner_key}/{external_id}/{agent_email}"
SCHEDULES_PATH = "/api/schedules/my/"

REQUEST_TIMEOUT = 30  # seconds


def _segment(value: str) -> str:
    """Percent-encode one URL path segment."""
    return quote(str(value), safe="@")


class VideoEngagerClient:
    """
    Client for the VideoEngager partner API.

    Uses the injected httpx client when given one; otherwise owns a client that is
    closed by close() or on leaving an ``async with`` block.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> "VideoEngagerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def _build_headers(self, token: str | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> ApiResult:
        query = {key: value for key, value in (params or {}).items() if value not in (None, "")}
        url = f"{self.base_url}{path}"

        try:
            response = await self._client.request(
                method,
                url,
                params=query or None,
                json=json_body,
                headers=self._build_headers(token),
            )
            data = response.json() if response.content else {}
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("VideoEngager request failed", method=method, path=path, error=str(e))
            return ApiResult(status=0, data={"error": str(e)})

        if not isinstance(data, dict):
            data = {"data": data}

        logger.debug("VideoEngager response", method=method, path=path, status_code=response.status_code)
        return ApiResult(status=response.status_code, data=data)

    async def authenticate(self, partner_key: str, external_id: str, agent_email: str) -> str | None:
        """
        Exchange partner credentials for an agent session token.

        Returns:
            The bearer token, or None when the call fails for any reason
        """
        if not partner_key or not external_id or not agent_email:
            logger.error("Missing partner key, external id or agent email for VideoEngager login")
            return None

        path = IMPERSONATE_PATH.format(
            partner_key=_segment(partner_key),
            external_id=_segment(external_id),
            agent_email=_segment(agent_email),
        )
        result = await self._request("GET", path)

        token = result.data.get("token") if result.ok else None
        if not token:
            logger.error(
                "VideoEngager authentication failed",
                status_code=result.status,
                error=result.error_message,
            )
            return None
        return token

    async def create_schedule_record(
        self, token: str, agent_email: str, date: str, duration: int
    ) -> ApiResult:
        """Create a schedule record. Visitor details are always sent blank."""
        payload = {
            "date": date,
            "duration": duration,
            "visitor": {"name": "", "email": "", "phone": ""},
        }
        return await self._request(
            "POST", SCHEDULES_PATH, json_body=payload, params={"agentEmail": agent_email}, token=token
        )

    async def delete_schedule_record(self, token: str, record_id: str) -> ApiResult:
        return await self._request("DELETE", f"{SCHEDULES_PATH}{_segment(record_id)}", token=token)
