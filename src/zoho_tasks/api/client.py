"""API client for the Alloy connector API."""

from typing import Any, Optional

import httpx

from zoho_tasks.config import Settings, get_config_manager
from zoho_tasks.errors import UpstreamError, classify_upstream_error
from zoho_tasks.utils.logger import get_logger


class AlloyClient:
    """HTTP client that executes connector actions on behalf of one user.

    Every call is a single request: failures are raised, never retried.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if settings is None:
            settings = get_config_manager().require_credentials()
        self.settings = settings
        self.base_url = settings.alloy.base_url.rstrip("/")
        self.timeout = settings.alloy.timeout
        self.connector_id = settings.alloy.connector_id
        self.credential_id = settings.alloy.credential_id
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.logger = get_logger()

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.settings.alloy.api_key}",
            "x-api-version": self.settings.alloy.api_version,
            "x-alloy-userid": self.settings.alloy.user_id,
        }

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AlloyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def action_path(self, action_id: str) -> str:
        return f"/connectors/{self.connector_id}/actions/{action_id}/execute"

    async def execute_action(
        self,
        action_id: str,
        *,
        path_params: Optional[dict[str, Any]] = None,
        query_params: Optional[dict[str, Any]] = None,
        request_body: Optional[Any] = None,
    ) -> dict[str, Any]:
        """Run one connector action and return the upstream payload."""
        body: dict[str, Any] = {"credentialId": self.credential_id}
        if path_params:
            body["pathParams"] = path_params
        if query_params:
            body["queryParameters"] = query_params
        if request_body is not None:
            body["requestBody"] = request_body

        client = self._get_client()
        path = self.action_path(action_id)
        self.logger.info("connector action %s -> POST %s", action_id, path)

        try:
            response = await client.post(path, json=body)
        except httpx.RequestError as e:
            self.logger.error("connector action %s failed: %s", action_id, e)
            raise UpstreamError(f"Could not reach the connector API: {e}") from e

        payload = _decode(response)
        if response.is_success:
            self.logger.info(
                "connector action %s completed: %s", action_id, response.status_code
            )
            return _unwrap(payload)

        error = classify_upstream_error(response.status_code, payload)
        self.logger.error(
            "connector action %s failed: %s %s",
            action_id,
            response.status_code,
            error.message,
        )
        raise error


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def _unwrap(payload: Any) -> dict[str, Any]:
    """Strip the connector's ``responseData`` envelope, if any."""
    if isinstance(payload, dict) and "responseData" in payload:
        payload = payload["responseData"]
    if payload is None or payload == "":
        return {}
    if not isinstance(payload, dict):
        raise UpstreamError(f"Unexpected connector response: {payload!r}"[:300])
    return payload


def get_client(settings: Optional[Settings] = None) -> AlloyClient:
    """Get an API client instance."""
    return AlloyClient(settings)
