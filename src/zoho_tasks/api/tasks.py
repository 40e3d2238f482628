"""Zoho CRM Tasks endpoints, reached through connector actions."""

from typing import Any, Optional

from zoho_tasks.api.client import AlloyClient
from zoho_tasks.errors import NotFoundError, UpstreamError

LIST_ACTION = "getRecords"
GET_ACTION = "getRecord"
CREATE_ACTION = "insertRecords"
UPDATE_ACTION = "updateRecords"
DELETE_ACTION = "deleteRecords"


def _check_results(payload: dict[str, Any], task_id: Optional[str] = None) -> dict:
    """Raise on the first per-record failure Zoho reports inside a 2xx body."""
    results = payload.get("data")
    if not isinstance(results, list) or not results:
        raise UpstreamError(f"Zoho CRM returned no result: {payload!r}"[:300])

    result = results[0]
    if str(result.get("status", "")).lower() == "error":
        message = result.get("message") or "Zoho CRM rejected the request"
        details = result.get("details") or {}
        points_at_id = details.get("api_name") == "id" or str(details.get("id")) == task_id
        if task_id and result.get("code") == "INVALID_DATA" and points_at_id:
            raise NotFoundError(f"Task {task_id} not found: {message}")
        raise UpstreamError(f"{result.get('code', 'ERROR')}: {message}")
    return result


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: AlloyClient, module: Optional[str] = None):
        self.client = client
        self.module = module or client.settings.zoho.module

    @property
    def path_params(self) -> dict[str, str]:
        return {"module": self.module}

    async def list_tasks(
        self,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> dict:
        """List task records exactly as Zoho returns them."""
        params: dict[str, Any] = {}
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = per_page

        payload = await self.client.execute_action(
            LIST_ACTION,
            path_params=self.path_params,
            query_params=params or None,
        )
        return {
            "data": payload.get("data") or [],
            "info": payload.get("info") or {},
        }

    async def get_task(self, task_id: str) -> dict:
        """Get a specific task record by ID."""
        payload = await self.client.execute_action(
            GET_ACTION,
            path_params={**self.path_params, "recordId": task_id},
        )
        records = payload.get("data") or []
        if not records:
            raise NotFoundError(f"Task {task_id} not found")
        return records[0]

    async def create_task(self, fields: dict[str, Any]) -> str:
        """Create a task from Zoho-named fields and return its ID."""
        payload = await self.client.execute_action(
            CREATE_ACTION,
            path_params=self.path_params,
            request_body={"data": [fields]},
        )
        result = _check_results(payload)
        return str((result.get("details") or {}).get("id", ""))

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> dict:
        """Update only the given Zoho-named fields of a task."""
        payload = await self.client.execute_action(
            UPDATE_ACTION,
            path_params=self.path_params,
            request_body={"data": [{"id": task_id, **fields}]},
        )
        return _check_results(payload, task_id)

    async def delete_task(self, task_id: str) -> dict:
        """Delete a task."""
        payload = await self.client.execute_action(
            DELETE_ACTION,
            path_params=self.path_params,
            query_params={"ids": task_id},
        )
        return _check_results(payload, task_id)
