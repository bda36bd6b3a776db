# src/taskboard/client/api_client.py

"""
Typed HTTP client for the task API.

- non-2xx responses raise ApiError carrying the status and the server message
- 204 No Content is an empty successful result (None)
- transport failures (connect/read timeouts, refused connections) raise ApiNetworkError

Both clients accept an injected httpx client, which is how tests point them at
an in-process app (fastapi.testclient.TestClient is an httpx.Client).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..api.schemas import TaskListResponse, TaskResponse
from ..tasks.task_models import Task, TaskList

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks"
DEFAULT_BASE_URL = "http://localhost:5082"


class ApiError(Exception):
    """Non-2xx response from the task API."""

    def __init__(self, status: int, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.payload = payload

    @property
    def error_type(self) -> str | None:
        if isinstance(self.payload, dict):
            value = self.payload.get("type")
            return value if isinstance(value, str) else None
        return None


class ApiNetworkError(Exception):
    """The request never produced an HTTP response."""


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        # Non-JSON error body (proxy page, plain text): use the default message.
        return None


def _error_message(status: int, payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("detail", "message", "title"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return f"HTTP error! status: {status}"


def _handle_response(response: httpx.Response) -> Any:
    if not response.is_success:
        payload = _error_payload(response)
        message = _error_message(response.status_code, payload)
        logger.debug(
            "API error %s %s -> %s: %s",
            response.request.method,
            response.request.url,
            response.status_code,
            message,
        )
        raise ApiError(response.status_code, message, payload)

    if response.status_code == 204:
        return None
    return response.json()


def _create_body(title: str, description: str | None) -> dict[str, Any]:
    body: dict[str, Any] = {"title": title}
    if description is not None:
        body["description"] = description
    return body


def _to_task_list(data: Any) -> TaskList:
    parsed = TaskListResponse.model_validate(data)
    return TaskList(tasks=[t.to_task() for t in parsed.tasks])


def _to_task(data: Any) -> Task:
    return TaskResponse.model_validate(data).to_task()


class TaskApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        http: httpx.Client | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings) -> TaskApiClient:
        return cls(
            str(getattr(settings, "api_base_url", DEFAULT_BASE_URL)),
            timeout=float(getattr(settings, "client_timeout_seconds", 10.0)),
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> TaskApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            response = self._http.request(method, path, json=json)
        except httpx.TransportError as exc:
            raise ApiNetworkError(f"Network error: {exc}") from exc
        return _handle_response(response)

    def fetch_tasks(self) -> TaskList:
        return _to_task_list(self._request("GET", TASKS_PATH))

    def get_task(self, task_id: int) -> Task:
        return _to_task(self._request("GET", f"{TASKS_PATH}/{task_id}"))

    def create_task(self, title: str, description: str | None = None) -> Task:
        return _to_task(self._request("POST", TASKS_PATH, json=_create_body(title, description)))

    def toggle_task(self, task_id: int) -> Task:
        return _to_task(self._request("PATCH", f"{TASKS_PATH}/{task_id}/toggle"))

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"{TASKS_PATH}/{task_id}")


class AsyncTaskApiClient:
    """Async twin of TaskApiClient (httpx.AsyncClient)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> AsyncTaskApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.TransportError as exc:
            raise ApiNetworkError(f"Network error: {exc}") from exc
        return _handle_response(response)

    async def fetch_tasks(self) -> TaskList:
        return _to_task_list(await self._request("GET", TASKS_PATH))

    async def get_task(self, task_id: int) -> Task:
        return _to_task(await self._request("GET", f"{TASKS_PATH}/{task_id}"))

    async def create_task(self, title: str, description: str | None = None) -> Task:
        return _to_task(
            await self._request("POST", TASKS_PATH, json=_create_body(title, description))
        )

    async def toggle_task(self, task_id: int) -> Task:
        return _to_task(await self._request("PATCH", f"{TASKS_PATH}/{task_id}/toggle"))

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"{TASKS_PATH}/{task_id}")
