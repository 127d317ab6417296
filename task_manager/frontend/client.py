"""
HTTP client for the Task Manager REST API.

``TaskApiClient`` mirrors the five ``/v1/tasks`` endpoints. Every method
returns the parsed JSON body on success. Non-2xx responses raise
``ApiError`` carrying the status code and the server's ``message``;
network-level failures propagate unchanged as
``requests.RequestException``.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the task API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _response_error_message(response: requests.Response, default: str) -> str:
    """
    Extract an error message from a JSON API response if possible.

    Falls back to *default* when the body is not JSON or carries no
    usable ``message`` field.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    if not isinstance(payload, dict):
        return default
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return default


class TaskApiClient:
    """
    Thin wrapper over the task endpoints.

    Args:
        base_url: Root URL of the API server (without the ``/v1`` prefix).
        timeout: Per-request timeout in seconds.
        session: Optional pre-configured ``requests.Session``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/v1/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            ApiError: If the response status is not 2xx.
            requests.RequestException: For network-level failures.
        """
        response = self.session.request(
            method=method,
            url=self._url(path),
            headers={"Accept": "application/json"},
            timeout=self.timeout,
            **kwargs,
        )
        if not 200 <= response.status_code < 300:
            message = _response_error_message(
                response, f"Request failed with status {response.status_code}"
            )
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        if response.status_code == 204:
            return {}
        return response.json()

    def get_tasks(self, filters: dict[str, str] | None = None) -> list[dict[str, Any]]:
        """Fetch the task list; *filters* become ``search``/``status`` query params."""
        params = {key: value for key, value in (filters or {}).items() if value}
        return self._request("GET", "/tasks", params=params)

    def get_task(self, task_id: int) -> dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/tasks", json=data)

    def update_task(self, task_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", f"/tasks/{task_id}", json=data)

    def update_task_status(self, task_id: int, status: str) -> dict[str, Any]:
        """Change only the status; sent as a PATCH carrying just ``status``."""
        return self._request("PATCH", f"/tasks/{task_id}", json={"status": status})

    def delete_task(self, task_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}")
