"""HTTP client for the Task Manager API."""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


@dataclass
class ClientConfig:
    """Client configuration."""
    api_url: str = "http://localhost:3000"
    storage_path: str = "taskmanager_storage.json"
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from environment variables."""
        return cls(
            api_url=os.getenv("TASKMANAGER_API_URL", "http://localhost:3000"),
            storage_path=os.getenv("TASKMANAGER_STORAGE_PATH", "taskmanager_storage.json"),
            timeout=float(os.getenv("TASKMANAGER_TIMEOUT", "10")),
        )


class ApiError(Exception):
    """A failed API call.

    ``status_code`` is None when the server was never reached.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskApiClient:
    """Thin wrapper over the ``/api`` routes.

    Every method returns the ``data`` (or ``message``) of the response
    envelope and raises ``ApiError`` otherwise.
    """

    def __init__(self, config: Optional[ClientConfig] = None, http: Optional[httpx.Client] = None):
        self.config = config or ClientConfig.from_env()
        self._http = http or httpx.Client(base_url=self.config.api_url, timeout=self.config.timeout)
        self.token: Optional[str] = None

    def close(self) -> None:
        self._http.close()

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self._http.request(method, f"/api{path}", json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Request {method} {path} failed: {e}")
            raise ApiError(f"Network error: {e}")

        try:
            body = response.json()
        except ValueError:
            raise ApiError(f"Unexpected response ({response.status_code})", response.status_code)
        if not isinstance(body, dict):
            raise ApiError(f"Unexpected response ({response.status_code})", response.status_code)

        if response.status_code >= 400 or not body.get("success", False):
            raise ApiError(body.get("error", "Request failed"), response.status_code)
        return body

    # --- Auth ---

    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        data = self._request(
            "POST", "/auth/register",
            json={"username": username, "email": email, "password": password},
        )["data"]
        self.token = data["token"]
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})["data"]
        self.token = data["token"]
        return data

    # --- Tasks ---

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks")["data"]

    def get_task(self, task_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")["data"]

    def create_task(self, text: str) -> Dict[str, Any]:
        return self._request("POST", "/tasks", json={"text": text})["data"]

    def update_task(
        self,
        task_id: str,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if text is not None:
            payload["text"] = text
        if completed is not None:
            payload["completed"] = completed
        return self._request("PUT", f"/tasks/{task_id}", json=payload)["data"]

    def delete_task(self, task_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}")["data"]

    def clear_tasks(self) -> str:
        return self._request("DELETE", "/tasks")["message"]

    # --- Reviews ---

    def list_reviews(self, task_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/reviews/{task_id}")["data"]

    def create_review(self, task_id: str, rating: int, comment: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"taskId": task_id, "rating": rating}
        if comment:
            payload["comment"] = comment
        return self._request("POST", "/reviews", json=payload)["data"]

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
