import logging
from typing import Any

import httpx

from tracker.client.cache import LocalCache
from tracker.core.config import get_client_settings


logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class BackendUnavailable(Exception):
    pass


class Resource:
    """CRUD calls for one collection route, e.g. ``/projects``."""

    def __init__(self, client: "TrackerClient", name: str) -> None:
        self.client = client
        self.name = name

    def list(self) -> list[dict]:
        return self.client.fetch_cached(self.name, f"/{self.name}")

    def get(self, item_id: int) -> dict:
        return self.client.request("GET", f"/{self.name}/{item_id}")

    def create(self, data: dict) -> dict:
        return self.client.request("POST", f"/{self.name}", json=data)

    def update(self, item_id: int, data: dict) -> dict:
        return self.client.request("PATCH", f"/{self.name}/{item_id}", json=data)

    def delete(self, item_id: int) -> None:
        self.client.request("DELETE", f"/{self.name}/{item_id}")


class TaskResource(Resource):
    def mark_complete(self, task_id: int) -> dict:
        return self.client.request("PATCH", f"/{self.name}/{task_id}/complete")

    def for_user(self, user_id: int) -> list[dict]:
        return self.client.request("GET", f"/{self.name}/user/{user_id}")


class TrackerClient:
    def __init__(
        self,
        base_url: str | None = None,
        http: httpx.Client | None = None,
        cache: LocalCache | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_client_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(timeout=timeout or settings.timeout)
        self.cache = cache if cache is not None else LocalCache(settings.cache_path)

        self.projects = Resource(self, "projects")
        self.tasks = TaskResource(self, "tasks")
        self.users = Resource(self, "users")

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TrackerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, path: str, json: dict | None = None) -> Any:
        try:
            response = self.http.request(method, f"{self.base_url}{path}", json=json)
        except httpx.TransportError as exc:
            raise BackendUnavailable(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 500:
            raise BackendUnavailable(f"{method} {path} returned {response.status_code}")
        if response.status_code >= 400:
            raise ApiError(response.status_code, _error_detail(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def fetch_cached(self, key: str, path: str) -> Any:
        """GET ``path`` and remember the result; serve the remembered copy when offline."""
        try:
            data = self.request("GET", path)
        except BackendUnavailable:
            cached = self.cache.get(key)
            if cached is None:
                raise
            logger.warning("Backend unavailable, serving cached %s", key)
            return cached

        try:
            self.cache.put(key, data)
        except OSError as exc:
            logger.warning("Could not write %s to cache at %s: %s", key, self.cache.path, exc)
        return data

    def dashboard(self) -> dict:
        return self.fetch_cached("dashboard", "/dashboard")


def _error_detail(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return response.text
    return body.get("detail", body) if isinstance(body, dict) else body
