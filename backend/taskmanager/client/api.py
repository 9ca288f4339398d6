"""
Async HTTP client for the task manager API.

Mirrors the REST surface one method per endpoint. Error responses are
raised as the same error classes the server uses (taskmanager.core.errors),
and any 401 on an authenticated call ends the session.
"""
import logging
from typing import Any, Optional

import httpx

from taskmanager.client.session import ClientSession
from taskmanager.core.errors import (
    AppError,
    ConflictError,
    FieldError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger("uvicorn.error")

DEFAULT_BASE_URL = "http://localhost:8000"


def _detail(resp: httpx.Response) -> dict:
    try:
        body = resp.json()
    except ValueError:
        return {}
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return {"message": detail}
    return detail if isinstance(detail, dict) else {}


class TaskManagerClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: Optional[ClientSession] = None,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.session = session if session is not None else ClientSession()
        self._owns_http = http is None
        self.http = http if http is not None else httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "TaskManagerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ===== Auth =====
    async def register(self, username: str, password: str) -> dict:
        resp = await self.http.post("/auth/register", json={"username": username, "password": password})
        self._raise_for_status(resp, authenticated=False)
        return resp.json()

    async def login(self, username: str, password: str) -> str:
        """Log in and store the returned token in the session."""
        resp = await self.http.post("/auth/login", json={"username": username, "password": password})
        self._raise_for_status(resp, authenticated=False)
        token = resp.json()["access_token"]
        self.session.start(token)
        return token

    def logout(self) -> None:
        # Tokens are stateless; forgetting it is all there is to do
        self.session.end()

    async def me(self) -> dict:
        return await self._request("GET", "/auth/me")

    # ===== Tasks =====
    async def list_tasks(self, page: Optional[int] = None, limit: Optional[int] = None) -> dict:
        params = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return await self._request("GET", "/tasks", params=params)

    async def get_task(self, task_id: str) -> dict:
        return await self._request("GET", f"/tasks/{task_id}")

    async def create_task(self, title: str, description: Optional[str] = None, status: Optional[str] = None) -> dict:
        payload: dict[str, Any] = {"title": title}
        if description is not None:
            payload["description"] = description
        if status is not None:
            payload["status"] = status
        return await self._request("POST", "/tasks", json=payload)

    async def update_task_status(self, task_id: str, status: str) -> dict:
        return await self._request("PATCH", f"/tasks/{task_id}/status", json={"status": status})

    async def update_task(self, task_id: str, **changes: Any) -> dict:
        """Send only the given fields (title, description, status)."""
        return await self._request("PATCH", f"/tasks/{task_id}", json=changes)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    # ===== Internals =====
    async def _request(self, method: str, url: str, **kwargs) -> Any:
        if not self.session.is_authenticated:
            raise UnauthorizedError("No access token found, log in again", code="AUTH_REQUIRED")
        resp = await self.http.request(method, url, headers=self.session.auth_headers(), **kwargs)
        self._raise_for_status(resp, authenticated=True)
        if resp.status_code == httpx.codes.NO_CONTENT:
            return None
        return resp.json()

    def _raise_for_status(self, resp: httpx.Response, *, authenticated: bool) -> None:
        if resp.is_success:
            return
        detail = _detail(resp)
        message = detail.get("message") or f"HTTP error {resp.status_code}"
        code = detail.get("code")
        if resp.status_code == 400:
            errors = [FieldError(e.get("field", ""), e.get("message", "")) for e in detail.get("errors") or []]
            raise ValidationError(errors, message=message)
        if resp.status_code == 401:
            if authenticated:
                logger.info("[client] session rejected by server, clearing token")
                self.session.end()
            raise UnauthorizedError(message, code=code)
        if resp.status_code == 404:
            raise NotFoundError(message, code=code)
        if resp.status_code == 409:
            raise ConflictError(message, code=code)
        if 400 <= resp.status_code < 500:
            raise AppError(message, code=code)
        resp.raise_for_status()
