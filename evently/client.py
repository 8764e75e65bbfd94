"""HTTP client for the Evently API.

Holds the bearer token after login, attaches it to every request and
unwraps the ``{data, meta}`` envelope so callers only see the payload.

Usage:
    with EventlyClient() as client:
        client.login("ada@example.com", "secret123")
        events = client.list_events()
"""

import logging
from typing import Any

import httpx

from evently.config import get_client_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error body returned by the API: ``{statusCode, message, error}``."""

    def __init__(self, status_code: int, message: str | list[str], error: str):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.message = message
        self.error = error

    @property
    def first_message(self) -> str:
        """The message to show a user: the string, or the first validation message."""
        if isinstance(self.message, list):
            return self.message[0] if self.message else self.error
        return self.message

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            status_code=body.get("statusCode", response.status_code),
            message=body.get("message", response.reason_phrase),
            error=body.get("error", response.reason_phrase),
        )


class EventlyClient:
    """Typed access to the auth and events endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        if http is None:
            base_url = base_url or str(get_client_settings().public_api_url)
            http = httpx.Client(base_url=base_url, timeout=timeout)
            self._owns_http = True
        else:
            self._owns_http = False
        self.http = http
        self.token = token

    def __enter__(self) -> "EventlyClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.http.request(method, path, json=json, headers=headers)
        if response.is_error:
            error = ApiError.from_response(response)
            if error.status_code == 401:
                # A rejected token is stale; make the caller log in again
                self.token = None
            logger.error(f"API {method} {path} failed: {error}")
            raise error

        return response.json().get("data")

    # Auth

    def register(self, name: str, email: str, password: str) -> dict[str, str]:
        return self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )

    def login(self, email: str, password: str) -> dict[str, str]:
        """Log in and keep the issued token for subsequent calls."""
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["access_token"]
        return data

    def logout(self) -> None:
        """Discard the token; the server keeps no session."""
        self.token = None

    def me(self) -> dict[str, Any]:
        return self._request("GET", "/auth/me")

    # Events

    def list_events(self) -> list[dict[str, Any]]:
        return self._request("GET", "/events")

    def get_event(self, event_id: int) -> dict[str, Any]:
        return self._request("GET", f"/events/{event_id}")

    def create_event(
        self,
        name: str,
        date: str,
        description: str | None = None,
        place: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": name, "date": date}
        if description is not None:
            payload["description"] = description
        if place is not None:
            payload["place"] = place
        return self._request("POST", "/events", json=payload)

    def update_event(self, event_id: int, **changes: Any) -> dict[str, Any]:
        """Send only the given fields; the rest keep their value."""
        return self._request("PUT", f"/events/{event_id}", json=changes)

    def delete_event(self, event_id: int) -> dict[str, str]:
        return self._request("DELETE", f"/events/{event_id}")
