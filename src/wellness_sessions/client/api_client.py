"""HTTP client for the wellness sessions API."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar
from uuid import UUID

import httpx
from pydantic import BaseModel

from wellness_sessions.api.models import (
    AuthResponse,
    PublishedSessionResponse,
    SessionResponse,
)
from wellness_sessions.client.credentials import ClientSession
from wellness_sessions.domain.models import Identity

_logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

INVALID_RESPONSE_MESSAGE = "Invalid response from server"


class ApiError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class DraftFields:
    """Editable session fields as the editor holds them."""

    title: str = ""
    tags: str = ""
    json_file_url: str = ""


class WellnessApi(Protocol):
    """Interface for the calls the editor makes."""

    async def probe(self) -> None:
        """Check the API is reachable."""

    async def register(self, email: str, password: str) -> ClientSession:
        """Create an account."""

    async def login(self, email: str, password: str) -> ClientSession:
        """Sign in."""

    async def list_published(self) -> list[PublishedSessionResponse]:
        """Return the public listing."""

    async def list_mine(self, session: ClientSession) -> list[SessionResponse]:
        """Return the caller's sessions."""

    async def get_mine(
        self, session: ClientSession, session_id: UUID
    ) -> SessionResponse:
        """Return one of the caller's sessions."""

    async def save_draft(
        self, session: ClientSession, fields: DraftFields, session_id: UUID | None
    ) -> SessionResponse:
        """Create or update a draft."""

    async def publish(
        self, session: ClientSession, fields: DraftFields, session_id: UUID | None
    ) -> SessionResponse:
        """Create or update a session and publish it."""

    async def close(self) -> None:
        """Release transport resources."""


@dataclass
class HttpxWellnessApi:
    """Wellness API client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(cls, base_url: str, timeout: float = 10.0) -> "HttpxWellnessApi":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def probe(self) -> None:
        """Request the API root."""
        await self._request("GET", "/", parse=lambda data: None)

    async def register(self, email: str, password: str) -> ClientSession:
        """Create an account and return the signed-in session."""
        return await self._request(
            "POST",
            "/register",
            json={"email": email, "password": password},
            parse=_parse_auth,
        )

    async def login(self, email: str, password: str) -> ClientSession:
        """Sign in and return the session."""
        return await self._request(
            "POST",
            "/login",
            json={"email": email, "password": password},
            parse=_parse_auth,
        )

    async def list_published(self) -> list[PublishedSessionResponse]:
        """Return the public listing."""
        return await self._request(
            "GET", "/sessions", parse=_list_parser(PublishedSessionResponse)
        )

    async def list_mine(self, session: ClientSession) -> list[SessionResponse]:
        """Return the caller's sessions."""
        return await self._request(
            "GET",
            "/my-sessions",
            session=session,
            parse=_list_parser(SessionResponse),
        )

    async def get_mine(
        self, session: ClientSession, session_id: UUID
    ) -> SessionResponse:
        """Return one of the caller's sessions."""
        return await self._request(
            "GET",
            f"/my-sessions/{session_id}",
            session=session,
            parse=SessionResponse.model_validate,
        )

    async def save_draft(
        self, session: ClientSession, fields: DraftFields, session_id: UUID | None
    ) -> SessionResponse:
        """Create or update a draft."""
        return await self._request(
            "POST",
            "/my-sessions/save-draft",
            session=session,
            json=_session_body(fields, session_id),
            parse=SessionResponse.model_validate,
        )

    async def publish(
        self, session: ClientSession, fields: DraftFields, session_id: UUID | None
    ) -> SessionResponse:
        """Create or update a session and publish it."""
        return await self._request(
            "POST",
            "/my-sessions/publish",
            session=session,
            json=_session_body(fields, session_id),
            parse=SessionResponse.model_validate,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[object], T],
        session: ClientSession | None = None,
        json: dict[str, object] | None = None,
    ) -> T:
        """Send a request and parse its JSON body.

        A success response whose body is not JSON, or does not match the
        expected shape, raises ``ApiError`` like an error response does.
        """
        headers = {"Content-Type": "application/json"}
        if session is not None:
            headers.update(session.authorization_header())
        _logger.debug("Making %s request to %s%s", method, self.base_url, path)
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            headers=headers,
            json=json,
            timeout=self.timeout,
        )
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        try:
            return parse(response.json())
        except (TypeError, ValueError) as exc:
            _logger.warning("Unparseable response from %s %s: %s", method, path, exc)
            raise ApiError(response.status_code, INVALID_RESPONSE_MESSAGE) from exc


def _session_body(fields: DraftFields, session_id: UUID | None) -> dict[str, object]:
    return {
        "id": str(session_id) if session_id else None,
        "title": fields.title,
        "tags": fields.tags,
        "json_file_url": fields.json_file_url,
    }


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def _to_client_session(response: AuthResponse) -> ClientSession:
    return ClientSession(
        token=response.token,
        user=Identity(id=response.user.id, email=response.user.email),
    )


def _parse_auth(data: object) -> ClientSession:
    return _to_client_session(AuthResponse.model_validate(data))


def _list_parser(model: type[M]) -> Callable[[object], list[M]]:
    def parse(data: object) -> list[M]:
        if not isinstance(data, list):
            raise TypeError(f"Expected a list, got {type(data).__name__}")
        return [model.model_validate(item) for item in data]

    return parse
