"""Bearer token dependency for owner-scoped endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

if TYPE_CHECKING:
    from wellness_sessions.containers import AppContainer

_bearer = HTTPBearer(auto_error=False)


async def require_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> UUID:
    """Return the id of the user the bearer token was issued to."""
    container: AppContainer = request.app.state.container
    token = credentials.credentials if credentials is not None else None
    return container.auth_service.authenticate(token)
