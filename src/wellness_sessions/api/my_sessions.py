"""Owner-scoped session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from wellness_sessions.api.auth import require_user_id
from wellness_sessions.api.models import SessionPayload, SessionResponse
from wellness_sessions.errors import NotFoundError

if TYPE_CHECKING:
    from wellness_sessions.containers import AppContainer

router = APIRouter(prefix="/my-sessions", tags=["my-sessions"])


@router.get("")
async def list_my_sessions(
    request: Request, user_id: UUID = Depends(require_user_id)
) -> list[SessionResponse]:
    """Return the caller's sessions, most recently updated first."""
    container: AppContainer = request.app.state.container
    sessions = container.session_service.list_mine(user_id)
    return [SessionResponse.from_record(session) for session in sessions]


@router.post("/save-draft")
async def save_draft(
    payload: SessionPayload,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> SessionResponse:
    """Create or update a draft."""
    container: AppContainer = request.app.state.container
    session = container.session_service.save_draft(user_id, payload.to_input())
    return SessionResponse.from_record(session)


@router.post("/publish")
async def publish(
    payload: SessionPayload,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> SessionResponse:
    """Create or update a session and publish it."""
    container: AppContainer = request.app.state.container
    session = container.session_service.publish(user_id, payload.to_input())
    return SessionResponse.from_record(session)


@router.get("/{session_id}")
async def get_my_session(
    session_id: str, request: Request, user_id: UUID = Depends(require_user_id)
) -> SessionResponse:
    """Return one of the caller's sessions."""
    container: AppContainer = request.app.state.container
    try:
        parsed_id = UUID(session_id)
    except ValueError as exc:
        raise NotFoundError("Session not found") from exc
    session = container.session_service.get_mine(user_id, parsed_id)
    return SessionResponse.from_record(session)
