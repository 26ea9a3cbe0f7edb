"""Session lifecycle: drafts, publishing and owner-scoped reads."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from wellness_sessions.domain.sessions import (
    DRAFT,
    PUBLISHED,
    PublishedSession,
    SessionInput,
    SessionRecord,
)
from wellness_sessions.errors import NotFoundError, ValidationError

_logger = logging.getLogger(__name__)

_MIN_STEP = timedelta(microseconds=1)


class SessionRepository(Protocol):
    """Persistence interface for wellness sessions."""

    def create_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        title: str,
        tags: list[str],
        json_file_url: str | None,
        status: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> SessionRecord:
        """Insert a session and return it."""

    def get_owned_session(
        self, user_id: UUID, session_id: UUID
    ) -> SessionRecord | None:
        """Return the session when it exists and belongs to the user."""

    def update_owned_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        session_id: UUID,
        title: str,
        tags: list[str],
        json_file_url: str | None,
        status: str | None,
        updated_at: datetime,
    ) -> SessionRecord | None:
        """Update a session owned by the user; status None leaves it unchanged."""

    def list_by_owner(self, user_id: UUID) -> list[SessionRecord]:
        """Return the user's sessions, most recently updated first."""

    def list_published(self) -> list[PublishedSession]:
        """Return published sessions, newest first, with owner emails."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag string, trimming each element."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",")]


@dataclass
class SessionService:
    """Create, update and list sessions on behalf of an owner."""

    repository: SessionRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def list_published(self) -> list[PublishedSession]:
        """Return every published session, newest first."""
        return self.repository.list_published()

    def list_mine(self, owner_id: UUID) -> list[SessionRecord]:
        """Return the owner's sessions, most recently updated first."""
        return self.repository.list_by_owner(owner_id)

    def get_mine(self, owner_id: UUID, session_id: UUID) -> SessionRecord:
        """Return one of the owner's sessions."""
        session = self.repository.get_owned_session(owner_id, session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def save_draft(self, owner_id: UUID, data: SessionInput) -> SessionRecord:
        """Create a draft or update an existing session in place."""
        return self._save(owner_id, data, status=DRAFT)

    def publish(self, owner_id: UUID, data: SessionInput) -> SessionRecord:
        """Create or update a session and mark it published."""
        return self._save(owner_id, data, status=PUBLISHED)

    def _save(self, owner_id: UUID, data: SessionInput, status: str) -> SessionRecord:
        if not data.title or not data.title.strip():
            raise ValidationError("Title required")
        tags = parse_tags(data.tags)
        json_file_url = data.json_file_url or None
        now = self.clock()

        if data.id is None:
            session = self.repository.create_session(
                user_id=owner_id,
                title=data.title,
                tags=tags,
                json_file_url=json_file_url,
                status=status,
                created_at=now,
                updated_at=now,
            )
            _logger.info(
                "Session created: user_id=%s session_id=%s status=%s",
                owner_id,
                session.id,
                session.status,
            )
            return session

        current = self.get_mine(owner_id, data.id)
        # Publishing is one-way: a draft save keeps a published session published.
        updated = self.repository.update_owned_session(
            user_id=owner_id,
            session_id=data.id,
            title=data.title,
            tags=tags,
            json_file_url=json_file_url,
            status=PUBLISHED if status == PUBLISHED else None,
            updated_at=max(now, current.updated_at + _MIN_STEP),
        )
        if updated is None:
            raise NotFoundError("Session not found")
        _logger.info(
            "Session updated: user_id=%s session_id=%s status=%s",
            owner_id,
            updated.id,
            updated.status,
        )
        return updated
