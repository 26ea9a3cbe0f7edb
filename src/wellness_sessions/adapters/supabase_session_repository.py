"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from wellness_sessions.domain.sessions import (
    PUBLISHED,
    PublishedSession,
    SessionRecord,
)
from wellness_sessions.services.sessions import SessionRepository

_COLUMNS = "id, user_id, title, tags, json_file_url, status, created_at, updated_at"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for wellness sessions."""

    client: Client

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
        """Create a session row and return it."""
        response = (
            self.client.table("sessions")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": title,
                    "tags": tags,
                    "json_file_url": json_file_url,
                    "status": status,
                    "created_at": created_at.isoformat(),
                    "updated_at": updated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _parse_session(response.data[0])

    def get_owned_session(
        self, user_id: UUID, session_id: UUID
    ) -> SessionRecord | None:
        """Return a session by id when the user owns it."""
        response = (
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

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
        """Update a session row scoped to its owner and return the new state."""
        payload: dict[str, object] = {
            "title": title,
            "tags": tags,
            "json_file_url": json_file_url,
            "updated_at": updated_at.isoformat(),
        }
        if status is not None:
            payload["status"] = status
        response = (
            self.client.table("sessions")
            .update(payload)
            .eq("id", str(session_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def list_by_owner(self, user_id: UUID) -> list[SessionRecord]:
        """Return the user's sessions, most recently updated first."""
        response = (
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("updated_at", desc=True)
            .execute()
        )
        return [_parse_session(row) for row in response.data or []]

    def list_published(self) -> list[PublishedSession]:
        """Return published sessions joined with their owner's email."""
        response = (
            self.client.table("sessions")
            .select(f"{_COLUMNS}, users(email)")
            .eq("status", PUBLISHED)
            .order("created_at", desc=True)
            .execute()
        )
        published = []
        for row in response.data or []:
            owner = row.get("users")
            owner_email = owner.get("email") if isinstance(owner, dict) else None
            published.append(
                PublishedSession(session=_parse_session(row), owner_email=owner_email)
            )
        return published


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.min.replace(tzinfo=UTC)


def _parse_session(row: dict[str, object]) -> SessionRecord:
    tags = row.get("tags")
    return SessionRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row["title"]),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        json_file_url=row.get("json_file_url") or None,
        status=str(row["status"]),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
