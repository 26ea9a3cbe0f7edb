"""Domain models for wellness sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DRAFT = "draft"
PUBLISHED = "published"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted wellness session."""

    id: UUID
    user_id: UUID
    title: str
    tags: list[str]
    json_file_url: str | None
    status: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PublishedSession:
    """A published session annotated with its owner's email."""

    session: SessionRecord
    owner_email: str | None


@dataclass(frozen=True)
class SessionInput:
    """Fields submitted by a save-draft or publish call."""

    title: str
    tags: str | None = None
    json_file_url: str | None = None
    id: UUID | None = None
