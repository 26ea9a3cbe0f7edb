"""Pydantic models for the HTTP request and response bodies."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from wellness_sessions.domain.models import AuthResult
from wellness_sessions.domain.sessions import (
    PublishedSession,
    SessionInput,
    SessionRecord,
)


class CredentialsPayload(BaseModel):
    """Email and password submitted to /register and /login."""

    email: str = ""
    password: str = ""


class SessionPayload(BaseModel):
    """Session fields submitted to save-draft and publish."""

    id: UUID | None = None
    title: str = ""
    tags: str | None = None
    json_file_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("json_file_url", "jsonUrl"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _join_tag_lists(cls, value: object) -> object:
        if isinstance(value, list):
            return ",".join(str(tag) for tag in value)
        return value

    def to_input(self) -> SessionInput:
        """Convert to the service-level input."""
        return SessionInput(
            id=self.id,
            title=self.title,
            tags=self.tags,
            json_file_url=self.json_file_url,
        )


class IdentityResponse(BaseModel):
    """Public user identity."""

    id: UUID
    email: str


class AuthResponse(BaseModel):
    """Bearer token plus the identity it was issued to."""

    token: str
    user: IdentityResponse

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        """Build the response from a service result."""
        return cls(
            token=result.token,
            user=IdentityResponse(id=result.identity.id, email=result.identity.email),
        )


class SessionResponse(BaseModel):
    """A session as returned to its owner."""

    id: UUID
    user_id: UUID
    title: str
    tags: list[str]
    json_file_url: str | None
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionResponse":
        """Build the response from a domain record."""
        return cls(
            id=record.id,
            user_id=record.user_id,
            title=record.title,
            tags=list(record.tags),
            json_file_url=record.json_file_url,
            status=record.status,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class PublishedSessionResponse(SessionResponse):
    """A session in the public listing."""

    owner_email: str | None

    @classmethod
    def from_published(cls, item: PublishedSession) -> "PublishedSessionResponse":
        """Build the response from a published session."""
        base = SessionResponse.from_record(item.session)
        return cls(**base.model_dump(), owner_email=item.owner_email)
