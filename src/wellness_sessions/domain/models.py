"""Domain models for users and authentication."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    password_hash: str
    created_at: datetime

    def identity(self) -> "Identity":
        """Return the public projection of the user."""
        return Identity(id=self.id, email=self.email)


@dataclass(frozen=True)
class Identity:
    """Public identity returned to clients."""

    id: UUID
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Issued bearer token plus the identity it belongs to."""

    token: str
    identity: Identity
