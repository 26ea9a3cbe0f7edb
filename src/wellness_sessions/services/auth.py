"""Authentication gate: registration, login and bearer token checks."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from wellness_sessions.domain.models import AuthResult, UserRecord
from wellness_sessions.errors import (
    AuthError,
    ConflictError,
    MissingCredentialError,
    ValidationError,
)

_logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with the email, if present."""

    def create_user(self, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user record.

        Raises ConflictError when the email is already taken.
        """


class PasswordHasher(Protocol):
    """Salted one-way password hashing."""

    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the hash."""

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification."""


class TokenIssuer(Protocol):
    """Signs and verifies bearer tokens."""

    def issue(self, user_id: UUID) -> str:
        """Return a signed token for the user id."""

    def verify(self, token: str) -> UUID:
        """Return the user id encoded in the token.

        Raises InvalidCredentialError for malformed, expired or badly signed
        tokens.
        """


@dataclass
class AuthService:
    """Application service for registration, login and token checks."""

    repository: UserRepository
    password_hasher: PasswordHasher
    token_issuer: TokenIssuer

    def register(self, email: str, password: str) -> AuthResult:
        """Create an account and return a fresh token."""
        if not email or not password:
            raise ValidationError("Email and password required")
        if self.repository.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = self.repository.create_user(email, self.password_hasher.hash(password))
        _logger.info("Registered user: user_id=%s", user.id)
        return AuthResult(
            token=self.token_issuer.issue(user.id), identity=user.identity()
        )

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return a fresh token."""
        if not email or not password:
            raise ValidationError("Email and password required")
        user = self.repository.get_by_email(email)
        if user is None:
            self.password_hasher.dummy_verify()
            raise AuthError(INVALID_CREDENTIALS)
        if not self.password_hasher.verify(password, user.password_hash):
            raise AuthError(INVALID_CREDENTIALS)
        return AuthResult(
            token=self.token_issuer.issue(user.id), identity=user.identity()
        )

    def authenticate(self, token: str | None) -> UUID:
        """Return the user id carried by a bearer token."""
        if token is None or not token.strip():
            raise MissingCredentialError("Access token required")
        return self.token_issuer.verify(token.strip())
