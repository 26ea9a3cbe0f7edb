"""JWT bearer tokens backed by python-jose."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt

from wellness_sessions.errors import InvalidCredentialError
from wellness_sessions.services.auth import TokenIssuer


@dataclass
class JoseTokenIssuer(TokenIssuer):
    """Signs tokens carrying the user id in the ``sub`` claim."""

    secret: str
    algorithm: str = "HS256"
    expire_minutes: int | None = None

    def issue(self, user_id: UUID) -> str:
        """Return a signed token for the user id."""
        claims: dict[str, object] = {"sub": str(user_id)}
        if self.expire_minutes is not None:
            claims["exp"] = datetime.now(tz=UTC) + timedelta(
                minutes=self.expire_minutes
            )
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> UUID:
        """Decode the token and return its user id."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidCredentialError("Invalid token") from exc
        subject = payload.get("sub")
        if not isinstance(subject, str):
            raise InvalidCredentialError("Invalid token")
        try:
            return UUID(subject)
        except ValueError as exc:
            raise InvalidCredentialError("Invalid token") from exc
