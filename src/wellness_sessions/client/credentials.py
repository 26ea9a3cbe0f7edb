"""Client session context and its on-disk cache."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from wellness_sessions.domain.models import Identity

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSession:
    """Bearer token and identity of the signed-in user."""

    token: str
    user: Identity

    def authorization_header(self) -> dict[str, str]:
        """Return the Authorization header for authenticated calls."""
        return {"Authorization": f"Bearer {self.token}"}


@dataclass
class CredentialStore:
    """Persists the client session as JSON so it survives restarts."""

    path: Path

    def load(self) -> ClientSession | None:
        """Return the stored session, or None when absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return ClientSession(
                token=str(raw["token"]),
                user=Identity(id=UUID(raw["user"]["id"]), email=raw["user"]["email"]),
            )
        except (OSError, ValueError, KeyError, TypeError):
            _logger.warning("Ignoring unreadable credentials file: %s", self.path)
            return None

    def save(self, session: ClientSession) -> None:
        """Write the session to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "token": session.token,
            "user": {"id": str(session.user.id), "email": session.user.email},
        }
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self) -> None:
        """Forget the stored session."""
        self.path.unlink(missing_ok=True)
