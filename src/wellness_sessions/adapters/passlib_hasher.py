"""Password hashing backed by passlib."""

from dataclasses import dataclass, field

from passlib.context import CryptContext

from wellness_sessions.services.auth import PasswordHasher


def _default_context() -> CryptContext:
    return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass
class PasslibPasswordHasher(PasswordHasher):
    """Salted pbkdf2-sha256 hashes via passlib's CryptContext."""

    context: CryptContext = field(default_factory=_default_context)

    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
        try:
            return self.context.verify(password, password_hash)
        except ValueError:
            return False

    def dummy_verify(self) -> None:
        """Burn a verification's worth of time for unknown accounts."""
        self.context.dummy_verify()
