"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from wellness_sessions.adapters.jose_token_issuer import JoseTokenIssuer
from wellness_sessions.adapters.passlib_hasher import PasslibPasswordHasher
from wellness_sessions.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from wellness_sessions.adapters.supabase_user_repository import SupabaseUserRepository
from wellness_sessions.config import Settings
from wellness_sessions.services.auth import AuthService
from wellness_sessions.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    session_service: SessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_service = AuthService(
        repository=SupabaseUserRepository(supabase_client),
        password_hasher=PasslibPasswordHasher(),
        token_issuer=JoseTokenIssuer(
            secret=resolved_settings.jwt_secret,
            algorithm=resolved_settings.jwt_algorithm,
            expire_minutes=resolved_settings.token_expire_minutes,
        ),
    )
    session_service = SessionService(SupabaseSessionRepository(supabase_client))

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        session_service=session_service,
        close_resources=close_resources,
    )
