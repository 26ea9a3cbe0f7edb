"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wellness_sessions.api.models import (
    AuthResponse,
    CredentialsPayload,
    PublishedSessionResponse,
)
from wellness_sessions.api.my_sessions import router as my_sessions_router
from wellness_sessions.app_logging import configure_logging
from wellness_sessions.config import parse_cors_origins
from wellness_sessions.containers import AppContainer
from wellness_sessions.errors import ServerError, WellnessError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Wellness Sessions API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(WellnessError)
    async def wellness_error_handler(
        request: Request, exc: WellnessError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code, content={"error": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "method": request.method},
        )
        error = ServerError()
        return JSONResponse(
            status_code=error.status_code, content={"error": error.message}
        )

    app.include_router(my_sessions_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Connectivity probe used by the client on start-up."""
        return {"message": "API is running successfully"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/register", status_code=201)
    async def register(payload: CredentialsPayload, request: Request) -> AuthResponse:
        """Create an account and return a bearer token."""
        state_container: AppContainer = request.app.state.container
        result = state_container.auth_service.register(payload.email, payload.password)
        return AuthResponse.from_result(result)

    @app.post("/login")
    async def login(payload: CredentialsPayload, request: Request) -> AuthResponse:
        """Check credentials and return a bearer token."""
        state_container: AppContainer = request.app.state.container
        result = state_container.auth_service.login(payload.email, payload.password)
        return AuthResponse.from_result(result)

    @app.get("/sessions")
    async def list_published(request: Request) -> list[PublishedSessionResponse]:
        """Return every published session, newest first."""
        state_container: AppContainer = request.app.state.container
        return [
            PublishedSessionResponse.from_published(item)
            for item in state_container.session_service.list_published()
        ]

    return app
