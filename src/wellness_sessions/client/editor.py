"""Editor state: navigation, the draft under edit and auto-save."""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field, replace
from typing import TypeVar
from uuid import UUID

import httpx

from wellness_sessions.api.models import PublishedSessionResponse, SessionResponse
from wellness_sessions.client.api_client import ApiError, DraftFields, WellnessApi
from wellness_sessions.client.credentials import ClientSession, CredentialStore
from wellness_sessions.client.debounce import Debouncer

_logger = logging.getLogger(__name__)

PAGE_AUTH = "auth"
PAGE_DASHBOARD = "dashboard"
PAGE_MY_SESSIONS = "my-sessions"
PAGE_EDITOR = "editor"

_EDITABLE_FIELDS = frozenset({"title", "tags", "json_file_url"})

T = TypeVar("T")


@dataclass
class EditorController:
    """Client-side state for the single-page session editor.

    Without a signed-in session the page is always ``auth``. Every field edit
    re-arms the auto-save timer; when it fires with a non-blank title the
    draft is saved and the returned id is adopted, so later saves update the
    same record.
    """

    api: WellnessApi
    store: CredentialStore
    autosave_delay: float = 5.0
    session: ClientSession | None = None
    draft: DraftFields = field(default_factory=DraftFields)
    editing_id: UUID | None = None
    published: list[PublishedSessionResponse] = field(default_factory=list)
    mine: list[SessionResponse] = field(default_factory=list)
    error: str | None = None
    notice: str | None = None
    _page: str = field(default=PAGE_DASHBOARD, init=False)
    _autosave: Debouncer = field(init=False)
    _draft_generation: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._autosave = Debouncer(self.autosave_delay, self._autosave_draft)

    @property
    def page(self) -> str:
        """Current page; forced to ``auth`` while signed out."""
        if self.session is None:
            return PAGE_AUTH
        return self._page

    @property
    def autosave_pending(self) -> bool:
        """True while an auto-save is scheduled."""
        return self._autosave.pending

    async def start(self) -> None:
        """Probe the backend and restore a stored session."""
        try:
            await self.api.probe()
        except (ApiError, httpx.HTTPError):
            _logger.warning("Backend connectivity probe failed", exc_info=True)
        self.session = self.store.load()
        if self.session is not None:
            self._page = PAGE_DASHBOARD
            await self.refresh_published()

    async def register(self, email: str, password: str) -> None:
        """Create an account and sign in."""
        session = await self._call(self.api.register(email, password))
        if session is not None:
            await self._signed_in(session, "Successfully registered!")

    async def login(self, email: str, password: str) -> None:
        """Sign in with existing credentials."""
        session = await self._call(self.api.login(email, password))
        if session is not None:
            await self._signed_in(session, "Successfully logged in!")

    def logout(self) -> None:
        """Forget the session and return to the auth page."""
        self._autosave.cancel()
        self.store.clear()
        self.session = None
        self.published = []
        self.mine = []
        self._reset_draft()

    async def show_dashboard(self) -> None:
        """Navigate to the public listing."""
        self._page = PAGE_DASHBOARD
        await self.refresh_published()

    async def show_my_sessions(self) -> None:
        """Navigate to the caller's sessions."""
        self._page = PAGE_MY_SESSIONS
        await self.refresh_mine()

    def open_new(self) -> None:
        """Start editing a new, unsaved session."""
        self._autosave.cancel()
        self._reset_draft()
        self._page = PAGE_EDITOR

    def open_existing(self, record: SessionResponse) -> None:
        """Start editing an existing session."""
        self._autosave.cancel()
        self.draft = DraftFields(
            title=record.title,
            tags=", ".join(record.tags),
            json_file_url=record.json_file_url or "",
        )
        self.editing_id = record.id
        self._draft_generation += 1
        self._page = PAGE_EDITOR

    def edit(self, field_name: str, value: str) -> None:
        """Change one draft field and re-arm the auto-save timer.

        Must be called from inside the running event loop.
        """
        if field_name not in _EDITABLE_FIELDS:
            raise ValueError(f"Unknown draft field: {field_name}")
        self.draft = replace(self.draft, **{field_name: value})
        self._autosave.trigger()

    async def save_draft(self) -> None:
        """Save the current draft and adopt the returned id.

        The id is not adopted if a different draft was opened while the
        request was in flight.
        """
        if self.session is None:
            return
        generation = self._draft_generation
        saved = await self._call(
            self.api.save_draft(self.session, self.draft, self.editing_id)
        )
        if saved is None:
            return
        if generation != self._draft_generation:
            _logger.info("Discarding save result for a draft no longer open")
            return
        self.editing_id = saved.id
        self.notice = "Draft saved!"

    async def publish(self) -> None:
        """Publish the current draft and return to the dashboard."""
        if self.session is None:
            return
        published = await self._call(
            self.api.publish(self.session, self.draft, self.editing_id)
        )
        if published is None:
            return
        self.notice = "Session published!"
        self._reset_draft()
        self._page = PAGE_DASHBOARD
        await self.refresh_published()

    async def refresh_published(self) -> None:
        """Reload the public listing."""
        sessions = await self._call(self.api.list_published())
        if sessions is not None:
            self.published = sessions

    async def refresh_mine(self) -> None:
        """Reload the caller's sessions."""
        if self.session is None:
            return
        sessions = await self._call(self.api.list_mine(self.session))
        if sessions is not None:
            self.mine = sessions

    def dismiss_error(self) -> None:
        """Clear the inline error message."""
        self.error = None

    def dismiss_notice(self) -> None:
        """Clear the inline success message."""
        self.notice = None

    async def wait_for_autosave(self) -> None:
        """Wait until the scheduled auto-save has run."""
        await self._autosave.wait()

    async def close(self) -> None:
        """Cancel pending work and release the HTTP client."""
        self._autosave.cancel()
        await self.api.close()

    async def _autosave_draft(self) -> None:
        if not self.draft.title.strip():
            return
        await self.save_draft()

    async def _signed_in(self, session: ClientSession, notice: str) -> None:
        self.store.save(session)
        self.session = session
        self.error = None
        self.notice = notice
        self._page = PAGE_DASHBOARD
        await self.refresh_published()

    def _reset_draft(self) -> None:
        self.draft = DraftFields()
        self.editing_id = None
        self._draft_generation += 1

    async def _call(self, call: Awaitable[T]) -> T | None:
        self.error = None
        try:
            return await call
        except ApiError as exc:
            _logger.warning("API call failed: status=%s", exc.status_code)
            self.error = exc.message
        except httpx.HTTPError as exc:
            _logger.warning("API call failed: %s", exc)
            self.error = f"Request failed: {exc}"
        return None
