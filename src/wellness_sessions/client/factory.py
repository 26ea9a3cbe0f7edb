"""Build an editor controller from client settings."""

from wellness_sessions.client.api_client import HttpxWellnessApi
from wellness_sessions.client.credentials import CredentialStore
from wellness_sessions.client.editor import EditorController
from wellness_sessions.config import ClientSettings


def build_editor(settings: ClientSettings | None = None) -> EditorController:
    """Create an editor wired to the configured API."""
    resolved_settings = settings or ClientSettings()
    api = HttpxWellnessApi.create(
        resolved_settings.api_base_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    return EditorController(
        api=api,
        store=CredentialStore(resolved_settings.credentials_path),
        autosave_delay=resolved_settings.autosave_delay_seconds,
    )
