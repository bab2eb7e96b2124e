"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nanoedit.adapters.openai_image_client import OpenAIImageClient
from nanoedit.config import Settings, resolve_image_size
from nanoedit.services.editing import EditService
from nanoedit.services.sessions import SessionStore
from nanoedit.services.workflow import EditWorkflow


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_store: SessionStore
    edit_service: EditService
    edit_workflow: EditWorkflow
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    image_client = OpenAIImageClient.create(
        api_key=resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    edit_service = EditService(
        client=image_client,
        model=resolved_settings.openai_model,
        size=resolve_image_size(resolved_settings.aspect_ratio),
        quality=resolved_settings.openai_image_quality,
    )
    session_store = SessionStore()
    edit_workflow = EditWorkflow(store=session_store, edit_service=edit_service)

    async def close_resources() -> None:
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_store=session_store,
        edit_service=edit_service,
        edit_workflow=edit_workflow,
        close_resources=close_resources,
    )
