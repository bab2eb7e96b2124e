"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from io import BytesIO

import pytest
from PIL import Image

from nanoedit.config import Settings
from nanoedit.containers import AppContainer
from nanoedit.domain.edits import ImagePart, ResponsePart, TextPart
from nanoedit.services.editing import EditService, ImageEditClient
from nanoedit.services.sessions import SessionStore
from nanoedit.services.workflow import EditWorkflow


def make_png(color: tuple[int, int, int] = (255, 0, 0), size: int = 4) -> bytes:
    """Return a tiny solid-colour PNG."""
    buffer = BytesIO()
    Image.new("RGB", (size, size), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_jpeg(color: tuple[int, int, int] = (0, 0, 255), size: int = 4) -> bytes:
    """Return a tiny solid-colour JPEG."""
    buffer = BytesIO()
    Image.new("RGB", (size, size), color).save(buffer, format="JPEG")
    return buffer.getvalue()


@dataclass
class FakeImageEditClient(ImageEditClient):
    """Fake image client returning scripted response parts."""

    parts: list[ResponsePart] = field(
        default_factory=lambda: [
            ImagePart(data=make_png((0, 255, 0))),
            TextPart(text="Added snow."),
        ]
    )
    error: Exception | None = None
    calls: list[dict[str, str]] = field(default_factory=list)

    async def edit(  # noqa: PLR0913
        self,
        *,
        model: str,
        image_data_url: str,
        prompt: str,
        size: str,
        quality: str,
    ) -> Sequence[ResponsePart]:
        self.calls.append(
            {
                "model": model,
                "image_data_url": image_data_url,
                "prompt": prompt,
                "size": size,
                "quality": quality,
            }
        )
        if self.error is not None:
            raise self.error
        return self.parts


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", max_upload_bytes=1024 * 1024)


@pytest.fixture
def image_client() -> FakeImageEditClient:
    return FakeImageEditClient()


@pytest.fixture
def container(settings: Settings, image_client: FakeImageEditClient) -> AppContainer:
    session_store = SessionStore()
    edit_service = EditService(client=image_client, model=settings.openai_model)
    edit_workflow = EditWorkflow(store=session_store, edit_service=edit_service)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_store=session_store,
        edit_service=edit_service,
        edit_workflow=edit_workflow,
        close_resources=close_resources,
    )
