"""Tests for the image edit service."""

import asyncio
import base64

from PIL import Image

from nanoedit.adapters.openai_image_client import OpenAIImageClient
from nanoedit.domain.edits import (
    NO_IMAGE_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    EditFailure,
    EditSuccess,
    ImagePart,
    TextPart,
)
from nanoedit.services.editing import EditService
from tests.conftest import FakeImageEditClient, make_jpeg, make_png


def test_request_edit_returns_image_and_commentary() -> None:
    client = FakeImageEditClient(
        parts=[
            TextPart(text="Sure. "),
            ImagePart(data=make_png((0, 255, 0))),
            TextPart(text="Added snow."),
        ]
    )
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert isinstance(result, EditSuccess)
    assert result.ok
    assert result.image == make_png((0, 255, 0))
    assert result.commentary == "Sure. Added snow."


def test_request_edit_sends_single_prompt_and_image() -> None:
    client = FakeImageEditClient()
    service = EditService(client=client, model="gpt-4.1", size="1536x1024")

    asyncio.run(service.request_edit(make_png(), "add snow"))

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["prompt"] == "add snow"
    assert call["model"] == "gpt-4.1"
    assert call["size"] == "1536x1024"
    assert call["image_data_url"].startswith("data:image/png;base64,")


def test_request_edit_strips_data_url_prefix() -> None:
    image = make_jpeg()
    data_url = "data:image/jpeg;base64," + base64.b64encode(image).decode()
    client = FakeImageEditClient()
    service = EditService(client=client, model="gpt-4.1")

    asyncio.run(service.request_edit(data_url, "add snow"))
    asyncio.run(service.request_edit(base64.b64encode(image).decode(), "add snow"))

    expected = "data:image/jpeg;base64," + base64.b64encode(image).decode()
    assert [call["image_data_url"] for call in client.calls] == [expected, expected]


def test_request_edit_text_only_response_is_failure() -> None:
    client = FakeImageEditClient(parts=[TextPart(text="I cannot do that.")])
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert isinstance(result, EditFailure)
    assert not result.ok
    assert result.message == NO_IMAGE_MESSAGE
    assert result.commentary == "I cannot do that."


def test_request_edit_capability_error_is_failure() -> None:
    client = FakeImageEditClient(error=RuntimeError("quota exceeded"))
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert result == EditFailure(message="quota exceeded")


def test_request_edit_error_without_message_uses_fallback() -> None:
    client = FakeImageEditClient(error=RuntimeError())
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert result == EditFailure(message=UNEXPECTED_ERROR_MESSAGE)


def test_request_edit_normalizes_output_to_png() -> None:
    client = FakeImageEditClient(
        parts=[ImagePart(data=make_jpeg(), mime_type="image/jpeg")]
    )
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert isinstance(result, EditSuccess)
    assert result.image.startswith(b"\x89PNG\r\n\x1a\n")


def test_request_edit_last_image_part_wins() -> None:
    client = FakeImageEditClient(
        parts=[
            ImagePart(data=make_png((1, 1, 1))),
            ImagePart(data=make_png((2, 2, 2))),
        ]
    )
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert isinstance(result, EditSuccess)
    assert result.image == make_png((2, 2, 2))


def test_request_edit_unreadable_image_is_failure() -> None:
    client = FakeImageEditClient(parts=[ImagePart(data=b"not-an-image")])
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert isinstance(result, EditFailure)


def test_request_edit_invalid_base64_input_is_failure() -> None:
    client = FakeImageEditClient()
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(
        service.request_edit("data:image/png;base64,@@@", "add snow")
    )

    assert isinstance(result, EditFailure)
    assert client.calls == []


def test_request_edit_oversized_image_is_failure(monkeypatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 4)
    client = FakeImageEditClient(
        parts=[ImagePart(data=make_jpeg(size=8), mime_type="image/jpeg")]
    )
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))

    assert isinstance(result, EditFailure)


def test_request_edit_missing_credential_is_failure(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    client = OpenAIImageClient.create(api_key=None, timeout_seconds=5)
    service = EditService(client=client, model="gpt-4.1")

    result = asyncio.run(service.request_edit(make_png(), "add snow"))
    asyncio.run(client.close())

    assert isinstance(result, EditFailure)
    assert result.message
