"""Image edit service that wraps a single capability exchange."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from nanoedit.domain.edits import (
    NO_IMAGE_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    EditFailure,
    EditResult,
    EditSuccess,
    ImagePart,
    ResponsePart,
    TextPart,
)
from nanoedit.services.images import (
    InvalidImagePayload,
    decode_image_payload,
    normalize_to_png,
    to_data_url,
)

_logger = logging.getLogger(__name__)


class ImageEditClient(Protocol):
    """Interface for the external image-generation capability."""

    async def edit(  # noqa: PLR0913
        self,
        *,
        model: str,
        image_data_url: str,
        prompt: str,
        size: str,
        quality: str,
    ) -> Sequence[ResponsePart]:
        """Send one image and one instruction, return the response parts."""


@dataclass
class EditService:
    """Service that requests an edit and folds the response into a result."""

    client: ImageEditClient
    model: str
    size: str = "1024x1024"
    quality: str = "auto"

    async def request_edit(self, current_image: bytes | str, prompt: str) -> EditResult:
        """Ask the capability to apply ``prompt`` to ``current_image``.

        Never raises for capability problems: transport, auth and quota errors
        come back as :class:`EditFailure` carrying the error message.
        """
        try:
            image_bytes = decode_image_payload(current_image)
        except InvalidImagePayload as exc:
            return EditFailure(message=str(exc))
        if not image_bytes:
            return EditFailure(message="Current image is empty.")

        try:
            parts = await self.client.edit(
                model=self.model,
                image_data_url=to_data_url(image_bytes),
                prompt=prompt,
                size=self.size,
                quality=self.quality,
            )
        except Exception as exc:
            _logger.exception("Image edit request failed")
            return EditFailure(message=str(exc) or UNEXPECTED_ERROR_MESSAGE)

        return _fold_parts(parts)


def _fold_parts(parts: Sequence[ResponsePart]) -> EditResult:
    """Collapse response parts into a success or failure result."""
    image: bytes | None = None
    commentary = ""
    for part in parts:
        if isinstance(part, ImagePart):
            image = part.data
        elif isinstance(part, TextPart):
            commentary += part.text

    if image is None:
        _logger.warning("Image edit returned no image part")
        return EditFailure(message=NO_IMAGE_MESSAGE, commentary=commentary)
    try:
        normalized = normalize_to_png(image)
    except InvalidImagePayload as exc:
        _logger.warning("Image edit returned an unreadable image: %s", exc)
        return EditFailure(message=str(exc), commentary=commentary)
    return EditSuccess(image=normalized, commentary=commentary)
