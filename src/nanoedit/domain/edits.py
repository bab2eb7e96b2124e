"""Models for image edit requests and their outcomes."""

from dataclasses import dataclass

NO_IMAGE_MESSAGE = "No image was generated. The model might have returned only text."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during image editing."


@dataclass(frozen=True)
class ImagePart:
    """Image returned by the capability, already decoded from base64."""

    data: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class TextPart:
    """Text returned by the capability alongside (or instead of) an image."""

    text: str


ResponsePart = ImagePart | TextPart


@dataclass(frozen=True)
class EditSuccess:
    """Edit that produced a new PNG image."""

    image: bytes
    commentary: str = ""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class EditFailure:
    """Edit that failed or produced no image."""

    message: str
    commentary: str = ""

    @property
    def ok(self) -> bool:
        return False


EditResult = EditSuccess | EditFailure
