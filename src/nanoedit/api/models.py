"""Pydantic models for the editing API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from nanoedit.domain.sessions import EditSession, EditStep

ORIGINAL_VERSION = "original"
CURRENT_VERSION = "current"


class UploadRequest(BaseModel):
    """Image upload as a data URL or bare base64 string."""

    image: str = Field(min_length=1)


class EditRequest(BaseModel):
    """Natural-language edit instruction."""

    prompt: str = Field(min_length=1)


class SelectRequest(BaseModel):
    """Version to display; ``None`` selects the original image."""

    step_id: UUID | None = None


class StepView(BaseModel):
    """Edit step as rendered in the history panel."""

    id: UUID
    prompt: str
    timestamp: datetime
    commentary: str
    image_url: str

    @classmethod
    def from_step(cls, step: EditStep) -> "StepView":
        return cls(
            id=step.id,
            prompt=step.prompt,
            timestamp=step.timestamp,
            commentary=step.commentary,
            image_url=f"/session/images/{step.id}",
        )


class SessionView(BaseModel):
    """Session state for rendering."""

    id: UUID
    created_at: datetime
    current_version: str
    original_image_url: str = f"/session/images/{ORIGINAL_VERSION}"
    current_image_url: str = f"/session/images/{CURRENT_VERSION}"
    history: list[StepView]
    edit_in_flight: bool = False

    @classmethod
    def from_session(
        cls, session: EditSession, edit_in_flight: bool = False
    ) -> "SessionView":
        current = session.current_step_id
        return cls(
            id=session.id,
            created_at=session.created_at,
            current_version=str(current) if current else ORIGINAL_VERSION,
            history=[StepView.from_step(step) for step in session.history],
            edit_in_flight=edit_in_flight,
        )


class EditResponse(BaseModel):
    """Successful edit: updated session plus any model commentary."""

    session: SessionView
    commentary: str = ""


class ErrorResponse(BaseModel):
    """Error body shown to the user until acknowledged."""

    error: str
    message: str | None = None
