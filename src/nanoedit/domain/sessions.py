"""Domain models for editing sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class EditStep:
    """One completed edit: the instruction and the image it produced."""

    id: UUID
    prompt: str
    image: bytes
    timestamp: datetime
    commentary: str = ""


@dataclass(frozen=True)
class EditSession:
    """Snapshot of the active editing session.

    ``current_step_id`` is ``None`` while the original image is displayed,
    otherwise it names the history entry being displayed.
    """

    id: UUID
    original_image: bytes
    created_at: datetime
    history: tuple[EditStep, ...] = ()
    current_step_id: UUID | None = None

    @property
    def current_image(self) -> bytes:
        """Return the payload of the version currently displayed."""
        step = self.find_step(self.current_step_id)
        return step.image if step is not None else self.original_image

    def find_step(self, step_id: UUID | None) -> EditStep | None:
        """Return the history entry with the given id, if present."""
        if step_id is None:
            return None
        for step in self.history:
            if step.id == step_id:
                return step
        return None
