"""Prompt submission flow tying the edit service to the session store."""

import logging
from dataclasses import dataclass, field

from nanoedit.domain.edits import EditFailure, EditResult, EditSuccess
from nanoedit.domain.errors import (
    EditInProgress,
    InvalidStep,
    NoActiveSession,
    SessionReplaced,
)
from nanoedit.services.editing import EditService
from nanoedit.services.sessions import SessionStore

_logger = logging.getLogger(__name__)


@dataclass
class EditWorkflow:
    """Runs one edit at a time against the active session."""

    store: SessionStore
    edit_service: EditService
    _in_flight: bool = field(default=False, init=False)

    @property
    def in_flight(self) -> bool:
        """Whether an edit request is currently outstanding."""
        return self._in_flight

    async def submit_prompt(self, prompt: str) -> EditResult:
        """Request an edit of the current image and record it on success."""
        if not prompt or not prompt.strip():
            raise InvalidStep("Edit prompt must not be empty.")
        session = self.store.current_session()
        if session is None:
            raise NoActiveSession()
        if self._in_flight:
            raise EditInProgress()

        self._in_flight = True
        try:
            result = await self.edit_service.request_edit(
                session.current_image, prompt
            )
            if not isinstance(result, EditSuccess):
                _logger.info("Edit not applied: %s", result.message)
                return result
            active = self.store.current_session()
            if active is None or active.id != session.id:
                _logger.info(
                    "Session %s replaced during edit; result dropped", session.id
                )
                raise SessionReplaced()
            try:
                self.store.append_step(prompt, result.image, result.commentary)
            except InvalidStep as exc:
                return EditFailure(message=str(exc), commentary=result.commentary)
            return result
        finally:
            self._in_flight = False
