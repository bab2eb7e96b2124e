"""In-memory store for the active editing session."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from nanoedit.domain.errors import InvalidStep, NoActiveSession, UnknownVersion
from nanoedit.domain.sessions import EditSession, EditStep

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionStore:
    """Holds at most one editing session and applies transitions to it.

    Every transition builds a new frozen snapshot and swaps it in under a
    lock, so readers never see history and the current image out of step.
    """

    _session: EditSession | None
    _lock: threading.Lock
    _clock: Callable[[], datetime]

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._session = None
        self._lock = threading.Lock()
        self._clock = clock or _utcnow

    def start_session(self, image_bytes: bytes) -> EditSession:
        """Replace any existing session with a fresh one for the image."""
        if not image_bytes:
            raise ValueError("image payload must not be empty")
        session = EditSession(
            id=uuid4(),
            original_image=image_bytes,
            created_at=self._clock(),
        )
        with self._lock:
            self._session = session
        _logger.info("Session started: id=%s bytes=%s", session.id, len(image_bytes))
        return session

    def append_step(
        self, prompt: str, image_bytes: bytes, commentary: str = ""
    ) -> EditStep:
        """Append a completed edit and make it the current version."""
        with self._lock:
            session = self._require_session()
            if not prompt or not prompt.strip():
                raise InvalidStep("Edit prompt must not be empty.")
            if not image_bytes:
                raise InvalidStep("Edit image must not be empty.")
            if image_bytes == session.original_image:
                raise InvalidStep("Edit image is identical to the original.")
            timestamp = self._clock()
            if session.history and timestamp < session.history[-1].timestamp:
                timestamp = session.history[-1].timestamp
            step = EditStep(
                id=uuid4(),
                prompt=prompt,
                image=image_bytes,
                timestamp=timestamp,
                commentary=commentary,
            )
            self._session = replace(
                session,
                history=(*session.history, step),
                current_step_id=step.id,
            )
        _logger.info(
            "Step appended: session=%s step=%s count=%s",
            session.id,
            step.id,
            len(session.history) + 1,
        )
        return step

    def select_step(self, step_id: UUID | None) -> EditSession:
        """Display a history entry by id, or the original when ``None``."""
        with self._lock:
            session = self._require_session()
            if step_id is not None and session.find_step(step_id) is None:
                raise UnknownVersion(f"Unknown edit step: {step_id}")
            self._session = replace(session, current_step_id=step_id)
            return self._session

    def select_image(self, image_bytes: bytes) -> EditSession:
        """Display whichever known version has exactly this payload."""
        with self._lock:
            session = self._require_session()
            if image_bytes == session.original_image:
                step_id = None
            else:
                match = next(
                    (step for step in session.history if step.image == image_bytes),
                    None,
                )
                if match is None:
                    raise UnknownVersion("Image does not match any known version.")
                step_id = match.id
            self._session = replace(session, current_step_id=step_id)
            return self._session

    def reset_to_original(self) -> EditSession:
        """Drop every edit step and display the original again."""
        with self._lock:
            session = self._require_session()
            reset = replace(session, history=(), current_step_id=None)
            self._session = reset
        _logger.info(
            "Session reset: id=%s discarded=%s", session.id, len(session.history)
        )
        return reset

    def current_session(self) -> EditSession | None:
        """Return the active session snapshot, if any."""
        return self._session

    def current_image(self) -> bytes:
        """Return the payload of the version currently displayed."""
        session = self._session
        if session is None:
            raise NoActiveSession()
        return session.current_image

    def _require_session(self) -> EditSession:
        if self._session is None:
            raise NoActiveSession()
        return self._session
