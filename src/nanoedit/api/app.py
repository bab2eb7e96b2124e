"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from nanoedit.api.models import (
    CURRENT_VERSION,
    ORIGINAL_VERSION,
    EditRequest,
    EditResponse,
    ErrorResponse,
    SelectRequest,
    SessionView,
    UploadRequest,
)
from nanoedit.app_logging import configure_logging
from nanoedit.containers import AppContainer
from nanoedit.domain.edits import EditFailure
from nanoedit.domain.errors import (
    EditInProgress,
    InvalidStep,
    NanoEditError,
    NoActiveSession,
    SessionReplaced,
    UnknownVersion,
)
from nanoedit.quick_actions import quick_actions
from nanoedit.services.images import (
    InvalidImagePayload,
    decode_image_payload,
    detect_mime_type,
    normalize_to_png,
)

_ERROR_STATUS: dict[type[NanoEditError], int] = {
    NoActiveSession: status.HTTP_404_NOT_FOUND,
    UnknownVersion: status.HTTP_404_NOT_FOUND,
    InvalidStep: status.HTTP_422_UNPROCESSABLE_CONTENT,
    EditInProgress: status.HTTP_409_CONFLICT,
    SessionReplaced: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NanoEditError)
    async def handle_editing_error(
        request: Request, exc: NanoEditError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )

    @app.exception_handler(InvalidImagePayload)
    async def handle_invalid_image(
        request: Request, exc: InvalidImagePayload
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/quick-actions")
    async def list_quick_actions() -> dict[str, list[dict[str, str]]]:
        """Return preset edit prompts."""
        return {"quick_actions": quick_actions()}

    @app.get("/session")
    async def get_session(request: Request) -> SessionView:
        """Return the active session for rendering."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_store.current_session()
        if session is None:
            raise NoActiveSession()
        return SessionView.from_session(
            session, state_container.edit_workflow.in_flight
        )

    @app.post("/session", status_code=status.HTTP_201_CREATED)
    async def start_session(payload: UploadRequest, request: Request) -> SessionView:
        """Start a new session from an uploaded image, discarding any old one."""
        state_container: AppContainer = request.app.state.container
        image_bytes = decode_image_payload(payload.image)
        if not image_bytes:
            raise InvalidImagePayload("Uploaded image is empty")
        if len(image_bytes) > state_container.settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Uploaded image is too large",
            )
        session = state_container.session_store.start_session(image_bytes)
        return SessionView.from_session(
            session, state_container.edit_workflow.in_flight
        )

    @app.post("/session/edits", response_model=EditResponse)
    async def submit_edit(
        payload: EditRequest, request: Request
    ) -> EditResponse | JSONResponse:
        """Apply a natural-language edit to the current image."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.edit_workflow.submit_prompt(payload.prompt)
        if isinstance(result, EditFailure):
            logger.warning("Edit failed: %s", result.message)
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content=ErrorResponse(
                    error=result.message, message=result.commentary or None
                ).model_dump(),
            )
        session = state_container.session_store.current_session()
        if session is None:
            raise NoActiveSession()
        return EditResponse(
            session=SessionView.from_session(
                session, state_container.edit_workflow.in_flight
            ),
            commentary=result.commentary,
        )

    @app.post("/session/select")
    async def select_version(payload: SelectRequest, request: Request) -> SessionView:
        """Display the original image or a prior edit step."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_store.select_step(payload.step_id)
        return SessionView.from_session(
            session, state_container.edit_workflow.in_flight
        )

    @app.post("/session/reset")
    async def reset_session(request: Request) -> SessionView:
        """Discard every edit and return to the original image."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_store.reset_to_original()
        return SessionView.from_session(
            session, state_container.edit_workflow.in_flight
        )

    @app.get("/session/images/{version}")
    async def get_image(version: str, request: Request) -> Response:
        """Return the raw image for ``original``, ``current`` or a step id."""
        state_container: AppContainer = request.app.state.container
        image_bytes = _resolve_version_image(state_container, version)
        return Response(content=image_bytes, media_type=detect_mime_type(image_bytes))

    @app.get("/session/export")
    async def export_image(request: Request) -> Response:
        """Download the current image as a PNG file."""
        state_container: AppContainer = request.app.state.container
        image_bytes = normalize_to_png(state_container.session_store.current_image())
        filename = f"nanoedit-{int(time.time() * 1000)}.png"
        return Response(
            content=image_bytes,
            media_type="image/png",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


def _resolve_version_image(container: AppContainer, version: str) -> bytes:
    """Look up image bytes for a version path segment."""
    session = container.session_store.current_session()
    if session is None:
        raise NoActiveSession()
    if version == ORIGINAL_VERSION:
        return session.original_image
    if version == CURRENT_VERSION:
        return session.current_image
    try:
        step_id = UUID(version)
    except ValueError as exc:
        raise UnknownVersion(f"Unknown version: {version}") from exc
    step = session.find_step(step_id)
    if step is None:
        raise UnknownVersion(f"Unknown edit step: {step_id}")
    return step.image
