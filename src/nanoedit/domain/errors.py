"""Errors raised by session and edit operations."""


class NanoEditError(Exception):
    """Base class for recoverable editing errors."""


class NoActiveSession(NanoEditError):
    """Raised when an operation needs a session and none exists."""

    def __init__(self) -> None:
        super().__init__("No active editing session. Upload an image first.")


class InvalidStep(NanoEditError):
    """Raised when an edit step is malformed; state is left untouched."""


class UnknownVersion(NanoEditError):
    """Raised when a selection target is neither the original nor a step."""


class EditInProgress(NanoEditError):
    """Raised when an edit is submitted while another one is outstanding."""

    def __init__(self) -> None:
        super().__init__("An edit is already in progress.")


class SessionReplaced(NanoEditError):
    """Raised when a new upload replaced the session while an edit was running."""

    def __init__(self) -> None:
        super().__init__("The session was replaced before the edit finished.")
