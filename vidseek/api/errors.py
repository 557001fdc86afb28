"""
Error types for the VidSeek client.

Backend-reported failures and transport failures are exceptions raised by the
client and caught by the controllers. Precondition failures never reach the
network and are plain values carrying the text shown to the user.
"""

from enum import Enum


class VidSeekError(Exception):
    """Base class for every error the client surfaces to the user."""


class BackendError(VidSeekError):
    """Non-2xx response; `detail` comes from the backend's JSON body."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class TransportError(VidSeekError):
    """No usable response: connection error, timeout, unreadable body."""


class InvalidTransition(VidSeekError):
    """A Session operation was called in a state that does not allow it."""


class Precondition(Enum):
    """Local rejections; no request is issued for any of these."""

    NO_FILE_SELECTED = "Please select a video file first."
    MISSING_PREREQUISITE = "Please upload a video and enter a search query."
    NO_ACTIVE_VIDEO = "Video ID not found."

    @property
    def message(self) -> str:
        return self.value
