"""
Session state for one VidSeek window.

Every mutation goes through a Session method so the consistency rules live in
one place:

- active_video_id is set iff the upload phase is SUCCEEDED
- a search starts only with an active video and a non-blank query
- selecting a file resets upload, search, summary and status text, and
  advances the generation so late completions for the old file are dropped
"""

from pathlib import Path
from typing import Optional, Sequence

from ..api.errors import InvalidTransition, Precondition
from .models import Phase, SearchResult, SearchState, UploadResult, UploadState

PROCESSING_MESSAGE = "Processing video... This may take a few minutes."


class Session:
    """Single mutable state bag owned by the application."""

    def __init__(self):
        self.backend_available = False
        self.is_ready = False  # Flips once, on the first healthy probe

        self.selected_file: Optional[Path] = None
        self.preview = None  # PreviewHandle for selected_file

        self.upload = UploadState()
        self.upload_status = ""

        self.search_query = ""
        self.search = SearchState()

        self.generation = 0

    # ------------------------------
    # Derived state
    # ------------------------------
    @property
    def active_video_id(self) -> Optional[str]:
        if self.upload.phase is Phase.SUCCEEDED:
            return self.upload.video_id
        return None

    @property
    def summary(self) -> Optional[str]:
        if self.upload.phase is Phase.SUCCEEDED:
            return self.upload.summary
        return None

    @property
    def results(self) -> Sequence[SearchResult]:
        if self.search.phase is Phase.SUCCEEDED:
            return self.search.results
        return ()

    @property
    def is_uploading(self) -> bool:
        return self.upload.phase is Phase.IN_PROGRESS

    @property
    def is_searching(self) -> bool:
        return self.search.phase is Phase.IN_PROGRESS

    def can_upload(self) -> bool:
        """Upload trigger is enabled for a selected, not yet processed, idle file."""
        return (
            self.selected_file is not None
            and self.upload.phase in (Phase.IDLE, Phase.FAILED)
        )

    def can_search(self) -> bool:
        return (
            self.active_video_id is not None
            and bool(self.search_query.strip())
            and not self.is_searching
        )

    # ------------------------------
    # Availability
    # ------------------------------
    def set_backend_available(self, available: bool) -> bool:
        """
        Record a probe result.

        Returns:
            True only for the probe that made the session ready
        """
        self.backend_available = available
        if available and not self.is_ready:
            self.is_ready = True
            return True
        return False

    # ------------------------------
    # File selection
    # ------------------------------
    def select_file(self, path: Path, preview) -> Optional[object]:
        """
        Replace the selected file and reset everything derived from it.

        Returns:
            The previous preview handle (the caller releases it), or None
        """
        previous = self.preview if self.preview is not preview else None
        self.selected_file = Path(path)
        self.preview = preview
        self.upload = UploadState()
        self.upload_status = ""
        self.search = SearchState()
        self.generation += 1
        return previous

    def close(self) -> Optional[object]:
        """Detach the preview on teardown. Returns it for release."""
        preview = self.preview
        self.preview = None
        return preview

    # ------------------------------
    # Upload
    # ------------------------------
    def reject(self, reason: Precondition):
        """Show a precondition failure in the upload status line."""
        self.upload_status = reason.message

    def begin_upload(self) -> int:
        """Move to IN_PROGRESS. Returns the generation token for the request."""
        if not self.can_upload():
            raise InvalidTransition(f"Cannot start upload from {self.upload.phase.value}")
        self.upload = UploadState(phase=Phase.IN_PROGRESS)
        self.upload_status = PROCESSING_MESSAGE
        return self.generation

    def complete_upload(self, token: int, result: UploadResult) -> bool:
        """Apply a successful upload. Returns False if the completion is stale."""
        if token != self.generation or not self.is_uploading:
            return False
        self.upload = UploadState(
            phase=Phase.SUCCEEDED,
            video_id=result.video_id,
            summary=result.summary,
            chunk_count=result.total_chunks
        )
        self.upload_status = f"Video processed successfully! Found {result.total_chunks} chunks."
        return True

    def fail_upload(self, token: int, message: str) -> bool:
        """Apply a failed upload. Returns False if the completion is stale."""
        if token != self.generation or not self.is_uploading:
            return False
        self.upload = UploadState(phase=Phase.FAILED, message=message)
        self.upload_status = f"Upload failed: {message}"
        return True

    # ------------------------------
    # Search
    # ------------------------------
    def set_query(self, query: str):
        self.search_query = query

    def begin_search(self) -> int:
        """Move to IN_PROGRESS. Returns the generation token for the request."""
        if not self.can_search():
            raise InvalidTransition("Search needs an active video and a non-empty query")
        self.search = SearchState(phase=Phase.IN_PROGRESS)
        return self.generation

    def complete_search(self, token: int, results: Sequence[SearchResult]) -> bool:
        """Replace results wholesale. Returns False if the completion is stale."""
        if token != self.generation or not self.is_searching:
            return False
        self.search = SearchState(phase=Phase.SUCCEEDED, results=tuple(results))
        return True

    def fail_search(self, token: int, message: str) -> bool:
        if token != self.generation or not self.is_searching:
            return False
        self.search = SearchState(phase=Phase.FAILED, message=message)
        return True
