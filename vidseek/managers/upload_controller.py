"""
Upload controller: file selection and the upload-and-process request.
"""

from functools import partial
from pathlib import Path

from ..api.errors import Precondition
from ..utils.logging_utils import get_component_logger

logger = get_component_logger("managers")


class UploadController:
    """Handles video selection, preview ownership and upload."""

    def __init__(self, app):
        """
        Initialize upload controller.

        Args:
            app: Reference to the main VidSeek instance for session, client and UI callbacks
        """
        self.app = app

    def select_file(self, path):
        """
        Select a local video. No validation here; the backend decides what it accepts.

        Args:
            path: Path to the chosen file

        Returns:
            The new preview handle
        """
        path = Path(path)
        preview = self.app.open_preview(path)
        previous = self.app.session.select_file(path, preview)
        if previous is not None:
            previous.release()

        logger.info(f"Selected video: {path}")
        self.app.refresh_ui()
        return preview

    def upload(self) -> bool:
        """
        Upload the selected file.

        Returns:
            True if a request was issued
        """
        session = self.app.session

        if session.selected_file is None:
            session.reject(Precondition.NO_FILE_SELECTED)
            self.app.refresh_ui()
            return False

        # Trigger is disabled while uploading or once this file is processed
        if not session.can_upload():
            return False

        token = session.begin_upload()
        video_path = session.selected_file
        logger.info(f"Upload started: {video_path.name} (generation {token})")

        self.app.dispatcher.submit(
            partial(self.app.client.upload_video, video_path),
            partial(self._on_upload_done, token),
            name="vidseek-upload"
        )
        self.app.refresh_ui()
        return True

    def _on_upload_done(self, token: int, result, error):
        session = self.app.session

        if error is None:
            applied = session.complete_upload(token, result)
        else:
            applied = session.fail_upload(token, str(error))

        if not applied:
            logger.warning(
                f"Discarding stale upload completion (generation {token}, "
                f"current {session.generation})"
            )
            return

        if error is None:
            logger.info(
                f"Upload complete: video_id={result.video_id}, chunks={result.total_chunks}"
            )
        else:
            logger.error(f"Upload failed: {error}")
        self.app.refresh_ui()

    def release_preview(self):
        """Release the current preview on teardown."""
        preview = self.app.session.close()
        if preview is not None:
            preview.release()
