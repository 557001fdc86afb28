"""
Subtitle export for VidSeek.
"""

import os
import tempfile
from pathlib import Path

from .api.errors import BackendError, Precondition
from .utils.logging_utils import get_component_logger

logger = get_component_logger("export")


class SubtitleExporter:
    """Downloads the backend-generated SRT for the active video."""

    def __init__(self, app):
        """
        Args:
            app: Reference to the main VidSeek instance
        """
        self.app = app

    def download_subtitles(self) -> bool:
        """
        Fetch <video_id>.srt into the configured downloads directory.

        Returns:
            True if a request was issued
        """
        video_id = self.app.session.active_video_id
        if not video_id:
            self.app.alert(Precondition.NO_ACTIVE_VIDEO.message)
            return False

        downloads_dir = self.app.config.downloads_dir
        logger.info(f"Downloading subtitles for {video_id}")
        self.app.dispatcher.submit(
            lambda: self.save_subtitles(video_id, downloads_dir),
            self._on_download_done,
            name="vidseek-srt"
        )
        return True

    def save_subtitles(self, video_id: str, downloads_dir: Path) -> Path:
        """
        Stream the subtitle payload to downloads_dir/<video_id>.srt (blocking).

        The payload goes to a temporary file first; it is moved into place on
        success and removed in every case.

        Returns:
            Path of the saved file
        """
        downloads_dir = Path(downloads_dir)
        downloads_dir.mkdir(parents=True, exist_ok=True)
        target = downloads_dir / f"{video_id}.srt"

        fd, temp_path = tempfile.mkstemp(prefix=f".{video_id}.", suffix=".part", dir=downloads_dir)
        try:
            with os.fdopen(fd, "wb") as fh:
                self.app.client.download_srt(video_id, fh)
            os.replace(temp_path, target)
        finally:
            if os.path.exists(temp_path):
                os.remove(temp_path)
        return target

    def _on_download_done(self, path, error):
        if error is None:
            logger.info(f"Subtitles saved to {path}")
            self.app.notify(f"Subtitles saved to {path}")
        elif isinstance(error, BackendError):
            logger.error(f"Subtitle download failed: {error}")
            self.app.alert(f"Failed to download SRT: {error}")
        else:
            logger.error(f"Subtitle download failed: {error}")
            self.app.alert(f"Download failed: {error}")
