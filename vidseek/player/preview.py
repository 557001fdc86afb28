"""
Local preview handle for the selected video.

A PreviewHandle is the playback-side reference to the chosen file. It lazily
opens a moviepy clip (and a temporary WAV for audio) and must be released
exactly once, when the file is replaced or the window closes.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from moviepy import VideoFileClip

from ..utils.logging_utils import get_component_logger

logger = get_component_logger("player")


class PreviewHandle:
    """Owns the decoded clip and temp audio for one selected file."""

    def __init__(self, path):
        self.path = Path(path)
        self.released = False
        self._clip: Optional[VideoFileClip] = None
        self._audio_path: Optional[str] = None

    @property
    def clip(self) -> VideoFileClip:
        if self.released:
            raise RuntimeError(f"Preview for {self.path.name} was already released")
        if self._clip is None:
            self._clip = VideoFileClip(str(self.path))
        return self._clip

    @property
    def duration(self) -> float:
        return float(self.clip.duration or 0.0)

    def audio_path(self) -> Optional[str]:
        """Write the clip's audio track to a temp WAV once; None if there is no audio."""
        if self._audio_path is not None:
            return self._audio_path
        clip = self.clip
        if clip.audio is None:
            return None

        temp_audio = tempfile.NamedTemporaryFile(suffix='.wav', delete=False)
        temp_audio.close()
        try:
            clip.audio.write_audiofile(temp_audio.name, logger=None)
        except Exception:
            os.remove(temp_audio.name)
            raise
        self._audio_path = temp_audio.name
        return self._audio_path

    def release(self):
        """Close the clip and delete temp audio. Only the first call does anything."""
        if self.released:
            logger.warning(f"Preview for {self.path.name} released twice")
            return
        self.released = True

        if self._clip is not None:
            self._clip.close()
            self._clip = None
        if self._audio_path and os.path.exists(self._audio_path):
            os.remove(self._audio_path)
        self._audio_path = None
