"""
Video player for VidSeek.
Renders frames from the selected file onto a Tk canvas and plays its audio.
This is the media surface search results seek into.
"""

import threading
import time
import tkinter as tk
from typing import Optional

from PIL import Image, ImageTk

try:
    import pygame
    HAS_PYGAME = True
except ImportError:
    HAS_PYGAME = False

from ..utils.logging_utils import get_component_logger
from .preview import PreviewHandle

DEFAULT_CANVAS_SIZE = (800, 450)

logger = get_component_logger("player")


class VideoPlayer:
    """Canvas-backed player with seek(), play(), pause() and stop()."""

    def __init__(self, root: tk.Misc, canvas: tk.Canvas):
        """
        Initialize video player.

        Args:
            root: Tk root, used to hand frames back to the UI thread
            canvas: Canvas frames are drawn on
        """
        self.root = root
        self.canvas = canvas
        self.preview: Optional[PreviewHandle] = None
        self.position = 0.0
        self.is_playing = False
        self.playback_thread: Optional[threading.Thread] = None
        self._play_token = 0
        self._audio_needs_restart = False
        self._photo = None  # Keep a reference so Tk doesn't drop the image

    # ------------------------------
    # Media surface
    # ------------------------------
    def load(self, preview: PreviewHandle):
        """Show a new preview, starting paused at 0:00."""
        self.stop()
        self.preview = preview
        self.position = 0.0
        self._render_still(0.0)

    def unload(self):
        self.stop()
        self.preview = None
        self._photo = None
        self.canvas.delete("all")

    def seek(self, seconds: float):
        if not self.preview:
            return
        duration = self.preview.duration
        self.position = max(0.0, min(float(seconds), max(0.0, duration - 0.1)))
        if self.is_playing:
            self._audio_needs_restart = True
        else:
            self._render_still(self.position)

    def play(self):
        if not self.preview or self.is_playing:
            return
        self.is_playing = True
        self._play_token += 1
        self._audio_needs_restart = True
        self.playback_thread = threading.Thread(
            target=self._playback_loop,
            args=(self._play_token,),
            daemon=True
        )
        self.playback_thread.start()

    def pause(self):
        self.is_playing = False
        self._stop_audio()

    def stop(self):
        self.is_playing = False
        self._play_token += 1
        self._stop_audio()
        # The loop exits on its own once it sees the token change
        self.playback_thread = None

    # ------------------------------
    # Rendering
    # ------------------------------
    def _canvas_size(self):
        width = self.canvas.winfo_width()
        height = self.canvas.winfo_height()
        if width <= 1 or height <= 1:
            return DEFAULT_CANVAS_SIZE
        return width, height

    def _frame_image(self, seconds: float, max_size) -> Image.Image:
        frame = self.preview.clip.get_frame(seconds)
        image = Image.fromarray(frame)
        image.thumbnail(max_size, Image.Resampling.LANCZOS)
        return image

    def _render_still(self, seconds: float):
        try:
            image = self._frame_image(seconds, self._canvas_size())
        except Exception as e:
            logger.warning(f"Could not render preview frame at {seconds:.1f}s: {e}")
            return
        self._draw(image)

    def _draw(self, image: Image.Image):
        """Draw a frame centred on the canvas (UI thread only)."""
        width, height = self._canvas_size()
        photo = ImageTk.PhotoImage(image=image)
        self.canvas.delete("all")
        self.canvas.create_image(width // 2, height // 2, anchor=tk.CENTER, image=photo)
        self._photo = photo

    def _playback_loop(self, token: int):
        preview = self.preview
        if preview is None:
            return
        try:
            clip = preview.clip
            frame_duration = 1.0 / (clip.fps or 25)
            duration = preview.duration
            max_size = self._canvas_size()

            while self.is_playing and token == self._play_token and self.position < duration:
                started = time.time()

                if self._audio_needs_restart:
                    self._audio_needs_restart = False
                    self._start_audio(preview, self.position)

                image = self._frame_image(self.position, max_size)
                self.root.after(0, lambda img=image: self._draw(img))

                self.position += frame_duration
                sleep_time = frame_duration - (time.time() - started)
                if sleep_time > 0:
                    time.sleep(sleep_time)

            if token == self._play_token and self.position >= duration:
                self.is_playing = False
                self._stop_audio()
        except Exception as e:
            if token != self._play_token:
                return  # Preview was replaced mid-frame
            logger.error(f"Playback error: {e}")
            self.is_playing = False
            self._stop_audio()

    # ------------------------------
    # Audio
    # ------------------------------
    def _start_audio(self, preview: PreviewHandle, position: float):
        if not HAS_PYGAME:
            return
        try:
            audio_path = preview.audio_path()
            if not audio_path:
                return
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=1024)
            pygame.mixer.music.load(audio_path)
            pygame.mixer.music.play(start=position)
        except Exception as e:
            logger.warning(f"Audio playback unavailable: {e}")

    def _stop_audio(self):
        if not HAS_PYGAME:
            return
        try:
            if pygame.mixer.get_init():
                pygame.mixer.music.stop()
                pygame.mixer.music.unload()
        except pygame.error as e:
            logger.debug(f"Audio stop failed: {e}")
