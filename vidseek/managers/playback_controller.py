"""
Playback control for search results.
Translates a selected result into a seek + play on the attached media surface.
"""

from ..utils.logging_utils import get_component_logger

logger = get_component_logger("managers")


class PlaybackController:
    """Drives the media surface (normally the VideoPlayer) from search results."""

    def __init__(self, app):
        """
        Initialize playback controller.

        Args:
            app: Reference to the main VidSeek instance
        """
        self.app = app
        self.surface = None  # Anything with seek(seconds) and play()

    def attach(self, surface):
        self.surface = surface

    def detach(self):
        self.surface = None

    def jump_to(self, timestamp: float) -> bool:
        """
        Seek to timestamp (seconds) and resume playback.

        Returns:
            False when no surface is attached (the player went away; not an error)
        """
        surface = self.surface
        if surface is None:
            logger.debug(f"No player attached, ignoring jump to {timestamp:.1f}s")
            return False

        surface.seek(timestamp)
        surface.play()
        return True
