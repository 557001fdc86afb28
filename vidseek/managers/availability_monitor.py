"""
Backend availability monitor.

Probes /health/ on start and every poll interval until the first success.
The first success dismisses the loading gate; after that the gate never comes
back, even if a later probe fails.
"""

from typing import Callable, Optional

from ..utils.logging_utils import get_component_logger

logger = get_component_logger("managers")


class AvailabilityMonitor:
    """Gates the UI on backend liveness."""

    def __init__(self, app, on_ready: Optional[Callable[[], None]] = None):
        """
        Initialize availability monitor.

        Args:
            app: Reference to the main VidSeek instance (session, client, dispatcher, config)
            on_ready: Called once, on the UI thread, when the backend first answers
        """
        self.app = app
        self.on_ready = on_ready
        self._timer = None
        self._probing = False
        self._running = False

    @property
    def interval_ms(self) -> int:
        return self.app.config.health_poll_interval_ms

    def check_health(self) -> bool:
        """Single idempotent probe (blocking)."""
        return self.app.client.check_health()

    def start(self):
        """Probe immediately, then keep polling until ready."""
        self._running = True
        self.probe()

    def stop(self):
        """Cancel the pending poll timer."""
        self._running = False
        if self._timer is not None:
            self.app.dispatcher.cancel(self._timer)
            self._timer = None

    def probe(self) -> bool:
        """Issue one probe unless one is already in flight."""
        if self._probing:
            return False
        self._probing = True
        self.app.dispatcher.submit(self.check_health, self._on_probe_done, name="vidseek-health")
        return True

    def _on_timer(self):
        self._timer = None
        self.probe()

    def _on_probe_done(self, healthy, error):
        self._probing = False
        session = self.app.session

        became_ready = session.set_backend_available(bool(healthy) and error is None)
        if became_ready:
            logger.info("Backend is available")
            if self.on_ready:
                self.on_ready()
        elif not session.backend_available:
            logger.debug("Backend unavailable, will retry")

        if self._running and not session.is_ready and self._timer is None:
            self._timer = self.app.dispatcher.schedule(self.interval_ms, self._on_timer)
