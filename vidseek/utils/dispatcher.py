"""
Background work dispatch for the Tk event loop.

Blocking backend calls run on daemon threads. Their completions are posted
back to the Tk thread with root.after(0, ...) so that Session state is only
ever touched from the UI thread.
"""

import threading
from functools import partial
from typing import Any, Callable, Optional

from ..api.errors import TransportError, VidSeekError
from .logging_utils import get_component_logger

# on_done(result, error) - exactly one of the two is not None
Completion = Callable[[Any, Optional[BaseException]], None]

logger = get_component_logger("dispatch")


class Dispatcher:
    """Runs work off the UI thread and hands results back to it."""

    def __init__(self, root):
        """
        Args:
            root: Tk root (anything with after() / after_cancel())
        """
        self.root = root

    def submit(self, work: Callable[[], Any], on_done: Completion,
               name: str = "vidseek-worker") -> threading.Thread:
        """Run work() on a daemon thread, then call on_done on the UI thread."""
        thread = threading.Thread(
            target=self._run,
            args=(work, on_done),
            name=name,
            daemon=True
        )
        thread.start()
        return thread

    def _run(self, work: Callable[[], Any], on_done: Completion):
        try:
            result = work()
        except VidSeekError as e:
            self.post(partial(on_done, None, e))
            return
        except Exception as e:
            # Delivered as a transport error so the trigger is re-enabled
            logger.error(f"Background task failed: {e!r}")
            self.post(partial(on_done, None, TransportError(str(e))))
            return
        self.post(partial(on_done, result, None))

    def post(self, callback: Callable[[], None]):
        """Queue callback on the UI thread."""
        self.root.after(0, callback)

    def schedule(self, delay_ms: int, callback: Callable[[], None]):
        """Run callback once on the UI thread after delay_ms. Returns a cancel token."""
        return self.root.after(delay_ms, callback)

    def cancel(self, token):
        """Cancel a pending schedule() call."""
        self.root.after_cancel(token)
