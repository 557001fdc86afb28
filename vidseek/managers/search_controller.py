"""
Search controller: query submission against the active video.
"""

from functools import partial
from typing import Optional

from ..api.errors import Precondition
from ..utils.logging_utils import get_component_logger

logger = get_component_logger("managers")


class SearchController:
    """Handles search requests and result replacement."""

    def __init__(self, app):
        """
        Initialize search controller.

        Args:
            app: Reference to the main VidSeek instance
        """
        self.app = app

    def set_query(self, query: str):
        self.app.session.set_query(query)

    def search(self, query: Optional[str] = None) -> bool:
        """
        Search the active video.

        Args:
            query: Query text (defaults to the session's current query)

        Returns:
            True if a request was issued
        """
        session = self.app.session
        if query is not None:
            session.set_query(query)

        # Trigger is disabled while a search is in flight
        if session.is_searching:
            return False

        if session.active_video_id is None or not session.search_query.strip():
            self.app.alert(Precondition.MISSING_PREREQUISITE.message)
            return False

        token = session.begin_search()
        video_id = session.active_video_id
        query_text = session.search_query
        top_k = self.app.config.search_top_k
        logger.info(f"Searching {video_id} for '{query_text}' (top_k={top_k})")

        self.app.dispatcher.submit(
            partial(self.app.client.search, video_id, query_text, top_k),
            partial(self._on_search_done, token),
            name="vidseek-search"
        )
        self.app.refresh_ui()
        return True

    def _on_search_done(self, token: int, results, error):
        session = self.app.session

        if error is None:
            applied = session.complete_search(token, results)
        else:
            applied = session.fail_search(token, str(error))

        if not applied:
            logger.warning(
                f"Discarding stale search completion (generation {token}, "
                f"current {session.generation})"
            )
            return

        if error is None:
            logger.info(f"Search returned {len(session.results)} results")
        else:
            logger.error(f"Search failed: {error}")
            self.app.alert(f"Search failed: {error}")
        self.app.refresh_ui()
