"""
HTTP client for the video search backend.

Endpoints:
    GET  /health/                 liveness
    POST /upload-video/           multipart upload, returns video_id / total_chunks / summary
    POST /search/                 {video_id, query, top_k} -> ranked chunks
    GET  /download-srt/{video_id} subtitle file
    GET  /videos/                 catalog

All calls are blocking; run them through the Dispatcher from UI code.
"""

import mimetypes
from pathlib import Path
from typing import Any, BinaryIO, List, Optional

import requests

from ..config import HEALTH_TIMEOUT, REQUEST_TIMEOUT, UPLOAD_TIMEOUT
from ..models.models import SearchResult, UploadResult, VideoRecord
from ..utils.logging_utils import get_component_logger
from .errors import BackendError, TransportError

UNKNOWN_ERROR = "Unknown error"
DOWNLOAD_CHUNK_SIZE = 64 * 1024

logger = get_component_logger("api")


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _extract_detail(response: requests.Response) -> str:
    """Read `detail` from an error body; fall back to a generic message."""
    try:
        body = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if not isinstance(body, dict):
        return UNKNOWN_ERROR
    detail = body.get("detail")
    if detail is None or detail == "":
        return UNKNOWN_ERROR
    return detail if isinstance(detail, str) else str(detail)


class BackendClient:
    """Thin wrapper over requests for the backend's HTTP contract."""

    def __init__(
        self,
        base_url: str,
        http: Optional[requests.Session] = None,
        health_timeout: float = HEALTH_TIMEOUT,
        request_timeout: float = REQUEST_TIMEOUT,
        upload_timeout: float = UPLOAD_TIMEOUT
    ):
        """
        Args:
            base_url: Backend base URL, e.g. http://localhost:8000
            http: requests.Session to use (a new one if None)
            health_timeout: Timeout for liveness probes
            request_timeout: Timeout for search / catalog / subtitle calls
            upload_timeout: Timeout for the upload-and-process call
        """
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.health_timeout = health_timeout
        self.request_timeout = request_timeout
        self.upload_timeout = upload_timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Send a request; raise TransportError / BackendError for failures."""
        kwargs.setdefault("timeout", self.request_timeout)
        try:
            response = self.http.request(method, self._url(path), **kwargs)
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError(str(e)) from e

        if not _is_success(response.status_code):
            detail = _extract_detail(response)
            response.close()
            logger.warning(f"{method} {path} -> {response.status_code}: {detail}")
            raise BackendError(response.status_code, detail)

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response: {e}") from e

    # ------------------------------
    # Endpoints
    # ------------------------------
    def check_health(self) -> bool:
        """Single liveness probe. Any failure means unavailable; never raises."""
        try:
            response = self.http.get(self._url("/health/"), timeout=self.health_timeout)
        except requests.RequestException as e:
            logger.debug(f"Health probe failed: {e}")
            return False
        healthy = _is_success(response.status_code)
        response.close()
        if not healthy:
            logger.debug(f"Health probe returned {response.status_code}")
        return healthy

    def upload_video(self, video_path: Path) -> UploadResult:
        """
        Upload a local video for processing.

        Args:
            video_path: Local file to send as the multipart `file` field

        Returns:
            UploadResult with video_id, total_chunks and optional summary
        """
        video_path = Path(video_path)
        content_type = mimetypes.guess_type(video_path.name)[0] or "application/octet-stream"

        logger.info(f"Uploading {video_path.name}")
        try:
            with open(video_path, "rb") as fh:
                response = self._request(
                    "POST",
                    "/upload-video/",
                    files={"file": (video_path.name, fh, content_type)},
                    timeout=self.upload_timeout
                )
        except OSError as e:
            raise TransportError(str(e)) from e

        data = self._json(response)
        try:
            return UploadResult.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed upload response: {e}") from e

    def search(self, video_id: str, query: str, top_k: int) -> List[SearchResult]:
        """Run a semantic search; results keep the backend's ranking order."""
        payload = {"video_id": video_id, "query": query, "top_k": top_k}
        response = self._request("POST", "/search/", json=payload)
        data = self._json(response)
        if not isinstance(data, list):
            raise TransportError("Malformed search response: expected a list")
        try:
            return [SearchResult.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed search result: {e}") from e

    def download_srt(self, video_id: str, destination: BinaryIO) -> int:
        """
        Stream the subtitle file for video_id into destination.

        Returns:
            Number of bytes written
        """
        written = 0
        response = self._request("GET", f"/download-srt/{video_id}", stream=True)
        with response:
            try:
                for block in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if block:
                        destination.write(block)
                        written += len(block)
            except requests.RequestException as e:
                raise TransportError(str(e)) from e
        return written

    def list_videos(self) -> List[VideoRecord]:
        """Fetch the catalog. Accepts a bare list or {"videos": [...]}."""
        response = self._request("GET", "/videos/")
        data = self._json(response)
        if isinstance(data, dict):
            data = data.get("videos", [])
        if not isinstance(data, list):
            raise TransportError("Malformed catalog response: expected a list")
        return [VideoRecord.from_dict(item) for item in data if isinstance(item, dict)]
