"""Test script for BackendClient - HTTP contract against a fake requests.Session"""

import io
import json

import pytest
import requests

from vidseek.api.client import BackendClient
from vidseek.api.errors import BackendError, TransportError

BASE_URL = "http://backend.test"


def make_response(status_code=200, body=None, raw=None):
    """Build a real requests.Response with its content already loaded."""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


class FakeHTTP:
    """Minimal requests.Session stand-in that records every call."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def _next(self):
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self._next()

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)


def make_client(*replies):
    http = FakeHTTP(*replies)
    return BackendClient(BASE_URL + "/", http=http), http


# ------------------------------
# Health
# ------------------------------
def test_health_ok():
    """Test a 2xx /health/ means available"""
    client, http = make_client(make_response(200, {"status": "ok"}))
    assert client.check_health() is True
    method, url, kwargs = http.calls[0]
    assert (method, url) == ("GET", f"{BASE_URL}/health/")
    assert kwargs["timeout"] == client.health_timeout


@pytest.mark.parametrize("reply", [
    make_response(503, {"detail": "starting"}),
    requests.ConnectionError("refused"),
    requests.Timeout("slow"),
])
def test_health_failures_never_raise(reply):
    """Test non-2xx, connection errors and timeouts all mean unavailable"""
    client, _ = make_client(reply)
    assert client.check_health() is False


# ------------------------------
# Upload
# ------------------------------
def test_upload_sends_multipart_file(tmp_path):
    """Test the video goes out as the multipart 'file' field"""
    video = tmp_path / "talk.mp4"
    video.write_bytes(b"\x00\x00fake")
    client, http = make_client(make_response(200, {
        "video_id": "v1", "total_chunks": 12, "summary": "A talk."
    }))

    result = client.upload_video(video)

    assert (result.video_id, result.total_chunks, result.summary) == ("v1", 12, "A talk.")
    method, url, kwargs = http.calls[0]
    assert (method, url) == ("POST", f"{BASE_URL}/upload-video/")
    name, _, content_type = kwargs["files"]["file"]
    assert name == "talk.mp4"
    assert content_type == "video/mp4"
    assert kwargs["timeout"] == client.upload_timeout


def test_upload_without_summary(tmp_path):
    """Test a missing or empty summary becomes None"""
    video = tmp_path / "talk.mp4"
    video.write_bytes(b"x")
    client, _ = make_client(make_response(200, {"video_id": "v1", "total_chunks": 3, "summary": ""}))
    assert client.upload_video(video).summary is None


def test_upload_error_detail(tmp_path):
    """Test a non-2xx response raises BackendError with the body's detail"""
    video = tmp_path / "talk.mp4"
    video.write_bytes(b"x")
    client, _ = make_client(make_response(422, {"detail": "Unsupported video format"}))

    with pytest.raises(BackendError) as exc_info:
        client.upload_video(video)
    assert exc_info.value.status_code == 422
    assert str(exc_info.value) == "Unsupported video format"


@pytest.mark.parametrize("response", [
    make_response(500, raw=b"<html>Internal Server Error</html>"),
    make_response(500, {"error": "no detail key"}),
    make_response(500, ["not", "an", "object"]),
])
def test_upload_error_without_detail(tmp_path, response):
    """Test error bodies without a usable detail fall back to 'Unknown error'"""
    video = tmp_path / "talk.mp4"
    video.write_bytes(b"x")
    client, _ = make_client(response)

    with pytest.raises(BackendError) as exc_info:
        client.upload_video(video)
    assert str(exc_info.value) == "Unknown error"


def test_upload_missing_file(tmp_path):
    """Test an unreadable local file is a transport error and sends nothing"""
    client, http = make_client()
    with pytest.raises(TransportError):
        client.upload_video(tmp_path / "missing.mp4")
    assert http.calls == []


def test_upload_connection_error(tmp_path):
    """Test requests failures are wrapped in TransportError"""
    video = tmp_path / "talk.mp4"
    video.write_bytes(b"x")
    client, _ = make_client(requests.ConnectionError("Connection refused"))

    with pytest.raises(TransportError, match="Connection refused"):
        client.upload_video(video)


# ------------------------------
# Search
# ------------------------------
def test_search_payload_and_results():
    """Test the search body and that ranking order is preserved"""
    client, http = make_client(make_response(200, [
        {"chunk": {"text": "Introduction", "start_time": 5, "end_time": 40}, "similarity_score": 0.91},
        {"chunk": {"text": "Wrap-up", "start_time": 600, "end_time": 640.5}, "similarity_score": 0.43},
    ]))

    results = client.search("v1", "intro", 5)

    method, url, kwargs = http.calls[0]
    assert (method, url) == ("POST", f"{BASE_URL}/search/")
    assert kwargs["json"] == {"video_id": "v1", "query": "intro", "top_k": 5}
    assert [r.chunk.text for r in results] == ["Introduction", "Wrap-up"]
    assert results[0].chunk.start_time == 5.0
    assert results[1].chunk.end_time == 640.5
    assert results[0].similarity_score == pytest.approx(0.91)


def test_search_error_detail():
    """Test search failures carry the backend detail"""
    client, _ = make_client(make_response(404, {"detail": "Video not found"}))
    with pytest.raises(BackendError, match="Video not found"):
        client.search("missing", "intro", 5)


def test_search_malformed_body():
    """Test a non-list or malformed body is a transport error"""
    client, _ = make_client(
        make_response(200, {"results": []}),
        make_response(200, [{"chunk": {"text": "x"}}]),
    )
    with pytest.raises(TransportError):
        client.search("v1", "intro", 5)
    with pytest.raises(TransportError):
        client.search("v1", "intro", 5)


# ------------------------------
# Subtitles and catalog
# ------------------------------
def test_download_srt_streams_to_destination():
    """Test the subtitle payload is written through and counted"""
    payload = b"1\n00:00:05,000 --> 00:00:40,000\nIntroduction\n"
    client, http = make_client(make_response(200, raw=payload))
    destination = io.BytesIO()

    written = client.download_srt("v1", destination)

    assert destination.getvalue() == payload
    assert written == len(payload)
    method, url, kwargs = http.calls[0]
    assert (method, url) == ("GET", f"{BASE_URL}/download-srt/v1")
    assert kwargs["stream"] is True


def test_download_srt_error():
    """Test a missing subtitle file raises BackendError"""
    client, _ = make_client(make_response(404, {"detail": "SRT file not found"}))
    with pytest.raises(BackendError, match="SRT file not found"):
        client.download_srt("v1", io.BytesIO())


@pytest.mark.parametrize("body", [
    [{"video_id": "v1", "filename": "talk.mp4", "total_chunks": 12}],
    {"videos": [{"video_id": "v1", "filename": "talk.mp4", "total_chunks": 12}]},
])
def test_list_videos(body):
    """Test the catalog accepts a bare list or a wrapped one"""
    client, http = make_client(make_response(200, body))
    videos = client.list_videos()

    assert http.calls[0][1] == f"{BASE_URL}/videos/"
    assert [(v.video_id, v.filename, v.total_chunks) for v in videos] == [("v1", "talk.mp4", 12)]
