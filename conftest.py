"""Shared fakes for the VidSeek test suite (no Tk, no network)."""

import logging
from pathlib import Path

import pytest

from vidseek.api.errors import BackendError, TransportError
from vidseek.config import ClientConfig
from vidseek.export import SubtitleExporter
from vidseek.managers import (
    AvailabilityMonitor,
    PlaybackController,
    SearchController,
    UploadController,
)
from vidseek.models import SearchResult, Session, TranscriptChunk, UploadResult
from vidseek.utils.dispatcher import Dispatcher
from vidseek.utils.logging_utils import ROOT_LOGGER


class InlineDispatcher(Dispatcher):
    """Runs work synchronously; timers are recorded and fired by hand."""

    def __init__(self):
        super().__init__(root=None)
        self.hold = False  # When True, completions wait for flush()
        self.pending = []
        self.timers = {}
        self._next_token = 0

    def submit(self, work, on_done, name="vidseek-worker"):
        if self.hold:
            self.pending.append((work, on_done))
        else:
            self._run(work, on_done)

    def flush(self):
        pending, self.pending = self.pending, []
        for work, on_done in pending:
            self._run(work, on_done)

    def post(self, callback):
        callback()

    def schedule(self, delay_ms, callback):
        self._next_token += 1
        self.timers[self._next_token] = (delay_ms, callback)
        return self._next_token

    def cancel(self, token):
        self.timers.pop(token, None)

    def fire_timers(self):
        timers, self.timers = self.timers, {}
        for _, callback in timers.values():
            callback()


class FakeClient:
    """Stands in for BackendClient; each reply is a value or an exception to raise."""

    def __init__(self):
        self.health_replies = []
        self.upload_reply = UploadResult(video_id="v1", total_chunks=12, summary="A short talk.")
        self.search_replies = []
        self.srt_reply = b"1\n00:00:05,000 --> 00:00:40,000\nIntroduction\n"
        self.videos_reply = []
        self.calls = []

    @staticmethod
    def _resolve(reply):
        if isinstance(reply, Exception):
            raise reply
        return reply

    def check_health(self):
        self.calls.append(("health",))
        reply = self.health_replies.pop(0) if self.health_replies else True
        return self._resolve(reply)

    def upload_video(self, path):
        self.calls.append(("upload", Path(path)))
        return self._resolve(self.upload_reply)

    def search(self, video_id, query, top_k):
        self.calls.append(("search", video_id, query, top_k))
        reply = self.search_replies.pop(0) if self.search_replies else []
        return self._resolve(reply)

    def download_srt(self, video_id, destination):
        self.calls.append(("srt", video_id))
        payload = self._resolve(self.srt_reply)
        destination.write(payload)
        return len(payload)

    def list_videos(self):
        self.calls.append(("videos",))
        return self._resolve(self.videos_reply)

    def count(self, kind):
        return sum(1 for call in self.calls if call[0] == kind)


class SpyPreview:
    """Preview handle that counts releases."""

    def __init__(self, path):
        self.path = Path(path)
        self.release_count = 0

    def release(self):
        self.release_count += 1


class SpySurface:
    def __init__(self):
        self.position = None
        self.playing = False

    def seek(self, seconds):
        self.position = seconds

    def play(self):
        self.playing = True


class FakeApp:
    """The subset of VidSeek the controllers talk to."""

    def __init__(self, tmp_path):
        self.config = ClientConfig(
            api_base_url="http://backend.test/",
            downloads_dir=tmp_path / "downloads",
            verbose=False
        )
        self.session = Session()
        self.client = FakeClient()
        self.dispatcher = InlineDispatcher()
        self.previews = []
        self.alerts = []
        self.notices = []
        self.refresh_count = 0
        self.ready_count = 0

        self.availability_monitor = AvailabilityMonitor(self, on_ready=self._on_ready)
        self.upload_controller = UploadController(self)
        self.search_controller = SearchController(self)
        self.playback_controller = PlaybackController(self)
        self.subtitle_exporter = SubtitleExporter(self)

    def _on_ready(self):
        self.ready_count += 1

    def open_preview(self, path):
        preview = SpyPreview(path)
        self.previews.append(preview)
        return preview

    def refresh_ui(self):
        self.refresh_count += 1

    def alert(self, message):
        self.alerts.append(message)

    def notify(self, message):
        self.notices.append(message)


def make_result(text="Introduction", start=5, end=40, score=0.91):
    return SearchResult(
        chunk=TranscriptChunk(text=text, start_time=float(start), end_time=float(end)),
        similarity_score=score
    )


@pytest.fixture
def app(tmp_path):
    return FakeApp(tmp_path)


@pytest.fixture
def uploaded_app(app, tmp_path):
    """App with a selected and successfully uploaded video (video_id v1)."""
    app.upload_controller.select_file(tmp_path / "talk.mp4")
    assert app.upload_controller.upload()
    return app


@pytest.fixture
def backend_error():
    return BackendError(422, "Unsupported video format")


@pytest.fixture
def transport_error():
    return TransportError("Connection refused")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() so each test starts with a bare vidseek logger tree."""
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
