"""
VidSeek - Video Semantic Search client with Tkinter
Upload a video to the search backend, query its transcript in natural
language, jump playback to a hit and export subtitles.
"""

from pathlib import Path
from tkinter import filedialog, messagebox
from typing import List, Optional

from ..api.client import BackendClient
from ..config import ClientConfig
from ..export import SubtitleExporter
from ..managers.availability_monitor import AvailabilityMonitor
from ..managers.playback_controller import PlaybackController
from ..managers.search_controller import SearchController
from ..managers.upload_controller import UploadController
from ..models import Session, VideoRecord
from ..player.preview import PreviewHandle
from ..player.video_player import VideoPlayer
from ..ui.main_ui import create_main_ui, show_main_content, update_ui_state
from ..utils.dispatcher import Dispatcher
from ..utils.logging_utils import get_logger

VIDEO_FILETYPES = [
    ("Video files", "*.mp4 *.mov *.avi *.mkv *.webm *.m4v"),
    ("All files", "*.*"),
]


class VidSeek:
    """
    VidSeek - Video Search Client Class

    Owns the Session for the lifetime of the window and wires the controllers:
    - AvailabilityMonitor gates the UI on backend liveness
    - UploadController selects and uploads the video
    - SearchController queries the active video
    - PlaybackController / SubtitleExporter act on results and the active video
    """

    def __init__(self, config: ClientConfig, video_path: Optional[str] = None):
        """
        Initialize VidSeek client.

        Args:
            config: Client configuration
            video_path: Optional video to preselect once the backend is ready
        """
        self.config = config
        self.initial_video = video_path
        self.logger = get_logger(config.log_file, config.verbose)
        self.session = Session()
        self.client = BackendClient(
            config.api_base_url,
            health_timeout=config.health_timeout,
            request_timeout=config.request_timeout,
            upload_timeout=config.upload_timeout
        )
        self.videos: List[VideoRecord] = []

        # Initialize controllers
        self.availability_monitor = AvailabilityMonitor(self, on_ready=self._on_backend_ready)
        self.upload_controller = UploadController(self)
        self.search_controller = SearchController(self)
        self.playback_controller = PlaybackController(self)
        self.subtitle_exporter = SubtitleExporter(self)

        # Created by run()
        self.root = None
        self.dispatcher: Optional[Dispatcher] = None
        self.player: Optional[VideoPlayer] = None
        self._stopped = False

        # UI components (see ui/main_ui.py)
        self.loading_frame = None
        self.content_frame = None
        self.status_label = None
        self.choose_btn = None
        self.file_label = None
        self.upload_btn = None
        self.upload_status_label = None
        self.download_btn = None
        self.video_frame = None
        self.video_canvas = None
        self.play_btn = None
        self.pause_btn = None
        self.search_frame = None
        self.search_var = None
        self.search_entry = None
        self.search_btn = None
        self.results_frame = None
        self.summary_frame = None
        self.summary_text = None

    # ------------------------------
    # Lifecycle
    # ------------------------------
    def run(self):
        """Build the window and enter the Tk main loop."""
        create_main_ui(self)
        self.dispatcher = Dispatcher(self.root)
        self.player = VideoPlayer(self.root, self.video_canvas)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self.logger.info(f"Backend: {self.config.api_base_url}")
        self.on_start()
        try:
            self.root.mainloop()
        finally:
            self.on_stop()

    def on_start(self):
        """Start health polling and fetch the catalog."""
        self.availability_monitor.start()
        self.load_videos()

    def on_stop(self):
        """Stop timers and release the preview. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        self.availability_monitor.stop()
        self.playback_controller.detach()
        if self.player:
            self.player.unload()
        self.upload_controller.release_preview()

    def _on_close(self):
        self.on_stop()
        self.root.destroy()

    def _on_backend_ready(self):
        show_main_content(self)
        self.notify("Backend ready")
        self.refresh_ui()
        if self.initial_video:
            video, self.initial_video = self.initial_video, None
            self.select_video(video)

    # ------------------------------
    # Catalog
    # ------------------------------
    def load_videos(self):
        """Fire-and-forget catalog fetch; failures are only logged."""
        self.dispatcher.submit(self.client.list_videos, self._on_videos_loaded, name="vidseek-catalog")

    def _on_videos_loaded(self, videos, error):
        if error is not None:
            self.logger.error(f"Failed to load videos: {error}")
            return
        self.videos = list(videos)
        self.logger.info(f"Backend catalog has {len(self.videos)} videos")

    # ------------------------------
    # Hooks used by the controllers
    # ------------------------------
    def open_preview(self, path: Path) -> PreviewHandle:
        return PreviewHandle(path)

    def refresh_ui(self):
        update_ui_state(self)

    def alert(self, message: str):
        """Blocking prompt for precondition and request failures."""
        self.logger.warning(message)
        if self.root:
            messagebox.showwarning("VidSeek", message, parent=self.root)

    def notify(self, message: str):
        if self.status_label:
            self.status_label.config(text=message)

    # ------------------------------
    # UI event handlers
    # ------------------------------
    def select_video(self, path):
        """Swap the player over to a newly selected file."""
        self.playback_controller.detach()
        if self.player:
            self.player.stop()
        preview = self.upload_controller.select_file(path)
        if self.player:
            self.player.load(preview)
            self.playback_controller.attach(self.player)
        self.notify(f"Selected {Path(path).name}")

    def _on_choose_file(self):
        path = filedialog.askopenfilename(
            parent=self.root,
            title="Select a video",
            filetypes=VIDEO_FILETYPES
        )
        if path:
            self.select_video(path)

    def _on_upload(self):
        self.upload_controller.upload()

    def _on_query_changed(self):
        self.search_controller.set_query(self.search_var.get())

    def _on_search(self):
        self.search_controller.search(self.search_var.get())

    def _on_jump(self, timestamp: float):
        self.playback_controller.jump_to(timestamp)

    def _on_play(self):
        if self.player:
            self.player.play()

    def _on_pause(self):
        if self.player:
            self.player.pause()

    def _on_download_subtitles(self):
        self.subtitle_exporter.download_subtitles()
