"""
Configuration constants for the VidSeek client.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import dotenv

# Backend connection
DEFAULT_API_BASE_URL = "http://localhost:8000"

# Timeouts (seconds)
HEALTH_TIMEOUT = 5
REQUEST_TIMEOUT = 30
UPLOAD_TIMEOUT = 900  # Transcription + embedding happens inside the upload request

# Availability polling
HEALTH_POLL_INTERVAL_MS = 5000

# Search
SEARCH_TOP_K = 5

# Subtitle export
DEFAULT_DOWNLOADS_DIR = Path.home() / "Downloads"

# Environment variable names
ENV_API_BASE_URL = "VIDSEEK_API_BASE_URL"
ENV_DOWNLOADS_DIR = "VIDSEEK_DOWNLOADS_DIR"
ENV_LOG_FILE = "VIDSEEK_LOG_FILE"


@dataclass
class ClientConfig:
    """Configuration for one VidSeek client window."""

    api_base_url: str = DEFAULT_API_BASE_URL

    # Polling and search
    health_poll_interval_ms: int = HEALTH_POLL_INTERVAL_MS
    search_top_k: int = SEARCH_TOP_K

    # Timeouts
    health_timeout: float = HEALTH_TIMEOUT
    request_timeout: float = REQUEST_TIMEOUT
    upload_timeout: float = UPLOAD_TIMEOUT

    # Output
    downloads_dir: Path = field(default_factory=lambda: DEFAULT_DOWNLOADS_DIR)

    # Logging
    log_file: Optional[str] = None
    verbose: bool = True

    def __post_init__(self):
        self.api_base_url = self.api_base_url.rstrip("/")
        self.downloads_dir = Path(self.downloads_dir).expanduser()


def load_config(
    api_base_url: Optional[str] = None,
    downloads_dir: Optional[str] = None,
    log_file: Optional[str] = None,
    verbose: bool = True
) -> ClientConfig:
    """
    Build a ClientConfig from the environment (.env supported) and explicit overrides.

    Args:
        api_base_url: Backend base URL (overrides VIDSEEK_API_BASE_URL)
        downloads_dir: Where subtitle files are saved (overrides VIDSEEK_DOWNLOADS_DIR)
        log_file: Optional log file path (overrides VIDSEEK_LOG_FILE)
        verbose: Whether to log to the console

    Returns:
        ClientConfig instance
    """
    dotenv.load_dotenv()

    base_url = api_base_url or os.getenv(ENV_API_BASE_URL) or DEFAULT_API_BASE_URL
    downloads = downloads_dir or os.getenv(ENV_DOWNLOADS_DIR) or DEFAULT_DOWNLOADS_DIR
    log_path = log_file or os.getenv(ENV_LOG_FILE) or None

    return ClientConfig(
        api_base_url=base_url,
        downloads_dir=Path(downloads),
        log_file=log_path,
        verbose=verbose
    )
