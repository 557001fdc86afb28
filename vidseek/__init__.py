"""
VidSeek - Video Semantic Search client
Upload a video to the search backend, ask questions about what is said in it,
jump to the matching moments and export subtitles.
"""

from .config import ClientConfig, load_config
from .models import Session, SearchResult, TranscriptChunk, UploadResult, VideoRecord
from .utils import format_time, format_score

__version__ = "1.0.0"

__all__ = ['ClientConfig', 'load_config', 'Session', 'SearchResult', 'TranscriptChunk',
           'UploadResult', 'VideoRecord', 'format_time', 'format_score']
