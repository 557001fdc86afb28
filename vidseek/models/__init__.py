"""
Data models for VidSeek.
"""

from .models import (
    Phase,
    TranscriptChunk,
    SearchResult,
    UploadResult,
    VideoRecord,
    UploadState,
    SearchState,
)
from .session import Session

__all__ = ['Phase', 'TranscriptChunk', 'SearchResult', 'UploadResult', 'VideoRecord',
           'UploadState', 'SearchState', 'Session']
