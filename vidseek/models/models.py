"""
Data models for the VidSeek client.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Phase(Enum):
    """Lifecycle of one upload or search request."""
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TranscriptChunk:
    """A contiguous time segment of the transcribed video."""
    text: str
    start_time: float  # seconds
    end_time: float  # seconds

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscriptChunk":
        return cls(
            text=str(data.get("text", "")),
            start_time=float(data["start_time"]),
            end_time=float(data["end_time"])
        )


@dataclass(frozen=True)
class SearchResult:
    """One ranked hit returned for a search query."""
    chunk: TranscriptChunk
    similarity_score: float  # 0.0 - 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(
            chunk=TranscriptChunk.from_dict(data["chunk"]),
            similarity_score=float(data["similarity_score"])
        )


@dataclass(frozen=True)
class UploadResult:
    """Body of a successful /upload-video/ response."""
    video_id: str
    total_chunks: int
    summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadResult":
        summary = data.get("summary")
        return cls(
            video_id=str(data["video_id"]),
            total_chunks=int(data.get("total_chunks", 0)),
            summary=str(summary) if summary else None
        )


@dataclass(frozen=True)
class VideoRecord:
    """Entry from the backend's /videos/ catalog."""
    video_id: Optional[str]
    filename: Optional[str] = None
    total_chunks: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoRecord":
        video_id = data.get("video_id", data.get("id"))
        total_chunks = data.get("total_chunks")
        return cls(
            video_id=str(video_id) if video_id is not None else None,
            filename=data.get("filename"),
            total_chunks=int(total_chunks) if total_chunks is not None else None,
            raw=dict(data)
        )


@dataclass(frozen=True)
class UploadState:
    """Upload lifecycle; video_id / summary / chunk_count only mean something when SUCCEEDED."""
    phase: Phase = Phase.IDLE
    video_id: Optional[str] = None
    summary: Optional[str] = None
    chunk_count: int = 0
    message: str = ""


@dataclass(frozen=True)
class SearchState:
    """Search lifecycle; results are only kept in SUCCEEDED."""
    phase: Phase = Phase.IDLE
    results: Tuple[SearchResult, ...] = ()
    message: str = ""
