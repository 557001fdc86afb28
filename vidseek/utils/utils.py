"""
Utility functions for VidSeek.
"""


def format_time(seconds: float) -> str:
    """Format time in M:SS format (no hour field)."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def format_time_range(start_time: float, end_time: float) -> str:
    """Format a chunk span as 'M:SS - M:SS' for the result badge."""
    return f"{format_time(start_time)} - {format_time(end_time)}"


def format_score(similarity_score: float) -> str:
    """Format a similarity score in [0, 1] as a percentage with one decimal."""
    return f"{similarity_score * 100:.1f}%"
