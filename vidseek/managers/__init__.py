"""
Managers and controllers for VidSeek.
"""

from .availability_monitor import AvailabilityMonitor
from .upload_controller import UploadController
from .search_controller import SearchController
from .playback_controller import PlaybackController

__all__ = [
    'AvailabilityMonitor',
    'UploadController',
    'SearchController',
    'PlaybackController'
]
