"""
Utility functions for VidSeek.
"""

from .utils import format_time, format_time_range, format_score
from .logging_utils import configure_logging, get_component_logger, get_logger

__all__ = ['format_time', 'format_time_range', 'format_score',
           'configure_logging', 'get_component_logger', 'get_logger']
