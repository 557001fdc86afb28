"""
HTTP access to the video search backend.
"""

from .errors import VidSeekError, BackendError, TransportError, InvalidTransition, Precondition
from .client import BackendClient

__all__ = ['VidSeekError', 'BackendError', 'TransportError', 'InvalidTransition',
           'Precondition', 'BackendClient']
