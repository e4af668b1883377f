"""Transcript module for parley.

Provides the message/session value types and the live transcript buffer.
"""

from .buffer import TranscriptBuffer
from .models import Message, Session, utc_now

__all__ = [
    "Message",
    "Session",
    "TranscriptBuffer",
    "utc_now",
]
