"""
Parley: a terminal chat client with archived conversation sessions.

Each subpackage hides one design decision: message values and the live
transcript, durable local storage, the generation service, the remote
history store, and the session lifecycle that ties them together.
"""

__version__ = "0.1.0"

from .client import ChatClient
from .config import ClientConfig
from .session import ExchangeResult, SubmitOutcome
from .transcript import Message, Session, TranscriptBuffer

__all__ = [
    "ChatClient",
    "ClientConfig",
    "ExchangeResult",
    "Message",
    "Session",
    "SubmitOutcome",
    "TranscriptBuffer",
]
