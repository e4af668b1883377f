"""Session and message-lifecycle module for parley.

Provides the identity signal, history loader, session archive,
exchange orchestrator and session manager.
"""

from .archive import SESSIONS_KEY, SessionArchive
from .identity import IdentitySignal
from .loader import HistoryLoader
from .manager import SessionManager
from .models import LIMIT_NOTICE, ExchangeResult, SubmitOutcome
from .orchestrator import DEFAULT_MAX_MESSAGES_PER_SESSION, ExchangeOrchestrator

__all__ = [
    "DEFAULT_MAX_MESSAGES_PER_SESSION",
    "ExchangeOrchestrator",
    "ExchangeResult",
    "HistoryLoader",
    "IdentitySignal",
    "LIMIT_NOTICE",
    "SESSIONS_KEY",
    "SessionArchive",
    "SessionManager",
    "SubmitOutcome",
]
