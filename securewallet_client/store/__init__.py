"""Central state store: typed slices updated through pure transitions."""

from . import ledger, session
from .ledger import LedgerState
from .session import SessionState
from .store import AppState, StateStore

__all__ = ["AppState", "LedgerState", "SessionState", "StateStore", "ledger", "session"]
