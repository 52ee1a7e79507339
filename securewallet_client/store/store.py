"""Process-wide container for the session and ledger slices."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Literal, Optional

from .ledger import LedgerState
from .session import SessionState

logger = logging.getLogger(__name__)

SliceName = Literal["session", "ledger"]
Listener = Callable[["AppState"], None]


@dataclass(frozen=True, slots=True)
class AppState:
    session: SessionState = SessionState()
    ledger: LedgerState = LedgerState()


class StateStore:
    """Holds :class:`AppState`; each update atomically replaces one slice.

    Only orchestrator completion handlers write. Readers either take the
    current snapshot, subscribe to changes, or await a predicate.
    """

    def __init__(self, state: Optional[AppState] = None) -> None:
        self._state = state or AppState()
        self._listeners: list[Listener] = []
        self._changed = asyncio.Event()

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def session(self) -> SessionState:
        return self._state.session

    @property
    def ledger(self) -> LedgerState:
        return self._state.ledger

    def update(self, slice_name: SliceName, transition: Callable[..., Any], *args: Any) -> Any:
        """Apply ``transition(current_slice, *args)`` and publish the result."""
        current = getattr(self._state, slice_name)
        updated = transition(current, *args)
        self._state = replace(self._state, **{slice_name: updated})
        logger.debug("%s <- %s", slice_name, getattr(transition, "__name__", transition))

        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as exc:  # pylint: disable=broad-except
                logger.error("State listener %r failed on %s update: %s", listener, slice_name, exc)

        changed, self._changed = self._changed, asyncio.Event()
        changed.set()
        return updated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every update; failures are logged, not raised."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_for(self, slice_name: SliceName, predicate: Callable[[Any], bool]) -> Any:
        """Wait until the named slice satisfies ``predicate`` and return it."""
        while True:
            current = getattr(self._state, slice_name)
            if predicate(current):
                return current
            await self._changed.wait()
