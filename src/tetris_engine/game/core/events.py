# src/tetris_engine/game/core/events.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Tuple, TypeVar

LOG = logging.getLogger(__name__)

Handler = Callable[[Any], None]

E = TypeVar("E", bound=Enum)


class BoardEvent(Enum):
    """
    Events published by the board engine. Payloads:

      BOARD_CHANGED          read-only grid snapshot (np.ndarray, headroom included)
      PIECE_FROZEN           same snapshot as BOARD_CHANGED
      CURRENT_PIECE_CHANGED  MovablePiece | None
      NEXT_PIECE_CHANGED     PieceKind
      ROW_CLEARED            True, once per cleared row
      GAME_OVER              bool
    """

    BOARD_CHANGED = "board"
    PIECE_FROZEN = "piece_frozen"
    CURRENT_PIECE_CHANGED = "current_piece"
    NEXT_PIECE_CHANGED = "next_piece"
    ROW_CLEARED = "complete_row"
    GAME_OVER = "game_over"


class EventBus(Generic[E]):
    """
    Per-owner publish/subscribe channel.

    Handlers are keyed by event kind and called synchronously in subscription order.
    A handler must not call back into the publisher for the same event cycle.
    """

    def __init__(self, events: type[E]) -> None:
        self._events = events
        self._handlers: Dict[E, List[Handler]] = {e: [] for e in events}

    def _check(self, event: E) -> E:
        if not isinstance(event, self._events):
            raise TypeError(f"event must be a {self._events.__name__}, got {event!r}")
        return event

    def subscribe(self, event: E, handler: Handler) -> Callable[[], None]:
        """Register a handler; returns a callable that unsubscribes it."""
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler)!r}")
        self._handlers[self._check(event)].append(handler)
        return lambda: self.unsubscribe(event, handler)

    def unsubscribe(self, event: E, handler: Handler) -> bool:
        handlers = self._handlers[self._check(event)]
        try:
            handlers.remove(handler)
        except ValueError:
            return False
        return True

    def handlers(self, event: E) -> Tuple[Handler, ...]:
        return tuple(self._handlers[self._check(event)])

    def publish(self, event: E, payload: Any = None) -> None:
        handlers = self._handlers[self._check(event)]
        if not handlers:
            return
        LOG.debug("publish %s to %d handler(s)", event.name, len(handlers))
        # Iterate a copy so a handler may unsubscribe itself.
        for handler in list(handlers):
            handler(payload)


__all__ = ["BoardEvent", "EventBus", "Handler"]
