# src/tetris_engine/game/scoring.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from tetris_engine.game.core.events import BoardEvent, EventBus
from tetris_engine.game.core.game import TetrisBoard
from tetris_engine.game.core.rules import ScoreConfig, level_for_rows, score_for_clears

LOG = logging.getLogger(__name__)


class ScoreEvent(Enum):
    SCORE_CHANGED = "score"
    LEVEL_CHANGED = "level"


class ScoreKeeper:
    """
    Scoring collaborator driven only by board events.

      - ROW_CLEARED counts rows for the freeze in progress
      - PIECE_FROZEN awards points_per_freeze plus the line points for those rows
      - GAME_OVER(False) (a new game) resets the counters

    LEVEL_CHANGED is published when the level goes up; an external tick source can use it
    to speed up. Handlers must not mutate the board (see EventBus).

    line_points is the scoring policy itself (classic 40/100/300/1200 by default, scaled by
    level), not a reproduction of any one game's payout quirks. Swap it through ScoringConfig.
    """

    def __init__(self, cfg: Optional[ScoreConfig] = None) -> None:
        self.cfg = cfg or ScoreConfig()
        if int(self.cfg.rows_per_level) <= 0:
            raise ValueError(f"rows_per_level must be positive, got {self.cfg.rows_per_level}")
        self.events: EventBus[ScoreEvent] = EventBus(ScoreEvent)
        self._unsubscribers: List[Callable[[], None]] = []
        self.reset()

    def reset(self) -> None:
        self.score = 0
        self.rows = 0
        self.level = 1
        self.freezes = 0
        self._pending_rows = 0

    def attach(self, board: TetrisBoard) -> "ScoreKeeper":
        self.detach()
        self._unsubscribers = [
            board.subscribe(BoardEvent.ROW_CLEARED, self._on_row_cleared),
            board.subscribe(BoardEvent.PIECE_FROZEN, self._on_piece_frozen),
            board.subscribe(BoardEvent.GAME_OVER, self._on_game_over),
        ]
        return self

    def detach(self) -> None:
        for unsub in self._unsubscribers:
            unsub()
        self._unsubscribers = []

    def _on_row_cleared(self, _payload: object) -> None:
        self._pending_rows += 1

    def _on_piece_frozen(self, _payload: object) -> None:
        cleared = self._pending_rows
        self._pending_rows = 0
        self.freezes += 1
        self.rows += cleared

        old_level = self.level
        self.level = level_for_rows(self.rows, self.cfg)

        self.score += int(self.cfg.points_per_freeze) + score_for_clears(cleared, self.cfg, level=self.level)
        self.events.publish(ScoreEvent.SCORE_CHANGED, self.score)

        if self.level > old_level:
            LOG.debug("level %d -> %d", old_level, self.level)
            self.events.publish(ScoreEvent.LEVEL_CHANGED, self.level)

    def _on_game_over(self, over: object) -> None:
        if not bool(over):
            self.reset()

    def summary(self) -> str:
        return f"score={self.score} rows={self.rows} level={self.level} freezes={self.freezes}"


__all__ = ["ScoreEvent", "ScoreKeeper"]
