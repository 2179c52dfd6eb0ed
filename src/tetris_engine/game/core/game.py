# src/tetris_engine/game/core/game.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

import numpy as np

from tetris_engine.game.core import pieceset
from tetris_engine.game.core.board import Board
from tetris_engine.game.core.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from tetris_engine.game.core.errors import EngineNotInitializedError
from tetris_engine.game.core.events import BoardEvent, EventBus, Handler
from tetris_engine.game.core.movable import MovablePiece
from tetris_engine.game.core.piece_rules import PieceRule, SequencePieceRule, UniformPieceRule
from tetris_engine.game.core.pieceset import KIND_ORDER, PieceKind
from tetris_engine.game.core.rotation import is_legal, try_rotate
from tetris_engine.game.core.types import Action, GameStatus
from tetris_engine.game.rendering.ascii import board_to_ascii

LOG = logging.getLogger(__name__)

_ACTION_ALIASES = {
    "left": Action.LEFT,
    "right": Action.RIGHT,
    "down": Action.DOWN,
    "soft_drop": Action.DOWN,
    "step": Action.DOWN,
    "drop": Action.DROP,
    "hard_drop": Action.DROP,
    "rot_cw": Action.ROT_CW,
    "rotate_cw": Action.ROT_CW,
    "rotate_right": Action.ROT_CW,
    "cw": Action.ROT_CW,
    "rot_ccw": Action.ROT_CCW,
    "rotate_ccw": Action.ROT_CCW,
    "rotate_left": Action.ROT_CCW,
    "ccw": Action.ROT_CCW,
}


def _positive_int(value: object, *, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{where} must be an int, got {type(value)!r}")
    v = int(value)
    if v <= 0:
        raise ValueError(f"{where} must be positive, got {v}")
    return v


class TetrisBoard:
    """
    Board engine: frozen grid, current piece, preview piece and game-over state.

    Contracts:

      - new_game() must be called before any piece operation; until then those
        operations raise EngineNotInitializedError.
      - Illegal moves and rotations are silent no-ops. Every movement operation publishes
        CURRENT_PIECE_CHANGED exactly once, whether or not the piece moved.
      - Freezing a piece with a cell at y >= height ends the game. GAME_OVER(True) is
        published at once; no rows are cleared and no new piece is spawned. While the game
        is over, movement operations leave the state untouched.
      - Observers only ever receive copies: grid snapshots are read-only arrays and pieces
        are frozen dataclasses.
      - Randomness comes from an injected numpy Generator (set_rng / rng=...).
    """

    def __init__(
            self,
            width: int = DEFAULT_WIDTH,
            height: int = DEFAULT_HEIGHT,
            *,
            piece_rule: PieceRule | None = None,
            rng: np.random.Generator | None = None,
    ) -> None:
        self.w = _positive_int(width, where="width")
        self.h = _positive_int(height, where="height")

        self.board = Board.empty(h=self.h, w=self.w)
        self.events: EventBus[BoardEvent] = EventBus(BoardEvent)

        # Board-owned RNG; replace via set_rng() for deterministic runs.
        self._rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

        # Rule used when no replay sequence is installed.
        self._default_rule: PieceRule = piece_rule or UniformPieceRule()
        self._piece_rule: PieceRule = self._default_rule

        self._current: Optional[MovablePiece] = None
        self._next_kind: Optional[PieceKind] = None
        self._started = False
        self._game_over = False

    # ---- queries -------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.w

    @property
    def height(self) -> int:
        return self.h

    @property
    def current_piece(self) -> Optional[MovablePiece]:
        return self._current

    @property
    def next_kind(self) -> Optional[PieceKind]:
        return self._next_kind

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def status(self) -> GameStatus:
        if not self._started:
            return GameStatus.NO_GAME
        if self._game_over:
            return GameStatus.GAME_OVER
        return GameStatus.PLAYING

    @property
    def piece_rule(self) -> PieceRule:
        return self._piece_rule

    def frozen_grid(self) -> np.ndarray:
        """Read-only height x width copy of the frozen blocks (row 0 is the floor)."""
        return self.board.frozen_grid()

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the frozen blocks plus headroom, with the current piece painted in."""
        return self.board.snapshot(self._current)

    def is_piece_legal(self, piece: MovablePiece) -> bool:
        return is_legal(board=self.board, piece=piece)

    def to_ascii(self) -> str:
        return board_to_ascii(self.snapshot(), visible_height=self.h)

    def __str__(self) -> str:
        return self.to_ascii()

    # ---- observers -----------------------------------------------------------------

    def subscribe(self, event: BoardEvent, handler: Handler) -> Callable[[], None]:
        return self.events.subscribe(event, handler)

    def unsubscribe(self, event: BoardEvent, handler: Handler) -> bool:
        return self.events.unsubscribe(event, handler)

    # ---- configuration -------------------------------------------------------------

    def set_rng(self, rng: np.random.Generator) -> None:
        self._rng = rng

    def set_piece_sequence(self, kinds: Sequence[object]) -> None:
        """
        Install a replay sequence consumed cyclically from index 0.

        An empty sequence restores the default (random) rule. During a game the current
        piece is replaced at once by the first piece of the new stream.
        """
        seq = pieceset.parse_kinds(kinds)
        if seq:
            self._piece_rule = SequencePieceRule(sequence=seq)
        else:
            self._piece_rule = self._default_rule
        self._piece_rule.reset(rng=self._rng, kinds=KIND_ORDER)
        LOG.debug("piece sequence set: %s", [k.value for k in seq] or "random")

        if self.status is GameStatus.PLAYING:
            self._current = self._next_movable_piece(restart=True)
            self._publish_current()

    # ---- game lifecycle ------------------------------------------------------------

    def new_game(self) -> None:
        self.board = Board.empty(h=self.h, w=self.w)
        self._game_over = False
        self._started = True
        self._piece_rule.reset(rng=self._rng, kinds=KIND_ORDER)
        self._current = self._next_movable_piece(restart=True)
        LOG.debug("new game %dx%d, first piece %s", self.w, self.h, self._current)

        self._publish_board(BoardEvent.BOARD_CHANGED)
        self._publish_current()
        self.events.publish(BoardEvent.GAME_OVER, False)

    # ---- operations ----------------------------------------------------------------

    def step(self) -> None:
        """One tick of the external clock: same as down()."""
        self._require_started("step")
        self.down()

    def left(self) -> None:
        piece = self._require_started("left")
        if not self._game_over:
            self._move(piece.left())
        self._publish_current()

    def right(self) -> None:
        piece = self._require_started("right")
        if not self._game_over:
            self._move(piece.right())
        self._publish_current()

    def rotate_cw(self) -> None:
        piece = self._require_started("rotate_cw")
        if not self._game_over:
            self._current = try_rotate(board=self.board, piece=piece, dir=+1)
        self._publish_current()

    def rotate_ccw(self) -> None:
        piece = self._require_started("rotate_ccw")
        if not self._game_over:
            self._current = try_rotate(board=self.board, piece=piece, dir=-1)
        self._publish_current()

    def down(self) -> None:
        """Move down one row, or freeze the piece if it cannot move."""
        piece = self._require_started("down")
        if not self._game_over and not self._move(piece.down()):
            self._lock_piece()
        self._publish_current()

    def drop(self) -> None:
        """
        Hard drop in two phases: advance without notifications, then freeze.
        CURRENT_PIECE_CHANGED is published once, after the freeze.
        """
        self._require_started("drop")
        if not self._game_over:
            self._advance_silently()
            self._lock_piece()
        self._publish_current()

    def apply(self, action: Any) -> None:
        """Dispatch an Action (or a string alias such as 'left', 'cw', 'drop')."""
        a = self._normalize_action(action)
        if a is Action.LEFT:
            self.left()
        elif a is Action.RIGHT:
            self.right()
        elif a is Action.DOWN:
            self.down()
        elif a is Action.DROP:
            self.drop()
        elif a is Action.ROT_CW:
            self.rotate_cw()
        elif a is Action.ROT_CCW:
            self.rotate_ccw()

    # ---- internals -----------------------------------------------------------------

    @staticmethod
    def _normalize_action(action: Any) -> Action:
        if isinstance(action, Action):
            return action
        s = str(action).strip().lower()
        try:
            return _ACTION_ALIASES[s]
        except KeyError as e:
            raise ValueError(f"unknown action {action!r}. known={sorted(_ACTION_ALIASES)!r}") from e

    def _require_started(self, operation: str) -> MovablePiece:
        if not self._started or self._current is None:
            raise EngineNotInitializedError(operation)
        return self._current

    def _move(self, candidate: MovablePiece) -> bool:
        if not is_legal(board=self.board, piece=candidate):
            return False
        self._current = candidate
        return True

    def _advance_silently(self) -> int:
        """Move down while legal. Publishes nothing; returns the number of rows moved."""
        rows = 0
        while self._current is not None and self._move(self._current.down()):
            rows += 1
        return rows

    def _lock_piece(self) -> None:
        """
        Freeze the current piece, clear rows, spawn the next piece.

        Publishes GAME_OVER (on overflow), ROW_CLEARED per row, NEXT_PIECE_CHANGED,
        then BOARD_CHANGED and PIECE_FROZEN.
        """
        piece = self._current
        if piece is None:
            return

        overflow = self.board.place(piece)
        LOG.debug("froze %s", piece)
        if overflow:
            self._set_game_over()

        if not self._game_over:
            rows = self.board.complete_rows()
            for _ in rows:
                self.events.publish(BoardEvent.ROW_CLEARED, True)
            if rows:
                self.board.clear_rows(rows)
                LOG.debug("cleared rows %s", rows)
            self._current = self._next_movable_piece(restart=False)

        snap = self.snapshot()
        self.events.publish(BoardEvent.BOARD_CHANGED, snap)
        self.events.publish(BoardEvent.PIECE_FROZEN, snap)

    def _set_game_over(self) -> None:
        if self._game_over:
            return
        self._game_over = True
        LOG.debug("game over")
        self.events.publish(BoardEvent.GAME_OVER, True)

    def _next_movable_piece(self, *, restart: bool) -> MovablePiece:
        # Promote preview -> current, then draw a new preview.
        if self._next_kind is None or restart:
            self._prepare_next()
        kind = self._next_kind
        assert kind is not None
        self._prepare_next()
        return MovablePiece(kind=kind, position=pieceset.spawn_position(kind, board_w=self.w, board_h=self.h))

    def _prepare_next(self) -> None:
        had_preview = self._next_kind is not None
        self._next_kind = self._piece_rule.next_piece()
        if had_preview and not self._game_over:
            self.events.publish(BoardEvent.NEXT_PIECE_CHANGED, self._next_kind)

    def _publish_current(self) -> None:
        self.events.publish(BoardEvent.CURRENT_PIECE_CHANGED, self._current)

    def _publish_board(self, event: BoardEvent) -> None:
        self.events.publish(event, self.snapshot())


__all__ = ["TetrisBoard"]
