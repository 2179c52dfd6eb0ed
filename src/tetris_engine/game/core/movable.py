# src/tetris_engine/game/core/movable.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from tetris_engine.game.core import pieceset
from tetris_engine.game.core.pieceset import PieceKind
from tetris_engine.game.core.types import Point, Rotation


@dataclass(frozen=True)
class MovablePiece:
    """
    A piece kind bound to a board position and a rotation.

    Pure geometry: every transform returns a new value and nothing here checks legality.
    """

    kind: PieceKind
    position: Point
    rotation: Rotation = Rotation.START

    def down(self) -> "MovablePiece":
        return replace(self, position=self.position.transform(0, -1))

    def left(self) -> "MovablePiece":
        return replace(self, position=self.position.transform(-1, 0))

    def right(self) -> "MovablePiece":
        return replace(self, position=self.position.transform(1, 0))

    def rotate_cw(self) -> "MovablePiece":
        return replace(self, rotation=self.rotation.cw())

    def rotate_ccw(self) -> "MovablePiece":
        return replace(self, rotation=self.rotation.ccw())

    def set_position(self, position: Point) -> "MovablePiece":
        return replace(self, position=position)

    def board_points(self) -> Tuple[Point, ...]:
        return tuple(self.position.transform(p) for p in pieceset.offsets(self.kind, self.rotation))

    def __str__(self) -> str:
        return f"{self.kind.value}@({self.position.x},{self.position.y}) {self.rotation.name}"


__all__ = ["MovablePiece"]
