# src/tetris_engine/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Iterator, Union, overload


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()
    DROP = auto()
    ROT_CW = auto()
    ROT_CCW = auto()


class GameStatus(Enum):
    NO_GAME = auto()
    PLAYING = auto()
    GAME_OVER = auto()


class Rotation(IntEnum):
    """
    The four orientations of a piece, in clockwise order.

    START is the spawn orientation. cw()/ccw() wrap modulo 4.
    """

    START = 0
    RIGHT = 1
    REVERSE = 2
    LEFT = 3

    def cw(self) -> "Rotation":
        return Rotation((int(self) + 1) % 4)

    def ccw(self) -> "Rotation":
        return Rotation((int(self) + 3) % 4)


@dataclass(frozen=True)
class Point:
    """
    Integer board coordinate. x grows to the right, y grows upwards (row 0 is the floor).
    """

    x: int
    y: int

    @overload
    def transform(self, dx: "Point") -> "Point": ...

    @overload
    def transform(self, dx: int, dy: int) -> "Point": ...

    def transform(self, dx: Union["Point", int], dy: int = 0) -> "Point":
        if isinstance(dx, Point):
            return Point(self.x + dx.x, self.y + dx.y)
        return Point(self.x + int(dx), self.y + int(dy))

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


__all__ = ["Action", "GameStatus", "Point", "Rotation"]
