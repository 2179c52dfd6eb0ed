# src/tetris_engine/game/core/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Iterable, Tuple

from tetris_engine.game.core.constants import CELLS_PER_PIECE, EMPTY_CELL
from tetris_engine.game.core.types import Point, Rotation


class PieceKind(str, Enum):
    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"

    def __str__(self) -> str:
        return self.value


class Block(IntEnum):
    """
    Cell tags stored in the grid. EMPTY is 0, every kind gets its KIND_ORDER position + 1.
    """

    EMPTY = EMPTY_CELL
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


def _pts(*xy: Tuple[int, int]) -> Tuple[Point, ...]:
    return tuple(Point(x, y) for x, y in xy)


# Local offsets per rotation (START, RIGHT, REVERSE, LEFT).
# y grows upwards and the top row of each bounding box is y = 1.
_SHAPES: Dict[PieceKind, Tuple[Tuple[Point, ...], ...]] = {
    PieceKind.I: (
        _pts((0, 0), (1, 0), (2, 0), (3, 0)),
        _pts((2, 1), (2, 0), (2, -1), (2, -2)),
        _pts((0, -1), (1, -1), (2, -1), (3, -1)),
        _pts((1, 1), (1, 0), (1, -1), (1, -2)),
    ),
    PieceKind.J: (
        _pts((0, 1), (0, 0), (1, 0), (2, 0)),
        _pts((1, 1), (2, 1), (1, 0), (1, -1)),
        _pts((0, 0), (1, 0), (2, 0), (2, -1)),
        _pts((1, 1), (1, 0), (0, -1), (1, -1)),
    ),
    PieceKind.L: (
        _pts((2, 1), (0, 0), (1, 0), (2, 0)),
        _pts((1, 1), (1, 0), (1, -1), (2, -1)),
        _pts((0, 0), (1, 0), (2, 0), (0, -1)),
        _pts((0, 1), (1, 1), (1, 0), (1, -1)),
    ),
    PieceKind.O: (
        _pts((1, 1), (2, 1), (1, 0), (2, 0)),
        _pts((1, 1), (2, 1), (1, 0), (2, 0)),
        _pts((1, 1), (2, 1), (1, 0), (2, 0)),
        _pts((1, 1), (2, 1), (1, 0), (2, 0)),
    ),
    PieceKind.S: (
        _pts((1, 1), (2, 1), (0, 0), (1, 0)),
        _pts((1, 1), (1, 0), (2, 0), (2, -1)),
        _pts((1, 0), (2, 0), (0, -1), (1, -1)),
        _pts((0, 1), (0, 0), (1, 0), (1, -1)),
    ),
    PieceKind.T: (
        _pts((1, 1), (0, 0), (1, 0), (2, 0)),
        _pts((1, 1), (1, 0), (2, 0), (1, -1)),
        _pts((0, 0), (1, 0), (2, 0), (1, -1)),
        _pts((1, 1), (0, 0), (1, 0), (1, -1)),
    ),
    PieceKind.Z: (
        _pts((0, 1), (1, 1), (1, 0), (2, 0)),
        _pts((2, 1), (1, 0), (2, 0), (1, -1)),
        _pts((0, 0), (1, 0), (1, -1), (2, -1)),
        _pts((1, 1), (0, 0), (1, 0), (0, -1)),
    ),
}

# Bounding-box widths used for spawn centering.
_WIDTHS: Dict[PieceKind, int] = {
    PieceKind.I: 4,
    PieceKind.J: 3,
    PieceKind.L: 3,
    PieceKind.O: 4,
    PieceKind.S: 3,
    PieceKind.T: 3,
    PieceKind.Z: 3,
}


@dataclass(frozen=True)
class PieceDef:
    kind: PieceKind
    rotations: Tuple[Tuple[Point, ...], ...]  # indexed by Rotation
    width: int
    block: Block

    def offsets(self, rot: Rotation | int) -> Tuple[Point, ...]:
        return self.rotations[int(rot) % len(self.rotations)]


def _build_catalog() -> Dict[PieceKind, PieceDef]:
    out: Dict[PieceKind, PieceDef] = {}
    for kind in PieceKind:
        rotations = _SHAPES[kind]
        if len(rotations) != len(Rotation):
            raise ValueError(f"{kind!r}: expected {len(Rotation)} rotations, got {len(rotations)}")
        for i, cells in enumerate(rotations):
            if len(set(cells)) != CELLS_PER_PIECE:
                raise ValueError(f"{kind!r}: rotation {i} must have {CELLS_PER_PIECE} distinct cells")
        out[kind] = PieceDef(kind=kind, rotations=rotations, width=_WIDTHS[kind], block=Block[kind.value])
    return out


_CATALOG: Dict[PieceKind, PieceDef] = _build_catalog()

KIND_ORDER: Tuple[PieceKind, ...] = tuple(PieceKind)


def get(kind: PieceKind) -> PieceDef:
    try:
        return _CATALOG[PieceKind(kind)]
    except (KeyError, ValueError) as e:
        raise KeyError(f"unknown piece kind {kind!r}. known kinds={[k.value for k in KIND_ORDER]!r}") from e


def offsets(kind: PieceKind, rot: Rotation | int) -> Tuple[Point, ...]:
    """Local cell offsets for (kind, rotation). Pure table lookup."""
    return get(kind).offsets(rot)


def width(kind: PieceKind) -> int:
    return get(kind).width


def block_of(kind: PieceKind) -> Block:
    return get(kind).block


def board_id_to_kind(board_id: int) -> PieceKind:
    bid = int(board_id)
    if bid <= 0:
        raise ValueError("board_id must be >= 1 (0 is empty)")
    if bid > len(KIND_ORDER):
        raise ValueError(f"board_id out of range: {bid} (valid 1..{len(KIND_ORDER)})")
    return KIND_ORDER[bid - 1]


def parse_kind(value: object) -> PieceKind:
    """
    Accept a PieceKind, its name ("t", " T ") or a Block id.
    """
    if isinstance(value, PieceKind):
        return value
    if isinstance(value, Block):
        return board_id_to_kind(int(value))
    s = str(value).strip().upper()
    try:
        return PieceKind(s)
    except ValueError as e:
        raise ValueError(f"unknown piece kind {value!r}. known kinds={[k.value for k in KIND_ORDER]!r}") from e


def parse_kinds(values: Iterable[object]) -> Tuple[PieceKind, ...]:
    return tuple(parse_kind(v) for v in values)


def spawn_position(kind: PieceKind, *, board_w: int, board_h: int) -> Point:
    """
    Horizontally centered by the kind's bounding width. The I piece spawns one row lower.
    """
    y = int(board_h) - 1
    if PieceKind(kind) is PieceKind.I:
        y -= 1
    return Point((int(board_w) - width(kind)) // 2, y)


__all__ = [
    "Block",
    "KIND_ORDER",
    "PieceDef",
    "PieceKind",
    "block_of",
    "board_id_to_kind",
    "get",
    "offsets",
    "parse_kind",
    "parse_kinds",
    "spawn_position",
    "width",
]
