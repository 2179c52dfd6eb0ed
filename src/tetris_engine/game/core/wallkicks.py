# src/tetris_engine/game/core/wallkicks.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from tetris_engine.game.core.pieceset import PieceKind
from tetris_engine.game.core.types import Point, Rotation


class KickFamily(Enum):
    I = "I"
    JLSTZ = "JLSTZ"
    O = "O"


ZERO_KICK = Point(0, 0)

_R0, _RR, _R2, _RL = Rotation.START, Rotation.RIGHT, Rotation.REVERSE, Rotation.LEFT


def _kicks(*xy: Tuple[int, int]) -> Tuple[Point, ...]:
    return tuple(Point(x, y) for x, y in xy)


# Candidate corrections after the implicit (0, 0) attempt, y-up.
_JLSTZ: Dict[Tuple[Rotation, Rotation], Tuple[Point, ...]] = {
    (_R0, _RR): _kicks((-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (_RR, _R0): _kicks((1, 0), (1, -1), (0, 2), (1, 2)),
    (_RR, _R2): _kicks((1, 0), (1, -1), (0, 2), (1, 2)),
    (_R2, _RR): _kicks((-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (_R2, _RL): _kicks((1, 0), (1, 1), (0, -2), (1, -2)),
    (_RL, _R2): _kicks((-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (_RL, _R0): _kicks((-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (_R0, _RL): _kicks((1, 0), (1, 1), (0, -2), (1, -2)),
}

_I: Dict[Tuple[Rotation, Rotation], Tuple[Point, ...]] = {
    (_R0, _RR): _kicks((-2, 0), (1, 0), (-2, -1), (1, 2)),
    (_RR, _R0): _kicks((2, 0), (-1, 0), (2, 1), (-1, -2)),
    (_RR, _R2): _kicks((-1, 0), (2, 0), (-1, 2), (2, -1)),
    (_R2, _RR): _kicks((1, 0), (-2, 0), (1, -2), (-2, 1)),
    (_R2, _RL): _kicks((2, 0), (-1, 0), (2, 1), (-1, -2)),
    (_RL, _R2): _kicks((-2, 0), (1, 0), (-2, -1), (1, 2)),
    (_RL, _R0): _kicks((1, 0), (-2, 0), (1, -2), (-2, 1)),
    (_R0, _RL): _kicks((-1, 0), (2, 0), (-1, 2), (2, -1)),
}

_TABLES: Dict[KickFamily, Dict[Tuple[Rotation, Rotation], Tuple[Point, ...]]] = {
    KickFamily.I: _I,
    KickFamily.JLSTZ: _JLSTZ,
}


def family_of(kind: PieceKind) -> KickFamily:
    k = PieceKind(kind)
    if k is PieceKind.I:
        return KickFamily.I
    if k is PieceKind.O:
        return KickFamily.O
    return KickFamily.JLSTZ


def get_wall_kicks(kind: PieceKind, src: Rotation, dst: Rotation) -> Tuple[Point, ...]:
    """
    Ordered candidate offsets for a rotation src -> dst, starting with (0, 0).

    The O piece has no kicks: only (0, 0) is returned.
    Raises ValueError for a transition that is not a single quarter turn.
    """
    fam = family_of(kind)
    if fam is KickFamily.O:
        return (ZERO_KICK,)
    key = (Rotation(src), Rotation(dst))
    try:
        table = _TABLES[fam][key]
    except KeyError as e:
        raise ValueError(f"no wall kicks for {fam.value} transition {key[0].name}->{key[1].name}") from e
    return (ZERO_KICK, *table)


__all__ = ["KickFamily", "ZERO_KICK", "family_of", "get_wall_kicks"]
