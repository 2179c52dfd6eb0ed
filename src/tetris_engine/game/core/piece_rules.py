# src/tetris_engine/game/core/piece_rules.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from tetris_engine.game.core.pieceset import PieceKind, parse_kinds


class PieceRule(ABC):
    """
    Source of upcoming piece kinds.

    The board calls reset() when a game starts (and when its piece stream is restarted),
    then next_piece() each time it needs a new preview. Randomness must come from the
    generator handed to reset(); rules never seed their own.
    """

    @abstractmethod
    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        raise NotImplementedError

    @abstractmethod
    def next_piece(self) -> PieceKind:
        raise NotImplementedError


@dataclass
class _RandomRule(PieceRule):
    _rng: np.random.Generator | None = field(default=None, repr=False)
    _kinds: tuple[PieceKind, ...] = ()

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        pool = tuple(PieceKind(k) for k in kinds)
        if not pool:
            raise ValueError(f"{type(self).__name__} requires non-empty kinds")
        self._rng = rng
        self._kinds = pool

    def _require_rng(self) -> np.random.Generator:
        if self._rng is None:
            raise RuntimeError(f"{type(self).__name__}.reset() must be called before next_piece()")
        return self._rng


@dataclass
class UniformPieceRule(_RandomRule):
    """Every kind equally likely on every draw."""

    def next_piece(self) -> PieceKind:
        rng = self._require_rng()
        return self._kinds[int(rng.integers(0, len(self._kinds)))]


@dataclass
class SequencePieceRule(PieceRule):
    """
    Fixed replay sequence, consumed cyclically. reset() rewinds the cursor to 0.

    The RNG and kinds passed to reset() are ignored.
    """

    sequence: tuple[PieceKind, ...] = ()
    _index: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self.sequence = parse_kinds(self.sequence)
        if not self.sequence:
            raise ValueError("SequencePieceRule requires a non-empty sequence")

    @property
    def index(self) -> int:
        return int(self._index)

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        self._index = 0

    def next_piece(self) -> PieceKind:
        self._index %= len(self.sequence)
        kind = self.sequence[self._index]
        self._index += 1
        return kind


@dataclass
class BagPieceRule(_RandomRule):
    """
    Shuffled-bag randomizer: each bag holds `bag_copies` of every kind and is dealt out
    completely before the next one is shuffled. bag_copies=1 is the usual 7-bag.
    """

    bag_copies: int = 1
    _bag: list[PieceKind] = field(default_factory=list, repr=False)

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        if int(self.bag_copies) < 1:
            raise ValueError(f"BagPieceRule.bag_copies must be >= 1 (got {self.bag_copies})")
        super().reset(rng=rng, kinds=kinds)
        self._bag = []

    def next_piece(self) -> PieceKind:
        rng = self._require_rng()
        if not self._bag:
            pool = list(self._kinds) * int(self.bag_copies)
            self._bag = [pool[i] for i in rng.permutation(len(pool))]
        return self._bag.pop()


def make_piece_rule(name: str, *, sequence: Sequence[object] = ()) -> PieceRule:
    rule = str(name).strip().lower()
    if rule == "uniform":
        return UniformPieceRule()
    if rule == "bag7":
        return BagPieceRule(bag_copies=1)
    if rule == "sequence":
        return SequencePieceRule(sequence=parse_kinds(sequence))
    raise ValueError(f"piece_rule must be 'uniform'|'bag7'|'sequence', got {name!r}")


__all__ = [
    "BagPieceRule",
    "PieceRule",
    "SequencePieceRule",
    "UniformPieceRule",
    "make_piece_rule",
]
