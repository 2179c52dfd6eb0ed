# src/tetris_engine/config/game.py
from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple

from pydantic import Field, ValidationInfo, field_validator, model_validator

from tetris_engine.config.base import ConfigBase
from tetris_engine.game.core.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from tetris_engine.game.core.pieceset import PieceKind, parse_kind
from tetris_engine.game.core.rules import ScoreConfig

PieceRuleName = Literal["uniform", "bag7", "sequence"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where} must be an int-like value, got {value!r}") from e


class ScoringConfig(ConfigBase):
    points_per_freeze: int = Field(default=4, ge=0)
    rows_per_level: int = Field(default=5, gt=0)
    line_points: Dict[int, int] = Field(default_factory=lambda: {1: 40, 2: 100, 3: 300, 4: 1200})

    @field_validator("line_points")
    @classmethod
    def _check_line_points(cls, v: Dict[int, int]) -> Dict[int, int]:
        if not v:
            raise ValueError("scoring.line_points must not be empty")
        for rows, points in v.items():
            if int(rows) < 1:
                raise ValueError(f"scoring.line_points keys must be >= 1, got {rows}")
            if int(points) < 0:
                raise ValueError(f"scoring.line_points values must be >= 0, got {points}")
        return dict(sorted(v.items()))

    def to_rules(self) -> ScoreConfig:
        return ScoreConfig(
            points_per_freeze=int(self.points_per_freeze),
            rows_per_level=int(self.rows_per_level),
            line_points=dict(self.line_points),
        )


class GameConfig(ConfigBase):
    """
    Engine-facing config: board size, piece source and scoring policy.

      game:
        width: 10
        height: 20
        seed: 7            # optional; omit for a fresh RNG
        piece_rule: sequence
        sequence: [I, O, T]
    """

    width: int = Field(default=DEFAULT_WIDTH, gt=0)
    height: int = Field(default=DEFAULT_HEIGHT, gt=0)
    seed: Optional[int] = Field(default=None, ge=0)
    piece_rule: PieceRuleName = "uniform"
    sequence: Tuple[PieceKind, ...] = ()
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)

    @field_validator("width", "height", mode="before")
    @classmethod
    def _dims_int(cls, v: object, info: ValidationInfo) -> int:
        return _as_int(v, where=f"game.{info.field_name}")

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return _as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @field_validator("sequence", mode="before")
    @classmethod
    def _parse_sequence(cls, v: object) -> Tuple[PieceKind, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            items = [s for s in v.replace(",", " ").split() if s]
        elif isinstance(v, (list, tuple)):
            items = list(v)
        else:
            raise ValueError(f"game.sequence must be a list or a comma-separated string, got {type(v)!r}")
        return tuple(parse_kind(s) for s in items)

    @model_validator(mode="after")
    def _check_sequence_rule(self) -> "GameConfig":
        if self.piece_rule == "sequence" and not self.sequence:
            raise ValueError("game.sequence must be non-empty when piece_rule is 'sequence'")
        if self.piece_rule != "sequence" and self.sequence:
            raise ValueError(f"game.sequence is only allowed with piece_rule 'sequence' (got {self.piece_rule!r})")
        return self


__all__ = ["GameConfig", "PieceRuleName", "ScoringConfig"]
