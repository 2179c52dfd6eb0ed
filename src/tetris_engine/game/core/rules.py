# src/tetris_engine/game/core/rules.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


def _default_line_points() -> Mapping[int, int]:
    return {1: 40, 2: 100, 3: 300, 4: 1200}


@dataclass(frozen=True)
class ScoreConfig:
    points_per_freeze: int = 4
    rows_per_level: int = 5
    line_points: Mapping[int, int] = field(default_factory=_default_line_points)


def level_for_rows(rows: int, cfg: ScoreConfig) -> int:
    """Levels start at 1 and go up every rows_per_level cleared rows."""
    return 1 + int(rows) // int(cfg.rows_per_level)


def score_for_clears(cleared: int, cfg: ScoreConfig, *, level: int = 1) -> int:
    """
    Points for `cleared` rows removed by a single freeze, scaled by level.

    Counts above the largest table entry score as the largest entry.
    """
    n = int(cleared)
    if n <= 0 or not cfg.line_points:
        return 0
    top = max(cfg.line_points)
    base = cfg.line_points.get(min(n, top), 0)
    return int(base) * int(level)


__all__ = ["ScoreConfig", "level_for_rows", "score_for_clears"]
