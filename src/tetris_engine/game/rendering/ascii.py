# src/tetris_engine/game/rendering/ascii.py
from __future__ import annotations

from typing import Optional

import numpy as np

from tetris_engine.game.core.constants import EMPTY_CELL


def board_to_ascii(
        grid: np.ndarray,
        *,
        visible_height: Optional[int] = None,
        filled: str = "*",
        empty: str = " ",
) -> str:
    """
    Render a grid snapshot (row 0 = floor) top row first.

    Rows at or above visible_height are headroom; a dashed line separates them from the
    playing field. The last line is the floor.
    """
    g = np.asarray(grid)
    if g.ndim != 2:
        raise ValueError(f"grid must be 2D, got shape {g.shape}")
    rows, w = g.shape
    vh = rows if visible_height is None else int(visible_height)

    lines: list[str] = []
    for y in range(rows - 1, -1, -1):
        cells = "".join(empty if int(v) == EMPTY_CELL else filled for v in g[y])
        lines.append(f"|{cells}|")
        if y == vh and vh > 0:
            lines.append(" " + "-" * w)
    lines.append("|" + "-" * w + "|")
    return "\n".join(lines)


__all__ = ["board_to_ascii"]
