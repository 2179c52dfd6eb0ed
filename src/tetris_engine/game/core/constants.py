# src/tetris_engine/game/core/constants.py
from __future__ import annotations

# Board / cell encoding
EMPTY_CELL: int = 0

# Default playing field
DEFAULT_WIDTH: int = 10
DEFAULT_HEIGHT: int = 20

# Empty rows added above the frozen rows in observer snapshots
HEADROOM_ROWS: int = 4

# Tetromino size
CELLS_PER_PIECE: int = 4
