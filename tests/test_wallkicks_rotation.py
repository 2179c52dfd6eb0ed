# tests/test_wallkicks_rotation.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.game.core.board import Board
from tetris_engine.game.core.movable import MovablePiece
from tetris_engine.game.core.pieceset import PieceKind
from tetris_engine.game.core.rotation import collides, is_legal, try_rotate
from tetris_engine.game.core.types import Point, Rotation
from tetris_engine.game.core.wallkicks import ZERO_KICK, KickFamily, family_of, get_wall_kicks

_QUARTER_TURNS = [(r, r.cw()) for r in Rotation] + [(r, r.ccw()) for r in Rotation]


def test_kick_families() -> None:
    assert family_of(PieceKind.I) is KickFamily.I
    assert family_of(PieceKind.O) is KickFamily.O
    for kind in (PieceKind.J, PieceKind.L, PieceKind.S, PieceKind.T, PieceKind.Z):
        assert family_of(kind) is KickFamily.JLSTZ


def test_every_quarter_turn_starts_with_zero_kick() -> None:
    for kind in (PieceKind.I, PieceKind.T):
        for src, dst in _QUARTER_TURNS:
            kicks = get_wall_kicks(kind, src, dst)
            assert kicks[0] == ZERO_KICK
            assert len(kicks) == 5


def test_known_srs_entries() -> None:
    assert get_wall_kicks(PieceKind.T, Rotation.START, Rotation.RIGHT)[1:] == (
        Point(-1, 0),
        Point(-1, 1),
        Point(0, -2),
        Point(-1, -2),
    )
    assert get_wall_kicks(PieceKind.I, Rotation.START, Rotation.RIGHT)[1:] == (
        Point(-2, 0),
        Point(1, 0),
        Point(-2, -1),
        Point(1, 2),
    )
    # I and JLSTZ tables differ
    assert get_wall_kicks(PieceKind.I, Rotation.LEFT, Rotation.START) != get_wall_kicks(
        PieceKind.S, Rotation.LEFT, Rotation.START
    )


def test_o_piece_has_only_the_zero_kick() -> None:
    assert get_wall_kicks(PieceKind.O, Rotation.START, Rotation.RIGHT) == (ZERO_KICK,)


def test_half_turn_has_no_kick_table() -> None:
    with pytest.raises(ValueError, match="no wall kicks"):
        get_wall_kicks(PieceKind.T, Rotation.START, Rotation.REVERSE)


def test_collision_rules_have_walls_and_floor_but_no_ceiling() -> None:
    board = Board.empty(h=20, w=10)
    # T START cells: (x+1, y+1), (x, y), (x+1, y), (x+2, y)
    assert not collides(board=board, piece=MovablePiece(PieceKind.T, Point(0, 0)))
    assert collides(board=board, piece=MovablePiece(PieceKind.T, Point(-1, 0)))
    assert collides(board=board, piece=MovablePiece(PieceKind.T, Point(8, 0)))
    assert collides(board=board, piece=MovablePiece(PieceKind.T, Point(0, -1)))
    assert is_legal(board=board, piece=MovablePiece(PieceKind.T, Point(3, 25)))

    board.grid[0, 1] = 3
    assert collides(board=board, piece=MovablePiece(PieceKind.T, Point(0, 0)))


def test_unobstructed_rotation_uses_zero_kick() -> None:
    board = Board.empty(h=20, w=10)
    p = MovablePiece(PieceKind.T, Point(4, 10))
    assert try_rotate(board=board, piece=p, dir=+1) == MovablePiece(PieceKind.T, Point(4, 10), Rotation.RIGHT)
    assert try_rotate(board=board, piece=p, dir=-1) == MovablePiece(PieceKind.T, Point(4, 10), Rotation.LEFT)


def test_t_against_right_wall_is_kicked_left() -> None:
    board = Board.empty(h=20, w=10)
    # LEFT occupies local columns 0..1; at x=8 it touches the right wall
    p = MovablePiece(PieceKind.T, Point(8, 5), Rotation.LEFT)
    assert is_legal(board=board, piece=p)

    out = try_rotate(board=board, piece=p, dir=+1)

    assert out == MovablePiece(PieceKind.T, Point(7, 5), Rotation.START)
    assert is_legal(board=board, piece=out)


def test_i_against_right_wall_is_kicked_left() -> None:
    board = Board.empty(h=20, w=10)
    p = MovablePiece(PieceKind.I, Point(7, 5), Rotation.RIGHT)
    assert {c.x for c in p.board_points()} == {9}

    out = try_rotate(board=board, piece=p, dir=+1)

    assert out == MovablePiece(PieceKind.I, Point(6, 5), Rotation.REVERSE)


def test_rotation_rejected_when_no_candidate_fits() -> None:
    board = Board.empty(h=20, w=10)
    p = MovablePiece(PieceKind.T, Point(8, 5), Rotation.LEFT)
    board.grid[:, :] = 1
    for c in p.board_points():
        board.grid[c.y, c.x] = 0

    assert try_rotate(board=board, piece=p, dir=+1) == p
    assert try_rotate(board=board, piece=p, dir=-1) == p


def test_o_rotation_never_changes_cells_and_ignores_kick_table(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "tetris_engine.game.core.rotation.get_wall_kicks",
        lambda *_a: (Point(3, 3), Point(-2, 1)),
    )
    board = Board.empty(h=20, w=10)
    board.grid[0, :] = 1
    p = MovablePiece(PieceKind.O, Point(3, 1))
    cells = set(p.board_points())

    out = p
    for _ in range(4):
        out = try_rotate(board=board, piece=out, dir=+1)
        assert set(out.board_points()) == cells
    assert out.rotation is Rotation.START


def test_rotation_result_is_always_legal_on_a_random_board() -> None:
    rng = np.random.default_rng(11)
    board = Board.empty(h=20, w=10)
    board.grid[:8, :] = (rng.random((8, 10)) < 0.5).astype(np.uint8)

    for kind in PieceKind:
        for rot in Rotation:
            for x in range(-1, 10):
                for y in range(6, 12):
                    p = MovablePiece(kind, Point(x, y), rot)
                    if not is_legal(board=board, piece=p):
                        continue
                    for d in (+1, -1):
                        assert is_legal(board=board, piece=try_rotate(board=board, piece=p, dir=d))
