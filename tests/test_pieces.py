from __future__ import annotations

import random

import pytest

from falling_blocks.game import Grid, Piece, PieceColor, PiecePlacementError, ShapeKind, color_for


@pytest.mark.parametrize("kind", list(ShapeKind))
def test_every_template_has_four_blocks_and_is_square(kind):
    piece = Piece(kind)
    assert piece.template.count() == 4
    assert piece.template.column_count == piece.template.row_count


@pytest.mark.parametrize("kind", list(ShapeKind))
def test_four_rotations_return_to_original(kind):
    piece = Piece(kind)
    original = piece.template.copy()
    for _ in range(4):
        piece.rotate_clockwise()
        assert piece.template.count() == 4
    assert piece.template == original
    for _ in range(4):
        piece.rotate_counter_clockwise()
    assert piece.template == original


def test_clockwise_rotation_of_l():
    piece = Piece(ShapeKind.L)
    piece.rotate_clockwise()
    assert piece.template == Grid.from_rows([[0, 1, 0], [0, 1, 0], [0, 1, 1]])


def test_counter_clockwise_undoes_clockwise():
    piece = Piece(ShapeKind.T)
    before = piece.template.copy()
    piece.rotate_clockwise()
    piece.rotate_counter_clockwise()
    assert piece.template == before


def test_positions_are_offset_by_anchor():
    piece = Piece(ShapeKind.STRAIGHT, anchor_x=3, anchor_y=5)
    assert piece.get_positions() == [(6, 3), (6, 4), (6, 5), (6, 6)]


def test_positions_off_board_raise():
    piece = Piece(ShapeKind.SQUARE, anchor_x=-1, anchor_y=0)
    assert piece.get_positions_unsafe() == [(0, -1), (0, 0), (1, -1), (1, 0)]
    with pytest.raises(PiecePlacementError):
        piece.get_positions()


def test_straight_rotated_can_sit_above_zero_anchor():
    piece = Piece(ShapeKind.STRAIGHT, anchor_x=-2, anchor_y=0)
    piece.rotate_clockwise()
    assert all(col == 0 for _, col in piece.get_positions())


def test_unsafe_moves_translate_anchor():
    piece = Piece(ShapeKind.T, anchor_x=4, anchor_y=2)
    piece.move_down_unsafe()
    piece.move_left_unsafe()
    piece.move_left_unsafe()
    piece.move_right_unsafe()
    assert (piece.anchor_x, piece.anchor_y) == (3, 3)
    piece.place_at(0, 0)
    assert (piece.anchor_x, piece.anchor_y) == (0, 0)


def test_swap_figures_keeps_anchors():
    a = Piece(ShapeKind.T, anchor_x=1, anchor_y=2)
    b = Piece(ShapeKind.STRAIGHT, anchor_x=5, anchor_y=6)
    a.rotate_clockwise()
    rotated_t = a.template.copy()
    a.swap_figures(b)
    assert a.kind == ShapeKind.STRAIGHT and b.kind == ShapeKind.T
    assert b.template == rotated_t
    assert (a.anchor_x, a.anchor_y, b.anchor_x, b.anchor_y) == (1, 2, 5, 6)


def test_refresh_restores_spawn_orientation():
    piece = Piece(ShapeKind.WORM)
    original = piece.template.copy()
    piece.rotate_clockwise()
    assert piece.template != original
    piece.refresh()
    assert piece.template == original


def test_randomize_uses_canonical_template():
    rng = random.Random(3)
    piece = Piece(ShapeKind.SQUARE)
    seen = set()
    for _ in range(200):
        piece.randomize(rng)
        seen.add(piece.kind)
        assert piece.template == Piece(piece.kind).template
    assert seen == set(ShapeKind)


def test_color_mapping_is_one_to_one():
    colors = {color_for(kind) for kind in ShapeKind}
    assert colors == set(PieceColor)
    assert Piece(ShapeKind.SQUARE).color == PieceColor.RED
    assert Piece(ShapeKind.STRAIGHT).color == PieceColor.LIGHT_BLUE


def test_copy_is_independent():
    piece = Piece(ShapeKind.L, 2, 3)
    clone = piece.copy()
    clone.rotate_clockwise()
    clone.move_down_unsafe()
    assert piece.template == Piece(ShapeKind.L).template
    assert piece.anchor_y == 3
