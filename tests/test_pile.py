from __future__ import annotations

from falling_blocks.game import Piece, PieceColor, Pile, ShapeKind

from conftest import fill_row


def assert_consistent(pile: Pile) -> None:
    for row in range(pile.rows):
        for col in range(pile.columns):
            assert pile.contains(row, col) == ((row, col) in pile.colors)


def put(pile: Pile, row: int, col: int, color: PieceColor) -> None:
    pile.grid.set(row, col, True)
    pile.colors[(row, col)] = color


def test_add_records_cells_and_colors():
    pile = Pile(10, 20)
    piece = Piece(ShapeKind.T, anchor_x=4, anchor_y=18)
    pile.add(piece)
    assert sorted(pile.colors) == [(18, 5), (19, 4), (19, 5), (19, 6)]
    assert set(pile.colors.values()) == {PieceColor.LIGHT_YELLOW}
    assert pile.height() == 2
    assert_consistent(pile)


def test_cleanup_on_empty_board_is_noop():
    pile = Pile(10, 20)
    assert pile.cleanup_full_lines() == 0
    assert pile.grid.count() == 0
    assert pile.colors == {}


def test_cleanup_without_full_rows_keeps_everything():
    pile = Pile(4, 5)
    put(pile, 0, 1, PieceColor.RED)
    put(pile, 4, 2, PieceColor.BLUE)
    fill_row(pile, 3, skip={0})
    before = dict(pile.colors)
    assert pile.cleanup_full_lines() == 0
    assert pile.colors == before
    assert_consistent(pile)


def test_single_full_row_shifts_rows_above_by_one():
    pile = Pile(3, 4)
    put(pile, 1, 2, PieceColor.GREEN)
    put(pile, 2, 0, PieceColor.MAGENTA)
    fill_row(pile, 3)

    assert pile.cleanup_full_lines() == 1
    assert pile.colors == {(3, 0): PieceColor.MAGENTA, (2, 2): PieceColor.GREEN}
    assert_consistent(pile)


def test_two_separate_full_rows_compact_in_one_pass():
    pile = Pile(4, 6)
    put(pile, 0, 0, PieceColor.RED)
    put(pile, 1, 1, PieceColor.BLUE)
    put(pile, 2, 2, PieceColor.GREEN)
    fill_row(pile, 3)
    put(pile, 4, 3, PieceColor.MAGENTA)
    fill_row(pile, 5)

    assert pile.cleanup_full_lines() == 2
    assert pile.colors == {
        (2, 0): PieceColor.RED,
        (3, 1): PieceColor.BLUE,
        (4, 2): PieceColor.GREEN,
        (5, 3): PieceColor.MAGENTA,
    }
    assert not pile.grid.row_slice(0).any()
    assert not pile.grid.row_slice(1).any()
    assert_consistent(pile)


def test_rows_above_both_clears_drop_by_two_on_tall_board():
    pile = Pile(5, 20)
    put(pile, 0, 4, PieceColor.YELLOW)
    put(pile, 1, 3, PieceColor.RED)
    put(pile, 2, 0, PieceColor.BLUE)
    fill_row(pile, 3)
    put(pile, 4, 1, PieceColor.GREEN)
    fill_row(pile, 5)

    assert pile.cleanup_full_lines() == 2
    # nothing below row 5, so everything ends up compacted against it
    assert pile.colors == {
        (2, 4): PieceColor.YELLOW,
        (3, 3): PieceColor.RED,
        (4, 0): PieceColor.BLUE,
        (5, 1): PieceColor.GREEN,
    }
    assert_consistent(pile)


def test_adjacent_full_rows_at_bottom():
    pile = Pile(3, 5)
    put(pile, 2, 1, PieceColor.RED)
    fill_row(pile, 3)
    fill_row(pile, 4)
    assert pile.cleanup_full_lines() == 2
    assert pile.colors == {(4, 1): PieceColor.RED}
    assert_consistent(pile)


def test_complete_lines_with_extra_cells():
    pile = Pile(4, 6)
    fill_row(pile, 5, skip={1, 2})
    fill_row(pile, 4, skip={0})
    extra = [(5, 1), (5, 2), (4, 1), (3, 1)]
    assert pile.get_complete_lines_with(extra) == [5]
    # nothing was written
    assert not pile.contains(5, 1)
    assert pile.get_complete_lines_with([(4, 0), (5, 1), (5, 2), (3, 0)]) == [4, 5]


def test_reset_empties_the_pile():
    pile = Pile(4, 4)
    fill_row(pile, 2)
    pile.reset()
    assert pile.grid.count() == 0 and pile.colors == {}
    assert pile.height() == 0
