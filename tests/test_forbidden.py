from zonequeens.forbidden import forbidden_cells
from tests.helpers import QUADRANT_ZONES


def test_empty_board_has_no_forbidden_cells(quadrant_board):
    assert quadrant_board.forbidden_cells() == [[False] * 4 for _ in range(4)]


def test_queen_blocks_row_column_zone_and_diagonals(quadrant_board):
    quadrant_board.toggle_queen(2, 2)
    blocked = quadrant_board.forbidden_cells()
    assert blocked[2][0]      # row
    assert blocked[0][2]      # column
    assert blocked[3][3]      # zone
    assert blocked[1][1]      # diagonal neighbour
    assert blocked[1][3]      # diagonal neighbour
    assert not blocked[2][2]  # the queen itself
    assert not blocked[0][0]
    assert not blocked[0][1]
    assert not blocked[1][0]


def test_placed_queens_are_never_forbidden():
    # Two queens whose rules would otherwise cover each other.
    blocked = forbidden_cells(QUADRANT_ZONES, [1, None, 0, None])
    assert not blocked[0][1]
    assert not blocked[2][0]
    assert blocked[1][0]
    assert not blocked[3][3]


def test_calculator_matches_board(quadrant_board):
    quadrant_board.toggle_queen(0, 1)
    quadrant_board.toggle_queen(3, 3)
    expected = forbidden_cells(QUADRANT_ZONES, quadrant_board.placements)
    assert quadrant_board.forbidden_cells() == expected
    assert sum(map(sum, expected)) == 13
