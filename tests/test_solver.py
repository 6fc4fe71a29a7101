import pytest

from zonequeens.solver import column_priority, solve
from tests.helpers import COLUMN_ZONES, QUADRANT_ZONES, THREE_ZONES, assert_valid_solution


def test_column_priority_prefers_small_zones():
    zone_map = [
        [0, 0, 0, 1],
        [0, 0, 2, 2],
        [3, 3, 3, 3],
        [3, 3, 3, 3],
    ]
    priority = column_priority(zone_map)
    assert priority[0] == [3, 0, 1, 2]
    assert priority[1] == [2, 3, 0, 1]
    assert priority[2] == [0, 1, 2, 3]


def test_solves_empty_board():
    solution = solve(COLUMN_ZONES)
    assert solution in ([1, 3, 0, 2], [2, 0, 3, 1])


def test_solves_quadrants():
    assert solve(QUADRANT_ZONES) in ([1, 3, 0, 2], [2, 0, 3, 1])


def test_too_few_zones_has_no_solution():
    assert solve(THREE_ZONES) is None


def test_keeps_commitments():
    solution = solve(COLUMN_ZONES, [2, None, None, None])
    assert solution == [2, 0, 3, 1]


def test_commitments_without_completion():
    assert solve(COLUMN_ZONES, [0, None, None, None]) is None


@pytest.mark.parametrize(
    "placements",
    [
        [1, None, 1, None],   # column repeated
        [1, 2, None, None],   # touching diagonally
        [None, 3, None, 3],   # column repeated further apart
    ],
)
def test_rejects_inconsistent_commitments(placements):
    assert solve(COLUMN_ZONES, placements) is None


def test_rejects_repeated_zone():
    zone_map = [
        [0, 0, 1, 1],
        [2, 2, 1, 1],
        [2, 3, 3, 3],
        [2, 3, 3, 3],
    ]
    assert solve(zone_map) == [1, 3, 0, 2]
    # (1, 1) and (3, 0) share a zone.
    assert solve(zone_map, [None, 1, None, 0]) is None


def test_does_not_mutate_inputs():
    placements = [None, 3, None, None]
    zone_map = [list(row) for row in COLUMN_ZONES]
    solution = solve(zone_map, placements)
    assert solution == [1, 3, 0, 2]
    assert placements == [None, 3, None, None]
    assert zone_map == COLUMN_ZONES


def test_complete_consistent_placements_are_returned():
    assert solve(COLUMN_ZONES, [1, 3, 0, 2]) == [1, 3, 0, 2]


def test_commitment_out_of_range():
    with pytest.raises(ValueError):
        solve(COLUMN_ZONES, [4, None, None, None])
    with pytest.raises(ValueError):
        solve(COLUMN_ZONES, [None, None])


def test_single_cell_board():
    assert solve([[0]]) == [0]


def test_sizes_two_and_three_are_unsolvable():
    assert solve([[0, 1], [0, 1]]) is None
    assert solve([[0, 1, 2]] * 3) is None


def test_larger_board_solution_is_valid():
    N = 10
    zone_map = [[c for c in range(N)] for _ in range(N)]
    solution = solve(zone_map)
    assert solution is not None
    assert_valid_solution(zone_map, solution)


def test_node_budget_gives_up():
    assert solve(COLUMN_ZONES) is not None
    assert solve(COLUMN_ZONES, max_nodes=1) is None


def test_node_budget_leaves_placements_alone():
    placements = [1, None, None, None]
    assert solve(COLUMN_ZONES, placements, max_nodes=1) is None
    assert placements == [1, None, None, None]
