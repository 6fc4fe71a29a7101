import random
from concurrent.futures import Executor, Future

from zonequeens.board import Board
from zonequeens.grid import zone_cells, zones_connected

COLUMN_ZONES = [
    [0, 1, 2, 3],
    [0, 1, 2, 3],
    [0, 1, 2, 3],
    [0, 1, 2, 3],
]

QUADRANT_ZONES = [
    [0, 0, 1, 1],
    [0, 0, 1, 1],
    [2, 2, 3, 3],
    [2, 2, 3, 3],
]

THREE_ZONES = [
    [0, 0, 1, 1],
    [0, 0, 1, 1],
    [2, 2, 2, 2],
    [2, 2, 2, 2],
]


def seeded_board(size, seed=0):
    return Board(size, rng=random.Random(seed))


def board_with_zones(zone_map):
    board = seeded_board(len(zone_map))
    board.load_zone_map(zone_map)
    return board


def assert_partition(zone_map, N):
    assert len(zone_map) == N
    assert all(len(row) == N for row in zone_map)
    assert all(0 <= z < N for row in zone_map for z in row)
    cells = zone_cells(zone_map)
    assert sum(len(c) for c in cells) == N * N
    assert all(cells), "every zone id must be used"
    assert zones_connected(zone_map)


def assert_valid_solution(zone_map, solution):
    N = len(zone_map)
    assert len(solution) == N
    assert sorted(solution) == list(range(N))
    assert len({zone_map[r][c] for r, c in enumerate(solution)}) == N
    for r in range(N - 1):
        assert abs(solution[r] - solution[r + 1]) != 1


class ImmediateExecutor(Executor):
    """Runs submitted work on the spot."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class ManualExecutor(Executor):
    """Holds submitted work until the test runs it."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def run(self, index=0):
        future, fn, args, kwargs = self.jobs.pop(index)
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
