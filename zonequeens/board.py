from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Set

from zonequeens.forbidden import forbidden_cells
from zonequeens.grid import (
    Cell,
    Placements,
    ZoneMap,
    check_zone_map,
    conflicting_cells,
    diagonally_adjacent,
    in_bounds,
    zone_cells,
    zone_sizes,
)
from zonequeens.solver import column_priority, solve
from zonequeens.zones import generate_zone_map

LOGGER = logging.getLogger(__name__)


class PlacementOutcome(Enum):
    PLACED = "placed"
    REMOVED = "removed"
    REJECTED = "rejected"


class HintOutcome(Enum):
    PLACED = "placed"
    CORRECTED = "corrected"
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"


@dataclass(frozen=True)
class PlacementResult:
    outcome: PlacementOutcome
    cell: Optional[Cell] = None


@dataclass(frozen=True)
class HintResult:
    outcome: HintOutcome
    cell: Optional[Cell] = None


class Board:
    """An N x N zone-queens puzzle and the player's progress on it.

    The zone map is generated on construction and is always solvable for
    N >= 4. Queens are stored one per row; ``toggle_queen`` refuses any
    placement that would clash with the queens already on the board, and
    ``provide_hint`` completes the board one row at a time from a cached
    solution that is dropped whenever a queen moves.
    """

    def __init__(self, size: int, rng: Optional[random.Random] = None):
        if size < 1:
            raise ValueError(f"board size must be at least 1, got {size}")
        self.size = size
        self.rng = rng or random.Random()

        self._zone_map: ZoneMap = []
        self._placements: Placements = []
        self._marks: List[List[bool]] = []
        self._solution: Optional[List[int]] = None
        self._zone_cells: List[List[Cell]] = []
        self._zone_counts: List[int] = []
        self._priority: List[List[int]] = []
        self.regenerate()

    # ---------------- lifecycle ----------------
    def regenerate(self) -> None:
        """Replaces the zone map, clears queens and marks, re-seeds the cached solution."""
        zone_map, solution = generate_zone_map(self.size, self.rng)
        self._install(zone_map)
        self._solution = solution

    def load_zone_map(self, zone_map: Sequence[Sequence[int]]) -> None:
        """Installs a given zone map; queens, marks and the cached solution are cleared."""
        check_zone_map(zone_map, self.size)
        self._install([list(row) for row in zone_map])
        self._solution = None

    def _install(self, zone_map: ZoneMap) -> None:
        N = self.size
        self._zone_map = zone_map
        self._placements = [None] * N
        self._marks = [[False] * N for _ in range(N)]

        counts = zone_sizes(zone_map)
        self._zone_counts = [counts.get(z, 0) for z in range(N)]
        self._zone_cells = zone_cells(zone_map)
        self._priority = column_priority(zone_map)

    def reset_queens(self) -> None:
        self._placements = [None] * self.size
        self._solution = None

    def clear_marks(self) -> None:
        self._marks = [[False] * self.size for _ in range(self.size)]

    # ---------------- accessors ----------------
    @property
    def zone_map(self) -> ZoneMap:
        return [list(row) for row in self._zone_map]

    @property
    def placements(self) -> Placements:
        return list(self._placements)

    @property
    def marks(self) -> List[List[bool]]:
        return [list(row) for row in self._marks]

    @property
    def zone_counts(self) -> List[int]:
        return list(self._zone_counts)

    @property
    def placed_count(self) -> int:
        return sum(1 for c in self._placements if c is not None)

    def zone_of(self, row: int, col: int) -> int:
        self._check(row, col)
        return self._zone_map[row][col]

    def has_queen(self, row: int, col: int) -> bool:
        self._check(row, col)
        return self._placements[row] == col

    def is_marked(self, row: int, col: int) -> bool:
        self._check(row, col)
        return self._marks[row][col]

    def _check(self, row: int, col: int) -> None:
        if not in_bounds(row, col, self.size):
            raise ValueError(f"cell ({row}, {col}) is outside the {self.size}x{self.size} board")

    # ---------------- marks ----------------
    def set_mark(self, row: int, col: int, marked: bool) -> None:
        self._check(row, col)
        self._marks[row][col] = marked

    # ---------------- queens ----------------
    def can_place(self, row: int, col: int) -> bool:
        """True if a queen at (row, col) clashes with no queen in another row."""
        self._check(row, col)
        zone = self._zone_map[row][col]
        for r, c in enumerate(self._placements):
            if r == row or c is None:
                continue
            if c == col:
                return False
            if self._zone_map[r][c] == zone:
                return False
            if diagonally_adjacent(r, c, row, col):
                return False
        return True

    def toggle_queen(self, row: int, col: int) -> PlacementResult:
        self._check(row, col)
        if self._placements[row] == col:
            self._placements[row] = None
            self._marks[row][col] = False
            self._solution = None
            return PlacementResult(PlacementOutcome.REMOVED, (row, col))

        if not self.can_place(row, col):
            return PlacementResult(PlacementOutcome.REJECTED)

        self._placements[row] = col
        self._marks[row][col] = False
        self._solution = None
        return PlacementResult(PlacementOutcome.PLACED, (row, col))

    def conflicts(self) -> Set[Cell]:
        return conflicting_cells(self._placements, self._zone_map)

    @property
    def is_solved(self) -> bool:
        if any(c is None for c in self._placements):
            return False
        if len(set(self._placements)) != self.size:
            return False
        zones = {self._zone_map[r][c] for r, c in enumerate(self._placements)}
        if len(zones) != self.size:
            return False
        return not self.conflicts()

    def forbidden_cells(self) -> List[List[bool]]:
        return forbidden_cells(self._zone_map, self._placements, self._zone_cells)

    # ---------------- hints ----------------
    def provide_hint(self) -> HintResult:
        if self._solution is None:
            self._solution = solve(self._zone_map, self._placements, priority=self._priority)
        solution = self._solution
        if solution is None:
            LOGGER.debug("hint requested but the current queens admit no solution")
            return HintResult(HintOutcome.NO_SOLUTION)

        for row, col in enumerate(self._placements):
            if col is None:
                return HintResult(HintOutcome.PLACED, self._take(row, solution[row]))

        # One disagreeing row per call.
        for row, col in enumerate(self._placements):
            if col != solution[row]:
                return HintResult(HintOutcome.CORRECTED, self._take(row, solution[row]))

        return HintResult(HintOutcome.SOLVED)

    def _take(self, row: int, col: int) -> Cell:
        self._placements[row] = col
        self._marks[row][col] = False
        return row, col
