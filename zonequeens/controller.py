from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional

from zonequeens import config
from zonequeens.board import Board, HintOutcome, HintResult, PlacementOutcome, PlacementResult

LOGGER = logging.getLogger(__name__)

REJECTED_MESSAGE = "Can't place: row, column or zone taken, or touching diagonally"


@dataclass
class _Generation:
    token: int
    size: int
    message: str
    future: Future


class PuzzleController:
    """Everything the window needs from the engine, plus the user-facing message.

    New boards are built on a worker thread. Each request bumps a token and
    only the board matching the latest token is adopted; older results are
    dropped when they arrive. Board input is ignored while a board is loading.
    """

    def __init__(
        self,
        size: int = config.DEFAULT_BOARD_SIZE,
        *,
        executor: Optional[Executor] = None,
        board_factory: Callable[[int], Board] = Board,
    ):
        self._board_factory = board_factory
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="zonequeens-board")
        self._token = 0
        self._pending: List[_Generation] = []

        self.board = board_factory(size)
        self.board_size = size
        self.easy_mode = False
        self.message = "Tap a cell to mark it, tap a marked cell to place a queen."

    # ---------------- read side ----------------
    @property
    def loading(self) -> bool:
        return bool(self._pending)

    @property
    def size_options(self) -> List[int]:
        return list(range(config.MIN_BOARD_SIZE, config.MAX_BOARD_SIZE + 1))

    def zone_color(self, r: int, c: int) -> str:
        return config.PALETTE[self.board.zone_of(r, c) % len(config.PALETTE)]

    def marks_view(self) -> List[List[bool]]:
        """Player marks, merged with the forbidden cells while easy mode is on."""
        marks = self.board.marks
        if not self.easy_mode:
            return marks
        blocked = self.board.forbidden_cells()
        N = self.board.size
        for r in range(N):
            for c in range(N):
                if blocked[r][c] and not self.board.has_queen(r, c):
                    marks[r][c] = True
        return marks

    # ---------------- board input ----------------
    def tap_cell(self, r: int, c: int) -> None:
        """Marks an empty cell; a marked cell gets a queen, a queen is removed."""
        if self.loading:
            return
        if self.board.has_queen(r, c):
            self._report(self.board.toggle_queen(r, c))
            return

        if self.board.is_marked(r, c):
            self.board.set_mark(r, c, False)
            result = self.board.toggle_queen(r, c)
            if result.outcome is PlacementOutcome.REJECTED:
                self.board.set_mark(r, c, True)
            self._report(result)
            return

        self.board.set_mark(r, c, True)
        self.message = f"({r + 1}, {c + 1}) marked"

    def toggle_queen(self, r: int, c: int) -> None:
        if self.loading:
            return
        self._report(self.board.toggle_queen(r, c))

    def paint_mark(self, r: int, c: int) -> None:
        if self.loading or self.board.has_queen(r, c):
            return
        self.board.set_mark(r, c, True)

    def hint(self) -> None:
        if self.loading:
            self.message = "Still generating the board, hold on."
            return
        self._report_hint(self.board.provide_hint())

    def reset_queens(self) -> None:
        if self.loading:
            return
        self.board.reset_queens()
        self.message = "All queens removed."

    def clear_board(self) -> None:
        if self.loading:
            return
        self.board.reset_queens()
        self.board.clear_marks()
        self.message = "Queens and marks cleared."

    def set_easy_mode(self, enabled: bool) -> None:
        if enabled == self.easy_mode:
            return
        self.easy_mode = enabled
        self.message = "Easy mode on: blocked cells are marked for you." if enabled else "Easy mode off."

    def _report(self, result: PlacementResult) -> None:
        if result.outcome is PlacementOutcome.REJECTED:
            self.message = REJECTED_MESSAGE
            return
        r, c = result.cell
        if result.outcome is PlacementOutcome.REMOVED:
            self.message = f"Queen removed from ({r + 1}, {c + 1})"
        elif self.board.is_solved:
            self.message = "Solved!"
        else:
            self.message = f"Queen placed at ({r + 1}, {c + 1})"

    def _report_hint(self, result: HintResult) -> None:
        if result.outcome is HintOutcome.PLACED:
            r, c = result.cell
            self.message = f"Hint: row {r + 1} goes in column {c + 1}"
        elif result.outcome is HintOutcome.CORRECTED:
            r, c = result.cell
            self.message = f"Hint: row {r + 1} moved to column {c + 1}"
        elif result.outcome is HintOutcome.SOLVED:
            self.message = "Nothing left to hint, the board is solved!"
        else:
            self.message = "No solution from here. Remove some queens and try again."

    # ---------------- generation ----------------
    def regenerate(self) -> None:
        size = self.board_size
        self.message = f"Generating a {size}x{size} board..."
        self._generate(size, "Tap a cell to mark it, tap a marked cell to place a queen.")

    def set_board_size(self, size: int) -> None:
        size = config.clamp_board_size(size)
        if size == self.board_size:
            return
        self.message = f"Generating a {size}x{size} board..."
        self._generate(size, f"New {size}x{size} board ready.")

    def _generate(self, size: int, message: str) -> None:
        self._token += 1
        LOGGER.debug("generating %dx%d board (token %d)", size, size, self._token)
        future = self._executor.submit(self._board_factory, size)
        self._pending.append(_Generation(self._token, size, message, future))
        self.poll()

    def poll(self) -> bool:
        """Adopts a finished board if it is the latest one requested. Returns True if adopted."""
        adopted = False
        waiting: List[_Generation] = []
        for gen in self._pending:
            if not gen.future.done():
                waiting.append(gen)
                continue
            if gen.token != self._token:
                LOGGER.debug("dropping superseded %dx%d board (token %d)", gen.size, gen.size, gen.token)
                continue
            try:
                board = gen.future.result()
            except Exception:
                LOGGER.exception("board generation failed for %dx%d", gen.size, gen.size)
                self.message = "Could not generate a board. Press R to retry."
                continue
            LOGGER.debug("finished %dx%d board (token %d)", gen.size, gen.size, gen.token)
            self.board = board
            self.board_size = gen.size
            self.message = gen.message
            adopted = True
        self._pending = waiting
        return adopted

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
