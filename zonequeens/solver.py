from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from zonequeens.grid import Placements, zone_sizes

LOGGER = logging.getLogger(__name__)


class _OutOfNodes(Exception):
    pass


# ============================================================
# Branching order
# ============================================================
def column_priority(zone_map: Sequence[Sequence[int]]) -> List[List[int]]:
    """Per row, the columns ordered by ascending size of the zone they fall in.

    Small zones are the most constrained, so the solver tries them first.
    Ties keep column order.
    """
    N = len(zone_map)
    counts = zone_sizes(zone_map)
    return [
        sorted(range(N), key=lambda c, row=zone_map[r]: (counts[row[c]], c))
        for r in range(N)
    ]


# ============================================================
# Backtracking solver (MRV + forward checking)
# ============================================================
def solve(
    zone_map: Sequence[Sequence[int]],
    placements: Optional[Sequence[Optional[int]]] = None,
    *,
    priority: Optional[Sequence[Sequence[int]]] = None,
    max_nodes: Optional[int] = None,
) -> Optional[List[int]]:
    """Completes ``placements`` into one column per row, or returns None if impossible.

    ``placements`` holds a column or None per row; committed rows are kept as
    they are. Column and zone usage are tracked as bit masks, so any board
    size works. Neither argument is mutated.

    With ``max_nodes`` the search gives up after visiting that many nodes and
    returns None as well, so None then means "not found within budget".
    """
    N = len(zone_map)
    if placements is None:
        placements = [None] * N
    if len(placements) != N:
        raise ValueError(f"expected {N} row placements, got {len(placements)}")
    if priority is None:
        priority = column_priority(zone_map)

    placement: Placements = [None] * N
    used_cols = 0
    used_zones = 0
    unresolved: List[int] = []

    # Commitments must already be consistent with each other.
    for r in range(N):
        c = placements[r]
        if c is None:
            unresolved.append(r)
            continue
        if not 0 <= c < N:
            raise ValueError(f"row {r} committed to column {c} outside [0, {N})")
        col_bit = 1 << c
        if used_cols & col_bit:
            return None
        zone_bit = 1 << zone_map[r][c]
        if used_zones & zone_bit:
            return None
        if r > 0 and placements[r - 1] is not None and abs(placements[r - 1] - c) == 1:
            return None
        if r + 1 < N and placements[r + 1] is not None and abs(placements[r + 1] - c) == 1:
            return None
        placement[r] = c
        used_cols |= col_bit
        used_zones |= zone_bit

    def candidates(r: int, cols: int, zones: int, limit: Optional[int] = None) -> List[int]:
        out: List[int] = []
        row_zones = zone_map[r]
        above = placement[r - 1] if r > 0 else None
        below = placement[r + 1] if r + 1 < N else None
        for c in priority[r]:
            if cols & (1 << c):
                continue
            if zones & (1 << row_zones[c]):
                continue
            if above is not None and abs(above - c) == 1:
                continue
            if below is not None and abs(below - c) == 1:
                continue
            out.append(c)
            if limit is not None and len(out) >= limit:
                break
        return out

    def still_open(r: int, cols: int, zones: int) -> bool:
        if r < 0 or r >= N or placement[r] is not None:
            return True
        return bool(candidates(r, cols, zones, limit=1))

    nodes = 0

    def search(remaining: List[int], cols: int, zones: int) -> bool:
        nonlocal nodes
        if not remaining:
            return True
        nodes += 1
        if max_nodes is not None and nodes > max_nodes:
            raise _OutOfNodes

        best_index = -1
        best: List[int] = []
        for index, r in enumerate(remaining):
            opts = candidates(r, cols, zones)
            if not opts:
                return False
            if best_index < 0 or len(opts) < len(best):
                best_index = index
                best = opts
                if len(best) == 1:
                    break

        r = remaining[best_index]
        rest = remaining[:best_index] + remaining[best_index + 1:]

        for c in best:
            next_cols = cols | (1 << c)
            next_zones = zones | (1 << zone_map[r][c])
            placement[r] = c
            if (
                still_open(r - 1, next_cols, next_zones)
                and still_open(r + 1, next_cols, next_zones)
                and search(rest, next_cols, next_zones)
            ):
                return True
            placement[r] = None

        return False

    try:
        found = search(unresolved, used_cols, used_zones)
    except _OutOfNodes:
        LOGGER.debug("gave up on %dx%d board after %d nodes", N, N, max_nodes)
        return None
    if not found:
        LOGGER.debug("no completion for %dx%d board with %d committed rows", N, N, N - len(unresolved))
        return None
    return [c for c in placement if c is not None]
