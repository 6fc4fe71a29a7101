from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from zonequeens.grid import Cell, ZoneMap, neighbors4, size_profile
from zonequeens.solver import solve

LOGGER = logging.getLogger(__name__)

UNASSIGNED_ID = -1


# ============================================================
# Frontier growth (shared by the random and fallback generators)
# ============================================================
def _frontier(regions: ZoneMap, rid: int, N: int) -> List[Cell]:
    out: List[Cell] = []
    for r in range(N):
        for c in range(N):
            if regions[r][c] != rid:
                continue
            out.extend((rr, cc) for rr, cc in neighbors4(r, c, N) if regions[rr][cc] == UNASSIGNED_ID)
    return out


def grow_zones(regions: ZoneMap, targets: List[int], rng: Optional[random.Random] = None) -> bool:
    """Grows every zone round-robin until the grid is covered.

    ``regions`` must already hold each zone's starting cells; it is filled in
    place. A zone below its target claims one frontier cell per turn: a random
    one when ``rng`` is given, otherwise the oldest (first in, first out). A
    zone whose frontier is exhausted keeps its current size as its target.

    Returns False if unclaimed cells remain that no zone can reach.
    """
    N = len(regions)
    sizes = [0] * N
    for row in regions:
        for rid in row:
            if rid != UNASSIGNED_ID:
                sizes[rid] += 1
    remaining = N * N - sum(sizes)

    fronts: List[Deque[Cell]] = []
    for rid in range(N):
        cells = _frontier(regions, rid, N)
        if rng is not None:
            rng.shuffle(cells)
        fronts.append(deque(cells))

    def next_cell(rid: int) -> Optional[Cell]:
        front = fronts[rid]
        while True:
            if not front:
                cells = _frontier(regions, rid, N)
                if not cells:
                    return None
                if rng is not None:
                    rng.shuffle(cells)
                front.extend(cells)
            if rng is None:
                r, c = front.popleft()
            else:
                i = rng.randrange(len(front))
                r, c = front[i]
                del front[i]
            if regions[r][c] == UNASSIGNED_ID:
                return r, c

    rid = 0
    idle = 0
    while remaining:
        if idle >= N:
            # A whole round without a claim: the rest is walled off by capped zones.
            return False
        if sizes[rid] >= targets[rid]:
            idle += 1
            rid = (rid + 1) % N
            continue
        cell = next_cell(rid)
        if cell is None:
            targets[rid] = sizes[rid]
            idle += 1
            rid = (rid + 1) % N
            continue

        r, c = cell
        regions[r][c] = rid
        sizes[rid] += 1
        remaining -= 1
        idle = 0
        for rr, cc in neighbors4(r, c, N):
            if regions[rr][cc] == UNASSIGNED_ID:
                fronts[rid].append((rr, cc))
        rid = (rid + 1) % N

    return True


# ============================================================
# Symmetry + relabelling
# ============================================================
def mirror_horizontally(zone_map: ZoneMap) -> ZoneMap:
    return [list(reversed(row)) for row in zone_map]

def mirror_vertically(zone_map: ZoneMap) -> ZoneMap:
    return [list(row) for row in reversed(zone_map)]

def transpose(zone_map: ZoneMap) -> ZoneMap:
    return [list(col) for col in zip(*zone_map)]


def relabel_zones(zone_map: ZoneMap, rng: random.Random) -> ZoneMap:
    ids = list(range(len(zone_map)))
    rng.shuffle(ids)
    return [[ids[z] for z in row] for row in zone_map]


# ============================================================
# Random generator
# ============================================================
def random_zone_map(N: int, rng: random.Random) -> Optional[ZoneMap]:
    """One randomized attempt: seeds, size targets, growth, symmetry, relabel.

    Two zones aim for 1 or 2 cells and one more for 3 or 4; the rest are
    unbounded. Returns None when growth walls off part of the grid.
    Boards smaller than 4 always get the fallback map.
    """
    if N < 4:
        return fallback_zone_map(N)

    regions = [[UNASSIGNED_ID for _ in range(N)] for _ in range(N)]
    for rid, k in enumerate(rng.sample(range(N * N), N)):
        r, c = divmod(k, N)
        regions[r][c] = rid

    targets = [N * N] * N
    small_ids = rng.sample(range(N), 2)
    for rid in small_ids:
        targets[rid] = rng.choice([1, 2])
    others = [rid for rid in range(N) if rid not in small_ids]
    if others:
        targets[rng.choice(others)] = rng.choice([3, 4])

    if not grow_zones(regions, targets, rng):
        return None

    if rng.random() < 0.5:
        regions = mirror_horizontally(regions)
    if rng.random() < 0.5:
        regions = mirror_vertically(regions)
    if rng.random() < 0.5:
        regions = transpose(regions)
    return relabel_zones(regions, rng)


# ============================================================
# Deterministic fallback
#   - Seeds are the cells of a fixed witness solution, one per row
#   - Capped zones are short horizontal runs through their seed
#   - Everything else grows first-in-first-out from its seed
# Each zone holds exactly one witness cell, so the map is always solvable.
# ============================================================
def _witness_columns(N: int) -> List[int]:
    # Odd columns then even ones: consecutive rows are never one column apart.
    return list(range(1, N, 2)) + list(range(0, N, 2))


def _run_through(c0: int, length: int, N: int) -> List[int]:
    cols = [c0]
    c = c0 + 1
    while len(cols) < length and c < N:
        cols.append(c)
        c += 1
    c = c0 - 1
    while len(cols) < length:
        cols.append(c)
        c -= 1
    return cols


def fallback_zone_map(N: int) -> ZoneMap:
    if N < 1:
        raise ValueError(f"board size must be at least 1, got {N}")
    if N < 4:
        return [[r] * N for r in range(N)]

    witness = _witness_columns(N)
    # row -> capped zone size; the remaining rows keep every capped row's
    # leftover cells reachable.
    if N == 4:
        capped: Dict[int, int] = {2: 1, 3: 2, 0: 3}
    else:
        capped = {0: 1, 2: 2, 4: 4}

    regions = [[UNASSIGNED_ID for _ in range(N)] for _ in range(N)]
    targets = [N * N] * N
    for r, c in enumerate(witness):
        regions[r][c] = r
    for r, length in capped.items():
        for c in _run_through(witness[r], length, N):
            regions[r][c] = r
        targets[r] = length

    if not grow_zones(regions, targets):
        raise RuntimeError(f"Could not complete the fallback zone map for N={N}.")
    return regions


# ============================================================
# Validation loop (never fails)
# ============================================================
# Search nodes a random attempt may cost before it counts as failed.
ATTEMPT_NODE_BUDGET = 2000


def attempt_limit(N: int) -> int:
    return min(24, max(8, N * 2))


def generate_zone_map(N: int, rng: Optional[random.Random] = None) -> Tuple[ZoneMap, Optional[List[int]]]:
    """Returns a zone map and one solution of it.

    Random attempts must show at least two zones of size <= 2 and one of size
    3..4, and the solver must find a solution within a node budget. When the attempt budget runs out the
    deterministic fallback is used instead. The solution is None only for
    sizes that have none at all (2 and 3).
    """
    if N < 1:
        raise ValueError(f"board size must be at least 1, got {N}")
    rng = rng or random.Random()

    if N >= 4:
        for attempt in range(attempt_limit(N)):
            zone_map = random_zone_map(N, rng)
            if zone_map is None:
                LOGGER.debug("attempt %d: growth walled off part of the %dx%d grid", attempt, N, N)
                continue
            small, medium = size_profile(zone_map)
            if small < 2 or medium < 1:
                LOGGER.debug("attempt %d: size profile small=%d medium=%d", attempt, small, medium)
                continue
            solution = solve(zone_map, max_nodes=ATTEMPT_NODE_BUDGET)
            if solution is not None:
                LOGGER.debug("accepted %dx%d zone map after %d attempt(s)", N, N, attempt + 1)
                return zone_map, solution
            LOGGER.debug("attempt %d: no solution found within %d nodes", attempt, ATTEMPT_NODE_BUDGET)
        LOGGER.debug("using fallback zone map for %dx%d", N, N)

    zone_map = fallback_zone_map(N)
    if N >= 4:
        return zone_map, _witness_columns(N)
    return zone_map, solve(zone_map)
