from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

Cell = Tuple[int, int]
ZoneMap = List[List[int]]
Placements = List[Optional[int]]

DIRS4 = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


def in_bounds(r, c, N):
    return 0 <= r < N and 0 <= c < N

def diagonally_adjacent(r1, c1, r2, c2):
    return abs(r1 - r2) == 1 and abs(c1 - c2) == 1


def neighbors4(r: int, c: int, N: int) -> List[Cell]:
    out: List[Cell] = []
    for dr, dc in DIRS4:
        rr, cc = r + dr, c + dc
        if in_bounds(rr, cc, N):
            out.append((rr, cc))
    return out


def zone_sizes(zone_map: Sequence[Sequence[int]]) -> Dict[int, int]:
    counts: Dict[int, int] = {}
    for row in zone_map:
        for zone in row:
            counts[zone] = counts.get(zone, 0) + 1
    return counts


def zone_cells(zone_map: Sequence[Sequence[int]]) -> List[List[Cell]]:
    """Returns zone id -> cells of that zone, row-major."""
    N = len(zone_map)
    lookup: List[List[Cell]] = [[] for _ in range(N)]
    for r in range(N):
        for c in range(N):
            lookup[zone_map[r][c]].append((r, c))
    return lookup


def size_profile(zone_map: Sequence[Sequence[int]]) -> Tuple[int, int]:
    """Returns (small, medium): zones of size <= 2 and zones of size 3..4."""
    sizes = zone_sizes(zone_map).values()
    small = sum(1 for s in sizes if s <= 2)
    medium = sum(1 for s in sizes if 3 <= s <= 4)
    return small, medium


def cells_connected(cells: Iterable[Cell]) -> bool:
    cells = set(cells)
    if not cells:
        return True
    start = next(iter(cells))
    q = deque([start])
    seen = {start}
    while q:
        r, c = q.popleft()
        for dr, dc in DIRS4:
            rr, cc = r + dr, c + dc
            if (rr, cc) in cells and (rr, cc) not in seen:
                seen.add((rr, cc))
                q.append((rr, cc))
    return len(seen) == len(cells)


def zones_connected(zone_map: Sequence[Sequence[int]]) -> bool:
    return all(cells_connected(cells) for cells in zone_cells(zone_map))


def conflicting_cells(placements: Sequence[Optional[int]], zone_map: Sequence[Sequence[int]]) -> Set[Cell]:
    """Placed cells that share a column or zone with another placement, or touch one diagonally.

    Rows are unique by construction because placements are indexed by row.
    """
    N = len(placements)
    qs = [(r, c) for r, c in enumerate(placements) if c is not None]

    col = [0] * N
    reg: Dict[int, int] = {}
    for r, c in qs:
        col[c] += 1
        rid = zone_map[r][c]
        reg[rid] = reg.get(rid, 0) + 1

    invalid: Set[Cell] = set()
    for r, c in qs:
        if col[c] > 1 or reg[zone_map[r][c]] > 1:
            invalid.add((r, c))

    for i in range(len(qs)):
        r1, c1 = qs[i]
        for j in range(i + 1, len(qs)):
            r2, c2 = qs[j]
            if diagonally_adjacent(r1, c1, r2, c2):
                invalid.add((r1, c1))
                invalid.add((r2, c2))

    return invalid


def check_zone_map(zone_map: Sequence[Sequence[int]], N: int) -> None:
    if len(zone_map) != N:
        raise ValueError(f"zone map has {len(zone_map)} rows, expected {N}")
    for r, row in enumerate(zone_map):
        if len(row) != N:
            raise ValueError(f"zone map row {r} has {len(row)} cells, expected {N}")
        for c, zone in enumerate(row):
            if not 0 <= zone < N:
                raise ValueError(f"zone id {zone} at ({r}, {c}) outside [0, {N})")
