from __future__ import annotations

from typing import List, Optional, Sequence

from zonequeens.grid import DIAGONALS, Cell, in_bounds, zone_cells as build_zone_cells


def forbidden_cells(
    zone_map: Sequence[Sequence[int]],
    placements: Sequence[Optional[int]],
    zone_cells: Optional[Sequence[Sequence[Cell]]] = None,
) -> List[List[bool]]:
    """Cells where a new queen would break a rule, given the queens already placed.

    Every placed queen blocks the rest of its row, its column and its zone,
    plus its four diagonal neighbours. Cells holding a queen are never blocked.
    """
    N = len(placements)
    blocked = [[False] * N for _ in range(N)]
    queens = [(r, c) for r, c in enumerate(placements) if c is not None]
    if not queens:
        return blocked
    if zone_cells is None:
        zone_cells = build_zone_cells(zone_map)

    for r, c in queens:
        for cc in range(N):
            blocked[r][cc] = True
        for rr in range(N):
            blocked[rr][c] = True
        for rr, cc in zone_cells[zone_map[r][c]]:
            blocked[rr][cc] = True
        for dr, dc in DIAGONALS:
            rr, cc = r + dr, c + dc
            if in_bounds(rr, cc, N):
                blocked[rr][cc] = True

    for r, c in queens:
        blocked[r][c] = False
    return blocked
