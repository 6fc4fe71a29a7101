"""Zone queens: one queen per row, column and zone, never touching diagonally."""

from zonequeens.board import Board, HintOutcome, HintResult, PlacementOutcome, PlacementResult
from zonequeens.forbidden import forbidden_cells
from zonequeens.solver import column_priority, solve
from zonequeens.zones import fallback_zone_map, generate_zone_map, random_zone_map

__all__ = [
    "Board",
    "HintOutcome",
    "HintResult",
    "PlacementOutcome",
    "PlacementResult",
    "column_priority",
    "fallback_zone_map",
    "forbidden_cells",
    "generate_zone_map",
    "random_zone_map",
    "solve",
]
