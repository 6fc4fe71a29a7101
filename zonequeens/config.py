# Board sizes offered to the player. The engine itself works for any N >= 1.
MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 14
DEFAULT_BOARD_SIZE = 8

# One pastel per zone; boards larger than the palette reuse colours.
PALETTE = [
    "#F2B5D4",
    "#B6E2A1",
    "#F8D68E",
    "#C0D6E8",
    "#A1D6CA",
    "#CBAACB",
    "#E5E5E5",
    "#E9B3B3",
    "#F7C59F",
    "#A0CED9",
    "#D4A5A5",
    "#F2F1A4",
    "#C1A5E8",
    "#9AD9A6",
    "#F0B7A4",
]


def clamp_board_size(size: int) -> int:
    return min(max(size, MIN_BOARD_SIZE), MAX_BOARD_SIZE)
