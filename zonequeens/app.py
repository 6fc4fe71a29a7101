from __future__ import annotations

import logging
from typing import Optional, Tuple

import pygame

from zonequeens import config
from zonequeens.controller import PuzzleController

LOGGER = logging.getLogger(__name__)

# ---------------- Visuals ----------------
FPS = 60

PAD = 24
TOP_BAR = 150
GRID_BORDER = 1
REGION_BORDER = 4
BOARD_PX = 560
MIN_CELL = 36
MAX_CELL = 86

BG = (245, 245, 245)
TEXT = (20, 20, 20)
BLACK = (0, 0, 0)
QUEEN = (40, 30, 60)
MARK = (30, 30, 30)
HINT_MARK = (150, 150, 150)
ILLEGAL_RED = (220, 40, 40)
SOLVED_GREEN = (30, 140, 60)

_FONT_NAMES = ["Times New Roman", "Times"]

HELP_LINES = [
    "Click=mark  Click marked=Q  Drag=paint marks",
    "Right/Ctrl=Q  H Hint  E Easy mode",
    "R New  Q Clear queens  C Clear all  +/- Size",
    "ESC Quit",
]


# ============================================================
# Helpers
# ============================================================
def cell_size(N: int) -> int:
    return max(MIN_CELL, min(MAX_CELL, BOARD_PX // N))

def cell_rect(r, c, CELL):
    x = PAD + c * CELL
    y = PAD + TOP_BAR + r * CELL
    return pygame.Rect(x, y, CELL, CELL)

def cell_at(pos, N, CELL) -> Optional[Tuple[int, int]]:
    mx, my = pos
    board_rect = pygame.Rect(PAD, PAD + TOP_BAR, N * CELL, N * CELL)
    if not board_rect.collidepoint(mx, my):
        return None
    return (my - (PAD + TOP_BAR)) // CELL, (mx - PAD) // CELL

def draw_text(screen, msg, x, y, f, color=TEXT):
    screen.blit(f.render(msg, True, color), (x, y))


# ============================================================
# Drawing
# ============================================================
def draw_grid_lines(screen, N, CELL):
    top = PAD + TOP_BAR
    left = PAD
    for i in range(N + 1):
        x = left + i * CELL
        pygame.draw.line(screen, (45, 45, 45), (x, top), (x, top + N * CELL), GRID_BORDER)
        y = top + i * CELL
        pygame.draw.line(screen, (45, 45, 45), (left, y), (left + N * CELL, y), GRID_BORDER)

def draw_region_borders(screen, zone_map, N, CELL):
    top = PAD + TOP_BAR
    left = PAD

    for r in range(N):
        for c in range(N - 1):
            if zone_map[r][c] != zone_map[r][c + 1]:
                x = left + (c + 1) * CELL
                y = top + r * CELL
                pygame.draw.line(screen, BLACK, (x, y), (x, y + CELL), REGION_BORDER)

    for r in range(N - 1):
        for c in range(N):
            if zone_map[r][c] != zone_map[r + 1][c]:
                x = left + c * CELL
                y = top + (r + 1) * CELL
                pygame.draw.line(screen, BLACK, (x, y), (x + CELL, y), REGION_BORDER)

    pygame.draw.rect(screen, BLACK, pygame.Rect(left, top, N * CELL, N * CELL), REGION_BORDER)

def draw_mark(screen, rect, CELL, color):
    cx, cy = rect.center
    s = int(CELL * 0.2)
    pygame.draw.line(screen, color, (cx - s, cy - s), (cx + s, cy + s), 3)
    pygame.draw.line(screen, color, (cx - s, cy + s), (cx + s, cy - s), 3)

def draw_queen(screen, rect, CELL):
    # Crown: three points over a band.
    w = int(CELL * 0.56)
    h = int(CELL * 0.42)
    x0 = rect.centerx - w // 2
    y0 = rect.centery - h // 2
    points = [
        (x0, y0 + h),
        (x0, y0),
        (x0 + w // 4, y0 + h // 2),
        (x0 + w // 2, y0),
        (x0 + 3 * w // 4, y0 + h // 2),
        (x0 + w, y0),
        (x0 + w, y0 + h),
    ]
    pygame.draw.polygon(screen, QUEEN, points)

def draw_board(state):
    screen = state["screen"]
    ctl: PuzzleController = state["controller"]
    board = ctl.board
    N = board.size
    CELL = state["CELL"]
    W = state["W"]

    zone_map = board.zone_map
    placements = board.placements
    marks = board.marks
    shown = ctl.marks_view()

    screen.fill(BG)
    pygame.draw.rect(screen, (235, 235, 235), pygame.Rect(0, 0, W, TOP_BAR + PAD))

    for r in range(N):
        for c in range(N):
            pygame.draw.rect(screen, state["colors"][zone_map[r][c] % len(state["colors"])], cell_rect(r, c, CELL))

    draw_grid_lines(screen, N, CELL)
    draw_region_borders(screen, zone_map, N, CELL)

    for r in range(N):
        for c in range(N):
            if placements[r] == c or not shown[r][c]:
                continue
            draw_mark(screen, cell_rect(r, c, CELL), CELL, MARK if marks[r][c] else HINT_MARK)

    invalid = board.conflicts()
    for r, c in enumerate(placements):
        if c is None:
            continue
        rect = cell_rect(r, c, CELL)
        draw_queen(screen, rect, CELL)
        if (r, c) in invalid:
            pygame.draw.rect(screen, ILLEGAL_RED, rect, 4)

def draw_info_panel(state):
    screen = state["screen"]
    ctl: PuzzleController = state["controller"]
    fonts = state["fonts"]
    N = ctl.board.size

    y = 10
    mode = "easy" if ctl.easy_mode else "normal"
    draw_text(screen, f"Board {N}x{N}   Queens {ctl.board.placed_count}/{N}   Mode {mode}", PAD, y, fonts["small"])
    y += fonts["small"].get_linesize() + 4

    lh = fonts["tiny"].get_linesize() + 2
    for line in HELP_LINES:
        draw_text(screen, line, PAD, y, fonts["tiny"])
        y += lh

    if ctl.loading:
        color = TEXT
    elif ctl.board.is_solved:
        color = SOLVED_GREEN
    elif ctl.message.startswith("Can't") or ctl.message.startswith("No solution"):
        color = ILLEGAL_RED
    else:
        color = TEXT
    draw_text(screen, ctl.message, PAD, TOP_BAR - fonts["small"].get_linesize(), fonts["small"], color)


# ============================================================
# State
# ============================================================
def build_state(controller: PuzzleController, fonts):
    N = controller.board.size
    CELL = cell_size(N)
    W = PAD * 2 + N * CELL
    H = PAD * 2 + TOP_BAR + N * CELL

    screen = pygame.display.set_mode((W, H))
    pygame.display.set_caption(f"Zone Queens {N}x{N}")

    return {
        "controller": controller,
        "board": controller.board,
        "fonts": fonts,
        "N": N, "CELL": CELL, "W": W, "H": H,
        "screen": screen,
        "colors": [pygame.Color(h) for h in config.PALETTE],

        # Left-drag paints marks
        "left_down": False,
        "left_down_cell": None,
        "left_down_pos": None,
        "drag_paint": False,
        "drag_seen": set(),
    }


def handle_key(state, event) -> bool:
    ctl: PuzzleController = state["controller"]
    if event.key == pygame.K_ESCAPE:
        return False
    if event.key == pygame.K_h:
        ctl.hint()
    elif event.key == pygame.K_r:
        ctl.regenerate()
    elif event.key == pygame.K_q:
        ctl.reset_queens()
    elif event.key == pygame.K_c:
        ctl.clear_board()
    elif event.key == pygame.K_e:
        ctl.set_easy_mode(not ctl.easy_mode)
    elif event.unicode in ("+", "="):
        ctl.set_board_size(ctl.board_size + 1)
    elif event.unicode in ("-", "_"):
        ctl.set_board_size(ctl.board_size - 1)
    return True


def handle_mouse_down(state, event):
    ctl: PuzzleController = state["controller"]
    cell = cell_at(event.pos, state["N"], state["CELL"])
    if cell is None:
        return

    ctrl_down = (pygame.key.get_mods() & pygame.KMOD_CTRL) != 0
    # Right click or Ctrl+Left: place/remove a queen immediately.
    if event.button == 3 or (event.button == 1 and ctrl_down):
        ctl.toggle_queen(*cell)
        return

    if event.button == 1:
        state["left_down"] = True
        state["left_down_cell"] = cell
        state["left_down_pos"] = event.pos
        state["drag_paint"] = False
        state["drag_seen"] = set()


def handle_mouse_motion(state, event):
    if not state["left_down"] or not event.buttons[0]:
        return
    cell = cell_at(event.pos, state["N"], state["CELL"])
    if cell is None:
        return

    # Enter drag paint mode if we moved enough or changed cells.
    if not state["drag_paint"]:
        down_x, down_y = state["left_down_pos"]
        mx, my = event.pos
        if state["left_down_cell"] != cell or abs(mx - down_x) + abs(my - down_y) >= 6:
            state["drag_paint"] = True
            state["drag_seen"].add(state["left_down_cell"])
            state["controller"].paint_mark(*state["left_down_cell"])
    if not state["drag_paint"]:
        return

    if cell not in state["drag_seen"]:
        state["drag_seen"].add(cell)
        state["controller"].paint_mark(*cell)


def handle_mouse_up(state, event):
    if event.button != 1 or not state["left_down"]:
        return
    ctl: PuzzleController = state["controller"]
    cell = state["left_down_cell"]
    state["left_down"] = False
    state["left_down_cell"] = None
    state["left_down_pos"] = None

    # Dragging already painted the marks.
    if state["drag_paint"]:
        state["drag_paint"] = False
        state["drag_seen"] = set()
        return

    ctl.tap_cell(*cell)


def handle_events(state, events) -> bool:
    """Dispatches one batch of events. Returns False once the window should close."""
    running = True
    for event in events:
        if event.type == pygame.QUIT:
            running = False
        elif event.type == pygame.KEYDOWN:
            running = handle_key(state, event) and running
        elif event.type == pygame.MOUSEBUTTONDOWN:
            handle_mouse_down(state, event)
        elif event.type == pygame.MOUSEMOTION:
            handle_mouse_motion(state, event)
        elif event.type == pygame.MOUSEBUTTONUP:
            handle_mouse_up(state, event)
    return running


# ============================================================
# Main
# ============================================================
def main(size: int = config.DEFAULT_BOARD_SIZE):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    clock = pygame.time.Clock()
    fonts = {
        "small": pygame.font.SysFont(_FONT_NAMES, 22),
        "tiny": pygame.font.SysFont(_FONT_NAMES, 18),
    }

    controller = PuzzleController(config.clamp_board_size(size))
    state = build_state(controller, fonts)
    LOGGER.info("started with a %dx%d board", state["N"], state["N"])

    running = True
    try:
        while running:
            clock.tick(FPS)

            if controller.poll() or controller.board is not state["board"]:
                state = build_state(controller, fonts)

            running = handle_events(state, pygame.event.get())

            draw_board(state)
            draw_info_panel(state)
            pygame.display.flip()
    finally:
        controller.shutdown()
        pygame.quit()
