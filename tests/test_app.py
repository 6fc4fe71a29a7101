from types import SimpleNamespace

import pytest

pygame = pytest.importorskip("pygame")

from zonequeens import app
from zonequeens.controller import PuzzleController
from tests.helpers import COLUMN_ZONES, ImmediateExecutor, seeded_board


@pytest.fixture
def state():
    ctl = PuzzleController(4, executor=ImmediateExecutor(), board_factory=seeded_board)
    ctl.board.load_zone_map(COLUMN_ZONES)
    return {
        "controller": ctl,
        "N": 4,
        "CELL": app.cell_size(4),
        "left_down": False,
        "left_down_cell": None,
        "left_down_pos": None,
        "drag_paint": False,
        "drag_seen": set(),
    }


def center_of(r, c, CELL):
    return app.cell_rect(r, c, CELL).center


def test_cell_size_is_bounded():
    assert app.cell_size(4) == app.MAX_CELL
    assert app.cell_size(14) == max(app.MIN_CELL, app.BOARD_PX // 14)


def test_cell_at_maps_pixels_to_cells():
    CELL = app.cell_size(8)
    assert app.cell_at(center_of(3, 5, CELL), 8, CELL) == (3, 5)
    assert app.cell_at((0, 0), 8, CELL) is None


def test_keys_drive_the_controller(state):
    ctl = state["controller"]
    assert app.handle_key(state, SimpleNamespace(key=pygame.K_h, unicode="h"))
    assert ctl.board.placed_count == 1
    app.handle_key(state, SimpleNamespace(key=pygame.K_e, unicode="e"))
    assert ctl.easy_mode
    app.handle_key(state, SimpleNamespace(key=pygame.K_q, unicode="q"))
    assert ctl.board.placed_count == 0
    app.handle_key(state, SimpleNamespace(key=pygame.K_EQUALS, unicode="+"))
    assert ctl.board.size == 5
    assert not app.handle_key(state, SimpleNamespace(key=pygame.K_ESCAPE, unicode="\x1b"))


def test_click_release_taps_the_cell(state):
    ctl = state["controller"]
    pos = center_of(0, 1, state["CELL"])
    for _ in range(2):
        state["left_down"] = True
        state["left_down_cell"] = (0, 1)
        state["left_down_pos"] = pos
        app.handle_mouse_up(state, SimpleNamespace(button=1, pos=pos))
    assert ctl.board.has_queen(0, 1)


def test_drag_paints_marks(state):
    ctl = state["controller"]
    CELL = state["CELL"]
    state["left_down"] = True
    state["left_down_cell"] = (2, 0)
    state["left_down_pos"] = center_of(2, 0, CELL)
    for c in range(1, 4):
        app.handle_mouse_motion(state, SimpleNamespace(pos=center_of(2, c, CELL), buttons=(1, 0, 0)))
    app.handle_mouse_up(state, SimpleNamespace(button=1, pos=center_of(2, 3, CELL)))
    assert all(ctl.board.is_marked(2, c) for c in range(4))
    assert ctl.board.placed_count == 0


def test_quit_survives_later_keys_in_the_same_batch(state):
    events = [
        SimpleNamespace(type=pygame.QUIT),
        SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_e, unicode="e"),
    ]
    assert not app.handle_events(state, events)
    assert state["controller"].easy_mode


def test_key_batch_keeps_running(state):
    events = [SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_h, unicode="h")]
    assert app.handle_events(state, events)
    assert state["controller"].board.placed_count == 1
