import random

import pytest

from tests.helpers import COLUMN_ZONES, QUADRANT_ZONES, board_with_zones


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def column_board():
    return board_with_zones(COLUMN_ZONES)


@pytest.fixture
def quadrant_board():
    return board_with_zones(QUADRANT_ZONES)
