import numpy as np
import pytest

from lifestamp.board import Board

GLIDER = "D5\nD2L1D2\nD3L1D1\nD1L3D1\nD5"


@pytest.fixture
def glider_data():
    return GLIDER


@pytest.fixture
def empty_board():
    return Board(10, 10)


@pytest.fixture
def random_board():
    board = Board(10, 10, rng=np.random.default_rng(1234))
    board.set_random_state()
    return board
