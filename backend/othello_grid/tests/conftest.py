"""
Pytest fixtures for othello_grid tests.
"""

import pytest

from othello_grid.board import EMPTY


@pytest.fixture
def empty_rows():
    """Factory for an all-empty grid given as rows (rows[y][x])"""
    def make(width: int = 8, height: int = 8):
        return [[EMPTY] * width for _ in range(height)]
    return make
