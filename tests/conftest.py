"""
Shared fixtures: hand-built positions used by several test modules.
"""

import pytest

from flip.core.board import Board


EMPTY_ROWS = ["........"] * 6


@pytest.fixture
def skip_board() -> Board:
    """Black to play A1; afterwards white has no reply but black still has C8."""
    return Board.from_rows([".WB....."] + EMPTY_ROWS + ["BW......"])


@pytest.fixture
def cascade_board() -> Board:
    """White to play A1 then C8 in a row; black has no reply in between."""
    return Board.from_rows([".BW....."] + EMPTY_ROWS + ["WB......"])


@pytest.fixture
def tied_board() -> Board:
    """Nobody can move, 4 discs each."""
    return Board.from_rows(["BBBBWWWW"] + EMPTY_ROWS + ["........"])
