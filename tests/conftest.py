from typing import List, Tuple

import pytest

from zip_puzzle.schemas import Level, NumberedCell


Coord = Tuple[int, int]


def snake_path(size: int) -> List[Coord]:
    """Row-by-row boustrophedon covering a size x size grid."""
    path: List[Coord] = []
    for row in range(size):
        cols = range(size) if row % 2 == 0 else range(size - 1, -1, -1)
        path.extend((row, col) for col in cols)
    return path


def column_snake_path(size: int) -> List[Coord]:
    return [(col, row) for row, col in snake_path(size)]


def numbered(path: List[Coord], indices: List[int]) -> List[NumberedCell]:
    return [
        NumberedCell(row=path[i][0], col=path[i][1], number=n)
        for n, i in enumerate(indices, start=1)
    ]


@pytest.fixture
def snake_3x3() -> List[Coord]:
    return snake_path(3)


@pytest.fixture
def snake_6x6() -> List[Coord]:
    return snake_path(6)


@pytest.fixture
def level_3x3(snake_3x3) -> Level:
    return Level(
        grid_size=3,
        difficulty="easy",
        numbered_cells=numbered(snake_3x3, [0, 4, 8]),
        solution_path=snake_3x3,
        walls=[],
        seed=1,
    )
