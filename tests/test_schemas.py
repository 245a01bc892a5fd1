import pytest
from pydantic import ValidationError

from zip_puzzle.schemas import DifficultyConfig, Level, NumberedCell, Wall


def test_wall_order_is_canonical():
    assert Wall.between((1, 2), (1, 1)) == Wall.between((1, 1), (1, 2))
    assert Wall.between((1, 2), (1, 1)).key == ((1, 1), (1, 2))


@pytest.mark.parametrize("a, b", [((0, 0), (1, 1)), ((0, 0), (0, 2)), ((2, 2), (2, 2))])
def test_wall_needs_adjacent_cells(a, b):
    with pytest.raises(ValidationError):
        Wall.between(a, b)


def test_numbers_start_at_one():
    with pytest.raises(ValidationError):
        NumberedCell(row=0, col=0, number=0)


def base_config(**overrides):
    params = dict(
        difficulty="easy", grid_size=4, min_dot_count=2, max_dot_count=4,
        min_spacing=1, min_wall_count=0, max_wall_count=3,
    )
    params.update(overrides)
    return DifficultyConfig(**params)


@pytest.mark.parametrize(
    "overrides",
    [
        {"grid_size": 0},
        {"min_dot_count": 5, "max_dot_count": 4},
        {"min_wall_count": 4, "max_wall_count": 3},
        {"max_dot_count": 17},
        {"min_dot_count": 1},
    ],
)
def test_bad_difficulty_config(overrides):
    with pytest.raises(ValueError):
        base_config(**overrides)


def test_level_json_aliases(level_3x3):
    data = level_3x3.model_dump(by_alias=True)
    assert "gridSize" in data and "solutionPath" in data

    again = Level.model_validate(data)
    assert again == level_3x3
    assert again.checkpoints == [(0, 0), (1, 1), (2, 2)]


def test_level_is_frozen(level_3x3):
    with pytest.raises(ValidationError):
        level_3x3.seed = 5
