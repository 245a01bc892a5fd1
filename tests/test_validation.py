from conftest import column_snake_path, numbered, snake_path
from zip_puzzle.schemas import Level, Wall
from zip_puzzle.services.validation import check_player_path, get_hint, validate_level


def test_valid_level(level_3x3):
    result = validate_level(level_3x3)
    assert result == {"valid": True, "errors": []}


def test_wall_on_solution_edge(level_3x3):
    level = level_3x3.model_copy(update={"walls": [Wall.between((0, 1), (0, 2))]})
    result = validate_level(level)
    assert not result["valid"]
    assert any("cuts the solution path" in e for e in result["errors"])
    assert any("not connected" in e for e in result["errors"])


def test_wall_touching_numbered_cell(level_3x3):
    level = level_3x3.model_copy(update={"walls": [Wall.between((1, 1), (2, 1))]})
    result = validate_level(level)
    assert any("touches a numbered cell" in e for e in result["errors"])


def test_short_path(level_3x3):
    level = level_3x3.model_copy(update={"solution_path": snake_path(3)[:-1]})
    result = validate_level(level)
    assert not result["valid"]
    assert "Path length 8 != 9" in result["errors"]


def test_numbers_out_of_path_order(level_3x3):
    path = snake_path(3)
    level = level_3x3.model_copy(update={"numbered_cells": numbered(path, [0, 8, 4])})
    result = validate_level(level)
    assert not result["valid"]
    assert any("out of path order" in e for e in result["errors"])


def test_solution_wins(level_3x3):
    assert check_player_path(level_3x3, level_3x3.solution_path)["valid"]


def test_other_full_path_also_wins(level_3x3):
    # numbers are what the player must respect, not the stored path
    assert check_player_path(level_3x3, column_snake_path(3))["valid"]


def test_wall_blocks_player(level_3x3):
    level = level_3x3.model_copy(update={"walls": [Wall.between((1, 1), (2, 1))]})
    result = check_player_path(level, column_snake_path(3))
    assert not result["valid"]
    assert "Illegal move" in result["reason"]


def test_incomplete_path(level_3x3):
    result = check_player_path(level_3x3, snake_path(3)[:5])
    assert not result["valid"]
    assert "left empty" in result["reason"]


def test_must_start_on_one(level_3x3):
    result = check_player_path(level_3x3, list(reversed(snake_path(3))))
    assert result == {"valid": False, "reason": "Path must start on number 1"}


def test_numbers_out_of_order(snake_3x3):
    level = Level(
        grid_size=3, difficulty="easy", numbered_cells=numbered(snake_3x3, [0, 6, 8]),
        solution_path=snake_3x3, walls=[], seed=1,
    )
    # column snake meets (2, 0) = 2 before (2, 2) = 3
    assert check_player_path(level, column_snake_path(3))["valid"]

    # (0, 2) = 2, (2, 0) = 3: column snake meets 3 first
    level = level.model_copy(update={"numbered_cells": numbered(snake_3x3, [0, 2, 6, 8])})
    result = check_player_path(level, column_snake_path(3))
    assert not result["valid"]
    assert "out of order" in result["reason"]


def test_hint_follows_solution(level_3x3):
    path = snake_path(3)
    assert get_hint(level_3x3, []) == path[0]
    assert get_hint(level_3x3, path[:4]) == path[4]
    # first wrong cell is replaced by the solution cell
    assert get_hint(level_3x3, [(0, 0), (1, 0)]) == path[1]
    assert get_hint(level_3x3, path) is None
