import pytest

from conftest import column_snake_path, numbered, snake_path
from zip_puzzle.errors import InvalidConfiguration, WallPlacementFailed
from zip_puzzle.services.grid import path_edges
from zip_puzzle.services.rng import SeededRandom
from zip_puzzle.services.uniqueness import count_solutions
from zip_puzzle.services.walls import WallRules, divergence_cut, place_walls


SNAKE = snake_path(6)
# (0, 0), (2, 0), (4, 0), (5, 0)
SNAKE_NUMBERS = numbered(SNAKE, [0, 12, 24, 35])
# 25 free edges, three of them touch a numbered cell
SNAKE_ELIGIBLE = 22


def assert_safe(walls, path, numbered_cells):
    solution = path_edges(path)
    numbers = {c.coord for c in numbered_cells}
    keys = [w.key for w in walls]
    assert len(set(keys)) == len(keys)
    for a, b in keys:
        assert (a, b) not in solution
        assert a not in numbers and b not in numbers


def test_rules():
    rules = WallRules(SNAKE, SNAKE_NUMBERS)
    assert rules.would_block_solution(((0, 0), (0, 1)))
    assert rules.would_block_numbered_cell(((0, 0), (1, 0)))
    assert rules.accepts(((0, 1), (1, 1)))
    rules.place(((0, 1), (1, 1)))
    assert rules.is_duplicate(((0, 1), (1, 1)))
    assert not rules.accepts(((0, 1), (1, 1)))


@pytest.mark.parametrize("target", [0, 5, 10, 22])
def test_enumerate_reaches_target(target):
    walls = place_walls(6, SNAKE, SNAKE_NUMBERS, target, SeededRandom(3))
    assert len(walls) == target
    assert_safe(walls, SNAKE, SNAKE_NUMBERS)


def test_enumerate_stops_at_eligible_edges():
    walls = place_walls(6, SNAKE, SNAKE_NUMBERS, 40, SeededRandom(3))
    assert len(walls) == SNAKE_ELIGIBLE
    assert_safe(walls, SNAKE, SNAKE_NUMBERS)


@pytest.mark.parametrize("probability", [None, 0.2])
def test_sample_strategy_is_bounded_and_safe(probability):
    walls = place_walls(
        6, SNAKE, SNAKE_NUMBERS, 18, SeededRandom(11),
        strategy="sample", wall_probability=probability,
    )
    assert len(walls) <= 18
    assert_safe(walls, SNAKE, SNAKE_NUMBERS)


def test_same_seed_same_walls():
    a = place_walls(6, SNAKE, SNAKE_NUMBERS, 12, SeededRandom(8))
    b = place_walls(6, SNAKE, SNAKE_NUMBERS, 12, SeededRandom(8))
    assert a == b


def test_unknown_strategy():
    with pytest.raises(InvalidConfiguration):
        place_walls(6, SNAKE, SNAKE_NUMBERS, 4, SeededRandom(1), strategy="spiral")


@pytest.mark.parametrize("target", [0, 2])
def test_require_unique_cuts_alternate_solution(snake_3x3, target):
    cells = numbered(snake_3x3, [0, 8])
    walls = place_walls(3, snake_3x3, cells, target, SeededRandom(5), require_unique=True)

    assert len(walls) == max(target, 1)
    assert_safe(walls, snake_3x3, cells)
    assert count_solutions(3, [(0, 0), (2, 2)], walls) == 1


def test_require_unique_fails_when_only_numbered_edges_differ(snake_3x3):
    cells = numbered(snake_3x3, [0, 4, 8])
    with pytest.raises(WallPlacementFailed):
        place_walls(3, snake_3x3, cells, 2, SeededRandom(5), require_unique=True)


def test_cut_starts_where_alternate_leaves_solution(snake_3x3):
    rules = WallRules(snake_3x3, numbered(snake_3x3, [0, 8]))
    # (0, 0) -> (1, 0) touches number 1 and the next two edges belong to the
    # solution, so the first usable edge is (2, 1) -> (1, 1)
    assert divergence_cut(column_snake_path(3), snake_3x3, rules) == ((1, 1), (2, 1))


def test_cut_walls_count_toward_target(snake_3x3):
    cells = numbered(snake_3x3, [0, 8])
    walls = place_walls(3, snake_3x3, cells, 1, SeededRandom(5), require_unique=True, max_count=1)
    assert [w.key for w in walls] == [((1, 1), (2, 1))]


def test_unique_walls_stay_within_max_count(snake_3x3):
    cells = numbered(snake_3x3, [0, 8])
    with pytest.raises(WallPlacementFailed):
        place_walls(3, snake_3x3, cells, 0, SeededRandom(5), require_unique=True, max_count=0)
