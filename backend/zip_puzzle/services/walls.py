"""
Zip Puzzle - Wall Placement

A wall is accepted only if it:
  1. does not sit between two consecutive solution cells
  2. does not touch a numbered cell
  3. is not already placed

With require_unique, walls are first spent cutting alternate solutions until
the intended path is the only one left. Cut walls count toward the target and
may not exceed max_count. Removing an edge never adds a solution and the
intended path never uses a cut edge, so the walls added afterwards keep the
solution unique.
"""

import logging
from typing import List, Optional, Set

from ..errors import InvalidConfiguration, SearchBudgetExceeded, WallPlacementFailed
from ..schemas import Coord, NumberedCell, Wall
from .grid import WallKey, interior_edges, path_edges, wall_key
from .rng import SeededRandom
from .uniqueness import is_unique_solution, iter_solutions


logger = logging.getLogger(__name__)

WALL_STRATEGIES = ("enumerate", "sample")


class WallRules:
    """Acceptance checks for candidate walls."""

    def __init__(self, solution_path: List[Coord], numbered_cells: List[NumberedCell]):
        self.solution_edges: Set[WallKey] = path_edges(solution_path)
        self.numbered: Set[Coord] = {c.coord for c in numbered_cells}
        self.placed: Set[WallKey] = set()

    def would_block_solution(self, key: WallKey) -> bool:
        return key in self.solution_edges

    def would_block_numbered_cell(self, key: WallKey) -> bool:
        return key[0] in self.numbered or key[1] in self.numbered

    def is_duplicate(self, key: WallKey) -> bool:
        return key in self.placed

    def accepts(self, key: WallKey) -> bool:
        return not (
            self.would_block_solution(key)
            or self.would_block_numbered_cell(key)
            or self.is_duplicate(key)
        )

    def place(self, key: WallKey) -> None:
        self.placed.add(key)


def _enumerate_walls(
    grid_size: int,
    rules: WallRules,
    placed: List[WallKey],
    target_count: int,
    rng: SeededRandom,
) -> None:
    for key in rng.shuffle(interior_edges(grid_size)):
        if len(placed) >= target_count:
            break
        if rules.accepts(key):
            rules.place(key)
            placed.append(key)


def _sample_walls(
    grid_size: int,
    rules: WallRules,
    placed: List[WallKey],
    target_count: int,
    rng: SeededRandom,
    wall_probability: Optional[float],
) -> None:
    attempts = 0
    max_attempts = grid_size * grid_size * 4

    while len(placed) < target_count and attempts < max_attempts:
        attempts += 1

        if wall_probability is not None and rng.next() > wall_probability:
            continue

        row = rng.next_int(0, grid_size - 1)
        col = rng.next_int(0, grid_size - 1)
        horizontal = rng.next_int(0, 2) < 1

        if horizontal and col < grid_size - 1:
            key = wall_key((row, col), (row, col + 1))
        elif not horizontal and row < grid_size - 1:
            key = wall_key((row, col), (row + 1, col))
        else:
            continue

        if rules.accepts(key):
            rules.place(key)
            placed.append(key)

    if len(placed) < target_count:
        logger.debug(
            "Wall sampling stopped at %d/%d walls after %d draws",
            len(placed), target_count, attempts,
        )


def divergence_cut(alternate: List[Coord], solution: List[Coord], rules: WallRules) -> Optional[WallKey]:
    """
    First acceptable wall on the alternate path, starting where it leaves
    the solution. Walling that edge also rules out every other path that
    leaves the solution the same way.
    """
    split = next(
        (i for i, (a, b) in enumerate(zip(alternate, solution)) if a != b),
        min(len(alternate), len(solution)),
    )
    for a, b in zip(alternate[split - 1:], alternate[split:]):
        key = wall_key(a, b)
        if rules.accepts(key):
            return key
    return None


def _cut_alternate_solutions(
    grid_size: int,
    solution_path: List[Coord],
    checkpoints: List[Coord],
    rules: WallRules,
    placed: List[WallKey],
    max_count: Optional[int],
    fill_every_cell: bool,
    node_limit: Optional[int],
) -> None:
    # one search for the whole loop: it reads rules.placed live and backs
    # off each new wall, so finished branches are never searched again
    search = iter_solutions(
        grid_size, checkpoints, rules.placed, fill_every_cell, node_limit,
        prefer=solution_path,
    )
    try:
        for candidate in search:
            if candidate == solution_path:
                continue

            if max_count is not None and len(placed) >= max_count:
                raise WallPlacementFailed(
                    f"More than {max_count} walls needed to make the solution unique"
                )
            key = divergence_cut(candidate, solution_path, rules)
            if key is None:
                raise WallPlacementFailed(
                    f"Alternate solution on {grid_size}x{grid_size} grid only differs "
                    "next to numbered cells"
                )
            rules.place(key)
            placed.append(key)
            logger.debug("Cut alternate solution with wall %s", key)
    except SearchBudgetExceeded as e:
        raise WallPlacementFailed(f"Uniqueness search gave up: {e}") from e


def place_walls(
    grid_size: int,
    solution_path: List[Coord],
    numbered_cells: List[NumberedCell],
    target_count: int,
    rng: SeededRandom,
    strategy: str = "enumerate",
    wall_probability: Optional[float] = None,
    require_unique: bool = False,
    fill_every_cell: bool = True,
    node_limit: Optional[int] = None,
    max_count: Optional[int] = None,
) -> List[Wall]:
    """
    Choose walls for a level.

    "enumerate" walks every interior edge in shuffled order and places
    min(target_count, eligible edges). "sample" draws random edges and stops
    after grid_size^2 * 4 draws, so it can fall short of the target.
With require_unique the result holds max(target_count, cut walls) walls.

    Raises:
        WallPlacementFailed: require_unique is set and walls cannot remove
            every alternate solution within max_count walls.
    """
    if strategy not in WALL_STRATEGIES:
        raise InvalidConfiguration(f"Unknown wall strategy: {strategy}")

    rules = WallRules(solution_path, numbered_cells)
    placed: List[WallKey] = []

    if require_unique:
        checkpoints = [c.coord for c in sorted(numbered_cells, key=lambda c: c.number)]
        _cut_alternate_solutions(
            grid_size, solution_path, checkpoints, rules, placed, max_count,
            fill_every_cell, node_limit,
        )

    if strategy == "enumerate":
        _enumerate_walls(grid_size, rules, placed, target_count, rng)
    else:
        _sample_walls(grid_size, rules, placed, target_count, rng, wall_probability)

    if require_unique and not is_unique_solution(
        grid_size, checkpoints, rules.placed, fill_every_cell, node_limit,
    ):
        raise WallPlacementFailed("Solution is not unique after wall placement")

    return [Wall.between(a, b) for a, b in placed]
