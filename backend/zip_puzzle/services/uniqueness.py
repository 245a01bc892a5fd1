"""
Zip Puzzle - Uniqueness Verifier

Exhaustive search for paths that start at checkpoint 1 and reach the last
checkpoint after passing every checkpoint in order. Stepping onto a
checkpoint before its turn is illegal.

Two notions of "solution":
  fill_every_cell=True   the path must cover the whole grid (the game's rule)
  fill_every_cell=False  any in-order checkpoint path counts
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterator, List, Optional, Set

from ..errors import InvalidConfiguration, SearchBudgetExceeded
from ..schemas import Coord
from .grid import WallKey, build_wall_set, neighbors, splits_region, wall_key


logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    cell: Coord
    target: int
    moves: List[Coord]
    cursor: int = 0


def _strands_cell(
    head: Coord,
    nxt: Coord,
    grid_size: int,
    visited: AbstractSet[Coord],
    walls: AbstractSet[WallKey],
    end: Coord,
) -> bool:
    """
    True if moving head -> nxt leaves an unvisited neighbour of head
    without enough free neighbours to be entered and left again.
    """
    for cell in neighbors(head, grid_size, visited, walls):
        if cell == nxt:
            continue
        free = len(neighbors(cell, grid_size, visited, walls))
        needed = 1 if cell == end else 2
        if free < needed:
            return True
    return False


def _drop_walled_moves(stack: List[_Frame], path: List[Coord], visited: Set[Coord], walls) -> None:
    """Unwind the search to just before the first path edge that is now walled."""
    for i in range(len(path) - 1):
        if wall_key(path[i], path[i + 1]) in walls:
            while len(path) > i + 1:
                stack.pop()
                visited.discard(path.pop())
            return


def iter_solutions(
    grid_size: int,
    checkpoints: List[Coord],
    walls=(),
    fill_every_cell: bool = True,
    node_limit: Optional[int] = None,
    prefer: Optional[List[Coord]] = None,
) -> Iterator[List[Coord]]:
    """
    Yield every solution path, one at a time.

    With prefer, the move along that path is tried first at each cell, so
    prefer itself comes out first (if it solves the puzzle) and the next
    solutions are the ones that leave it as late as possible.

    walls given as a set of keys is read live: keys added between two yields
    apply when the search resumes, and a search sitting on a newly walled
    edge backs off it.

    Raises:
        SearchBudgetExceeded: more than node_limit moves explored.
    """
    if len(checkpoints) < 2:
        raise InvalidConfiguration("at least two checkpoints are required")

    wall_set = walls if isinstance(walls, (set, frozenset)) else build_wall_set(walls)
    total = grid_size * grid_size
    end = checkpoints[-1]
    order: Dict[Coord, int] = {cell: i for i, cell in enumerate(checkpoints)}
    successor: Dict[Coord, Coord] = dict(zip(prefer, prefer[1:])) if prefer else {}

    def moves(cell: Coord) -> List[Coord]:
        result = neighbors(cell, grid_size, visited, wall_set)
        preferred = successor.get(cell)
        if preferred in result:
            result.remove(preferred)
            result.insert(0, preferred)
        return result

    start = checkpoints[0]
    path = [start]
    visited = {start}
    stack = [_Frame(start, 1, moves(start))]
    nodes = 0

    while stack:
        frame = stack[-1]
        if frame.cursor >= len(frame.moves):
            stack.pop()
            visited.discard(path.pop())
            continue

        nxt = frame.moves[frame.cursor]
        frame.cursor += 1
        if wall_key(frame.cell, nxt) in wall_set:
            continue

        nodes += 1
        if node_limit is not None and nodes > node_limit:
            raise SearchBudgetExceeded(node_limit)

        target = frame.target
        idx = order.get(nxt)
        if idx is not None:
            if idx != target:
                continue
            target += 1

        if target == len(checkpoints):
            if not fill_every_cell or len(path) + 1 == total:
                yield path + [nxt]
                _drop_walled_moves(stack, path, visited, wall_set)
            continue

        if fill_every_cell and (
            _strands_cell(frame.cell, nxt, grid_size, visited, wall_set, end)
            or splits_region(frame.cell, nxt, grid_size, visited, wall_set)
        ):
            continue

        visited.add(nxt)
        path.append(nxt)
        stack.append(_Frame(nxt, target, moves(nxt)))

    logger.debug("Solution search finished after %d nodes", nodes)


def count_solutions(
    grid_size: int,
    checkpoints: List[Coord],
    walls=(),
    fill_every_cell: bool = True,
    limit: int = 2,
    node_limit: Optional[int] = None,
) -> int:
    """Number of solutions, capped at limit."""
    count = 0
    for _ in iter_solutions(grid_size, checkpoints, walls, fill_every_cell, node_limit):
        count += 1
        if count >= limit:
            break
    return count


def is_unique_solution(
    grid_size: int,
    checkpoints: List[Coord],
    walls=(),
    fill_every_cell: bool = True,
    node_limit: Optional[int] = None,
) -> bool:
    """True if exactly one solution exists. An exhausted search is not unique."""
    try:
        return count_solutions(grid_size, checkpoints, walls, fill_every_cell, 2, node_limit) == 1
    except SearchBudgetExceeded as e:
        logger.warning("Uniqueness undetermined: %s", e)
        return False


def find_alternate_solution(
    grid_size: int,
    checkpoints: List[Coord],
    walls,
    solution: List[Coord],
    fill_every_cell: bool = True,
    node_limit: Optional[int] = None,
) -> Optional[List[Coord]]:
    """First solution that differs from the given one, or None."""
    for candidate in iter_solutions(grid_size, checkpoints, walls, fill_every_cell, node_limit, solution):
        if candidate != solution:
            return candidate
    return None
