"""
Zip Puzzle - Grid Helpers

Coordinates are (row, col). Walls are kept as a set of canonical
(cell, cell) keys so lookups are O(1) inside the search loops.
"""

from collections import deque
from typing import AbstractSet, Iterable, List, Optional, Set, Tuple

from ..schemas import Coord, Wall


WallKey = Tuple[Coord, Coord]

# up, down, left, right
DIRECTIONS: List[Tuple[int, int]] = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def wall_key(a: Coord, b: Coord) -> WallKey:
    """Order-independent key for the edge between a and b."""
    return (a, b) if a <= b else (b, a)


def build_wall_set(walls: Iterable) -> Set[WallKey]:
    """Accepts Wall models or raw (cell, cell) pairs."""
    keys: Set[WallKey] = set()
    for wall in walls:
        if isinstance(wall, Wall):
            keys.add(wall.key)
        else:
            a, b = wall
            keys.add(wall_key(tuple(a), tuple(b)))
    return keys


def in_bounds(cell: Coord, grid_size: int) -> bool:
    return 0 <= cell[0] < grid_size and 0 <= cell[1] < grid_size


def is_adjacent(a: Coord, b: Coord) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def has_wall_between(a: Coord, b: Coord, walls: AbstractSet[WallKey]) -> bool:
    return wall_key(a, b) in walls


def neighbors(
    cell: Coord,
    grid_size: int,
    visited: Optional[AbstractSet[Coord]] = None,
    walls: AbstractSet[WallKey] = frozenset(),
    include_visited: bool = False,
) -> List[Coord]:
    """
    Legal orthogonal moves from cell.

    Wall-blocked neighbours are always dropped. Visited cells are dropped
    unless include_visited is set (connectivity checks over a filled path).
    """
    row, col = cell
    result: List[Coord] = []
    for dr, dc in DIRECTIONS:
        nxt = (row + dr, col + dc)
        if not in_bounds(nxt, grid_size):
            continue
        if not include_visited and visited is not None and nxt in visited:
            continue
        if walls and wall_key(cell, nxt) in walls:
            continue
        result.append(nxt)
    return result


def interior_edges(grid_size: int) -> List[WallKey]:
    """Every edge between adjacent cells, row-major, right edge before down edge."""
    edges: List[WallKey] = []
    for row in range(grid_size):
        for col in range(grid_size):
            if col < grid_size - 1:
                edges.append(((row, col), (row, col + 1)))
            if row < grid_size - 1:
                edges.append(((row, col), (row + 1, col)))
    return edges


def path_edges(path: List[Coord]) -> Set[WallKey]:
    """Edges used by consecutive cells of a path."""
    return {wall_key(path[i], path[i + 1]) for i in range(len(path) - 1)}


def connects(
    start: Coord,
    targets: Iterable[Coord],
    grid_size: int,
    visited: AbstractSet[Coord],
    walls: AbstractSet[WallKey] = frozenset(),
) -> bool:
    """
    True if every target is reachable from start through unvisited cells.
    Breadth-first, so nearby targets end the search early.
    """
    pending = set(targets)
    pending.discard(start)
    if not pending:
        return True

    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        for nxt in neighbors(cell, grid_size, visited, walls):
            if nxt in seen:
                continue
            pending.discard(nxt)
            if not pending:
                return True
            seen.add(nxt)
            queue.append(nxt)
    return False


def splits_region(
    head: Coord,
    nxt: Coord,
    grid_size: int,
    visited: AbstractSet[Coord],
    walls: AbstractSet[WallKey] = frozenset(),
) -> bool:
    """
    True if moving head -> nxt cuts an unvisited neighbour of head off from
    nxt. visited must hold head but not nxt.
    """
    targets = []
    for cell in neighbors(head, grid_size, visited, walls):
        if cell == nxt:
            continue
        # perpendicular neighbours share the far corner of their 2x2 block
        corner = (cell[0] + nxt[0] - head[0], cell[1] + nxt[1] - head[1])
        if (
            corner != head
            and in_bounds(corner, grid_size)
            and corner not in visited
            and wall_key(cell, corner) not in walls
            and wall_key(corner, nxt) not in walls
        ):
            continue
        targets.append(cell)

    return bool(targets) and not connects(nxt, targets, grid_size, visited, walls)
