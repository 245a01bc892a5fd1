"""
Zip Puzzle - Hamiltonian Path Builder

Randomized DFS with Warnsdorff ordering: unvisited neighbours are shuffled,
then stably sorted by how many unvisited neighbours they have left, so the
most constrained cell is tried first and equal-degree cells keep the random
order. A move is skipped when it cuts the unvisited cells apart or leaves a
second dead end. The DFS runs on an explicit stack; retries are counted in
the search context and the search aborts once the ceiling is reached.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Set

from ..errors import InvalidConfiguration, PathGenerationExhausted
from ..schemas import Coord
from .grid import neighbors, splits_region
from .rng import SeededRandom


logger = logging.getLogger(__name__)


@dataclass
class SearchFrame:
    cell: Coord
    candidates: List[Coord]
    cursor: int = 0

    def exhausted(self) -> bool:
        return self.cursor >= len(self.candidates)

    def advance(self) -> Coord:
        cell = self.candidates[self.cursor]
        self.cursor += 1
        return cell


@dataclass
class PathSearchContext:
    grid_size: int
    max_retries: int
    path: List[Coord] = field(default_factory=list)
    visited: Set[Coord] = field(default_factory=set)
    frames: List[SearchFrame] = field(default_factory=list)
    retries: int = 0

    @property
    def total(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def complete(self) -> bool:
        return len(self.path) == self.total

    def visit(self, cell: Coord) -> None:
        self.visited.add(cell)
        self.path.append(cell)

    def backtrack(self) -> None:
        cell = self.path.pop()
        self.visited.discard(cell)
        self.retries += 1

    def unvisited(self) -> Iterator[Coord]:
        for row in range(self.grid_size):
            for col in range(self.grid_size):
                if (row, col) not in self.visited:
                    yield (row, col)


def remaining_degree(cell: Coord, ctx: PathSearchContext) -> int:
    """Unvisited neighbours left for cell."""
    return len(neighbors(cell, ctx.grid_size, ctx.visited))


def ordered_candidates(cell: Coord, ctx: PathSearchContext, rng: SeededRandom) -> List[Coord]:
    candidates = rng.shuffle(neighbors(cell, ctx.grid_size, ctx.visited))
    # sort() is stable: equal degrees keep the shuffled order
    candidates.sort(key=lambda c: remaining_degree(c, ctx))
    return candidates


def is_dead_move(head: Coord, nxt: Coord, ctx: PathSearchContext) -> bool:
    """
    True if the path can no longer cover every cell after head -> nxt.

    A cell with a single free neighbour has to be the last one, so two of
    them are fatal, as is an unvisited region nxt cannot reach. nxt must not
    be visited yet.
    """
    if splits_region(head, nxt, ctx.grid_size, ctx.visited):
        return True

    # only neighbours of head lose a free neighbour with this move
    new_dead_ends = [
        c for c in neighbors(head, ctx.grid_size, ctx.visited)
        if c != nxt and remaining_degree(c, ctx) < 2
    ]
    if len(new_dead_ends) != 1:
        return len(new_dead_ends) > 1

    dead_end = new_dead_ends[0]
    for cell in ctx.unvisited():
        if cell not in (nxt, dead_end) and remaining_degree(cell, ctx) < 2:
            return True
    return False


def build_hamiltonian_path(
    grid_size: int,
    rng: SeededRandom,
    max_retries: int = 1000,
) -> List[Coord]:
    """
    Build a path visiting every cell of the grid exactly once.

    Raises:
        PathGenerationExhausted: retry ceiling hit or search space exhausted.
    """
    if grid_size <= 0:
        raise InvalidConfiguration(f"grid_size must be positive, got {grid_size}")

    ctx = PathSearchContext(grid_size=grid_size, max_retries=max_retries)
    start = (rng.next_int(0, grid_size - 1), rng.next_int(0, grid_size - 1))
    ctx.visit(start)
    if ctx.complete:
        return ctx.path

    ctx.frames.append(SearchFrame(start, ordered_candidates(start, ctx, rng)))

    while ctx.frames:
        if ctx.retries >= ctx.max_retries:
            break

        frame = ctx.frames[-1]
        if frame.exhausted():
            ctx.frames.pop()
            if not ctx.frames:
                break
            ctx.backtrack()
            continue

        nxt = frame.advance()
        if len(ctx.path) + 1 < ctx.total and is_dead_move(frame.cell, nxt, ctx):
            continue

        ctx.visit(nxt)
        if ctx.complete:
            logger.debug(
                "Hamiltonian path on %dx%d from %s after %d retries",
                grid_size, grid_size, start, ctx.retries,
            )
            return ctx.path
        ctx.frames.append(SearchFrame(nxt, ordered_candidates(nxt, ctx, rng)))

    raise PathGenerationExhausted(grid_size, ctx.retries)
