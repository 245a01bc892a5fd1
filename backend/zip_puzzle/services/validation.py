"""
Zip Puzzle - Level Validation

Server-side checks:
  validate_level     every structural invariant of a generated level
  check_player_path  win condition for a submitted path
  get_hint           next cell to draw, driven by the stored solution
"""

from typing import Any, Dict, List, Optional, Sequence

from ..schemas import Coord, Level
from .grid import in_bounds, neighbors


def validate_level(level: Level) -> Dict[str, Any]:
    """Checks that the level is well-formed."""
    errors: List[str] = []
    size = level.grid_size
    path = [tuple(c) for c in level.solution_path]
    walls = level.wall_keys

    # Full coverage
    if len(path) != size * size:
        errors.append(f"Path length {len(path)} != {size * size}")
    if len(set(path)) != len(path):
        errors.append("Path visits a cell more than once")
    for cell in path:
        if not in_bounds(cell, size):
            errors.append(f"Path cell {cell} out of bounds")
            break

    # Connectivity
    for i in range(len(path) - 1):
        a, b = path[i], path[i + 1]
        if b not in neighbors(a, size, walls=walls, include_visited=True):
            errors.append(f"Path not connected between {a} and {b} (index {i})")
            break

    # Checkpoints
    index_of = {cell: i for i, cell in enumerate(path)}
    ordered = sorted(level.numbered_cells, key=lambda c: c.number)
    numbers = [c.number for c in ordered]
    if numbers != list(range(1, len(ordered) + 1)):
        errors.append(f"Numbers are not contiguous from 1: {numbers}")
    if len(ordered) < 2:
        errors.append("Level needs at least two numbered cells")
    else:
        positions = [index_of.get(c.coord) for c in ordered]
        if None in positions:
            errors.append("Numbered cell not on the solution path")
        else:
            if any(b <= a for a, b in zip(positions, positions[1:])):
                errors.append(f"Numbered cells out of path order: {positions}")
            if positions[0] != 0:
                errors.append("Number 1 is not at the start of the path")
            if path and positions[-1] != len(path) - 1:
                errors.append("Last number is not at the end of the path")

    # Wall safety
    numbered = {c.coord for c in ordered}
    for wall in level.walls:
        a, b = wall.key
        i, j = index_of.get(a), index_of.get(b)
        if i is not None and j is not None and abs(i - j) == 1:
            errors.append(f"Wall {wall.key} cuts the solution path")
        if a in numbered or b in numbered:
            errors.append(f"Wall {wall.key} touches a numbered cell")
    if len(walls) != len(level.walls):
        errors.append("Duplicate walls")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
    }


def check_player_path(level: Level, player_path: Sequence[Sequence[int]]) -> Dict[str, Any]:
    """
    Win condition: every cell filled once, moves follow the wall-aware
    adjacency rule, numbers visited 1..K in order, ending on K.
    """
    size = level.grid_size
    path: List[Coord] = [tuple(c) for c in player_path]
    walls = level.wall_keys
    checkpoints = level.checkpoints

    if not path:
        return {"valid": False, "reason": "Empty path"}
    if path[0] != checkpoints[0]:
        return {"valid": False, "reason": "Path must start on number 1"}

    seen = set()
    next_number = 0
    for i, cell in enumerate(path):
        if not in_bounds(cell, size):
            return {"valid": False, "reason": f"Cell {cell} out of bounds"}
        if cell in seen:
            return {"valid": False, "reason": f"Cell {cell} visited twice"}
        if i > 0 and cell not in neighbors(path[i - 1], size, walls=walls, include_visited=True):
            return {"valid": False, "reason": f"Illegal move {path[i - 1]} -> {cell}"}
        seen.add(cell)

        if cell in checkpoints:
            if checkpoints.index(cell) != next_number:
                return {"valid": False, "reason": f"Number at {cell} reached out of order"}
            next_number += 1

    if len(seen) != size * size:
        return {"valid": False, "reason": f"{size * size - len(seen)} cells left empty"}
    if path[-1] != checkpoints[-1]:
        return {"valid": False, "reason": "Path must end on the last number"}

    return {"valid": True, "reason": ""}


def get_hint(level: Level, drawn_path: Sequence[Sequence[int]]) -> Optional[Coord]:
    """
    Next solution cell after the correct prefix of the drawn path.
    Returns None once the solution is fully drawn.
    """
    solution = [tuple(c) for c in level.solution_path]
    drawn = [tuple(c) for c in drawn_path]

    prefix = 0
    while prefix < len(drawn) and prefix < len(solution) and drawn[prefix] == solution[prefix]:
        prefix += 1

    if prefix >= len(solution):
        return None
    return solution[prefix]
