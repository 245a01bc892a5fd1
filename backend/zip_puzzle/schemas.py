"""
Zip Puzzle - Pydantic Schemas

All level schemas in one file. JSON uses camelCase keys
(gridSize, numberedCells, solutionPath) to match the stored puzzle format.
"""

from typing import List, Literal, Optional, Set, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


Coord = Tuple[int, int]
Difficulty = Literal["easy", "medium", "hard"]


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================
# CELLS
# ============================================

class Cell(_Schema):
    """Grid cell (row, col)."""
    row: int = Field(ge=0)
    col: int = Field(ge=0)

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


class NumberedCell(Cell):
    """Checkpoint the player must pass through in order."""
    number: int = Field(ge=1)


# ============================================
# WALLS
# ============================================

class Wall(_Schema):
    """
    Blocked edge between two orthogonally adjacent cells.

    Cells are stored in canonical order, so Wall(a, b) == Wall(b, a).
    """
    cell1: Coord
    cell2: Coord

    @model_validator(mode="before")
    @classmethod
    def order_cells(cls, data):
        if isinstance(data, dict) and "cell1" in data and "cell2" in data:
            first, second = tuple(data["cell1"]), tuple(data["cell2"])
            if second < first:
                data = {**data, "cell1": second, "cell2": first}
        return data

    @model_validator(mode="after")
    def check_adjacent(self) -> "Wall":
        dr = abs(self.cell1[0] - self.cell2[0])
        dc = abs(self.cell1[1] - self.cell2[1])
        if dr + dc != 1:
            raise ValueError(f"Wall cells {self.cell1} and {self.cell2} are not adjacent")
        return self

    @classmethod
    def between(cls, a: Coord, b: Coord) -> "Wall":
        return cls(cell1=a, cell2=b)

    @property
    def key(self) -> Tuple[Coord, Coord]:
        return (self.cell1, self.cell2)

    def touches(self, cell: Coord) -> bool:
        return cell == self.cell1 or cell == self.cell2


# ============================================
# DIFFICULTY
# ============================================

class DifficultyConfig(_Schema):
    """Tuning parameters for one difficulty."""
    difficulty: Difficulty
    grid_size: int = Field(gt=0)
    min_dot_count: int = Field(ge=2)
    max_dot_count: int = Field(ge=2)
    min_spacing: int = Field(ge=0)
    min_wall_count: int = Field(ge=0)
    max_wall_count: int = Field(ge=0)
    # Only used by the "sample" wall strategy
    wall_probability: Optional[float] = Field(default=None, gt=0, le=1)

    @model_validator(mode="after")
    def check_ranges(self) -> "DifficultyConfig":
        if self.min_dot_count > self.max_dot_count:
            raise ValueError(
                f"min_dot_count {self.min_dot_count} > max_dot_count {self.max_dot_count}"
            )
        if self.max_dot_count > self.grid_size * self.grid_size:
            raise ValueError(
                f"max_dot_count {self.max_dot_count} exceeds cell count of "
                f"{self.grid_size}x{self.grid_size} grid"
            )
        if self.min_wall_count > self.max_wall_count:
            raise ValueError(
                f"min_wall_count {self.min_wall_count} > max_wall_count {self.max_wall_count}"
            )
        return self


# ============================================
# LEVEL
# ============================================

class Level(_Schema):
    """Generated puzzle. Immutable once assembled."""
    grid_size: int = Field(gt=0)
    difficulty: Difficulty
    numbered_cells: List[NumberedCell]
    solution_path: List[Coord]
    walls: List[Wall] = []
    seed: int

    @property
    def checkpoints(self) -> List[Coord]:
        """Numbered cell coordinates ordered by number."""
        ordered = sorted(self.numbered_cells, key=lambda c: c.number)
        return [c.coord for c in ordered]

    @property
    def wall_keys(self) -> Set[Tuple[Coord, Coord]]:
        return {w.key for w in self.walls}
