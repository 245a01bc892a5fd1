"""
Zip Puzzle - Errors

Retryable errors are caught by the level assembler; everything else
propagates to the caller.
"""


class PuzzleGenerationError(Exception):
    """Base class for generator failures."""


class InvalidConfiguration(PuzzleGenerationError, ValueError):
    """Malformed difficulty key or impossible generator parameters."""


class PathGenerationExhausted(PuzzleGenerationError):
    """Hamiltonian path search ran out of backtracks for this seed."""

    def __init__(self, grid_size: int, retries: int):
        self.grid_size = grid_size
        self.retries = retries
        super().__init__(
            f"No Hamiltonian path found on {grid_size}x{grid_size} grid "
            f"after {retries} backtracks"
        )


class SearchBudgetExceeded(PuzzleGenerationError):
    """Solution search visited more nodes than allowed."""

    def __init__(self, node_limit: int):
        self.node_limit = node_limit
        super().__init__(f"Solution search exceeded {node_limit} nodes")


class WallPlacementFailed(PuzzleGenerationError):
    """Walls could not make the solution unique."""


class LevelGenerationFailed(PuzzleGenerationError):
    """Every generation attempt failed."""

    def __init__(self, attempts: int, last_error: Exception | None = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed to generate level after {attempts} attempts")


RETRYABLE_ERRORS = (PathGenerationExhausted, WallPlacementFailed, SearchBudgetExceeded)
