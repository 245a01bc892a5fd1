"""
Zip Puzzle - Level Generator

Pipeline per attempt:
  SeededRandom -> Hamiltonian path -> checkpoints -> walls -> validation

A failed attempt is retried with a seed drawn from the failed attempt's own
generator, so the same input seed always ends in the same level. The seed
stored on the level is the one that produced it.
"""

import logging
import time
from datetime import date
from typing import Dict, Optional

from ..config import settings
from ..errors import (
    RETRYABLE_ERRORS,
    InvalidConfiguration,
    LevelGenerationFailed,
    PuzzleGenerationError,
)
from ..schemas import DifficultyConfig, Level
from .checkpoints import build_numbered_cells, select_checkpoints
from .hamiltonian import build_hamiltonian_path
from .rng import SeededRandom
from .validation import validate_level
from .walls import place_walls


logger = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1


# ============================================
# DIFFICULTY
# ============================================

DIFFICULTY_CONFIGS: Dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(
        difficulty="easy",
        grid_size=6,
        min_dot_count=3,
        max_dot_count=9,
        min_spacing=2,
        min_wall_count=4,
        max_wall_count=18,
        wall_probability=0.2,
    ),
    "medium": DifficultyConfig(
        difficulty="medium",
        grid_size=8,
        min_dot_count=4,
        max_dot_count=8,
        min_spacing=4,
        min_wall_count=9,
        max_wall_count=18,
    ),
    "hard": DifficultyConfig(
        difficulty="hard",
        grid_size=10,
        min_dot_count=7,
        max_dot_count=7,
        min_spacing=8,
        min_wall_count=16,
        max_wall_count=28,
    ),
}


def get_difficulty_config(difficulty: str) -> DifficultyConfig:
    """Config for a difficulty key."""
    config = DIFFICULTY_CONFIGS.get(difficulty)
    if config is None:
        raise InvalidConfiguration(
            f"Unknown difficulty {difficulty!r}, expected one of {sorted(DIFFICULTY_CONFIGS)}"
        )
    return config


# ============================================
# SEEDS
# ============================================

def seed_for_date(day: date) -> int:
    """Daily puzzle seed (month is zero-based, as in the puzzles already published)."""
    return day.day + (day.month - 1) * 31 + day.year * 365


def fresh_seed() -> int:
    """Wall-clock seed for non-reproducible levels."""
    return int(time.time() * 1000)


def next_attempt_seed(rng: SeededRandom) -> int:
    return rng.next_int(0, MAX_SEED)


# ============================================
# SINGLE ATTEMPT
# ============================================

def build_level(
    config: DifficultyConfig,
    seed: int,
    rng: SeededRandom,
    path_max_retries: int,
    require_unique: bool,
) -> Level:
    """One generation attempt. Raises a retryable error on failure."""
    path = build_hamiltonian_path(config.grid_size, rng, path_max_retries)

    dot_count = rng.next_int(config.min_dot_count, config.max_dot_count)
    indices = select_checkpoints(path, dot_count, config.min_spacing)
    numbered_cells = build_numbered_cells(path, indices)

    wall_count = rng.next_int(config.min_wall_count, config.max_wall_count)
    walls = place_walls(
        config.grid_size,
        path,
        numbered_cells,
        wall_count,
        rng,
        strategy=settings.WALL_STRATEGY,
        wall_probability=config.wall_probability,
        require_unique=require_unique,
        fill_every_cell=settings.fill_every_cell,
        node_limit=settings.UNIQUENESS_NODE_LIMIT,
        max_count=config.max_wall_count,
    )

    return Level(
        grid_size=config.grid_size,
        difficulty=config.difficulty,
        numbered_cells=numbered_cells,
        solution_path=path,
        walls=walls,
        seed=seed,
    )


# ============================================
# MAIN GENERATOR FUNCTION
# ============================================

def generate_level(
    difficulty: str = "medium",
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    *,
    config: Optional[DifficultyConfig] = None,
    require_unique_solution: Optional[bool] = None,
    path_max_retries: Optional[int] = None,
) -> Level:
    """
    Generate a level.

    Args:
        difficulty: easy | medium | hard (ignored when config is given).
        seed: Reproducible seed. None -> wall-clock seed.
        max_attempts: Attempts before giving up (settings default: 5).
        config: Explicit difficulty parameters.
        require_unique_solution: Place walls until the solution is unique.
        path_max_retries: Backtrack ceiling for the path search.

    Raises:
        InvalidConfiguration: unknown difficulty or impossible parameters.
        LevelGenerationFailed: every attempt failed.
    """
    cfg = config if config is not None else get_difficulty_config(difficulty)
    if max_attempts is None:
        max_attempts = settings.LEVEL_MAX_ATTEMPTS
    if max_attempts <= 0:
        raise InvalidConfiguration(f"max_attempts must be positive, got {max_attempts}")
    if require_unique_solution is None:
        require_unique_solution = settings.REQUIRE_UNIQUE_SOLUTION
    if path_max_retries is None:
        path_max_retries = settings.PATH_MAX_RETRIES

    if seed is None:
        seed = fresh_seed()
        logger.info("No seed given, using wall-clock seed %d", seed)

    current_seed = seed
    last_error: Optional[PuzzleGenerationError] = None

    for attempt in range(1, max_attempts + 1):
        rng = SeededRandom(current_seed)
        try:
            level = build_level(cfg, current_seed, rng, path_max_retries, require_unique_solution)
        except RETRYABLE_ERRORS as e:
            last_error = e
            failed_seed, current_seed = current_seed, next_attempt_seed(rng)
            logger.warning(
                "Attempt %d/%d failed for seed %d (%s), retrying with seed %d",
                attempt, max_attempts, failed_seed, e, current_seed,
            )
            continue

        validation = validate_level(level)
        if not validation["valid"]:
            last_error = PuzzleGenerationError("; ".join(validation["errors"]))
            failed_seed, current_seed = current_seed, next_attempt_seed(rng)
            logger.error(
                "Attempt %d/%d produced an invalid level for seed %d: %s",
                attempt, max_attempts, failed_seed, validation["errors"],
            )
            continue

        logger.info(
            "Generated %s level %dx%d: seed=%d, numbers=%d, walls=%d, attempts=%d",
            cfg.difficulty, cfg.grid_size, cfg.grid_size, level.seed,
            len(level.numbered_cells), len(level.walls), attempt,
        )
        return level

    raise LevelGenerationFailed(max_attempts, last_error)


def generate_daily_level(today: Optional[date] = None) -> Level:
    """Puzzle of the day: seed from the calendar date."""
    if today is None:
        today = date.today()
    return generate_level(settings.DAILY_DIFFICULTY, seed_for_date(today))


def generate_random_level(difficulty: str = "medium") -> Level:
    """Non-reproducible level."""
    return generate_level(difficulty)
