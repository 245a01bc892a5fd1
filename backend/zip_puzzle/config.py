"""
Zip Puzzle - Configuration

Generator settings via environment variables (prefix ZIP_).
"""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    """Generator settings."""

    # Logging (DEBUG forces debug-level output)
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Path search
    PATH_MAX_RETRIES: int = 1000
    LEVEL_MAX_ATTEMPTS: int = 5

    # Uniqueness
    REQUIRE_UNIQUE_SOLUTION: bool = False
    # hamiltonian: the unique path must fill every cell
    # checkpoint: any in-order checkpoint path counts as a solution
    UNIQUE_SOLUTION_MODE: Literal["hamiltonian", "checkpoint"] = "hamiltonian"
    UNIQUENESS_NODE_LIMIT: int = 500_000

    # Walls
    WALL_STRATEGY: Literal["enumerate", "sample"] = "enumerate"

    # Daily puzzle
    DAILY_DIFFICULTY: Literal["easy", "medium", "hard"] = "easy"

    # Level files
    LEVELS_DIR: Path = Path("levels")

    @field_validator("PATH_MAX_RETRIES", "UNIQUENESS_NODE_LIMIT")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"must be >= 0, got: {value}")
        return value

    @field_validator("LEVEL_MAX_ATTEMPTS")
    @classmethod
    def validate_attempts(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"LEVEL_MAX_ATTEMPTS must be positive, got: {value}")
        return value

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    @property
    def fill_every_cell(self) -> bool:
        """True when uniqueness is judged on full-grid completions."""
        return self.UNIQUE_SOLUTION_MODE == "hamiltonian"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ZIP_",
        case_sensitive=True,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get settings (cached)."""
    return Settings()


settings = get_settings()
