import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..config import settings
from ..schemas import Level


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def level_filename(level: Level) -> str:
    """File name for a level: <difficulty>_<seed>.json."""
    return f"{level.difficulty}_{level.seed}.json"


def save_level(level: Level, directory: Optional[PathLike] = None) -> Path:
    """Write the level as camelCase JSON and return the file path."""
    target_dir = Path(directory) if directory is not None else settings.LEVELS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    path = target_dir / level_filename(level)
    path.write_text(
        json.dumps(level.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent="\t") + "\n",
        encoding="utf-8",
    )
    logger.info("Saved level to %s", path)
    return path


def load_level(path: PathLike) -> Level:
    """
    Load a level file.

    Raises:
        FileNotFoundError: missing file.
        pydantic.ValidationError: malformed level data.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    try:
        return Level.model_validate_json(raw)
    except ValidationError:
        logger.error("Invalid level file %s", file_path)
        raise


def find_level(difficulty: str, seed: int, directory: Optional[PathLike] = None) -> Optional[Level]:
    """Load a stored level by difficulty and seed, None if not stored."""
    base = Path(directory) if directory is not None else settings.LEVELS_DIR
    path = base / f"{difficulty}_{seed}.json"
    if not path.exists():
        logger.debug("Level file not found: %s", path)
        return None
    return load_level(path)
