#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT_DIR / "backend"))

from zip_puzzle.config import settings  # noqa: E402
from zip_puzzle.errors import PuzzleGenerationError  # noqa: E402
from zip_puzzle.services.generator import (  # noqa: E402
    DIFFICULTY_CONFIGS,
    generate_daily_level,
    generate_level,
)
from zip_puzzle.services.level_loader import save_level  # noqa: E402
from zip_puzzle.services.validation import validate_level  # noqa: E402


logger = logging.getLogger("generate_levels")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate Zip puzzle levels as JSON."
    )
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTY_CONFIGS),
        default="medium",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="First seed. Consecutive levels use seed, seed+1, ... Omit for wall-clock seeds.",
    )
    parser.add_argument("--count", type=int, default=1, help="Number of levels to generate.")
    parser.add_argument(
        "--daily",
        type=date.fromisoformat,
        default=None,
        metavar="YYYY-MM-DD",
        help="Generate the daily puzzle for this date instead.",
    )
    parser.add_argument(
        "--require-unique",
        action="store_true",
        help="Place walls until the puzzle has exactly one solution.",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write level files into this directory. Without it, JSON is printed.",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Re-check every level and exit non-zero on the first invalid one.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        if args.daily is not None:
            levels = [generate_daily_level(args.daily)]
        else:
            levels = []
            for i in range(args.count):
                seed = None if args.seed is None else args.seed + i
                levels.append(generate_level(
                    args.difficulty,
                    seed,
                    require_unique_solution=args.require_unique or None,
                ))
    except PuzzleGenerationError as e:
        logger.error("Generation failed: %s", e)
        return 1

    for level in levels:
        if args.validate:
            validation = validate_level(level)
            if not validation["valid"]:
                logger.error("Level seed=%d invalid: %s", level.seed, validation["errors"])
                return 1

        if args.out is not None:
            save_level(level, args.out)
        else:
            print(json.dumps(level.model_dump(mode="json", by_alias=True), ensure_ascii=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
