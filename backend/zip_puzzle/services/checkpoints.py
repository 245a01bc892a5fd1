"""
Zip Puzzle - Checkpoint Selection

Numbered cells are spread evenly along the solution path. The first and
last path cells are always numbered. Each intermediate pick must be at least
min_spacing (Manhattan) from the previous one; when its segment holds no
such cell, the farthest cell in the segment is used instead.
"""

import logging
from typing import List

from ..errors import InvalidConfiguration
from ..schemas import Coord, NumberedCell
from .grid import manhattan


logger = logging.getLogger(__name__)


def checkpoint_window(index: int, segment: int, path_length: int) -> range:
    """Path indices eligible for intermediate checkpoint number index+1."""
    start = index * segment
    stop = min((index + 1) * segment, path_length - 1)
    return range(start, stop)


def select_checkpoints(path: List[Coord], dot_count: int, min_spacing: int) -> List[int]:
    """
    Pick dot_count path indices, strictly increasing, starting at 0 and
    ending at len(path) - 1.
    """
    if dot_count < 2:
        raise InvalidConfiguration(f"dot_count must be >= 2, got {dot_count}")
    if dot_count > len(path):
        raise InvalidConfiguration(
            f"dot_count {dot_count} exceeds path length {len(path)}"
        )

    segment = len(path) // (dot_count - 1)
    indices = [0]

    for i in range(1, dot_count - 1):
        last = path[indices[-1]]
        window = checkpoint_window(i, segment, len(path))

        chosen = None
        for idx in window:
            if manhattan(path[idx], last) >= min_spacing:
                chosen = idx
                break

        if chosen is None:
            # Relaxed: farthest cell in the segment, earliest on ties
            chosen = max(window, key=lambda idx: (manhattan(path[idx], last), -idx))
            logger.debug(
                "Checkpoint %d: no cell within %d..%d is %d apart from %s, using %s",
                i + 1, window.start, window.stop - 1, min_spacing, last, path[chosen],
            )

        indices.append(chosen)

    indices.append(len(path) - 1)
    return indices


def build_numbered_cells(path: List[Coord], indices: List[int]) -> List[NumberedCell]:
    return [
        NumberedCell(row=path[idx][0], col=path[idx][1], number=number)
        for number, idx in enumerate(indices, start=1)
    ]
