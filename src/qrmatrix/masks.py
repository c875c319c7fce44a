from __future__ import annotations

import logging
from typing import Callable, List

import numpy as np

from qrmatrix.errors import InvalidArgument

logger = logging.getLogger(__name__)

# Predicates work on ints and on numpy index grids alike.
MASK_PATTERNS: List[Callable] = [
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    lambda i, j: ((i * j) % 3 + (i + j) % 2) % 2 == 0,
]

NUM_MASKS = len(MASK_PATTERNS)


def _check_pattern(mask_pattern: int) -> int:
    if not isinstance(mask_pattern, int) or not (0 <= mask_pattern < NUM_MASKS):
        raise InvalidArgument(f"bad mask pattern: {mask_pattern!r}")
    return mask_pattern


def mask(mask_pattern: int, row: int, col: int) -> bool:
    return bool(MASK_PATTERNS[_check_pattern(mask_pattern)](row, col))


def mask_grid(mask_pattern: int, size: int) -> np.ndarray:
    """
    Boolean (size, size) array, True where the mask flips a data module.
    """
    rows, cols = np.indices((size, size))
    return np.asarray(MASK_PATTERNS[_check_pattern(mask_pattern)](rows, cols), dtype=bool)


def lost_point(dark: np.ndarray) -> int:
    """
    Penalty for a fully populated symbol.

    For every module, count the same-colour modules among its up-to-8
    neighbours (clipped at the edges); a count c > 5 costs 3 + (c - 5).
    """
    dark = np.asarray(dark, dtype=bool)
    n = dark.shape[0]
    cells = dark.astype(np.int8)

    # -1 border never matches a 0/1 module
    padded = np.full((n + 2, n + 2), -1, dtype=np.int8)
    padded[1:-1, 1:-1] = cells

    same = np.zeros((n, n), dtype=np.int32)
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            same += padded[1 + dr:1 + dr + n, 1 + dc:1 + dc + n] == cells

    over = same[same > 5]
    return int(np.sum(3 + (over - 5)))


def choose_best_mask(build_trial: Callable[[int], np.ndarray]) -> int:
    """
    Build a trial symbol for every mask and return the index with the lowest
    penalty. Ties keep the lower index.

    build_trial(mask_pattern) must return a fresh dark-module array.
    """
    best_pattern = 0
    best_points = 0
    for pattern in range(NUM_MASKS):
        points = lost_point(build_trial(pattern))
        logger.debug("mask %d: lost points %d", pattern, points)
        if pattern == 0 or points < best_points:
            best_points = points
            best_pattern = pattern
    logger.debug("selected mask %d (lost points %d)", best_pattern, best_points)
    return best_pattern
