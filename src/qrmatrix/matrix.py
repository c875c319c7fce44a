from __future__ import annotations

from enum import IntEnum
from typing import List, Tuple

import numpy as np

from qrmatrix.bch import bch_type_info, bch_type_number
from qrmatrix.config import MAX_VERSION, MIN_VERSION, EccLevel
from qrmatrix.errors import InvalidArgument
from qrmatrix.masks import mask_grid


class Module(IntEnum):
    UNSET = -1
    LIGHT = 0
    DARK = 1


# Alignment pattern centre coordinates per version (index 0 = version 1).
PATTERN_POSITION_TABLE = (
    (),
    (6, 18),
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),
    (6, 24, 42),
    (6, 26, 46),
    (6, 28, 50),
    (6, 30, 54),
    (6, 32, 58),
    (6, 34, 62),
    (6, 26, 46, 66),
    (6, 26, 48, 70),
    (6, 26, 50, 74),
    (6, 30, 54, 78),
    (6, 30, 56, 82),
    (6, 30, 58, 86),
    (6, 34, 62, 90),
    (6, 28, 50, 72, 94),
    (6, 26, 50, 74, 98),
    (6, 30, 54, 78, 102),
    (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110),
    (6, 30, 58, 86, 114),
    (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122),
    (6, 30, 54, 78, 102, 126),
    (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134),
    (6, 34, 60, 86, 112, 138),
    (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150),
    (6, 24, 50, 76, 102, 128, 154),
    (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162),
    (6, 26, 54, 82, 110, 138, 166),
    (6, 30, 58, 86, 114, 142, 170),
)


def module_count(version: int) -> int:
    if not (MIN_VERSION <= version <= MAX_VERSION):
        raise InvalidArgument(f"version must be in [{MIN_VERSION},{MAX_VERSION}], got {version}")
    return version * 4 + 17


def pattern_position(version: int) -> Tuple[int, ...]:
    return PATTERN_POSITION_TABLE[version - 1]


def new_grid(version: int) -> np.ndarray:
    n = module_count(version)
    return np.full((n, n), Module.UNSET, dtype=np.int8)


def _set(grid: np.ndarray, row: int, col: int, dark: bool) -> None:
    grid[row, col] = Module.DARK if dark else Module.LIGHT


def place_finder_pattern(grid: np.ndarray, row: int, col: int) -> None:
    """
    7x7 position probe with its one-module light separator, clipped at the edges.
    """
    n = grid.shape[0]
    for r in range(-1, 8):
        if row + r <= -1 or n <= row + r:
            continue
        for c in range(-1, 8):
            if col + c <= -1 or n <= col + c:
                continue
            dark = (
                (0 <= r <= 6 and c in (0, 6))
                or (0 <= c <= 6 and r in (0, 6))
                or (2 <= r <= 4 and 2 <= c <= 4)
            )
            _set(grid, row + r, col + c, dark)


def place_alignment_patterns(grid: np.ndarray, version: int) -> None:
    pos = pattern_position(version)
    for row in pos:
        for col in pos:
            # overlaps a finder pattern
            if grid[row, col] != Module.UNSET:
                continue
            for r in range(-2, 3):
                for c in range(-2, 3):
                    dark = r in (-2, 2) or c in (-2, 2) or (r == 0 and c == 0)
                    _set(grid, row + r, col + c, dark)


def place_timing_patterns(grid: np.ndarray) -> None:
    n = grid.shape[0]
    for r in range(8, n - 8):
        if grid[r, 6] != Module.UNSET:
            continue
        _set(grid, r, 6, r % 2 == 0)
    for c in range(8, n - 8):
        if grid[6, c] != Module.UNSET:
            continue
        _set(grid, 6, c, c % 2 == 0)


def format_info_positions(n: int) -> Tuple[List[Tuple[int, int]], List[Tuple[int, int]]]:
    """
    Cells holding format bit i, for the copy along column 8 and the copy along row 8.
    """
    vertical = []
    horizontal = []
    for i in range(15):
        if i < 6:
            vertical.append((i, 8))
        elif i < 8:
            vertical.append((i + 1, 8))
        else:
            vertical.append((n - 15 + i, 8))

        if i < 8:
            horizontal.append((8, n - i - 1))
        elif i < 9:
            horizontal.append((8, 15 - i))
        else:
            horizontal.append((8, 15 - i - 1))
    return vertical, horizontal


def place_format_info(grid: np.ndarray, ecc_level: EccLevel, mask_pattern: int, *, test: bool) -> None:
    """
    Write both copies of the 15-bit format info plus the dark module.
    In test mode the area is only reserved (all light).
    """
    n = grid.shape[0]
    bits = bch_type_info((EccLevel.parse(ecc_level) << 3) | mask_pattern)
    vertical, horizontal = format_info_positions(n)
    for i in range(15):
        dark = not test and ((bits >> i) & 1) == 1
        _set(grid, *vertical[i], dark)
        _set(grid, *horizontal[i], dark)

    _set(grid, n - 8, 8, not test)


def place_version_info(grid: np.ndarray, version: int, *, test: bool) -> None:
    """
    Two transposed 6x3 copies of the 18-bit version info (versions >= 7 only).
    """
    n = grid.shape[0]
    bits = bch_type_number(version)
    for i in range(18):
        dark = not test and ((bits >> i) & 1) == 1
        _set(grid, i // 3, i % 3 + n - 8 - 3, dark)
        _set(grid, i % 3 + n - 8 - 3, i // 3, dark)


def data_positions(grid: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Unset cells in placement order: two-column strips from the right edge,
    alternating upward and downward, skipping the vertical timing column.
    """
    n = grid.shape[0]
    rows: List[int] = []
    cols: List[int] = []

    inc = -1
    row = n - 1
    col = n - 1
    while col > 0:
        if col == 6:
            col -= 1
        while True:
            for c in range(2):
                if grid[row, col - c] == Module.UNSET:
                    rows.append(row)
                    cols.append(col - c)
            row += inc
            if row < 0 or n <= row:
                row -= inc
                inc = -inc
                break
        col -= 2

    return np.asarray(rows, dtype=np.intp), np.asarray(cols, dtype=np.intp)


def map_data(grid: np.ndarray, codewords: bytes, mask_pattern: int) -> None:
    """
    Fill every unset cell with the codeword bits (MSB first), XORed with the mask.
    Cells past the end of the stream get 0 before masking.
    """
    rows, cols = data_positions(grid)
    bits = np.unpackbits(np.frombuffer(bytes(codewords), dtype=np.uint8))

    stream = np.zeros(rows.size, dtype=bool)
    k = min(rows.size, bits.size)
    stream[:k] = bits[:k].astype(bool)

    flip = mask_grid(mask_pattern, grid.shape[0])[rows, cols]
    grid[rows, cols] = np.where(stream ^ flip, Module.DARK, Module.LIGHT)


def build_matrix(
    version: int,
    ecc_level: EccLevel,
    codewords: bytes,
    mask_pattern: int,
    *,
    test: bool = False,
) -> np.ndarray:
    """
    Build a complete, independent module grid for one mask.

    test=True leaves format/version info light so every mask trial is
    scored on the same function-pattern layout.
    """
    grid = new_grid(version)
    n = grid.shape[0]

    place_finder_pattern(grid, 0, 0)
    place_finder_pattern(grid, n - 7, 0)
    place_finder_pattern(grid, 0, n - 7)
    place_alignment_patterns(grid, version)
    place_timing_patterns(grid)
    place_format_info(grid, ecc_level, mask_pattern, test=test)
    if version >= 7:
        place_version_info(grid, version, test=test)

    map_data(grid, codewords, mask_pattern)
    return grid


def dark_modules(grid: np.ndarray) -> np.ndarray:
    if np.any(grid == Module.UNSET):
        raise ValueError("grid still has unset modules")
    return grid == Module.DARK
