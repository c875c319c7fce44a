import numpy as np
import pytest

from qrmatrix.errors import InvalidArgument
from qrmatrix.masks import NUM_MASKS, choose_best_mask, lost_point, mask, mask_grid


def _naive_lost_point(dark) -> int:
    n = len(dark)
    total = 0
    for row in range(n):
        for col in range(n):
            same = 0
            for r in (-1, 0, 1):
                if row + r < 0 or n <= row + r:
                    continue
                for c in (-1, 0, 1):
                    if col + c < 0 or n <= col + c:
                        continue
                    if r == 0 and c == 0:
                        continue
                    if dark[row][col] == dark[row + r][col + c]:
                        same += 1
            if same > 5:
                total += 3 + same - 5
    return total


def _checkerboard(n: int) -> np.ndarray:
    r, c = np.indices((n, n))
    return (r + c) % 2 == 0


def test_mask_formulas_spot_checks():
    assert mask(0, 0, 0) is True
    assert mask(0, 0, 1) is False
    assert mask(1, 1, 5) is False
    assert mask(2, 7, 3) is True
    assert mask(3, 1, 2) is True
    assert mask(4, 2, 0) is False
    assert mask(4, 2, 3) is True
    assert mask(5, 0, 9) is True
    assert mask(6, 1, 1) is True
    assert mask(6, 1, 5) is False
    assert mask(7, 1, 2) is False


@pytest.mark.parametrize("pattern", range(NUM_MASKS))
def test_mask_grid_matches_scalar_predicate(pattern):
    n = 25
    grid = mask_grid(pattern, n)
    assert grid.shape == (n, n)
    for r in range(n):
        for c in range(n):
            assert grid[r, c] == mask(pattern, r, c)


@pytest.mark.parametrize("pattern", [-1, 8, "0"])
def test_bad_mask_pattern_rejected(pattern):
    with pytest.raises(InvalidArgument):
        mask(pattern, 0, 0)
    with pytest.raises(InvalidArgument):
        mask_grid(pattern, 21)


def test_lost_point_uniform_grid():
    # only the 3x3 interior has 8 same-colour neighbours: 9 * (3 + 3)
    assert lost_point(np.ones((5, 5), dtype=bool)) == 54
    assert lost_point(np.zeros((5, 5), dtype=bool)) == 54


def test_lost_point_checkerboard_is_zero():
    assert lost_point(_checkerboard(21)) == 0


def test_lost_point_matches_naive_count():
    rng = np.random.default_rng(2025)
    for density in (0.2, 0.5, 0.8):
        dark = rng.random((29, 29)) < density
        assert lost_point(dark) == _naive_lost_point(dark.tolist())


def test_choose_best_mask_picks_minimum():
    uniform = np.ones((9, 9), dtype=bool)

    def trial(pattern):
        return _checkerboard(9) if pattern == 3 else uniform.copy()

    assert choose_best_mask(trial) == 3


def test_choose_best_mask_ties_keep_lowest_index():
    def trial(pattern):
        if pattern in (2, 5):
            return _checkerboard(9)
        return np.ones((9, 9), dtype=bool)

    assert choose_best_mask(trial) == 2
    assert choose_best_mask(lambda p: np.ones((9, 9), dtype=bool)) == 0
