from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

import numpy as np

from qrmatrix.codewords import create_data, fits
from qrmatrix.config import AUTO_VERSION, MAX_VERSION, MIN_VERSION, Config, EccLevel, _get_ecc_level, _get_version
from qrmatrix.masks import choose_best_mask
from qrmatrix.matrix import build_matrix, dark_modules
from qrmatrix.rs_blocks import total_data_codewords

logger = logging.getLogger(__name__)


def _to_segment(data: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise TypeError("add_data: data must be bytes-like or str")


def select_version(ecc_level: EccLevel, segments: List[bytes]) -> int:
    """
    Smallest version whose data capacity holds the segments.
    Falls back to the largest version, whose encode then reports the overflow.
    """
    for version in range(MIN_VERSION, MAX_VERSION):
        if fits(version, ecc_level, segments):
            return version
    return MAX_VERSION


class QRSymbol:
    """
    One QR symbol built from byte-mode segments.

    Usage:
        qr = QRSymbol(ecc_level="M")
        qr.add_data("HELLO")
        qr.build()
        qr.module_count(), qr.is_dark(row, col)

    Arguments are validated by build(). After build() the symbol is
    read-only; encode a new payload with a new QRSymbol.
    """

    def __init__(self, version: int = AUTO_VERSION, ecc_level: Any = EccLevel.M, *, cfg: Optional[Config] = None):
        self.cfg = cfg if cfg is not None else Config(version=version, ecc_level=ecc_level)
        self._segments: List[bytes] = []
        self._version: Optional[int] = None
        self._ecc_level: Optional[EccLevel] = None
        self._mask_pattern: Optional[int] = None
        self._codewords: Optional[bytes] = None
        self._modules: Optional[np.ndarray] = None

    # ---- building ----

    def add_data(self, data: Union[bytes, bytearray, str]) -> None:
        """
        Append one byte-mode segment (str is encoded as UTF-8).
        """
        if self._modules is not None:
            raise RuntimeError("add_data: symbol is already built")
        self._segments.append(_to_segment(data))

    def build(self) -> "QRSymbol":
        """
        Pick the version (if auto), compute codewords, choose the mask and
        lay out the final matrix.

        Raises InvalidArgument for a bad version/level and CapacityExceeded
        when the data does not fit.
        """
        if self._modules is not None:
            raise RuntimeError("build: symbol is already built")

        ecc_level = _get_ecc_level(self.cfg)
        version = _get_version(self.cfg)
        segments = list(self._segments)

        if version == AUTO_VERSION:
            version = select_version(ecc_level, segments)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "auto-selected version %d for %d segment(s) at level %s (%d data codewords)",
                    version, len(segments), ecc_level.name, total_data_codewords(version, ecc_level),
                )

        codewords = create_data(version, ecc_level, segments)

        def trial(mask_pattern: int) -> np.ndarray:
            return dark_modules(build_matrix(version, ecc_level, codewords, mask_pattern, test=True))

        mask_pattern = choose_best_mask(trial)
        modules = dark_modules(build_matrix(version, ecc_level, codewords, mask_pattern, test=False))
        modules.setflags(write=False)

        self._version = version
        self._ecc_level = ecc_level
        self._mask_pattern = mask_pattern
        self._codewords = codewords
        self._modules = modules
        return self

    make = build

    # ---- queries (after build) ----

    def _built(self) -> np.ndarray:
        if self._modules is None:
            raise RuntimeError("symbol is not built yet; call build() first")
        return self._modules

    @property
    def is_built(self) -> bool:
        return self._modules is not None

    @property
    def version(self) -> int:
        self._built()
        return self._version

    @property
    def ecc_level(self) -> EccLevel:
        self._built()
        return self._ecc_level

    @property
    def mask_pattern(self) -> int:
        self._built()
        return self._mask_pattern

    @property
    def codewords(self) -> bytes:
        self._built()
        return self._codewords

    @property
    def modules(self) -> np.ndarray:
        """Read-only boolean grid, True = dark."""
        return self._built()

    def module_count(self) -> int:
        return self._built().shape[0]

    def is_dark(self, row: int, col: int) -> bool:
        modules = self._built()
        n = modules.shape[0]
        if not (0 <= row < n and 0 <= col < n):
            raise IndexError(f"is_dark({row}, {col}): outside 0..{n - 1}")
        return bool(modules[row, col])
