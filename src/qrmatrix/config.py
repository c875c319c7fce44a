from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from qrmatrix.errors import InvalidArgument

MIN_VERSION = 1
MAX_VERSION = 40
AUTO_VERSION = 0


class EccLevel(IntEnum):
    """
    Error-correction level.

    Values are the 2-bit indicators written into format info, which is why
    they are not in L, M, Q, H order.
    """
    L = 1
    M = 0
    Q = 3
    H = 2

    @classmethod
    def parse(cls, value: Any) -> "EccLevel":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidArgument(f"unknown ECC level: {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidArgument(f"ECC level indicator must be in [0,3], got {value}") from None
        raise InvalidArgument(f"unsupported ECC level: {value!r}")


@dataclass(frozen=True)
class Config:
    """
    Symbol config.

    version: 1..40, or 0 to pick the smallest version the data fits in.
    ecc_level: EccLevel, its indicator, or one of "L", "M", "Q", "H".
    """
    version: int = AUTO_VERSION
    ecc_level: Any = EccLevel.M


def _get_version(cfg: Any) -> int:
    version = getattr(cfg, "version", None)
    if version is None:
        raise AttributeError("cfg missing required int attribute: version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise InvalidArgument("cfg.version must be int")
    if not (AUTO_VERSION <= version <= MAX_VERSION):
        raise InvalidArgument(f"cfg.version must be in [{AUTO_VERSION},{MAX_VERSION}], got {version}")
    return version


def _get_ecc_level(cfg: Any) -> EccLevel:
    level = getattr(cfg, "ecc_level", None)
    if level is None:
        raise AttributeError("cfg missing required attribute: ecc_level")
    return EccLevel.parse(level)
