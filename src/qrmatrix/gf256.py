from __future__ import annotations

# GF(256) with primitive polynomial 0x11D (x^8 + x^4 + x^3 + x^2 + 1), generator alpha = 2.
_PRIM = 0x11D

_exp = [0] * 256
_log = [0] * 256

_x = 1
for _i in range(255):
    _exp[_i] = _x
    _log[_x] = _i
    _x <<= 1
    if _x & 0x100:
        _x ^= _PRIM
_exp[255] = _exp[0]

EXP_TABLE = tuple(_exp)
LOG_TABLE = tuple(_log)
del _x, _i, _exp, _log


def glog(n: int) -> int:
    """
    Discrete log base alpha. Only defined for n in [1,255].
    """
    if not (1 <= n <= 255):
        raise ValueError(f"glog({n}): log is only defined for 1..255")
    return LOG_TABLE[n]


def gexp(n: int) -> int:
    """
    alpha ** n. Exponents arising from log-space subtraction may be negative
    or >= 255; they are folded back into [0,254] first.
    """
    return EXP_TABLE[n % 255]
