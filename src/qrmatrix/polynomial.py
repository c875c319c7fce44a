from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Tuple

from qrmatrix.gf256 import gexp, glog


class Polynomial:
    """
    Polynomial over GF(256), coefficients highest-degree first.

    Leading zeros are stripped on construction; the zero polynomial is (0,).
    `shift` appends that many zero coefficients (multiplies by x**shift).
    Instances are immutable: every operation returns a new Polynomial.
    """

    __slots__ = ("_num",)

    def __init__(self, num: Iterable[int], shift: int = 0):
        coeffs = list(num)
        offset = 0
        while offset < len(coeffs) and coeffs[offset] == 0:
            offset += 1
        coeffs = coeffs[offset:]
        if not coeffs:
            self._num: Tuple[int, ...] = (0,)
            return
        for c in coeffs:
            if not (0 <= c <= 255):
                raise ValueError(f"coefficient {c} is not a GF(256) element")
        self._num = tuple(coeffs) + (0,) * shift

    @property
    def num(self) -> Tuple[int, ...]:
        return self._num

    @property
    def degree(self) -> int:
        return len(self._num) - 1

    def is_zero(self) -> bool:
        return self._num == (0,)

    def __len__(self) -> int:
        return len(self._num)

    def __getitem__(self, index: int) -> int:
        return self._num[index]

    def __iter__(self):
        return iter(self._num)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._num == other._num

    def __hash__(self) -> int:
        return hash(self._num)

    def __repr__(self) -> str:
        return f"Polynomial({list(self._num)})"

    def multiply(self, other: "Polynomial") -> "Polynomial":
        num = [0] * (len(self) + len(other) - 1)
        for i, a in enumerate(self._num):
            if a == 0:
                continue
            la = glog(a)
            for j, b in enumerate(other._num):
                if b == 0:
                    continue
                num[i + j] ^= gexp(la + glog(b))
        return Polynomial(num)

    def mod(self, other: "Polynomial") -> "Polynomial":
        """
        Remainder of long division by `other`.
        Each pass cancels the leading term, so the working copy shrinks until
        its degree drops below the divisor's.
        """
        if other.is_zero():
            raise ZeroDivisionError("polynomial division by zero")
        divisor = other._num
        log_lead = glog(divisor[0])
        rem = self
        while not rem.is_zero() and len(rem) >= len(divisor):
            ratio = glog(rem[0]) - log_lead
            num = list(rem._num)
            for i, d in enumerate(divisor):
                if d:
                    num[i] ^= gexp(glog(d) + ratio)
            rem = Polynomial(num)
        return rem


@lru_cache(maxsize=None)
def error_correct_polynomial(ecc_length: int) -> Polynomial:
    """
    Generator polynomial prod_{i=0}^{ecc_length-1} (x - alpha**i).
    """
    if ecc_length < 0:
        raise ValueError("ecc_length must be >= 0")
    g = Polynomial([1])
    for i in range(ecc_length):
        g = g.multiply(Polynomial([1, gexp(i)]))
    return g
