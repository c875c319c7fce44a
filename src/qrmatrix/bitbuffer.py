from __future__ import annotations

from typing import List


class BitBuffer:
    """
    Append-only bit sequence. Values are appended MSB-first.
    """

    def __init__(self) -> None:
        self._bits: List[int] = []

    def __len__(self) -> int:
        return len(self._bits)

    @property
    def bits(self) -> List[int]:
        return list(self._bits)

    def put(self, value: int, length: int) -> None:
        """
        Append the low `length` bits of value, most significant first.
        """
        if length < 0:
            raise ValueError("length must be >= 0")
        for i in range(length - 1, -1, -1):
            self._bits.append((value >> i) & 1)

    def put_bit(self, bit: bool) -> None:
        self._bits.append(1 if bit else 0)

    def put_bytes(self, data: bytes) -> None:
        for b in data:
            self.put(b, 8)

    def to_bytes(self) -> bytes:
        if len(self._bits) % 8 != 0:
            raise ValueError(f"Bit length must be multiple of 8, got {len(self._bits)}")
        out = bytearray(len(self._bits) // 8)
        for bi in range(0, len(self._bits), 8):
            v = 0
            for i in range(8):
                v = (v << 1) | self._bits[bi + i]
            out[bi // 8] = v
        return bytes(out)
