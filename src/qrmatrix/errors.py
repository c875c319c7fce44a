from __future__ import annotations


class QRMatrixError(Exception):
    """Base class for encoder errors."""


class CapacityExceeded(QRMatrixError, ValueError):
    """
    Encoded segments do not fit the data codewords of the (version, level).
    No partial symbol is produced.
    """

    def __init__(self, bits: int, capacity_bits: int):
        super().__init__(f"code length overflow ({bits} > {capacity_bits})")
        self.bits = bits
        self.capacity_bits = capacity_bits


class InvalidArgument(QRMatrixError, ValueError):
    """Caller supplied a version, ECC level or mask index outside its range."""
