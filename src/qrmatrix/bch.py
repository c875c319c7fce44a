from __future__ import annotations

# BCH(15,5) generator x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
G15 = 0b10100110111  # 1335
# BCH(18,6) generator x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
G18 = 0b1111100100101  # 7973
# XOR mask applied to format info so it is never all zero
G15_MASK = 0b101010000010010  # 21522


def bch_digit(data: int) -> int:
    """
    Number of significant bits in data (0 for 0).
    """
    digit = 0
    while data != 0:
        digit += 1
        data >>= 1
    return digit


def bch_remainder(value: int, generator: int) -> int:
    """
    Shift-and-XOR the generator into value until its degree drops below the generator's.
    """
    g_digit = bch_digit(generator)
    d = value
    while bch_digit(d) - g_digit >= 0:
        d ^= generator << (bch_digit(d) - g_digit)
    return d


def bch_type_info(data: int) -> int:
    """
    15-bit format info for 5-bit data = (ecc indicator << 3) | mask, already masked.
    """
    if not (0 <= data < 32):
        raise ValueError(f"format data must be 5 bits, got {data}")
    d = data << 10
    return (d | bch_remainder(d, G15)) ^ G15_MASK


def bch_type_number(version: int) -> int:
    """
    18-bit version info for a 6-bit version number.
    """
    if not (0 <= version < 64):
        raise ValueError(f"version must fit 6 bits, got {version}")
    d = version << 12
    return d | bch_remainder(d, G18)
