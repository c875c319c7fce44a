from __future__ import annotations

from typing import List, Sequence

from qrmatrix.bitbuffer import BitBuffer
from qrmatrix.config import EccLevel
from qrmatrix.errors import CapacityExceeded
from qrmatrix.polynomial import Polynomial, error_correct_polynomial
from qrmatrix.rs_blocks import RSBlock, rs_blocks, total_data_codewords

MODE_8BIT_BYTE = 0b0100

PAD0 = 0xEC
PAD1 = 0x11


def length_bits(version: int) -> int:
    """
    Width of the byte-mode character count field.
    """
    if 1 <= version < 10:
        return 8
    return 16


def segment_bits(version: int, segments: Sequence[bytes]) -> BitBuffer:
    """
    Mode indicator, count field and payload for every segment, nothing else.
    """
    buf = BitBuffer()
    count_width = length_bits(version)
    for seg in segments:
        buf.put(MODE_8BIT_BYTE, 4)
        buf.put(len(seg), count_width)
        buf.put_bytes(seg)
    return buf


def fits(version: int, ecc_level: EccLevel, segments: Sequence[bytes]) -> bool:
    capacity = total_data_codewords(version, ecc_level) * 8
    return len(segment_bits(version, segments)) <= capacity


def encode_data(version: int, ecc_level: EccLevel, segments: Sequence[bytes]) -> bytes:
    """
    Data codewords for (version, level): segments, terminator, bit padding,
    then alternating 0xEC/0x11 pad bytes up to the data capacity.

    Raises CapacityExceeded if the segments alone do not fit.
    """
    capacity = total_data_codewords(version, ecc_level) * 8

    buf = segment_bits(version, segments)
    if len(buf) > capacity:
        raise CapacityExceeded(len(buf), capacity)

    # terminator only if there is room for all four bits
    if len(buf) + 4 <= capacity:
        buf.put(0, 4)

    while len(buf) % 8 != 0:
        buf.put_bit(False)

    pads = (PAD0, PAD1)
    i = 0
    while len(buf) < capacity:
        buf.put(pads[i % 2], 8)
        i += 1

    return buf.to_bytes()


def ecc_codewords(data: bytes, ecc_count: int) -> bytes:
    """
    Remainder of data(x) * x**ecc_count divided by the generator polynomial,
    right-aligned and left-padded with zeros to ecc_count bytes.
    """
    if ecc_count <= 0:
        return b""
    rs_poly = error_correct_polynomial(ecc_count)
    raw = Polynomial(data, shift=len(rs_poly) - 1)
    rem = raw.mod(rs_poly)

    out = bytearray(ecc_count)
    for i in range(ecc_count):
        mod_index = i + len(rem) - ecc_count
        if mod_index >= 0:
            out[i] = rem[mod_index]
    return bytes(out)


def interleave(blocks: Sequence[bytes]) -> bytes:
    """
    Read ragged blocks column-major: byte 0 of every block, then byte 1 of
    every block that has one, and so on.
    """
    width = max((len(b) for b in blocks), default=0)
    out = bytearray()
    for c in range(width):
        for b in blocks:
            if c < len(b):
                out.append(b[c])
    return bytes(out)


def build_codewords(data: bytes, blocks: Sequence[RSBlock]) -> bytes:
    """
    Split data codewords across blocks, add per-block ECC, and interleave:
    all data columns first, then all ECC columns.
    """
    expected = sum(b.data_count for b in blocks)
    if len(data) != expected:
        raise ValueError(f"build_codewords: got {len(data)} data codewords, blocks hold {expected}")

    dc: List[bytes] = []
    ec: List[bytes] = []
    offset = 0
    for block in blocks:
        chunk = bytes(data[offset:offset + block.data_count])
        offset += block.data_count
        dc.append(chunk)
        ec.append(ecc_codewords(chunk, block.ecc_count))

    return interleave(dc) + interleave(ec)


def create_data(version: int, ecc_level: EccLevel, segments: Sequence[bytes]) -> bytes:
    """
    Full interleaved codeword stream for the symbol.
    """
    blocks = rs_blocks(version, ecc_level)
    return build_codewords(encode_data(version, ecc_level, segments), blocks)
