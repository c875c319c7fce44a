import pytest

from qrmatrix.codewords import (
    build_codewords,
    create_data,
    ecc_codewords,
    encode_data,
    fits,
    interleave,
    length_bits,
)
from qrmatrix.config import EccLevel
from qrmatrix.errors import CapacityExceeded
from qrmatrix.polynomial import Polynomial, error_correct_polynomial
from qrmatrix.rs_blocks import RSBlock, rs_blocks


def test_length_bits_switches_at_version_10():
    assert length_bits(1) == 8
    assert length_bits(9) == 8
    assert length_bits(10) == 16
    assert length_bits(40) == 16


def test_encode_data_hello_version1_m():
    data = encode_data(1, EccLevel.M, [b"HELLO"])
    # 0100 | 00000101 | H E L L O | 0000 terminator
    head = bytes([0x40, 0x54, 0x84, 0x54, 0xC4, 0xC4, 0xF0])
    assert data == head + bytes([0xEC, 0x11] * 4 + [0xEC])
    assert len(data) == 16


def test_encode_data_empty_payload_fits_version1():
    data = encode_data(1, EccLevel.L, [])
    # no segments: terminator + bit padding make one zero byte
    assert len(data) == 19
    assert data == b"\x00" + bytes([0xEC, 0x11] * 9)


def test_encode_data_empty_segment():
    data = encode_data(1, EccLevel.L, [b""])
    # mode + zero count + terminator
    assert data[:2] == b"\x40\x00"
    assert data[2:] == bytes([0xEC, 0x11] * 8 + [0xEC])


def test_capacity_boundary_exact_fit_has_no_terminator():
    # two segments: 2 * (4 + 8) header bits + 16 * 8 payload bits == 19 * 8
    segs = [b"A" * 8, b"B" * 8]
    data = encode_data(1, EccLevel.L, segs)
    assert len(data) == 19
    assert data[-1] == ord("B")
    assert fits(1, EccLevel.L, segs)


def test_capacity_boundary_one_byte_over_fails():
    segs = [b"A" * 8, b"B" * 9]
    assert not fits(1, EccLevel.L, segs)
    with pytest.raises(CapacityExceeded) as exc:
        encode_data(1, EccLevel.L, segs)
    assert exc.value.bits == 160
    assert exc.value.capacity_bits == 152
    assert isinstance(exc.value, ValueError)


def test_terminator_added_when_four_bits_spare():
    # 12 + 17 * 8 = 148 bits, room for the terminator and nothing else
    data = encode_data(1, EccLevel.L, [b"\xff" * 17])
    assert len(data) == 19
    assert data[-1] == 0xF0


def test_ecc_codewords_hello_world_1m_vector():
    data = bytes([32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17])
    assert ecc_codewords(data, 10) == bytes([196, 35, 39, 119, 235, 215, 231, 226, 93, 23])


def test_codeword_is_multiple_of_generator():
    data = encode_data(2, EccLevel.Q, [b"reed solomon"])
    ecc = ecc_codewords(data, 22)
    assert Polynomial(data + ecc).mod(error_correct_polynomial(22)).is_zero()


def test_ecc_codewords_are_left_padded():
    # all-zero data has an all-zero remainder
    assert ecc_codewords(bytes(5), 7) == bytes(7)


def test_interleave_ragged_columns():
    assert interleave([b"ab", b"cde"]) == b"acbde"
    assert interleave([]) == b""


def test_build_codewords_interleaves_data_then_ecc():
    blocks = rs_blocks(5, EccLevel.Q)
    data = bytes(range(62))
    out = build_codewords(data, blocks)

    assert len(out) == 134
    assert out[:4] == bytes([data[0], data[15], data[30], data[46]])
    # last data column only exists in the two longer blocks
    assert out[60:62] == bytes([data[45], data[61]])

    ecc0 = ecc_codewords(data[0:15], 18)
    ecc3 = ecc_codewords(data[46:62], 18)
    assert out[62] == ecc0[0]
    assert out[65] == ecc3[0]
    assert out[-1] == ecc3[-1]


def test_build_codewords_rejects_wrong_length():
    with pytest.raises(ValueError):
        build_codewords(b"\x00" * 3, [RSBlock(26, 19)])


def test_create_data_length_matches_total_codewords():
    for version in (1, 6, 10, 21):
        for level in EccLevel:
            out = create_data(version, level, [b"x" * 5])
            assert len(out) == sum(b.total_count for b in rs_blocks(version, level))


def test_version_1_h_holds_seven_bytes():
    # 9 data codewords: 12 header bits + 7 * 8 = 68 <= 72, one more byte is 76
    assert len(create_data(1, EccLevel.H, [b"x" * 7])) == 26
    assert not fits(1, EccLevel.H, [b"x" * 8])
    with pytest.raises(CapacityExceeded):
        create_data(1, EccLevel.H, [b"x" * 10])
